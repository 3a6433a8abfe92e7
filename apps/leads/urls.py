from django.urls import path
from . import views

app_name = 'leads'

urlpatterns = [
    path('', views.lead_list_view, name='lead_list'),
    path('mine/', views.my_leads_view, name='my_leads'),
    path('kanban/', views.lead_kanban_view, name='lead_kanban'),
    path('create/', views.lead_create_view, name='lead_create'),
    path('export/', views.lead_export_view, name='lead_export'),
    path('bulk-assign/', views.lead_bulk_assign_view, name='lead_bulk_assign'),
    path('auto-assign/', views.auto_assign_config_view, name='auto_assign_config'),
    path('auto-assign/run/', views.auto_assign_run_view, name='auto_assign_run'),
    path('sales/', views.sales_overview_view, name='sales_overview'),
    path('scores/', views.lead_scores_view, name='lead_scores'),
    path('duplicates/', views.lead_duplicates_view, name='lead_duplicates'),
    path('duplicates/merge/', views.lead_merge_view, name='lead_merge'),
    path('calls/', views.call_log_list_view, name='call_list'),
    path('calls/mine/', views.my_calls_view, name='my_calls'),
    path('<uuid:pk>/', views.lead_detail_view, name='lead_detail'),
    path('<uuid:pk>/edit/', views.lead_update_view, name='lead_update'),
    path('<uuid:pk>/delete/', views.lead_delete_view, name='lead_delete'),
    path('<uuid:pk>/assign/', views.lead_assign_view, name='lead_assign'),
    path('<uuid:pk>/change-stage/', views.lead_change_stage_view, name='lead_change_stage'),
]
