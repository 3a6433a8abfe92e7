from django.urls import path
from . import views

app_name = 'employees'

urlpatterns = [
    path('', views.employee_list_view, name='employee_list'),
    path('kanban/', views.employee_kanban_view, name='employee_kanban'),
    path('export/', views.employee_export_view, name='employee_export'),
    path('me/', views.my_profile_view, name='my_profile'),
    path('create/', views.employee_create_view, name='employee_create'),
    path('<uuid:pk>/', views.employee_detail_view, name='employee_detail'),
    path('<uuid:pk>/edit/', views.employee_update_view, name='employee_update'),
    path('<uuid:pk>/delete/', views.employee_delete_view, name='employee_delete'),
]
