from django.urls import path
from . import views

app_name = 'taskboard'

urlpatterns = [
    path('', views.task_list_view, name='task_list'),
    path('kanban/', views.task_kanban_view, name='task_kanban'),
    path('mine/', views.my_tasks_view, name='my_tasks'),
    path('create/', views.task_create_view, name='task_create'),
    path('export/', views.task_export_view, name='task_export'),
    path('<uuid:pk>/edit/', views.task_update_view, name='task_update'),
    path('<uuid:pk>/status/', views.task_change_status_view, name='task_change_status'),
    path('<uuid:pk>/share/', views.task_share_view, name='task_share'),
    path('<uuid:pk>/delete/', views.task_delete_view, name='task_delete'),
]
