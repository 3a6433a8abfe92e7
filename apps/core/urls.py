from django.urls import path
from . import views


app_name = 'core'

urlpatterns = [
    path('', views.dashboard_view, name='dashboard'),
    path('notes/<slug:page_key>/', views.notes_view, name='notes'),
    path('notes/<slug:page_key>/<int:pk>/', views.note_update_view, name='note_update'),
    path('notes/<slug:page_key>/<int:pk>/delete/', views.note_delete_view, name='note_delete'),
    path('settings/', views.settings_view, name='settings'),
    path('columns/<slug:table_key>/', views.columns_view, name='columns'),
]
