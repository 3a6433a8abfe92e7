from django.urls import path
from . import views

app_name = 'attendance'

urlpatterns = [
    path('', views.attendance_list_view, name='attendance_list'),
    path('export/', views.attendance_export_view, name='attendance_export'),
    path('today/', views.today_view, name='today'),
    path('check-in/', views.check_in_view, name='check_in'),
    path('check-out/', views.check_out_view, name='check_out'),
    path('history/', views.history_view, name='history'),
]
