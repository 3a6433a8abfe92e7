from django.urls import path
from . import views

app_name = 'accounts'

urlpatterns = [

    path('login/', views.login_view, name='login'),
    path('logout/', views.logout_view, name='logout'),
    path('me/', views.me_view, name='me'),

    path('roles/', views.roles_view, name='roles'),
    path('roles/<slug:role_id>/', views.role_update_view, name='role_update'),
    path('roles/<slug:role_id>/delete/', views.role_delete_view, name='role_delete'),

    path('users/<int:pk>/role/', views.user_role_view, name='user_role'),
    path('users/<int:pk>/toggle-status/', views.toggle_user_status, name='user_toggle_status'),
]
