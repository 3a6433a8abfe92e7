from django.urls import path
from . import views

app_name = 'documents'

urlpatterns = [
    path('', views.document_list_view, name='document_list'),
    path('create/', views.document_create_view, name='document_create'),
    path('export/', views.document_export_view, name='document_export'),
    path('mine/', views.my_documents_view, name='my_documents'),
    path('<uuid:pk>/edit/', views.document_update_view, name='document_update'),
    path('<uuid:pk>/assign/', views.document_assign_view, name='document_assign'),
    path('<uuid:pk>/delete/', views.document_delete_view, name='document_delete'),
    path('<uuid:pk>/download/', views.document_download_view, name='document_download'),
]
