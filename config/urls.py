from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from django.shortcuts import redirect

# Main URL Configuration
# Every app answers JSON; the dashboard front-end consumes these routes

urlpatterns = [

    path('admin/', admin.site.urls),
    path('accounts/', include('apps.accounts.urls')),
    path('dashboard/', include('apps.core.urls')),
    path('', lambda request: redirect('core:dashboard') if request.user.is_authenticated else redirect('accounts:login')),
    path('employees/', include('apps.employees.urls')),
    path('leads/', include('apps.leads.urls')),
    path('attendance/', include('apps.attendance.urls')),
    path('tasks/', include('apps.taskboard.urls')),
    path('documents/', include('apps.documents.urls')),

]

if settings.DEBUG:
    # Media files (uploaded documents)
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

    # Static files (admin CSS, JS)
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
