from django.contrib import admin
from django.utils.html import format_html
from .models import Employee


STATUS_COLORS = {
    'Active': '#28a745',
    'Onboarding': '#17a2b8',
    'Resigned': '#6c757d',
}


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):

    list_display = ['full_name', 'employee_id', 'official_email', 'job_title', 'status_badge', 'date_of_joining']
    list_filter = ['status', 'employment_type', 'work_mode']
    search_fields = ['full_name', 'employee_id', 'official_email', 'official_contact_number', 'job_title']
    ordering = ['full_name']
    list_per_page = 25

    fieldsets = (
        ('Identity', {
            'fields': ('full_name', 'employee_id', 'profile_photo', 'dob')
        }),
        ('Contact', {
            'fields': ('official_email', 'official_contact_number', 'personal_email',
                       'personal_contact_number', 'current_address', 'permanent_address', 'linkedin_profile')
        }),
        ('Employment', {
            'fields': ('job_title', 'date_of_joining', 'employment_type', 'work_mode', 'status',
                       'reporting_manager', 'teams')
        }),
    )

    def status_badge(self, obj):
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 10px; border-radius: 3px; font-size: 11px;">{}</span>',
            STATUS_COLORS.get(obj.status, '#343a40'), obj.status
        )

    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'
