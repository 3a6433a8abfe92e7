from django.contrib import admin
from django.utils.html import format_html
from .models import AttendanceRecord
from .policy import format_time


STATUS_COLORS = {
    'Present': '#28a745',
    'Late': '#ffc107',
    'Half Day': '#fd7e14',
}


@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):

    list_display = ['full_name_from_employee', 'date', 'check_in', 'check_out', 'status_badge', 'working_hours']
    list_filter = ['status', 'date']
    search_fields = ['full_name_from_employee', 'employee_id_from_employee']
    list_select_related = ['employee']
    date_hierarchy = 'date'
    list_per_page = 50

    def check_in(self, obj):
        return format_time(obj.time_in) or '-'
    check_in.short_description = 'Check In'

    def check_out(self, obj):
        return format_time(obj.time_out) or '-'
    check_out.short_description = 'Check Out'

    def status_badge(self, obj):
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 10px; border-radius: 3px; font-size: 11px;">{}</span>',
            STATUS_COLORS.get(obj.base_status, '#6c757d'), obj.status or '-'
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'
