from django.contrib import admin
from django.utils.html import format_html
from .models import Task


STATUS_COLORS = {
    'pending': '#ffc107',
    'in_progress': '#17a2b8',
    'completed': '#28a745',
    'cancelled': '#dc3545',
}

PRIORITY_COLORS = {
    'low': '#6c757d',
    'medium': '#17a2b8',
    'high': '#fd7e14',
    'urgent': '#dc3545',
}


def _badge(color, text):
    return format_html(
        '<span style="background-color: {}; color: white; padding: 3px 8px; '
        'border-radius: 3px; font-size: 11px;">{}</span>',
        color, text
    )


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):

    list_display = ['title', 'assignee', 'status_badge', 'priority_badge', 'due_date', 'overdue', 'update_count']
    list_filter = ['status', 'priority', 'due_date']
    search_fields = ['title', 'description', 'assignee__full_name']
    list_select_related = ['assignee']
    readonly_fields = ['completed_on', 'update_count', 'shared_from', 'created_at', 'updated_at']
    list_per_page = 25

    actions = ['mark_completed']

    def status_badge(self, obj):
        return _badge(STATUS_COLORS.get(obj.status, '#6c757d'), obj.get_status_display())
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def priority_badge(self, obj):
        return _badge(PRIORITY_COLORS.get(obj.priority, '#6c757d'), obj.get_priority_display())
    priority_badge.short_description = 'Priority'
    priority_badge.admin_order_field = 'priority'

    def overdue(self, obj):
        return obj.days_overdue or '-'
    overdue.short_description = 'Days Overdue'

    def mark_completed(self, request, queryset):
        count = 0
        for task in queryset.exclude(status='completed'):
            task.change_status('completed')
            count += 1
        self.message_user(request, f'{count} task(s) marked as completed')
    mark_completed.short_description = 'Mark selected tasks as completed'
