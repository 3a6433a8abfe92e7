from django.contrib import admin
from django.utils.html import format_html
from .models import Document, DocumentAssignment, format_file_size


STATUS_COLORS = {
    'Active': '#28a745',
    'Archived': '#6c757d',
    'Deleted': '#dc3545',
}


class DocumentAssignmentInline(admin.TabularInline):
    model = DocumentAssignment
    extra = 0
    fields = ['employee', 'can_view', 'can_download']
    autocomplete_fields = ['employee']


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):

    list_display = ['title', 'category', 'status_badge', 'file_name', 'size', 'created_by', 'created_at']
    list_filter = ['category', 'status', 'created_at']
    search_fields = ['title', 'description', 'file_name']
    list_select_related = ['created_by']
    readonly_fields = ['file_name', 'file_type', 'file_size', 'created_at', 'updated_at']
    inlines = [DocumentAssignmentInline]
    list_per_page = 25

    def status_badge(self, obj):
        return format_html(
            '<span style="background-color: {}; color: white; '
            'padding: 3px 10px; border-radius: 3px; font-size: 11px;">{}</span>',
            STATUS_COLORS.get(obj.status, '#343a40'), obj.status
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def size(self, obj):
        return format_file_size(obj.file_size)
    size.admin_order_field = 'file_size'


@admin.register(DocumentAssignment)
class DocumentAssignmentAdmin(admin.ModelAdmin):

    list_display = ['document', 'employee', 'can_view', 'can_download', 'created_at']
    list_filter = ['can_view', 'can_download']
    search_fields = ['document__title', 'employee__full_name']
    list_select_related = ['document', 'employee']
