from django.contrib import admin
from django.utils.html import format_html
from .models import CallLog, Lead


class CallLogInline(admin.TabularInline):
    model = CallLog
    extra = 0
    fields = ['call_type', 'call_date', 'duration', 'sentiment', 'employee']
    readonly_fields = ['call_date']
    show_change_link = True


@admin.register(Lead)
class LeadAdmin(admin.ModelAdmin):

    list_display = ['name', 'mobile', 'city', 'source', 'stage', 'priority_badge', 'assigned_to_display', 'date_and_time']
    list_filter = ['stage', 'source', 'priority', 'date_and_time']
    search_fields = ['name', 'mobile', 'email', 'city']
    list_select_related = ['assigned_to']
    date_hierarchy = 'date_and_time'
    list_per_page = 25
    inlines = [CallLogInline]

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'mobile', 'email', 'city')
        }),
        ('Classification', {
            'fields': ('services', 'source', 'stage', 'priority', 'tags')
        }),
        ('Assignment & Follow-up', {
            'fields': ('assigned_to', 'follow_up_date')
        }),
        ('Call Outcome', {
            'fields': ('call_connected', 'call_remark', 'call_notes'),
            'classes': ('collapse',)
        }),
        ('Deal', {
            'fields': ('deal_amount', 'client_budget', 'date_and_time')
        }),
    )

    actions = ['mark_follow_up', 'mark_not_connected']

    def priority_badge(self, obj):
        colors = {
            'Low': '#6c757d',
            'Medium': '#ffc107',
            'High': '#dc3545',
        }
        if not obj.priority:
            return '-'
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            colors.get(obj.priority, '#6c757d'),
            obj.priority
        )
    priority_badge.short_description = 'Priority'

    def assigned_to_display(self, obj):
        if obj.assigned_to:
            return format_html(
                '<span style="background-color: #667eea; color: white; '
                'padding: 2px 6px; border-radius: 50%; font-size: 10px; '
                'margin-right: 5px;">{}</span> {}',
                obj.assigned_to.get_initials(),
                obj.assigned_to.full_name
            )
        return format_html('<span style="color: #999;">{}</span>', 'Unassigned')
    assigned_to_display.short_description = 'Assigned To'

    def mark_follow_up(self, request, queryset):
        count = queryset.update(stage='Follow Up Required')
        self.message_user(request, f'Updated {count} leads to "Follow Up Required"')
    mark_follow_up.short_description = 'Mark as "Follow Up Required"'

    def mark_not_connected(self, request, queryset):
        count = queryset.update(stage='Not Connected')
        self.message_user(request, f'Updated {count} leads to "Not Connected"')
    mark_not_connected.short_description = 'Mark as "Not Connected"'


@admin.register(CallLog)
class CallLogAdmin(admin.ModelAdmin):

    list_display = ['client_name', 'client_number', 'call_type', 'call_date', 'duration', 'sentiment', 'employee']
    list_filter = ['call_type', 'sentiment', 'call_date']
    search_fields = ['client_name', 'client_number']
    list_select_related = ['employee']
    list_per_page = 25
