from django.contrib import admin, messages
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import User
from .roles import catalog


ROLE_COLORS = {
    'admin': '#28a745',  # Green
    'manager': '#6f42c1',  # Purple
    'employee': '#007bff',  # Blue
    'viewer': '#6c757d',  # Gray
}


# DASHBOARD ACCOUNTS
@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('email', 'full_name', 'role_badge', 'permission_count', 'directory_row', 'is_active', 'last_login')
    list_display_links = ('email', 'full_name')
    list_filter = ('role', 'is_active', 'is_superuser')
    search_fields = ('email', 'first_name', 'last_name')
    ordering = ('-date_joined',)
    list_per_page = 25
    actions = ['activate_accounts', 'deactivate_accounts']

    fieldsets = (
        (_('Login'), {'fields': ('email', 'password')}),
        (_('Profile'), {'fields': ('first_name', 'last_name')}),
        (_('Dashboard Role'), {
            'fields': ('role',),
            'description': _('Role id from the in-memory catalog; unknown ids grant nothing.'),
        }),
        (_('Django Access'), {
            'fields': ('is_active', 'is_staff', 'is_superuser'),
            'classes': ('collapse',),
        }),
        (_('Activity'), {
            'fields': ('date_joined', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        (None, {
            'fields': ('email', 'first_name', 'last_name', 'role', 'password1', 'password2'),
            'classes': ('wide',),
        }),
    )

    readonly_fields = ('date_joined', 'last_login')

    @admin.display(description=_('Name'), ordering='first_name')
    def full_name(self, obj):
        return obj.get_full_name()

    @admin.display(description=_('Role'), ordering='role')
    def role_badge(self, obj):
        role = catalog.roles.get(obj.role)
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 10px; border-radius: 3px;">{}</span>',
            ROLE_COLORS.get(obj.role, '#343a40'), role.name if role else obj.role,
        )

    @admin.display(description=_('Permissions'))
    def permission_count(self, obj):
        return len(obj.get_permissions())

    @admin.display(description=_('Employee'))
    def directory_row(self, obj):
        from apps.employees.models import Employee

        employee = Employee.objects.for_user(obj)
        return employee.full_name if employee else '-'

    @admin.action(description=_('Activate selected accounts'))
    def activate_accounts(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, f'{updated} account(s) activated.', messages.SUCCESS)

    @admin.action(description=_('Deactivate selected accounts'))
    def deactivate_accounts(self, request, queryset):
        updated = queryset.exclude(pk=request.user.pk).update(is_active=False)
        self.message_user(request, f'{updated} account(s) deactivated.', messages.SUCCESS)
