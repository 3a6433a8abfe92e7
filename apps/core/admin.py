from django.contrib import admin
from .models import AdminNote, SystemSetting


@admin.register(AdminNote)
class AdminNoteAdmin(admin.ModelAdmin):

    list_display = ['page_key', 'display_title', 'updated_at']
    list_filter = ['page_key']
    search_fields = ['title', 'notes']
    ordering = ['-updated_at']

    fieldsets = (
        ('Note', {
            'fields': ('page_key', 'title', 'notes')
        }),
        ('Timestamps', {
            'fields': ('updated_at',),
            'classes': ('collapse',)
        }),
    )

    def display_title(self, obj):
        return obj.display_title

    display_title.short_description = 'Title'


@admin.register(SystemSetting)
class SystemSettingAdmin(admin.ModelAdmin):

    list_display = ['key', 'updated_at']
    search_fields = ['key']
    readonly_fields = ['updated_at']
