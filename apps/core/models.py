from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class AdminNote(models.Model):
    """Quick note attached to one dashboard page (notes panel in the header)"""

    page_key = models.CharField(max_length=100, db_index=True, help_text="Page the note belongs to, e.g. 'leads-notes'")
    title = models.CharField(max_length=200, blank=True, help_text="Note title")
    notes = models.TextField(blank=True, help_text="Note body")
    updated_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = 'admin_notes'
        verbose_name = _("Admin Note")
        verbose_name_plural = _("Admin Notes")
        ordering = ['-updated_at']

    def __str__(self):
        return f"{self.page_key}: {self.display_title}"

    @property
    def display_title(self):
        return self.title or self.notes[:30] or 'Untitled Note'

    def as_row(self):
        return {
            'id': str(self.pk),
            'page_key': self.page_key,
            'title': self.display_title,
            'content': self.notes or '',
            'created_at': self.updated_at.isoformat() if self.updated_at else '',
        }


class SystemSetting(models.Model):
    """Key → JSON blob. The admin settings page lives under key 'system_settings'."""

    key = models.CharField(max_length=100, unique=True)
    value = models.JSONField(default=dict, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'system_settings'
        verbose_name = _("System Setting")
        verbose_name_plural = _("System Settings")

    def __str__(self):
        return self.key
