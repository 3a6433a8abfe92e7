import uuid

from django.db import models
from django.utils import timezone
from taggit.managers import TaggableManager
from taggit.models import GenericUUIDTaggedItemBase, TaggedItemBase

from apps.core.links import contact_links
from apps.employees.models import Employee


# Stages the employee work queues are built from
NEW_STAGES = ['New', 'Assigned']
FOLLOW_UP_STAGE = 'Follow Up Required'
NOT_CONNECTED_STAGE = 'Not Connected'


class UUIDTaggedItem(GenericUUIDTaggedItemBase, TaggedItemBase):
    """Tag link for models keyed by UUID"""

    class Meta:
        verbose_name = "Tag"
        verbose_name_plural = "Tags"


class Lead(models.Model):

    PRIORITY_CHOICES = [
        ('Low', 'Low'),
        ('Medium', 'Medium'),
        ('High', 'High'),
    ]

    whalesync_postgres_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Basic Information
    name = models.CharField(max_length=200, blank=True, help_text="Lead's full name")
    mobile = models.CharField(max_length=30, blank=True, db_index=True, help_text='Phone number as entered')
    email = models.EmailField(blank=True, help_text='Email address (optional)')
    city = models.CharField(max_length=100, blank=True)

    # Lead Classification (free text - stages and sources come from the sales team's sheet)
    services = models.CharField(max_length=255, blank=True, help_text='Comma separated, e.g. "USA LLC Formation, Brand Development"')
    source = models.CharField(max_length=100, blank=True, db_index=True)
    stage = models.CharField(max_length=100, blank=True, default='New', db_index=True)
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, blank=True)

    # Assignment & Follow-up
    assigned_to = models.ForeignKey(Employee, on_delete=models.SET_NULL, null=True, blank=True,
                                    related_name='assigned_leads', db_column='assigned_to',
                                    help_text='Employee responsible for this lead')
    follow_up_date = models.DateTimeField(null=True, blank=True, db_index=True)

    # Call outcome
    call_connected = models.CharField(max_length=20, blank=True, help_text='Yes / No')
    call_remark = models.CharField(max_length=255, blank=True)
    call_notes = models.TextField(blank=True)

    # Money
    deal_amount = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    client_budget = models.CharField(max_length=100, blank=True)

    tags = TaggableManager(through=UUIDTaggedItem, blank=True)

    date_and_time = models.DateTimeField(default=timezone.now, db_index=True, help_text='When the lead came in')

    class Meta:
        db_table = 'Leads'
        verbose_name = 'Lead'
        verbose_name_plural = 'Leads'
        ordering = ['-date_and_time']
        indexes = [
            models.Index(fields=['assigned_to', 'stage'], name='leads_assigned_stage_idx'),
        ]

    def __str__(self):
        return f"{self.name or 'Unnamed'} ({self.mobile or 'no mobile'}) - {self.stage or 'No stage'}"

    def get_initials(self):
        parts = (self.name or '').split()
        if len(parts) >= 2:
            return f"{parts[0][0]}{parts[1][0]}".upper()
        elif len(parts) == 1:
            return parts[0][0].upper()
        return "?"

    def is_due_today(self, today=None):
        if not self.follow_up_date:
            return False
        today = today or timezone.localdate()
        return timezone.localtime(self.follow_up_date).date() == today

    def change_stage(self, new_stage):
        self.stage = new_stage
        self.save(update_fields=['stage'])

    def assign_to(self, employee):
        self.assigned_to = employee
        if employee and self.stage in ('', 'New'):
            self.stage = 'Assigned'
        self.save(update_fields=['assigned_to', 'stage'])

    def as_row(self):
        return {
            'id': str(self.pk),
            'name': self.name or '',
            'mobile': self.mobile or '',
            'email': self.email or '',
            'city': self.city or '',
            'services': self.services or '',
            'source': self.source or '',
            'stage': self.stage or '',
            'priority': self.priority or '',
            'assigned_to': str(self.assigned_to_id) if self.assigned_to_id else '',
            'assigned_to_name': self.assigned_to.full_name if self.assigned_to_id else '',
            'follow_up_date': self.follow_up_date.isoformat() if self.follow_up_date else '',
            'due_today': self.is_due_today(),
            'call_connected': self.call_connected or '',
            'call_remark': self.call_remark or '',
            'call_notes': self.call_notes or '',
            'deal_amount': float(self.deal_amount) if self.deal_amount is not None else 0,
            'client_budget': self.client_budget or '',
            'date_and_time': self.date_and_time.isoformat() if self.date_and_time else '',
            'tags': sorted(tag.name for tag in self.tags.all()),
            'links': contact_links(self.mobile),
        }


class CallLog(models.Model):

    CALL_TYPE_CHOICES = [
        ('Incoming', 'Incoming'),
        ('Outgoing', 'Outgoing'),
        ('Missed', 'Missed'),
    ]

    whalesync_postgres_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    client_name = models.CharField(max_length=200, blank=True)
    client_number = models.CharField(max_length=30, blank=True)
    call_type = models.CharField(max_length=20, choices=CALL_TYPE_CHOICES, blank=True, db_index=True)
    call_date = models.DateTimeField(default=timezone.now, db_index=True)
    duration = models.PositiveIntegerField(default=0, help_text='Seconds')
    sentiment = models.CharField(max_length=30, blank=True)
    service = models.CharField(max_length=255, blank=True)

    leads = models.ForeignKey(Lead, on_delete=models.SET_NULL, null=True, blank=True,
                              related_name='calls', db_column='leads')
    employee = models.ForeignKey(Employee, on_delete=models.SET_NULL, null=True, blank=True,
                                 related_name='calls', db_column='employee')

    class Meta:
        db_table = 'Calls'
        verbose_name = 'Call'
        verbose_name_plural = 'Calls'
        ordering = ['-call_date']

    def __str__(self):
        return f"{self.call_type or 'Call'} - {self.client_name or self.client_number}"

    def as_row(self):
        return {
            'id': str(self.pk),
            'client_name': self.client_name or '',
            'client_number': self.client_number or '',
            'call_type': self.call_type or '',
            'call_date': self.call_date.isoformat() if self.call_date else '',
            'duration': self.duration or 0,
            'sentiment': self.sentiment or '',
            'service': self.service or '',
            'lead': str(self.leads_id) if self.leads_id else '',
            'employee': str(self.employee_id) if self.employee_id else '',
        }
