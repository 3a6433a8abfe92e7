import uuid

from django.conf import settings
from django.db import models


class EmployeeManager(models.Manager):

    def for_user(self, user):
        """Employee row for a login account (official email, case-insensitive) or None"""
        if not getattr(user, 'is_authenticated', False) or not user.email:
            return None
        return self.filter(official_email__iexact=user.email).first()


class Employee(models.Model):

    STATUS_CHOICES = [
        ('Active', 'Active'),
        ('Onboarding', 'Onboarding'),
        ('Resigned', 'Resigned'),
    ]

    whalesync_postgres_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Identity
    full_name = models.CharField(max_length=200, help_text="Employee's full name")
    employee_id = models.CharField(max_length=50, blank=True, db_index=True, help_text='HR employee code, e.g. EMP-014')
    profile_photo = models.URLField(max_length=500, blank=True)
    dob = models.DateField(null=True, blank=True)

    # Contact
    official_email = models.EmailField(blank=True, db_index=True, help_text='Work email, also used for login')
    official_contact_number = models.CharField(max_length=30, blank=True)
    personal_email = models.EmailField(blank=True)
    personal_contact_number = models.CharField(max_length=30, blank=True)
    current_address = models.TextField(blank=True)
    permanent_address = models.TextField(blank=True)
    linkedin_profile = models.URLField(max_length=500, blank=True)

    # Employment
    job_title = models.CharField(max_length=150, blank=True)
    date_of_joining = models.DateField(null=True, blank=True)
    employment_type = models.CharField(max_length=50, blank=True, help_text='Full-time, Intern, Contract...')
    work_mode = models.CharField(max_length=50, blank=True, help_text='Office, Remote, Hybrid')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='Active', db_index=True)
    reporting_manager = models.CharField(max_length=200, blank=True)
    teams = models.CharField(max_length=200, blank=True)

    objects = EmployeeManager()

    class Meta:
        db_table = 'Employee Directory'
        verbose_name = 'Employee'
        verbose_name_plural = 'Employees'
        ordering = ['full_name']

    def __str__(self):
        return f"{self.full_name} ({self.job_title or 'No title'})"

    def get_initials(self):
        parts = (self.full_name or '').split()
        if len(parts) >= 2:
            return f"{parts[0][0]}{parts[1][0]}".upper()
        elif len(parts) == 1:
            return parts[0][0].upper()
        return "?"

    @property
    def is_tech_team(self):
        """Tech team works 10:00-18:00 instead of 09:30-18:30"""
        title = (self.job_title or '').lower()
        return any(keyword in title for keyword in settings.ATTENDANCE_TECH_KEYWORDS)

    @property
    def board_status(self):
        """Kanban column; anything unexpected lands in Active"""
        valid = {value for value, _ in self.STATUS_CHOICES}
        return self.status if self.status in valid else 'Active'

    def as_row(self):
        return {
            'id': str(self.pk),
            'full_name': self.full_name or '',
            'employee_id': self.employee_id or '',
            'profile_photo': self.profile_photo or '',
            'initials': self.get_initials(),
            'official_email': self.official_email or '',
            'official_contact_number': self.official_contact_number or '',
            'personal_email': self.personal_email or '',
            'personal_contact_number': self.personal_contact_number or '',
            'job_title': self.job_title or '',
            'date_of_joining': self.date_of_joining.isoformat() if self.date_of_joining else '',
            'dob': self.dob.isoformat() if self.dob else '',
            'employment_type': self.employment_type or '',
            'work_mode': self.work_mode or '',
            'status': self.board_status,
            'reporting_manager': self.reporting_manager or '',
            'teams': self.teams or '',
            'current_address': self.current_address or '',
            'permanent_address': self.permanent_address or '',
            'linkedin_profile': self.linkedin_profile or '',
        }
