import re

from django import forms
from django.core.exceptions import ValidationError

from .models import Employee


class EmployeeForm(forms.ModelForm):
    class Meta:
        model = Employee
        fields = [
            'full_name', 'employee_id', 'profile_photo', 'dob',
            'official_email', 'official_contact_number', 'personal_email', 'personal_contact_number',
            'current_address', 'permanent_address', 'linkedin_profile',
            'job_title', 'date_of_joining', 'employment_type', 'work_mode', 'status',
            'reporting_manager', 'teams',
        ]

        error_messages = {
            'full_name': {'required': 'Full name is required', 'max_length': 'Name is too long (max 200 characters)'},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # omitted on create -> Active
        self.fields['status'].required = False

    def clean_status(self):
        return self.cleaned_data.get('status') or self.instance.status

    def clean_full_name(self):
        full_name = self.cleaned_data.get('full_name', '').strip()
        if not full_name:
            raise ValidationError('Full name is required')
        return full_name

    def clean_official_email(self):
        email = (self.cleaned_data.get('official_email') or '').strip().lower()
        if not email:
            return ''

        duplicates = Employee.objects.filter(official_email__iexact=email)
        if self.instance.pk:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise ValidationError('Another employee already uses this official email')
        return email

    def _clean_phone(self, field):
        phone = (self.cleaned_data.get(field) or '').strip()
        if phone and len(re.sub(r'\D', '', phone)) < 10:
            raise ValidationError('Phone number must have at least 10 digits')
        return phone

    def clean_official_contact_number(self):
        return self._clean_phone('official_contact_number')

    def clean_personal_contact_number(self):
        return self._clean_phone('personal_contact_number')
