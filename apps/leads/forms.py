import re

from django import forms
from django.core.exceptions import ValidationError
from taggit.utils import edit_string_for_tags

from apps.employees.models import Employee
from .models import Lead


class LeadForm(forms.ModelForm):
    class Meta:
        model = Lead
        fields = [
            'name', 'mobile', 'email', 'city', 'services', 'source', 'stage', 'priority',
            'assigned_to', 'follow_up_date', 'call_connected', 'call_remark', 'call_notes',
            'deal_amount', 'client_budget', 'tags',
        ]

        error_messages = {
            'name': {'max_length': 'Name is too long (max 200 characters)'},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['assigned_to'].queryset = Employee.objects.exclude(status='Resigned')
        if self.instance.pk:
            self.initial['tags'] = edit_string_for_tags(self.instance.tags.all())

    def clean_mobile(self):
        mobile = (self.cleaned_data.get('mobile') or '').strip()
        if mobile and len(re.sub(r'\D', '', mobile)) < 10:
            raise ValidationError('Mobile number must have at least 10 digits')
        return mobile

    def clean_email(self):
        email = self.cleaned_data.get('email')
        if email:
            return email.strip().lower()
        return ''

    def clean_deal_amount(self):
        amount = self.cleaned_data.get('deal_amount')
        if amount is not None and amount < 0:
            raise ValidationError('Deal amount cannot be negative')
        return amount

    def clean(self):
        cleaned_data = super().clean()
        if not cleaned_data.get('name') and not cleaned_data.get('mobile'):
            raise ValidationError('A lead needs a name or a mobile number')
        return cleaned_data


class LeadStageChangeForm(forms.Form):
    stage = forms.CharField(max_length=100, label='New Stage', required=True)

    def clean_stage(self):
        return self.cleaned_data['stage'].strip()


class LeadAssignForm(forms.Form):
    assigned_to = forms.ModelChoiceField(queryset=Employee.objects.none(), label='Assign To', required=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['assigned_to'].queryset = Employee.objects.filter(status='Active')


class LeadBulkAssignForm(LeadAssignForm):
    leads = forms.ModelMultipleChoiceField(queryset=Lead.objects.all(), label='Leads', required=True)


class LeadMergeForm(forms.Form):
    leads = forms.ModelMultipleChoiceField(queryset=Lead.objects.all(), label='Leads', required=True)

    def clean_leads(self):
        leads = self.cleaned_data['leads']
        if len(leads) < 2:
            raise ValidationError('Select at least two leads to merge')
        return leads
