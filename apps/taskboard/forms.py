from django import forms
from django.core.exceptions import ValidationError

from apps.employees.models import Employee
from .models import Task


class TaskForm(forms.ModelForm):
    class Meta:
        model = Task
        fields = ['title', 'description', 'status', 'priority', 'due_date', 'assignee']

        error_messages = {
            'title': {'required': 'Please enter a task title'},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['assignee'].queryset = Employee.objects.exclude(status='Resigned')
        # omitted on create -> model defaults (pending / medium)
        self.fields['status'].required = False
        self.fields['priority'].required = False

    def clean_title(self):
        title = (self.cleaned_data.get('title') or '').strip()
        if not title:
            raise ValidationError('Please enter a task title')
        return title

    def clean_status(self):
        return self.cleaned_data.get('status') or self.instance.status

    def clean_priority(self):
        return self.cleaned_data.get('priority') or self.instance.priority


class TaskStatusForm(forms.Form):
    status = forms.ChoiceField(choices=Task.STATUS_CHOICES, label='New Status')


class TaskShareForm(forms.Form):
    assignee = forms.ModelChoiceField(
        queryset=Employee.objects.none(), label='Share With',
        error_messages={'required': 'Please select an employee to share with'},
    )
    message = forms.CharField(widget=forms.Textarea, required=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['assignee'].queryset = Employee.objects.exclude(status='Resigned')
