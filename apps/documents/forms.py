from django import forms
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import UploadedFile

from apps.employees.models import Employee
from .models import Document


class DocumentForm(forms.ModelForm):
    class Meta:
        model = Document
        fields = ['title', 'description', 'category', 'status', 'file', 'file_url']

        error_messages = {
            'title': {'required': 'Please enter a document title'},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['category'].required = False
        self.fields['status'].required = False

    def clean_category(self):
        return self.cleaned_data.get('category') or self.instance.category

    def clean_status(self):
        return self.cleaned_data.get('status') or self.instance.status

    def clean_file(self):
        upload = self.cleaned_data.get('file')
        if isinstance(upload, UploadedFile) and upload.size > settings.DOCUMENT_MAX_UPLOAD_SIZE:
            limit = settings.DOCUMENT_MAX_UPLOAD_SIZE // (1024 * 1024)
            raise ValidationError(f'File is too large (max {limit} MB)')
        return upload

    def clean(self):
        cleaned_data = super().clean()
        has_file = cleaned_data.get('file') or cleaned_data.get('file_url')
        if not has_file and not (self.instance.file or self.instance.file_url):
            raise ValidationError('Please select a file to upload')
        return cleaned_data

    def save(self, commit=True):
        document = super().save(commit=False)

        upload = self.cleaned_data.get('file')
        if isinstance(upload, UploadedFile):
            document.file_name = upload.name
            document.file_type = upload.content_type or ''
            document.file_size = upload.size
        elif document.file_url and not document.file_name:
            document.file_name = document.file_url.rstrip('/').rsplit('/', 1)[-1]

        if commit:
            document.save()
        return document


class DocumentAssignForm(forms.Form):
    employees = forms.ModelMultipleChoiceField(queryset=Employee.objects.none(), required=False)
    view_only = forms.ModelMultipleChoiceField(
        queryset=Employee.objects.none(), required=False,
        help_text='Assigned employees who may view but not download',
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['employees'].queryset = Employee.objects.filter(status='Active')
        self.fields['view_only'].queryset = Employee.objects.filter(status='Active')

    def assignments(self):
        view_only = {employee.pk for employee in self.cleaned_data['view_only']}
        return [
            {'employee': employee, 'can_view': True, 'can_download': employee.pk not in view_only}
            for employee in self.cleaned_data['employees']
        ]
