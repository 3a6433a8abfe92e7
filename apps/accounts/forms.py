from django import forms
from django.utils.translation import gettext_lazy as _

from .models import User
from .roles import catalog


class LoginForm(forms.Form):
    email = forms.EmailField(label=_('Email Address'), max_length=255, required=True)
    password = forms.CharField(label=_('Password'), required=True, widget=forms.PasswordInput)
    remember = forms.BooleanField(label=_('Remember me'), required=False, initial=False)

    def clean_email(self):
        return self.cleaned_data['email'].strip().lower()


class RoleForm(forms.Form):
    """Create or edit a role bundle in the in-memory catalog"""

    id = forms.SlugField(label=_('Role ID'), max_length=30)
    name = forms.CharField(label=_('Role Name'), max_length=100)
    description = forms.CharField(label=_('Description'), max_length=255, required=False)
    permissions = forms.MultipleChoiceField(label=_('Permissions'), required=False, choices=())

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['permissions'].choices = [
            (permission_id, permission_id) for permission_id in catalog.all_permission_ids()
        ]

    def clean_name(self):
        name = self.cleaned_data['name'].strip()
        if not name:
            raise forms.ValidationError(_('Role name is required'))
        return name


class UserRoleForm(forms.ModelForm):

    class Meta:
        model = User
        fields = ['role']

    def clean_role(self):
        role = self.cleaned_data['role']
        if role not in catalog.roles:
            raise forms.ValidationError(_('Unknown role'))
        return role
