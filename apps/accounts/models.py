# Models:
# 1. User - dashboard login account (email login + role id from the catalog)


from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class UserManager(BaseUserManager):
    """Email-keyed manager; ``role`` defaults to 'employee' (superusers get 'admin')"""

    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        """
        Example:
            User.objects.create_user('priya@company.com', 'securepass123', first_name='Priya', role='manager')
        """
        if not email:
            raise ValueError(_('Users must have an email address'))

        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)

        user = self.model(email=self.normalize_email(email), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('role', 'admin')

        if not extra_fields['is_staff'] or not extra_fields['is_superuser']:
            raise ValueError(_('Superuser must have is_staff=True and is_superuser=True'))

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Dashboard login account

    The role is a plain id resolved against ``apps.accounts.roles.catalog``,
    so custom roles added at runtime need no migration. The matching
    Employee Directory row (if any) shares the official email.
    """

    email = models.EmailField(_('email address'), unique=True, max_length=255, help_text=_('Used for login.'))
    first_name = models.CharField(_('first name'), max_length=50, blank=True)
    last_name = models.CharField(_('last name'), max_length=50, blank=True)

    role = models.CharField(_('role'), max_length=30, default='employee', db_index=True,
                            help_text=_('Role id: admin, manager, employee, viewer or a custom role'))

    is_active = models.BooleanField(_('active'), default=True)
    is_staff = models.BooleanField(_('staff status'), default=False, help_text=_('Can log into the Django admin.'))
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-date_joined']

    def __str__(self):
        name = self.get_full_name()
        return self.email if name == self.email else f"{name} ({self.email})"

    def get_full_name(self):
        return ' '.join(part for part in (self.first_name, self.last_name) if part) or self.email

    def get_short_name(self):
        return self.first_name or self.email

    def get_initials(self):
        parts = [part for part in (self.first_name, self.last_name) if part] or [self.email]
        return ''.join(part[0] for part in parts).upper()

    # ROLE CHECKS
    def is_admin(self):
        return self.is_superuser or self.role == 'admin'

    def is_manager(self):
        return self.role == 'manager'

    def get_permissions(self):
        """Permission ids granted by the role bundle (everything for superusers)"""
        from .roles import catalog

        if self.is_superuser:
            return catalog.all_permission_ids()
        return catalog.permissions_for(self.role)

    def has_dashboard_permission(self, permission_id):
        return permission_id in self.get_permissions()
