"""
System settings (admin panel → Settings).

Stored as one JSON row in system_settings under SETTINGS_KEY and merged over
DEFAULT_SETTINGS on read, so new default keys show up without a migration.
"""

import copy
import logging

from .models import SystemSetting

logger = logging.getLogger(__name__)

SETTINGS_KEY = 'system_settings'

DEFAULT_SETTINGS = {
    'general': {
        'companyName': 'Your Company',
        'companyEmail': 'admin@company.com',
        'timezone': 'Asia/Kolkata',
        'dateFormat': 'DD/MM/YYYY',
        'currency': 'INR',
        'language': 'en',
    },
    'notifications': {
        'emailNotifications': True,
        'smsNotifications': False,
        'pushNotifications': True,
        'leadAssigned': True,
        'leadConverted': True,
        'taskReminder': True,
        'reportGenerated': False,
    },
    'security': {
        'twoFactorAuth': False,
        'sessionTimeout': 30,
        'passwordPolicy': 'medium',
        'ipWhitelist': [],
        'auditLogging': True,
    },
    'integrations': {
        'emailProvider': 'smtp',
        'smsProvider': 'twilio',
        'calendarSync': True,
        'crmSync': True,
        'analyticsTracking': True,
    },
    'appearance': {
        'theme': 'light',
        'primaryColor': '#3b82f6',
        'logo': '',
        'favicon': '',
        'customCss': '',
    },
}


class SettingsError(ValueError):
    pass


def deep_merge(base, override):
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_settings():
    row = SystemSetting.objects.filter(key=SETTINGS_KEY).first()
    return deep_merge(DEFAULT_SETTINGS, row.value if row else {})


def save_settings(data):
    """
    Merge ``data`` ({section: {key: value}}) into the stored settings.

    Raises:
        SettingsError: unknown section, or a section that is not an object
    """
    if not isinstance(data, dict):
        raise SettingsError('Settings must be an object')

    for section, values in data.items():
        if section not in DEFAULT_SETTINGS:
            raise SettingsError(f"Unknown settings section '{section}'")
        if not isinstance(values, dict):
            raise SettingsError(f"Settings section '{section}' must be an object")

    merged = deep_merge(load_settings(), data)
    SystemSetting.objects.update_or_create(key=SETTINGS_KEY, defaults={'value': merged})
    logger.info(f"System settings updated ({', '.join(data) or 'no sections'})")
    return merged


def reset_settings():
    SystemSetting.objects.filter(key=SETTINGS_KEY).delete()
    return copy.deepcopy(DEFAULT_SETTINGS)
