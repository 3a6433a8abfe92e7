import os
from datetime import time
from pathlib import Path
from decouple import config


# BASE DIRECTORY
# Build paths inside the project like this: BASE_DIR / 'subdir'
# BASE_DIR points to the project root (where manage.py is)
BASE_DIR = Path(__file__).resolve().parent.parent


# SECURITY SETTINGS

# SECURITY WARNING: keep the secret key used in production secret!
# Generate new key: python -c 'from django.core.management.utils import get_random_secret_key; print(get_random_secret_key())'
SECRET_KEY = config('SECRET_KEY', default='django-insecure-CHANGE-THIS-IN-PRODUCTION')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = config('DEBUG', default=True, cast=bool)

# Format: 'domain.com,www.domain.com,api.domain.com'
ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1,0.0.0.0,testserver').split(',')


# INSTALLED APPS

INSTALLED_APPS = [
    # Django built-in apps
    'django.contrib.admin',  # Admin interface
    'django.contrib.auth',  # Authentication framework
    'django.contrib.contenttypes',  # Content types framework
    'django.contrib.sessions',  # Session framework (column visibility lives here)
    'django.contrib.messages',  # Messaging framework
    'django.contrib.staticfiles',  # Static files management

    # Third-party apps
    'corsheaders',  # CORS headers for the dashboard frontend
    'taggit',  # Tags for categorizing leads

    # Our custom apps
    # IMPORTANT: accounts must be first (custom user model)
    'apps.accounts',  # Users, roles & permission catalog
    'apps.core',  # Table engine, notes, settings, dashboard
    'apps.employees',  # Employee Directory
    'apps.leads',  # Leads, calls, scoring, duplicates
    'apps.attendance',  # Check-in / check-out
    'apps.taskboard',  # Tasks
    'apps.documents',  # Documents & assignments
]


# MIDDLEWARE

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',  # Security enhancements
    'django.contrib.sessions.middleware.SessionMiddleware',  # Session support
    'corsheaders.middleware.CorsMiddleware',  # CORS support (must be before CommonMiddleware)
    'django.middleware.common.CommonMiddleware',  # Common utilities
    'django.middleware.csrf.CsrfViewMiddleware',  # CSRF protection
    'django.contrib.auth.middleware.AuthenticationMiddleware',  # Authentication
    'django.contrib.messages.middleware.MessageMiddleware',  # Messages framework
    'django.middleware.clickjacking.XFrameOptionsMiddleware',  # Clickjacking protection
]


# URL CONFIGURATION
ROOT_URLCONF = 'config.urls'


# TEMPLATES
# Only the admin site renders HTML, every other view returns JSON
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]


# WSGI APPLICATION
WSGI_APPLICATION = 'config.wsgi.application'


# DATABASE

# SQLite by default so the test suite runs anywhere.
# Production points DB_ENGINE at django.db.backends.postgresql.
DB_ENGINE = config('DB_ENGINE', default='django.db.backends.sqlite3')

if DB_ENGINE == 'django.db.backends.sqlite3':
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': config('DB_NAME', default=str(BASE_DIR / 'db.sqlite3')),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': DB_ENGINE,
            'NAME': config('DB_NAME', default='officedesk_db'),
            'USER': config('DB_USER', default='officedesk_user'),
            'PASSWORD': config('DB_PASSWORD', default='officedesk_pass'),
            'HOST': config('DB_HOST', default='db'),  # 'db' is Docker service name
            'PORT': config('DB_PORT', default='5432'),

            # Keep connection open for 10 minutes
            'CONN_MAX_AGE': 600,

            'OPTIONS': {
                'connect_timeout': 10,
            }
        }
    }


# CACHE
# The attendance local tier (offline-attendance records) is kept here.
# Use django.core.cache.backends.redis.RedisCache in production so web
# workers and Celery workers share it.
CACHES = {
    'default': {
        'BACKEND': config('CACHE_BACKEND', default='django.core.cache.backends.locmem.LocMemCache'),
        'LOCATION': config('CACHE_LOCATION', default='officedesk'),
    }
}


# AUTHENTICATION

# Custom user model (email login + dashboard role)
AUTH_USER_MODEL = 'accounts.User'

LOGIN_URL = '/accounts/login/'


# INTERNATIONALIZATION

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'Asia/Kolkata'
USE_I18N = True
USE_TZ = True


# STATIC FILES
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'


# MEDIA FILES (Document uploads)

# Example: http://localhost:8000/media/documents/2026/10/offer-letter.pdf
MEDIA_URL = '/media/'
MEDIA_ROOT = config('MEDIA_ROOT', default=str(BASE_DIR / 'media'))

# Largest document accepted by the upload endpoint (bytes)
DOCUMENT_MAX_UPLOAD_SIZE = 10 * 1024 * 1024


# CORS HEADERS (Cross-Origin Resource Sharing)

# In development: allow all
# In production: specify exact dashboard origins
if DEBUG:
    CORS_ALLOW_ALL_ORIGINS = True
else:
    CORS_ALLOWED_ORIGINS = config('CORS_ALLOWED_ORIGINS', default='https://dashboard.example.com').split(',')
CORS_ALLOW_CREDENTIALS = True


# CELERY (Background Tasks)

CELERY_BROKER_URL = config('REDIS_URL', default='redis://redis:6379/0')
CELERY_RESULT_BACKEND = config('REDIS_URL', default='redis://redis:6379/0')

CELERY_ACCEPT_CONTENT = ['json']
CELERY_TASK_SERIALIZER = 'json'
CELERY_RESULT_SERIALIZER = 'json'
CELERY_TIMEZONE = TIME_ZONE

# Run tasks inline (no broker) - handy for local development
CELERY_TASK_ALWAYS_EAGER = config('CELERY_TASK_ALWAYS_EAGER', default=False, cast=bool)

# Celery task time limit (5 minutes)
CELERY_TASK_TIME_LIMIT = 5 * 60
CELERY_TASK_SOFT_TIME_LIMIT = 4 * 60


# LOGGING

LOG_DIR = BASE_DIR / 'logs'
os.makedirs(LOG_DIR, exist_ok=True)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,

    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {module} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {message}',
            'style': '{',
        },
    },

    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
        'file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': LOG_DIR / 'django.log',
            'maxBytes': 1024 * 1024 * 10,  # 10 MB
            'backupCount': 5,
            'formatter': 'verbose',
        },
    },

    'loggers': {
        'django': {
            'handlers': ['console', 'file'],
            'level': config('LOG_LEVEL', default='INFO'),
            'propagate': True,
        },
        'apps': {  # Our custom apps
            'handlers': ['console', 'file'],
            'level': config('APPS_LOG_LEVEL', default='DEBUG'),
            'propagate': False,
        },
    },
}


# CUSTOM SETTINGS

# Session settings
SESSION_COOKIE_AGE = 86400  # 24 hours in seconds

# Table views (filter -> sort -> paginate)
TABLE_PAGE_SIZES = (10, 20, 50, 100)
TABLE_DEFAULT_PAGE_SIZE = 10

# Attendance policy
# Tech team starts at 10:00, everyone else at 09:30.
# Check-in at or after 12:00 is a half day.
# Check-out after the end time appends " (Overtime)".
ATTENDANCE_POLICY = {
    'office_start': time(9, 30),
    'tech_start': time(10, 0),
    'half_day_cutoff': time(12, 0),
    'office_end': time(18, 30),
    'tech_end': time(18, 0),
    'grace_minutes': 15,
}
ATTENDANCE_TECH_KEYWORDS = ('tech', 'developer', 'engineer')
ATTENDANCE_SYNC_MAX_RETRIES = 5

# Lead analytics batch sizes
LEAD_SCORING_BATCH = 50
LEAD_DUPLICATE_BATCH = 100

# External payment system (opened in a new tab from the header)
PAYMENT_SYSTEM_URL = config('PAYMENT_SYSTEM_URL', default='https://payments.example.com')


# SECURITY SETTINGS (Production)

if not DEBUG:
    SECURE_SSL_REDIRECT = True
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True
    SECURE_CONTENT_TYPE_NOSNIFF = True
    X_FRAME_OPTIONS = 'DENY'
    SECURE_HSTS_SECONDS = 31536000  # 1 year
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True


# DEFAULT AUTO FIELD
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
