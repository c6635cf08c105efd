"""
Django Test Settings for LabourHub

Overrides the main settings for fast, isolated test runs.

Usage:
    pytest                       (picked up from pyproject.toml)
    pytest --ds=labourhub.settings_test

Set TEST_DB_ENGINE=django.db.backends.postgresql to run the suite, including
the concurrency tests, against PostgreSQL.
"""

import os

from .settings import *  # noqa: F401, F403

# =============================================================================
# TEST ENVIRONMENT CONFIGURATION
# =============================================================================

DEBUG = False
TESTING = True

# Use a faster password hasher for tests
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# =============================================================================
# DATABASE CONFIGURATION
# =============================================================================

if os.environ.get('TEST_DB_ENGINE', 'django.db.backends.sqlite3') == 'django.db.backends.sqlite3':
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': ':memory:',
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': os.environ['TEST_DB_ENGINE'],
            'NAME': os.environ.get('TEST_DB_NAME', 'labourhub_test'),
            'USER': os.environ.get('TEST_DB_USER', os.environ.get('DB_USER', 'postgres')),
            'PASSWORD': os.environ.get('TEST_DB_PASSWORD', os.environ.get('DB_PASSWORD', '')),
            'HOST': os.environ.get('TEST_DB_HOST', os.environ.get('DB_HOST', 'localhost')),
            'PORT': os.environ.get('TEST_DB_PORT', os.environ.get('DB_PORT', '5432')),
        }
    }

# =============================================================================
# CELERY CONFIGURATION
# =============================================================================

# Execute tasks synchronously during tests
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

# =============================================================================
# NOTIFICATIONS
# =============================================================================

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'
NOTIFICATION_BACKEND = 'log'
NOTIFICATION_ASYNC = False

TWILIO_ACCOUNT_SID = ''
TWILIO_AUTH_TOKEN = ''
TWILIO_FROM_NUMBER = ''

# Random codes; tests read the issued code from the database
OTP_FIXED_CODE = ''

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'CRITICAL',
    },
}
