"""
Django Settings - Testing Configuration
"""

import tempfile

from .base import *

DEBUG = False
TESTING = True

# Use faster password hasher
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# In-memory SQLite; the suite does not depend on PostgreSQL features
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}


class DisableMigrations:
    """Build the test schema straight from the models."""

    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None


MIGRATION_MODULES = DisableMigrations()

# Throttles stay wired (scoped views still resolve their rates) but never trip
REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {
    "anon": "20000/hour",
    "user": "200000/hour",
    "login": "1000/minute",
    "first_time_login": "1000/minute",
}

# Use sync Celery
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

# Fast deterministic in-process cache for tests.
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "ems-tests-cache",
    }
}

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}
MEDIA_ROOT = tempfile.mkdtemp(prefix="ems-test-media-")

NOTIFIER_BACKEND = "apps.notifications.notifiers.LogNotifier"
INVITATION_RETURN_TEMP_PASSWORD = True

LOGGING = {}

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'
