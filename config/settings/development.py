"""
Django Settings - Development Configuration
"""

from .base import *

DEBUG = True

# ALLOWED_HOSTS is set in base.py based on DEBUG flag (accepts all hosts in dev)

# Database logging
LOGGING["loggers"]["django.db.backends"] = {
    "handlers": ["console"],
    "level": config("DB_LOG_LEVEL", default="INFO"),
    "propagate": False,
}

# Development throttle profile: permissive but still active.
DEV_DISABLE_THROTTLING = config("DEV_DISABLE_THROTTLING", default=False, cast=bool)

if DEV_DISABLE_THROTTLING:
    REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []

REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {
    "anon": "5000/hour",
    "user": "30000/hour",
    "login": "30/minute",
    "first_time_login": "30/minute",
}

# Email - Console backend
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'
