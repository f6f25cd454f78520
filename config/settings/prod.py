"""Production settings for the room booking service.

Sensitive values must come from environment variables; the service is
expected to run on PostgreSQL so the room overlap exclusion constraint is
in place.
"""

from .base import *  # noqa: F401,F403
from .base import get_env

# Never run with debug enabled in production
DEBUG = False

SECRET_KEY = get_env('DJANGO_SECRET_KEY', required=True)

# Allowed hosts should be defined explicitly via environment variable
ALLOWED_HOSTS = [host.strip() for host in get_env('DJANGO_ALLOWED_HOSTS', required=True).split(',') if host.strip()]

SIMPLE_JWT['SIGNING_KEY'] = get_env('JWT_SIGNING_KEY', required=True)  # noqa: F405

DATABASES['default']['ENGINE'] = get_env('DB_ENGINE', 'django.db.backends.postgresql')  # noqa: F405

SECURE_CONTENT_TYPE_NOSNIFF = True
