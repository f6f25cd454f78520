"""Settings used by the test suite.

SQLite in memory unless DB_ENGINE points somewhere else; the PostgreSQL
race tests are skipped on other backends.
"""

import structlog

from .base import *  # noqa: F401,F403
from .base import get_env

SECRET_KEY = 'test-secret-key-that-is-long-enough-for-hs256-signing'

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': get_env('DB_ENGINE', 'django.db.backends.sqlite3'),
        'NAME': get_env('DB_NAME', ':memory:'),
        'USER': get_env('DB_USER', ''),
        'PASSWORD': get_env('DB_PASSWORD', ''),
        'HOST': get_env('DB_HOST', ''),
        'PORT': get_env('DB_PORT', ''),
    }
}

# SQLite writers take the database lock at BEGIN instead of upgrading a
# read lock halfway through a booking transaction
if DATABASES['default']['ENGINE'] == 'django.db.backends.sqlite3':
    DATABASES['default']['OPTIONS'] = {'transaction_mode': 'IMMEDIATE'}

SIMPLE_JWT = {
    **SIMPLE_JWT,  # noqa: F405
    'SIGNING_KEY': SECRET_KEY,
}

BOOKING_CONCURRENCY_RETRIES = 3

LOGGING["handlers"]["console"]["level"] = "WARNING"  # noqa: F405

# structlog.testing.capture_logs cannot see loggers that were already cached
structlog.configure(cache_logger_on_first_use=False)
