# tasktrack/settings/prod.py
import os

from apps.core.config import load_database_config, require_env
from .base import *  # noqa: F401,F403

SECRET_KEY = require_env(os.environ, 'DJANGO_SECRET_KEY')
DEBUG = os.environ.get('DJANGO_DEBUG', '') == '1'
ALLOWED_HOSTS = [h for h in os.environ.get('DJANGO_ALLOWED_HOSTS', '').split(',') if h]

# Brak konfiguracji bazy = twardy błąd przy starcie
DATABASES = {
    'default': load_database_config(os.environ),
}

TASKTRACK_BACKEND = {
    'GOAL_CONTEXT_COLUMN': os.environ.get('TASKTRACK_GOAL_CONTEXT_COLUMN', '1') == '1',
    'REPORTS_TABLE': os.environ.get('TASKTRACK_REPORTS_TABLE', '1') == '1',
}
