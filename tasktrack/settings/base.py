# tasktrack/settings/base.py
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

DEBUG = False
ALLOWED_HOSTS = []

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django_filters',

    # Nasze aplikacje
    'apps.core',
    'apps.tasks',
    'apps.sprints',
    'apps.goals',
    'apps.reports',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
]

ROOT_URLCONF = 'tasktrack.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'

# Lokalny magazyn "urządzenia" (fallback dla celów i raportów) - bez TTL
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    },
    'local': {
        'BACKEND': 'django.core.cache.backends.filebased.FileBasedCache',
        'LOCATION': str(BASE_DIR / 'var' / 'local_store'),
        'TIMEOUT': None,
        'OPTIONS': {'MAX_ENTRIES': 1000000},
    },
}

# Statycznie zadeklarowane możliwości backendu (zamiast sondowania schematu)
TASKTRACK_BACKEND = {
    'GOAL_CONTEXT_COLUMN': True,
    'REPORTS_TABLE': True,
}

TASKTRACK = {
    'WORKLOAD_CADENCE_DAYS': 5,
    'HIGH_GOAL_RATIO': 1.2,
    'COLD_START_GOAL_RATIO': 0.7,
    'VELOCITY_WINDOW': 3,
    'DUE_SOON_DAYS': 3,
    'TIMER_TICK_SECONDS': 1,
    # Przeliczanie dzisiejszego raportu po każdej zmianie zadania / wpisu czasu
    'REFRESH_REPORTS_ON_CHANGE': True,
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'apps': {
            'handlers': ['console'],
            'level': 'INFO',
        },
        'django': {
            'handlers': ['console'],
            'level': 'WARNING',
        },
    },
}
