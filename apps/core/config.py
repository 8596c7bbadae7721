# apps/core/config.py
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping

from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)

SQLITE_ENGINE = 'django.db.backends.sqlite3'
DEFAULT_ENGINE = 'django.db.backends.postgresql'


def require_env(environ: Mapping[str, str], name: str) -> str:
    value = environ.get(name)
    if not value:
        raise ImproperlyConfigured(
            f"Missing required environment variable {name}. "
            f"The application cannot start without backend configuration."
        )
    return value


def load_database_config(environ: Mapping[str, str]) -> dict:
    """
    Buduje wpis DATABASES['default'] ze zmiennych środowiskowych.
    Brak nazwy bazy (lub hosta/użytkownika dla serwerowych silników) kończy start aplikacji.
    """
    engine = environ.get('TASKTRACK_DB_ENGINE', DEFAULT_ENGINE)
    config = {
        'ENGINE': engine,
        'NAME': require_env(environ, 'TASKTRACK_DB_NAME'),
    }

    if engine == SQLITE_ENGINE:
        return config

    config.update({
        'USER': require_env(environ, 'TASKTRACK_DB_USER'),
        'PASSWORD': environ.get('TASKTRACK_DB_PASSWORD', ''),
        'HOST': require_env(environ, 'TASKTRACK_DB_HOST'),
        'PORT': environ.get('TASKTRACK_DB_PORT', '5432'),
    })
    return config


@dataclass(frozen=True)
class BackendCapabilities:
    goal_context_column: bool = True
    reports_table: bool = True


@lru_cache(maxsize=None)
def get_backend_capabilities() -> BackendCapabilities:
    from django.conf import settings

    declared = getattr(settings, 'TASKTRACK_BACKEND', {})
    capabilities = BackendCapabilities(
        goal_context_column=declared.get('GOAL_CONTEXT_COLUMN', True),
        reports_table=declared.get('REPORTS_TABLE', True),
    )
    if not capabilities.goal_context_column:
        logger.warning("goal_points.context column disabled - goals run in single-context mode")
    if not capabilities.reports_table:
        logger.warning("reports table disabled - reports are kept in local storage only")
    return capabilities


def engine_setting(name: str, default=None):
    """Zwraca parametr silnika z settings.TASKTRACK."""
    from django.conf import settings
    return getattr(settings, 'TASKTRACK', {}).get(name, default)
