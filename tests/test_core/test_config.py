"""Tests for environment-driven configuration and backend capability flags."""

import pytest
from django.core.exceptions import ImproperlyConfigured
from django.test import override_settings

from apps.core.config import (
    BackendCapabilities, engine_setting, get_backend_capabilities, load_database_config, require_env,
)


def test_missing_database_name_is_fatal():
    """Without a database name the application must refuse to start."""
    with pytest.raises(ImproperlyConfigured, match="TASKTRACK_DB_NAME"):
        load_database_config({})


def test_server_engine_requires_user_and_host():
    env = {'TASKTRACK_DB_NAME': 'tasktrack'}
    with pytest.raises(ImproperlyConfigured, match="TASKTRACK_DB_USER"):
        load_database_config(env)

    env['TASKTRACK_DB_USER'] = 'app'
    with pytest.raises(ImproperlyConfigured, match="TASKTRACK_DB_HOST"):
        load_database_config(env)


def test_postgres_config_defaults():
    config = load_database_config({
        'TASKTRACK_DB_NAME': 'tasktrack',
        'TASKTRACK_DB_USER': 'app',
        'TASKTRACK_DB_HOST': 'db.internal',
    })
    assert config['ENGINE'] == 'django.db.backends.postgresql'
    assert config['PORT'] == '5432'
    assert config['PASSWORD'] == ''


def test_sqlite_needs_only_name():
    config = load_database_config({
        'TASKTRACK_DB_ENGINE': 'django.db.backends.sqlite3',
        'TASKTRACK_DB_NAME': '/tmp/tasktrack.sqlite3',
    })
    assert config == {'ENGINE': 'django.db.backends.sqlite3', 'NAME': '/tmp/tasktrack.sqlite3'}


def test_require_env_rejects_empty_value():
    with pytest.raises(ImproperlyConfigured):
        require_env({'DJANGO_SECRET_KEY': ''}, 'DJANGO_SECRET_KEY')
    assert require_env({'DJANGO_SECRET_KEY': 'x'}, 'DJANGO_SECRET_KEY') == 'x'


def test_capabilities_default_to_full_schema():
    assert get_backend_capabilities() == BackendCapabilities(goal_context_column=True, reports_table=True)


@override_settings(TASKTRACK_BACKEND={'GOAL_CONTEXT_COLUMN': False, 'REPORTS_TABLE': False})
def test_capabilities_follow_declared_flags():
    caps = get_backend_capabilities()
    assert caps.goal_context_column is False
    assert caps.reports_table is False


def test_capabilities_resolved_once():
    first = get_backend_capabilities()
    with override_settings(TASKTRACK_BACKEND={'GOAL_CONTEXT_COLUMN': False}):
        assert get_backend_capabilities() is first


def test_engine_setting_fallback():
    assert engine_setting('WORKLOAD_CADENCE_DAYS') == 5
    assert engine_setting('NOT_A_SETTING', 42) == 42
