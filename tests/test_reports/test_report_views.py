"""Tests for the report endpoints, ORM repository and refresh command."""

from datetime import date, datetime
from io import StringIO

import pytest
from django.core.cache import caches
from django.core.management import call_command
from django.test import override_settings
from django.urls import reverse

from apps.reports.adapters.orm_repositories import DjangoReportRepository
from apps.reports.domain.aggregation import ReportSnapshot
from apps.reports.models import Report
from apps.tasks.models import Task, TimeEntry
from fakes import UTC

pytestmark = pytest.mark.django_db


@pytest.fixture(autouse=True)
def _clear_local_store():
    caches['local'].clear()
    yield
    caches['local'].clear()


def _task_with_time(user, completed=True):
    task = Task.objects.create(user=user, title='Write', size='M', points=3, is_completed=completed,
                               completed_at=datetime(2024, 1, 5, 12, tzinfo=UTC) if completed else None,
                               due_date=datetime(2024, 1, 10, tzinfo=UTC))
    TimeEntry.objects.create(user=user, task=task, date=date(2024, 1, 5), duration=3600,
                             start_time=datetime(2024, 1, 5, 9, tzinfo=UTC))
    return task


def test_repository_upserts_one_row_per_day(user):
    repo = DjangoReportRepository()
    repo.upsert(user.id, ReportSnapshot(report_date=date(2024, 1, 5), total_time=10))
    repo.upsert(user.id, ReportSnapshot(report_date=date(2024, 1, 5), total_time=20,
                                        monthly_points={'2024-01': 3}))

    assert Report.objects.filter(user=user).count() == 1
    stored = repo.get(user.id, date(2024, 1, 5))
    assert stored.total_time == 20
    assert stored.monthly_points == {'2024-01': 3}


def test_task_change_refreshes_todays_report(user, django_capture_on_commit_callbacks):
    with django_capture_on_commit_callbacks(execute=True):
        _task_with_time(user)
    assert Report.objects.filter(user=user).exists()


def test_stats_endpoint(auth_client, user):
    _task_with_time(user)
    response = auth_client.get(reverse('reports_stats'))

    assert response.status_code == 200
    data = response.json()
    assert data['most_productive_hour'] == 9
    assert data['size_counts']['M'] == 1
    assert len(data['time_distribution_by_size']) == 24


def test_total_time_endpoint(auth_client, user):
    _task_with_time(user)
    response = auth_client.get(reverse('reports_total_time'),
                               {'start': '2024-01-04', 'end': '2024-01-06', 'bucket': 'day'})

    assert response.status_code == 200
    assert [p['hours'] for p in response.json()['series']] == [0.0, 1.0, 0.0]


def test_total_time_rejects_bad_input(auth_client):
    assert auth_client.get(reverse('reports_total_time'), {'bucket': 'quarter'}).status_code == 400
    assert auth_client.get(reverse('reports_total_time'), {'start': 'not-a-date'}).status_code == 400


def test_report_day_and_range(auth_client, user):
    Report.objects.create(user=user, report_date=date(2024, 1, 5), total_time=60, points_earned=3)

    day = auth_client.get(reverse('report_day'), {'date': '2024-01-05'})
    assert day.status_code == 200
    assert day.json()['points_earned'] == 3

    assert auth_client.get(reverse('report_day'), {'date': '2024-01-06'}).status_code == 404

    window = auth_client.get(reverse('report_range'), {'start': '2024-01-01', 'end': '2024-01-07'})
    assert [r['report_date'] for r in window.json()['reports']] == ['2024-01-05']


@override_settings(TASKTRACK_BACKEND={'GOAL_CONTEXT_COLUMN': True, 'REPORTS_TABLE': False})
def test_refresh_without_reports_table_stores_locally(auth_client, user):
    _task_with_time(user, completed=False)
    Report.objects.all().delete()

    response = auth_client.post(reverse('report_refresh'))

    assert response.status_code == 200
    assert response.json()['stored'] == 'local'
    assert not Report.objects.exists()


def test_report_endpoints_require_login(client):
    response = client.get(reverse('reports_stats'))
    assert response.status_code == 302


def test_refresh_reports_command(user, django_user_model):
    django_user_model.objects.create_user(username='bob', password='x')
    out = StringIO()

    call_command('refresh_reports', stdout=out)

    assert Report.objects.count() == 2
    assert 'alice' in out.getvalue()


def test_refresh_reports_command_single_user(user, django_user_model):
    django_user_model.objects.create_user(username='bob', password='x')

    call_command('refresh_reports', '--user', str(user.id), stdout=StringIO())

    assert list(Report.objects.values_list('user_id', flat=True)) == [user.id]
