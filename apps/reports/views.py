from datetime import timedelta

from dateutil import parser
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_http_methods

from apps.core.http import engine_errors, json_error
from apps.reports.domain import aggregation
from apps.tasks.adapters.orm_repositories import DjangoTaskRepository
from .services import build_report_service


def _parse_day(value, default):
    if not value:
        return default
    try:
        return parser.parse(value).date()
    except (ValueError, OverflowError):
        raise ValueError(f"Invalid date: {value}")


@login_required
@engine_errors
def stats_api_view(request):
    """
    API zwracające dane do wykresów (rozmiary, godziny, czasy ukończenia, trendy).
    """
    service = build_report_service()
    tasks = DjangoTaskRepository().list_for_user(request.user.id)
    return JsonResponse(service.insights(tasks))


@login_required
@engine_errors
def total_time_view(request):
    today = timezone.localdate()
    start = _parse_day(request.GET.get('start'), today - timedelta(days=30))
    end = _parse_day(request.GET.get('end'), today)
    bucket = request.GET.get('bucket', 'day')

    tasks = DjangoTaskRepository().list_for_user(request.user.id)
    return JsonResponse({
        'bucket': bucket,
        'series': aggregation.total_time_series(tasks, start, end, bucket),
    })


@login_required
@engine_errors
def report_day_view(request):
    day = _parse_day(request.GET.get('date'), timezone.localdate())
    report = build_report_service().get_report(request.user.id, day)
    if report is None:
        return json_error(f"No report for {day.isoformat()}", status=404)
    return JsonResponse(report.as_dict())


@login_required
@engine_errors
def report_range_view(request):
    today = timezone.localdate()
    start = _parse_day(request.GET.get('start'), today - timedelta(days=7))
    end = _parse_day(request.GET.get('end'), today)
    reports = build_report_service().get_reports_in_range(request.user.id, start, end)
    return JsonResponse({'reports': [r.as_dict() for r in reports]})


@require_http_methods(["POST"])
@login_required
@engine_errors
def report_refresh_view(request):
    service = build_report_service()
    tasks = DjangoTaskRepository().list_for_user(request.user.id)
    result = service.refresh(request.user.id, tasks)
    return JsonResponse({'stored': result.outcome.value})
