# apps/tasks/views.py
from dateutil import parser
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_http_methods

from apps.core.adapters.cache_store import DjangoCacheLocalStore
from apps.core.config import engine_setting
from apps.core.http import engine_errors, int_param, json_error
from apps.sprints.adapters.orm_repositories import DjangoSprintRepository
from apps.sprints.domain.services import SprintService
from .adapters.orm_repositories import DjangoTaskRepository, DjangoTimeEntryRepository, DjangoFolderRepository
from .application.use_cases import (
    CreateTaskUseCase, CreateTaskInput, AddManualTimeEntryUseCase, ManualTimeEntryInput,
)
from .domain.entities import TaskEntity, TimeEntryEntity
from .domain.services import (
    TaskService, UpdateTaskInput, TimerRegistry, FolderService, NotificationService,
)
from .filters import TaskFilter
from .models import Task

# Jeden stoper na użytkownika, w pamięci procesu
TIMERS = TimerRegistry(DjangoTimeEntryRepository)


def entry_to_dict(entry: TimeEntryEntity) -> dict:
    return {
        'id': entry.id,
        'date': entry.date.isoformat(),
        'duration': entry.duration,
        'start_time': entry.start_time.isoformat(),
    }


def task_to_dict(task: TaskEntity) -> dict:
    return {
        'id': task.id,
        'title': task.title,
        'description': task.description,
        'size': task.size.value,
        'points': task.points,
        'priority': task.priority.value if task.priority else None,
        'due_date': task.due_date.isoformat() if task.due_date else None,
        'folder': task.folder,
        'is_completed': task.is_completed,
        'completed_at': task.completed_at.isoformat() if task.completed_at else None,
        'created_at': task.created_at.isoformat() if task.created_at else None,
        'total_seconds': task.total_seconds,
        'time_entries': [entry_to_dict(e) for e in task.time_entries],
    }


def parse_datetime(value):
    if not value:
        return None
    try:
        parsed = parser.parse(value)
    except (ValueError, OverflowError):
        raise ValueError(f"Invalid date: {value}")
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


def parse_bool(value, default=None):
    if value in (None, ''):
        return default
    return str(value).lower() in ('1', 'true', 'on', 'yes')


def build_task_service() -> TaskService:
    return TaskService(
        DjangoTaskRepository(),
        time_entries=DjangoTimeEntryRepository(),
        sprint_service=SprintService(DjangoSprintRepository()),
    )


# --- Zadania ---

@login_required
@engine_errors
def task_list_view(request):
    """Migawka zadań użytkownika (z wpisami czasu), opcjonalnie filtrowana."""
    tasks = build_task_service().snapshot(request.user.id)

    if request.GET:
        f = TaskFilter(request.GET, queryset=Task.objects.filter(user=request.user))
        allowed = set(f.qs.values_list('id', flat=True))
        tasks = [t for t in tasks if t.id in allowed]

    return JsonResponse({'tasks': [task_to_dict(t) for t in tasks]})


@require_http_methods(["POST"])
@login_required
@engine_errors
def task_create_view(request):
    input_dto = CreateTaskInput(
        title=request.POST.get('title', '').strip(),
        user_id=request.user.id,
        size=request.POST.get('size', 'M'),
        due_date=parse_datetime(request.POST.get('due_date')),
        points=int_param(request.POST, 'points'),
        folder=request.POST.get('folder') or None,
        description=request.POST.get('description', ''),
        priority=request.POST.get('priority') or None,
    )

    # Złożenie Use Case (Manual Dependency Injection)
    task = CreateTaskUseCase(repository=DjangoTaskRepository()).execute(input_dto)
    return JsonResponse(task_to_dict(task), status=201)


@require_http_methods(["POST"])
@login_required
@engine_errors
def task_update_view(request, pk):
    changes = UpdateTaskInput(
        title=request.POST.get('title'),
        size=request.POST.get('size') or None,
        points=int_param(request.POST, 'points'),
        due_date=parse_datetime(request.POST.get('due_date')),
        folder=request.POST.get('folder'),
        description=request.POST.get('description'),
        priority=request.POST.get('priority'),
        is_completed=parse_bool(request.POST.get('is_completed')),
    )
    service = build_task_service()
    if service.repository.get_by_id(request.user.id, pk) is None:
        return json_error("Task not found", status=404)

    task = service.update_task(request.user.id, pk, changes)
    return JsonResponse(task_to_dict(task))


@require_http_methods(["POST"])
@login_required
@engine_errors
def task_complete_view(request, pk):
    service = build_task_service()
    if service.repository.get_by_id(request.user.id, pk) is None:
        return json_error("Task not found", status=404)

    task = service.set_completed(request.user.id, pk, parse_bool(request.POST.get('completed'), True))
    return JsonResponse(task_to_dict(task))


@require_http_methods(["POST", "DELETE"])
@login_required
@engine_errors
def task_delete_view(request, pk):
    service = build_task_service()
    if service.repository.get_by_id(request.user.id, pk) is None:
        return json_error("Task not found", status=404)

    # Zatrzymaj stoper, jeśli mierzy usuwane zadanie
    engine = TIMERS.for_user(request.user.id)
    if engine.state.task_id == pk:
        engine.stop()

    service.delete_task(request.user.id, pk)
    return JsonResponse({'deleted': pk})


@require_http_methods(["POST"])
@login_required
@engine_errors
def time_entry_create_view(request, pk):
    """Ręczny wpis czasu: tryb "range" (start-koniec) albo "duration" (godziny + minuty)."""
    if DjangoTaskRepository().get_by_id(request.user.id, pk) is None:
        return json_error("Task not found", status=404)

    day = parse_datetime(request.POST.get('date'))
    input_dto = ManualTimeEntryInput(
        task_id=pk,
        user_id=request.user.id,
        day=timezone.localdate(day) if day else timezone.localdate(),
        mode=request.POST.get('mode', 'range'),
        start=request.POST.get('start', '09:00'),
        end=request.POST.get('end', '10:00'),
        hours=int_param(request.POST, 'hours', 0),
        minutes=int_param(request.POST, 'minutes', 0),
    )
    entry = AddManualTimeEntryUseCase(DjangoTimeEntryRepository()).execute(input_dto)
    return JsonResponse(entry_to_dict(entry), status=201)


# --- Stoper ---

def _timer_payload(engine) -> dict:
    task_id = engine.state.task_id
    return {
        'task_id': task_id,
        'is_running': engine.is_running,
        'is_paused': engine.is_paused,
        'elapsed': engine.live_seconds(task_id) if task_id is not None else 0,
    }


@require_http_methods(["POST"])
@login_required
@engine_errors
def timer_start_view(request, pk):
    if DjangoTaskRepository().get_by_id(request.user.id, pk) is None:
        return json_error("Task not found", status=404)

    engine = TIMERS.for_user(request.user.id)
    engine.start(pk)
    return JsonResponse(_timer_payload(engine))


@require_http_methods(["POST"])
@login_required
@engine_errors
def timer_pause_view(request):
    engine = TIMERS.for_user(request.user.id)
    engine.pause()
    return JsonResponse(_timer_payload(engine))


@require_http_methods(["POST"])
@login_required
@engine_errors
def timer_stop_view(request):
    engine = TIMERS.for_user(request.user.id)
    saved = engine.stop()
    return JsonResponse({
        'stopped': saved is not None,
        'entry': entry_to_dict(saved) if saved else None,
    })


@login_required
def timer_status_view(request):
    return JsonResponse(_timer_payload(TIMERS.for_user(request.user.id)))


# --- Foldery ---

@require_http_methods(["GET", "POST"])
@login_required
@engine_errors
def folder_list_view(request):
    service = FolderService(DjangoFolderRepository())
    if request.method == "POST":
        folder = service.add_folder(request.user.id, request.POST.get('name', ''))
        return JsonResponse({'id': folder.id, 'name': folder.name}, status=201)

    return JsonResponse({'folders': [
        {'id': f.id, 'name': f.name} for f in service.list_folders(request.user.id)
    ]})


@require_http_methods(["POST"])
@login_required
@engine_errors
def folder_rename_view(request, pk):
    folder = FolderService(DjangoFolderRepository()).rename_folder(request.user.id, pk, request.POST.get('name', ''))
    return JsonResponse({'id': folder.id, 'name': folder.name})


@require_http_methods(["POST", "DELETE"])
@login_required
@engine_errors
def folder_delete_view(request, pk):
    FolderService(DjangoFolderRepository()).delete_folder(request.user.id, pk)
    return JsonResponse({'deleted': pk})


# --- Powiadomienia ---

def build_notification_service() -> NotificationService:
    return NotificationService(DjangoCacheLocalStore(), due_soon_days=engine_setting('DUE_SOON_DAYS', 3))


@login_required
@engine_errors
def notifications_view(request):
    tasks = DjangoTaskRepository().list_for_user(request.user.id)
    service = build_notification_service()
    now = timezone.now()
    return JsonResponse({
        'due_soon': [task_to_dict(t) for t in service.due_soon(tasks, now)],
        'unread': [t.id for t in service.unread(request.user.id, tasks, now)],
    })


@require_http_methods(["POST"])
@login_required
@engine_errors
def notifications_seen_view(request):
    tasks = DjangoTaskRepository().list_for_user(request.user.id)
    marked = build_notification_service().mark_seen(request.user.id, tasks, timezone.now())
    return JsonResponse({'marked': marked})
