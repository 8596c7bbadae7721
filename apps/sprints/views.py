# apps/sprints/views.py
from dateutil import parser
from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_http_methods

from apps.core.http import engine_errors, json_error
from apps.tasks.adapters.orm_repositories import DjangoTaskRepository
from .adapters.orm_repositories import DjangoSprintRepository
from .domain.entities import SprintEntity
from .domain.services import SprintService, SprintSelection

SESSION_KEY = 'selected_sprint_id'


def sprint_to_dict(sprint: SprintEntity) -> dict:
    return {
        'id': sprint.id,
        'name': sprint.name,
        'start_date': sprint.start_date.isoformat(),
        'end_date': sprint.end_date.isoformat(),
        'tasks': sprint.tasks,
    }


def parse_day(value, name: str):
    if not value:
        raise ValueError(f"Sprint {name} is required")
    try:
        return parser.parse(value).date()
    except (ValueError, OverflowError):
        raise ValueError(f"Invalid date: {value}")


def load_selection(request, sprints) -> SprintSelection:
    """Wybór z sesji; bez wyboru - jawne wyliczenie bieżącego sprintu."""
    selection = SprintSelection()
    sprint_id = request.session.get(SESSION_KEY)
    if sprint_id is not None:
        selection.select(sprints, sprint_id)
    if selection.sprint is None:
        selection.refresh(sprints, timezone.localdate())
    return selection


def store_selection(request, selection: SprintSelection) -> None:
    if selection.sprint_id is None:
        request.session.pop(SESSION_KEY, None)
    else:
        request.session[SESSION_KEY] = selection.sprint_id


def _after_mutation(request, service: SprintService, selection: SprintSelection) -> JsonResponse:
    """Po każdej zmianie: odśwież listę i bieżący sprint, zwróć nowy stan."""
    sprints = service.list_sprints(request.user.id)
    selection.refresh(sprints, timezone.localdate())
    store_selection(request, selection)
    return JsonResponse({
        'sprints': [sprint_to_dict(s) for s in sprints],
        'selected': selection.sprint_id,
    })


@login_required
@engine_errors
def sprint_list_view(request):
    service = SprintService(DjangoSprintRepository())
    sprints = service.list_sprints(request.user.id)
    selection = load_selection(request, sprints)
    return JsonResponse({
        'sprints': [sprint_to_dict(s) for s in sprints],
        'selected': selection.sprint_id,
    })


@require_http_methods(["POST"])
@login_required
@engine_errors
def sprint_create_view(request):
    service = SprintService(DjangoSprintRepository())
    result = service.create_sprint(
        request.user.id,
        request.POST.get('name', ''),
        parse_day(request.POST.get('start_date'), 'start date'),
        parse_day(request.POST.get('end_date'), 'end date'),
    )
    if not result.success:
        return json_error(result.message, status=400)

    sprints = service.list_sprints(request.user.id)
    response = _after_mutation(request, service, load_selection(request, sprints))
    response.status_code = 201
    return response


@require_http_methods(["POST"])
@login_required
@engine_errors
def sprint_update_view(request, pk):
    service = SprintService(DjangoSprintRepository())
    sprint = service.repository.get_by_id(request.user.id, pk)
    if sprint is None:
        return json_error("Sprint not found", status=404)

    if request.POST.get('name'):
        sprint.name = request.POST['name'].strip()
    if request.POST.get('start_date'):
        sprint.start_date = parse_day(request.POST['start_date'], 'start date')
    if request.POST.get('end_date'):
        sprint.end_date = parse_day(request.POST['end_date'], 'end date')

    selection = load_selection(request, service.list_sprints(request.user.id))
    service.update_sprint(request.user.id, sprint, selection)
    return _after_mutation(request, service, selection)


@require_http_methods(["POST", "DELETE"])
@login_required
@engine_errors
def sprint_delete_view(request, pk):
    service = SprintService(DjangoSprintRepository())
    selection = load_selection(request, service.list_sprints(request.user.id))
    service.delete_sprint(request.user.id, pk, selection)
    return _after_mutation(request, service, selection)


@require_http_methods(["POST"])
@login_required
@engine_errors
def sprint_select_view(request, pk):
    service = SprintService(DjangoSprintRepository())
    selection = SprintSelection()
    if selection.select(service.list_sprints(request.user.id), pk) is None:
        return json_error("Sprint not found", status=404)
    store_selection(request, selection)
    return JsonResponse({'selected': selection.sprint_id})


@require_http_methods(["POST"])
@login_required
@engine_errors
def sprint_add_tasks_view(request, pk):
    service = SprintService(DjangoSprintRepository())
    sprint = service.add_tasks_to_sprint(request.user.id, pk, request.POST.getlist('task_ids'))
    if sprint is None:
        return json_error("Sprint not found", status=404)
    return JsonResponse(sprint_to_dict(sprint))


@require_http_methods(["POST"])
@login_required
@engine_errors
def sprint_remove_task_view(request, pk, task_id):
    service = SprintService(DjangoSprintRepository())
    sprint = service.remove_task_from_sprint(request.user.id, task_id, pk)
    if sprint is None:
        return json_error("Sprint not found", status=404)
    return JsonResponse(sprint_to_dict(sprint))


@login_required
@engine_errors
def sprint_tasks_view(request, pk):
    service = SprintService(DjangoSprintRepository())
    sprint = service.repository.get_by_id(request.user.id, pk)
    if sprint is None:
        return json_error("Sprint not found", status=404)

    tasks = service.sprint_tasks(sprint, DjangoTaskRepository().list_for_user(request.user.id))
    return JsonResponse({
        'sprint': sprint_to_dict(sprint),
        'tasks': [{'id': t.id, 'title': t.title, 'size': t.size.value, 'points': t.points,
                   'is_completed': t.is_completed} for t in tasks],
    })
