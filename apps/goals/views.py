# apps/goals/views.py
from dataclasses import asdict

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from apps.core.adapters.cache_store import DjangoCacheLocalStore
from apps.core.config import get_backend_capabilities
from apps.core.http import engine_errors
from apps.core.storage import FallbackStorage
from apps.goals.adapters.orm_repositories import DjangoGoalRepository
from apps.goals.domain.entities import GENERAL_CONTEXT, sprint_id_from_context
from apps.goals.domain.services import GoalService
from apps.goals.forms import GoalPointsForm
from apps.sprints.adapters.orm_repositories import DjangoSprintRepository
from apps.tasks.adapters.orm_repositories import DjangoTaskRepository


def build_goal_service() -> GoalService:
    # Złożenie serwisu (Manual Dependency Injection)
    capabilities = get_backend_capabilities()
    return GoalService(
        repository=DjangoGoalRepository(supports_context=capabilities.goal_context_column),
        storage=FallbackStorage(DjangoCacheLocalStore()),
    )


def _context_scope(user_id: int, context: str):
    """Zwraca (zadania w kontekście, sprint albo None)."""
    tasks = DjangoTaskRepository().list_for_user(user_id)
    sprint = None
    sprint_id = sprint_id_from_context(context)
    if sprint_id is not None and sprint_id.isdigit():
        sprint = DjangoSprintRepository().get_by_id(user_id, int(sprint_id))
    return GoalService.scope_tasks(tasks, context, sprint), sprint


@login_required
@engine_errors
def goal_status_view(request):
    context = request.GET.get('context') or GENERAL_CONTEXT
    service = build_goal_service()
    scoped, sprint = _context_scope(request.user.id, context)

    status = service.evaluate(request.user.id, context, scoped, sprint)
    return JsonResponse({
        'context': status.context,
        'target': status.target,
        'progress': status.progress,
        'achieved': status.achieved,
        'just_achieved': status.just_achieved,
        'suggested': service.suggest_goal(request.user.id, context, scoped),
    })


@require_http_methods(["POST"])
@login_required
@engine_errors
def goal_set_view(request):
    form = GoalPointsForm(request.POST)
    if not form.is_valid():
        return JsonResponse({'errors': form.errors}, status=400)

    context = form.cleaned_data['context']
    value = form.cleaned_data['value']
    service = build_goal_service()
    scoped, sprint = _context_scope(request.user.id, context)

    suggested = service.suggest_goal(request.user.id, context, scoped)
    # Punkt odniesienia: sugestia (prędkość historyczna albo szacunek na zimno)
    previous = suggested

    # Ostrzeżenie - zapis dopiero po potwierdzeniu
    if service.is_high_target(value, previous) and not form.cleaned_data['confirm']:
        return JsonResponse({
            'requires_confirmation': True,
            'previous': previous,
            'message': f"Goal {value} is much higher than {previous}. Confirm to continue.",
        }, status=409)

    progress = service.progress_for(scoped)
    result = service.set_goal(request.user.id, context, value, progress=progress, suggested=suggested)
    status = service.evaluate(request.user.id, context, scoped, sprint)

    return JsonResponse({
        'context': context,
        'target': value,
        'stored': result.outcome.value,
        'progress': status.progress,
        'just_achieved': status.just_achieved,
    })


@login_required
@engine_errors
def goal_suggest_view(request):
    context = request.GET.get('context') or GENERAL_CONTEXT
    scoped, _ = _context_scope(request.user.id, context)
    return JsonResponse({
        'context': context,
        'suggested': build_goal_service().suggest_goal(request.user.id, context, scoped),
    })


@login_required
@engine_errors
def goal_summary_view(request):
    summary = build_goal_service().summary(request.user.id)
    return JsonResponse(asdict(summary))


@login_required
@engine_errors
def goal_history_view(request):
    return JsonResponse({'goals': build_goal_service().history(request.user.id)})
