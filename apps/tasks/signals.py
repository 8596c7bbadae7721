# apps/tasks/signals.py
import logging

from django.db import transaction
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver

from apps.core.config import engine_setting
from apps.core.errors import PersistenceError
from .models import Task, TimeEntry

logger = logging.getLogger(__name__)


def _deleted_via(origin, model) -> bool:
    """Czy usunięcie zaczęło się od obiektu (albo QuerySetu) danego modelu."""
    return isinstance(origin, model) or getattr(origin, 'model', None) is model


def _run_refresh(user_id):
    from apps.reports.services import refresh_user_report

    try:
        refresh_user_report(user_id)
    except PersistenceError as e:
        logger.error("Error updating report for user %s: %s", user_id, e)


def _refresh_report(user_id):
    """Best-effort, po zatwierdzeniu transakcji: błąd raportu nigdy nie blokuje edycji zadania."""
    if not engine_setting('REFRESH_REPORTS_ON_CHANGE', True):
        return
    transaction.on_commit(lambda: _run_refresh(user_id))


@receiver(post_save, sender=Task)
def task_saved(sender, instance, raw=False, **kwargs):
    """Po zmianie zadania przelicz dzisiejszy raport."""
    if raw:
        return
    _refresh_report(instance.user_id)


@receiver(post_delete, sender=Task)
def task_deleted(sender, instance, origin=None, **kwargs):
    # Kaskada z usunięcia użytkownika - nie ma już czego przeliczać
    if origin is not None and not _deleted_via(origin, Task):
        return
    _refresh_report(instance.user_id)


@receiver(post_save, sender=TimeEntry)
def time_entry_saved(sender, instance, raw=False, **kwargs):
    if raw:
        return
    _refresh_report(instance.user_id)


@receiver(post_delete, sender=TimeEntry)
def time_entry_deleted(sender, instance, origin=None, **kwargs):
    # Kaskada z usunięcia zadania - raport przelicza sygnał zadania
    if origin is not None and not _deleted_via(origin, TimeEntry):
        return
    _refresh_report(instance.user_id)
