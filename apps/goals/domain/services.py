# apps/goals/domain/services.py
"""
Silnik celów punktowych.

Cel jest przypisany do kontekstu: "general" (wszystkie zadania) albo
"sprint_<id>" (zadania z listy sprintu). Zapisy idą przez FallbackStorage:
gdy baza odmówi, wybrany cel ląduje pod lokalnym kluczem urządzenia.
"""
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Iterable, List, Optional

from django.utils import timezone

from apps.core.config import engine_setting
from apps.core.errors import PersistenceError
from apps.core.ports.local_store import local_key
from apps.core.storage import FallbackStorage, StorageResult
from apps.goals.domain.entities import GoalEntity, GENERAL_CONTEXT, is_sprint_context
from apps.goals.domain.streaks import calculate_streaks
from apps.goals.ports.repositories import IGoalRepository

logger = logging.getLogger(__name__)

GOAL_PURPOSE = 'goalPoints'
ACHIEVED_PURPOSE = 'goalAchieved'


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass
class GoalStatus:
    context: str
    target: int
    progress: int
    achieved: bool
    just_achieved: bool
    goal: Optional[GoalEntity] = None


@dataclass
class GoalSummary:
    total_goals: int = 0
    achieved_goals: int = 0
    general_achieved: int = 0
    sprint_achieved: int = 0
    current_streak: int = 0
    longest_streak: int = 0


class GoalService:
    def __init__(self, repository: IGoalRepository, storage: FallbackStorage,
                 clock: Callable[[], datetime] = timezone.now,
                 high_goal_ratio: Optional[float] = None,
                 cold_start_ratio: Optional[float] = None,
                 velocity_window: Optional[int] = None):
        self.repository = repository
        self.storage = storage
        self.clock = clock
        self.high_goal_ratio = high_goal_ratio or engine_setting('HIGH_GOAL_RATIO', 1.2)
        self.cold_start_ratio = cold_start_ratio or engine_setting('COLD_START_GOAL_RATIO', 0.7)
        self.velocity_window = velocity_window or engine_setting('VELOCITY_WINDOW', 3)

    # --- Postęp ---

    @staticmethod
    def scope_tasks(tasks: Iterable, context: str, sprint=None) -> list:
        """Zadania należące do kontekstu. Kontekst sprintu bez sprintu = brak zadań."""
        tasks = list(tasks)
        if not is_sprint_context(context):
            return tasks
        if sprint is None:
            return []
        return [task for task in tasks if sprint.has_task(task.id)]

    @staticmethod
    def progress_for(tasks: Iterable) -> int:
        return sum(task.points or 0 for task in tasks if task.is_completed)

    # --- Odczyt ---

    def _goal_key(self, user_id: int, context: str) -> str:
        return local_key(user_id, GOAL_PURPOSE, context)

    def _achieved_key(self, user_id: int, context: str) -> str:
        return local_key(user_id, ACHIEVED_PURPOSE, context)

    def load_goal(self, user_id: int, context: str = GENERAL_CONTEXT) -> Optional[GoalEntity]:
        result = self.storage.read(
            lambda: self.repository.get_active(user_id, context),
            self._goal_key(user_id, context),
        )
        if result.value is None:
            return None

        if result.is_remote:
            goal = result.value
        else:
            goal = GoalEntity(id=None, goal_value=int(result.value.get('value', 0)), context=context)

        # Osiągnięcie zapisane lokalnie (cel lokalny albo nieudany zapis zdalny)
        flag = self.storage.read_local(self._achieved_key(user_id, context))
        if not goal.achieved and flag and flag.get('goal_id') == goal.id:
            goal.achieved = True
        return goal

    def load_target(self, user_id: int, context: str = GENERAL_CONTEXT) -> int:
        goal = self.load_goal(user_id, context)
        return goal.goal_value if goal else 0

    # --- Zapis ---

    def set_goal(self, user_id: int, context: str, value: int, progress: int,
                 suggested: int = 0) -> StorageResult:
        if value is None or value <= 0:
            raise ValueError("Goal value must be greater than zero")

        def remote_write() -> GoalEntity:
            # Najpierw zamknij poprzedni aktywny cel w tym kontekście
            self.repository.deactivate_active(user_id, context, points_at_end=progress, end_date=self.clock())
            return self.repository.insert(
                GoalEntity(id=None, goal_value=value, context=context,
                           suggested_value=suggested, points_at_start=progress),
                user_id=user_id,
            )

        result = self.storage.write(remote_write, self._goal_key(user_id, context),
                                    {'context': context, 'value': value})
        # Nowy cel = nowa szansa na powiadomienie
        self.storage.delete_local(self._achieved_key(user_id, context))

        if result.is_remote:
            logger.info("Goal %s set for user %s in %s", value, user_id, context)
        else:
            logger.warning("Goal %s for user %s in %s kept in local storage", value, user_id, context)
        return result

    def check_achievement(self, user_id: int, goal: Optional[GoalEntity], progress: int,
                          context: Optional[str] = None) -> bool:
        """
        Zwraca True tylko przy przejściu w stan osiągnięty (jednorazowe powiadomienie).
        Encja jest oznaczana nawet wtedy, gdy zapis się nie uda.
        `context` to kontekst zapytania; w trybie bez kolumny context encja ma pusty kontekst.
        """
        if goal is None or not goal.is_active or goal.achieved:
            return False
        if goal.goal_value <= 0 or progress < goal.goal_value:
            return False

        now = self.clock()
        goal.achieved = True
        goal.achieved_date = now
        goal.points_at_end = progress

        context = context or goal.context
        key = self._achieved_key(user_id, context)
        payload = {'goal_id': goal.id, 'value': goal.goal_value, 'achieved_date': now.isoformat()}
        if goal.id is None:
            self.storage.write_local(key, payload)
        else:
            self.storage.write(
                lambda: self.repository.mark_achieved(user_id, goal.id, now, progress), key, payload,
            )

        logger.info("Goal %s achieved by user %s in %s (%s pts)", goal.goal_value, user_id, context, progress)
        return True

    def evaluate(self, user_id: int, context: str, tasks: Iterable, sprint=None) -> GoalStatus:
        """Wczytuje cel, liczy postęp i sprawdza osiągnięcie - wywoływane po każdej zmianie."""
        goal = self.load_goal(user_id, context)
        progress = self.progress_for(self.scope_tasks(tasks, context, sprint))
        just_achieved = self.check_achievement(user_id, goal, progress, context)
        return GoalStatus(
            context=context,
            target=goal.goal_value if goal else 0,
            progress=progress,
            achieved=bool(goal and goal.achieved),
            just_achieved=just_achieved,
            goal=goal,
        )

    # --- Sugestie ---

    def historical_velocity(self, user_id: int, context: str) -> int:
        """Średnia z ostatnich osiągniętych celów tej rodziny kontekstów; 0 bez historii."""
        try:
            recent = self.repository.recent_achieved(user_id, context, self.velocity_window)
        except PersistenceError as e:
            logger.error("Error loading achieved goals for user %s: %s", user_id, e)
            return 0

        if not recent:
            return 0
        return round_half_up(sum(g.goal_value for g in recent) / len(recent))

    def suggest_goal(self, user_id: int, context: str, scoped_tasks: Iterable) -> int:
        velocity = self.historical_velocity(user_id, context)
        if velocity:
            return velocity

        # Zimny start: część punktów wszystkich zadań w zakresie
        total = sum(task.points or 0 for task in scoped_tasks)
        return round_half_up(self.cold_start_ratio * total)

    def is_high_target(self, new_value: int, previous_value: int) -> bool:
        """Ostrzeżenie po stronie klienta - wymaga potwierdzenia, nie blokuje zapisu."""
        if not previous_value or previous_value <= 0:
            return False
        return new_value > self.high_goal_ratio * previous_value

    # --- Statystyki ---

    def summary(self, user_id: int, today: Optional[date] = None) -> GoalSummary:
        goals = self.repository.list_for_user(user_id)
        achieved = [g for g in goals if g.achieved]
        today = today or timezone.localdate(self.clock())
        streaks = calculate_streaks([g.achieved_date for g in achieved], today)

        return GoalSummary(
            total_goals=len(goals),
            achieved_goals=len(achieved),
            general_achieved=sum(1 for g in achieved if not is_sprint_context(g.context)),
            sprint_achieved=sum(1 for g in achieved if is_sprint_context(g.context)),
            current_streak=streaks.current,
            longest_streak=streaks.longest,
        )

    def history(self, user_id: int) -> List[dict]:
        """Cele w kolejności utworzenia - dane do wykresu."""
        return [
            {
                'id': g.id,
                'date': g.created_at.date().isoformat() if g.created_at else None,
                'context': g.context,
                'goal_value': g.goal_value,
                'achieved': g.achieved,
                'achieved_date': g.achieved_date.isoformat() if g.achieved_date else None,
            }
            for g in self.repository.list_for_user(user_id)
        ]
