# apps/tasks/domain/services/timer.py
"""
Silnik stopera: co najwyżej jeden aktywny pomiar na raz.

start() na działającym zadaniu nic nie zmienia; na zadaniu wstrzymanym przez
pause() wznawia pomiar z zachowanym elapsed_seconds.
start() na innym zadaniu najpierw zatrzymuje i zapisuje poprzedni pomiar.
stop() zapisuje TimeEntry (także z pauzy) i zawsze resetuje stan, nawet gdy zapis się nie udał.

Tick (co sekundę) to tylko licznik do wyświetlania. Zapisywany czas trwania to
zegar ścienny bieżącego odcinka plus sekundy zebrane w odcinkach przed pauzą.
"""
import asyncio
import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Optional

from django.utils import timezone

from apps.core.config import engine_setting
from apps.core.errors import PersistenceError
from apps.tasks.domain.entities import TimeEntryEntity
from apps.tasks.ports.repositories import ITimeEntryRepository

logger = logging.getLogger(__name__)


@dataclass
class ActiveTimer:
    task_id: Optional[int] = None
    start_instant: Optional[datetime] = None  # None = pauza
    elapsed_seconds: int = 0

    @property
    def is_running(self) -> bool:
        return self.task_id is not None and self.start_instant is not None

    @property
    def is_paused(self) -> bool:
        return self.task_id is not None and self.start_instant is None


class TimerEngine:
    def __init__(self, time_entries: ITimeEntryRepository, user_id: int,
                 clock: Callable[[], datetime] = timezone.now):
        self.time_entries = time_entries
        self.user_id = user_id
        self.clock = clock
        self.state = ActiveTimer()
        # Sekundy zebrane w odcinkach przed ostatnią pauzą
        self._carried_seconds = 0
        # Początek pierwszego odcinka - start_time zapisywanego wpisu
        self._session_start: Optional[datetime] = None

    @property
    def is_running(self) -> bool:
        return self.state.is_running

    @property
    def is_paused(self) -> bool:
        return self.state.is_paused

    def _wall_seconds(self) -> int:
        delta = (self.clock() - self.state.start_instant).total_seconds()
        return int(math.floor(delta + self._carried_seconds))

    def start(self, task_id: int) -> None:
        if self.state.task_id == task_id:
            if self.state.is_paused:
                # Wznowienie - elapsed zostaje
                self._carried_seconds = self.state.elapsed_seconds
                self.state.start_instant = self.clock()
            return

        if self.state.task_id is not None:
            self.stop()

        now = self.clock()
        self.state = ActiveTimer(task_id=task_id, start_instant=now, elapsed_seconds=0)
        self._carried_seconds = 0
        self._session_start = now

    def pause(self) -> int:
        """Zamraża pomiar; zwraca zebrane sekundy."""
        if self.state.is_running:
            self.state.elapsed_seconds = self._wall_seconds()
            self._carried_seconds = self.state.elapsed_seconds
            self.state.start_instant = None
        return self.state.elapsed_seconds

    def tick(self) -> None:
        if self.state.is_running:
            self.state.elapsed_seconds += 1

    def live_seconds(self, task_id: int) -> int:
        """Czas liczony z zegara ściennego - dla widoków bez tickera."""
        if self.state.task_id != task_id or task_id is None:
            return 0
        if self.state.is_paused:
            return self._carried_seconds
        return self._wall_seconds()

    def get_elapsed(self, task_id: int) -> int:
        if self.state.task_id == task_id:
            return self.state.elapsed_seconds
        return 0

    def stop(self) -> Optional[TimeEntryEntity]:
        if self.state.task_id is None:
            return None

        now = self.clock()
        duration = self._wall_seconds() if self.state.is_running else self._carried_seconds
        start_instant = self._session_start or now

        entry = TimeEntryEntity(
            id=None,
            task_id=self.state.task_id,
            date=timezone.localdate(now),
            duration=max(0, duration),
            start_time=start_instant,
        )

        saved = None
        try:
            saved = self.time_entries.add(entry, user_id=self.user_id)
            logger.info("Timer stored %ss for task %s", entry.duration, entry.task_id)
        except PersistenceError as e:
            # Zmierzony czas przepada - stan i tak resetujemy
            logger.error("Error saving time entry for task %s: %s", entry.task_id, e)

        self.state = ActiveTimer()
        self._carried_seconds = 0
        self._session_start = None
        return saved


class TimerTicker:
    """
    Cykliczne wywołanie engine.tick() jako zadanie asyncio.

    Kończy się samo, gdy stoper przestaje działać; stop() (lub wyjście z
    `async with`) anuluje je deterministycznie.
    """

    def __init__(self, engine: TimerEngine, interval: Optional[float] = None):
        self.engine = engine
        self.interval = interval or engine_setting('TIMER_TICK_SECONDS', 1)
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.is_running:
            logger.warning("Timer ticker already running")
            return
        self._task = asyncio.create_task(self._loop())

    def stop(self) -> None:
        if self._task and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _loop(self) -> None:
        try:
            while self.engine.is_running:
                await asyncio.sleep(self.interval)
                if not self.engine.is_running:
                    break
                self.engine.tick()
        except asyncio.CancelledError:
            pass

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.stop()
        return False


class TimerRegistry:
    """Jeden silnik stopera na użytkownika, trzymany w pamięci procesu (bez persystencji)."""

    def __init__(self, time_entries_factory: Callable[[], ITimeEntryRepository],
                 clock: Callable[[], datetime] = timezone.now):
        self.time_entries_factory = time_entries_factory
        self.clock = clock
        self._engines: Dict[int, TimerEngine] = {}

    def for_user(self, user_id: int) -> TimerEngine:
        engine = self._engines.get(user_id)
        if engine is None:
            engine = TimerEngine(self.time_entries_factory(), user_id=user_id, clock=self.clock)
            self._engines[user_id] = engine
        return engine

    def clear(self) -> None:
        self._engines.clear()
