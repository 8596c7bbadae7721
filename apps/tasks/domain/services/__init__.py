from .task_service import TaskService, UpdateTaskInput, validate_task
from .timer import TimerEngine, TimerTicker, TimerRegistry, ActiveTimer
from .time_entries import calculate_range_duration, duration_from_parts
from .folders import FolderService
from .notifications import NotificationService
