# apps/sprints/adapters/orm_repositories.py
from datetime import date
from typing import List, Optional
from apps.core.adapters.orm import backend_call
from apps.core.errors import PolicyDeniedError
from apps.sprints.domain.entities import SprintEntity
from apps.sprints.ports.repositories import ISprintRepository
from apps.sprints.models import Sprint as SprintModel


class DjangoSprintRepository(ISprintRepository):
    def to_entity(self, model: SprintModel) -> SprintEntity:
        return SprintEntity(
            id=model.id,
            name=model.name,
            start_date=model.start_date,
            end_date=model.end_date,
            tasks=[str(t) for t in (model.tasks or [])],
        )

    def list_for_user(self, user_id: int) -> List[SprintEntity]:
        with backend_call("select sprints"):
            qs = SprintModel.objects.filter(user_id=user_id).order_by('start_date', 'id')
            return [self.to_entity(s) for s in qs]

    def get_by_id(self, user_id: int, sprint_id: int) -> Optional[SprintEntity]:
        with backend_call("select sprint"):
            try:
                return self.to_entity(SprintModel.objects.get(id=sprint_id, user_id=user_id))
            except SprintModel.DoesNotExist:
                return None

    def find_overlapping(self, user_id: int, start: date, end: date) -> List[SprintEntity]:
        with backend_call("select conflicting sprints"):
            qs = SprintModel.objects.filter(user_id=user_id, start_date__lt=end, end_date__gt=start)
            return [self.to_entity(s) for s in qs]

    def list_containing_task(self, user_id: int, task_id: str) -> List[SprintEntity]:
        # JSONField__contains nie działa na SQLite - filtrujemy w Pythonie
        return [s for s in self.list_for_user(user_id) if s.has_task(task_id)]

    def save(self, sprint: SprintEntity, user_id: int) -> SprintEntity:
        data = {
            'name': sprint.name,
            'start_date': sprint.start_date,
            'end_date': sprint.end_date,
            'tasks': list(sprint.tasks),
        }

        with backend_call("save sprint"):
            if sprint.id:
                updated = SprintModel.objects.filter(id=sprint.id, user_id=user_id).update(**data)
                if not updated:
                    raise PolicyDeniedError(f"Sprint {sprint.id} not found for user {user_id}")
                obj = SprintModel.objects.get(id=sprint.id)
            else:
                obj = SprintModel.objects.create(user_id=user_id, **data)

        return self.to_entity(obj)

    def delete(self, user_id: int, sprint_id: int) -> None:
        with backend_call("delete sprint"):
            deleted, _ = SprintModel.objects.filter(id=sprint_id, user_id=user_id).delete()
        if not deleted:
            raise PolicyDeniedError(f"Sprint {sprint_id} not found for user {user_id}")
