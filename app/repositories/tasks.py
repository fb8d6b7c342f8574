import logging
from typing import List, Optional

from sqlalchemy import desc, not_
from sqlalchemy.orm import Session

from app.database import utcnow
from app.errors import NotFoundError, ValidationError
from app.models.task import PRIORITY_ALIASES, Priority, Task

logger = logging.getLogger(__name__)


def normalize_priority(value: Optional[str]) -> str:
    """Map a client-supplied priority onto its stored value.

    None or an empty value means the default (media). English aliases are
    accepted; anything else raises ValidationError.
    """
    key = "" if value is None else str(value).strip().lower()
    if not key:
        return Priority.MEDIUM.value
    if key in PRIORITY_ALIASES:
        return PRIORITY_ALIASES[key].value
    try:
        return Priority(key).value
    except ValueError:
        allowed = ", ".join(p.value for p in Priority)
        raise ValidationError(f"Priority must be one of: {allowed}")


class TaskRepository:
    """Task CRUD. Every statement filters on the owner id."""

    def __init__(self, db: Session):
        self.db = db

    def _owned(self, owner_id: int, task_id: int):
        return self.db.query(Task).filter(Task.id == task_id, Task.user_id == owner_id)

    def list(self, owner_id: int) -> List[Task]:
        return (
            self.db.query(Task)
            .filter(Task.user_id == owner_id)
            .order_by(desc(Task.created_at), desc(Task.id))
            .all()
        )

    def get(self, owner_id: int, task_id: int) -> Task:
        task = self._owned(owner_id, task_id).first()
        if not task:
            raise NotFoundError("Task not found")
        return task

    def create(self, owner_id: int, title: str, description: Optional[str] = None, priority: Optional[str] = None) -> Task:
        title = (title or "").strip()
        if not title:
            raise ValidationError("Title is required")
        new = Task(
            user_id=owner_id,
            title=title,
            description=description or None,
            priority=normalize_priority(priority),
        )
        self.db.add(new)
        self.db.commit()
        self.db.refresh(new)
        logger.info("Created task id=%s for user id=%s", new.id, owner_id)
        return new

    def toggle(self, owner_id: int, task_id: int) -> Task:
        # single UPDATE so ownership is checked by the same statement that writes
        updated = self._owned(owner_id, task_id).update(
            {Task.completed: not_(Task.completed), Task.updated_at: utcnow()},
            synchronize_session=False,
        )
        if not updated:
            self.db.rollback()
            raise NotFoundError("Task not found")
        self.db.commit()
        logger.info("Toggled task id=%s for user id=%s", task_id, owner_id)
        return self.get(owner_id, task_id)

    def delete(self, owner_id: int, task_id: int):
        deleted = self._owned(owner_id, task_id).delete(synchronize_session=False)
        if not deleted:
            self.db.rollback()
            raise NotFoundError("Task not found")
        self.db.commit()
        logger.info("Deleted task id=%s for user id=%s", task_id, owner_id)
