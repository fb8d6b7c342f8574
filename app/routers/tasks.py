from typing import List

from fastapi import APIRouter, Depends

from app.dependencies import Identity, get_current_identity, get_task_repository
from app.repositories.tasks import TaskRepository
from app.schemas.task import MessageOut, TaskCreate, TaskOut

# the guard runs before any handler in this router
router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskOut])
def list_tasks(
    identity: Identity = Depends(get_current_identity),
    repo: TaskRepository = Depends(get_task_repository),
):
    return repo.list(identity.user_id)


@router.post("", response_model=TaskOut, status_code=201)
def create_task(
    task: TaskCreate,
    identity: Identity = Depends(get_current_identity),
    repo: TaskRepository = Depends(get_task_repository),
):
    return repo.create(identity.user_id, task.title, task.description, task.priority)


@router.put("/{task_id}/toggle", response_model=TaskOut)
def toggle_task(
    task_id: int,
    identity: Identity = Depends(get_current_identity),
    repo: TaskRepository = Depends(get_task_repository),
):
    return repo.toggle(identity.user_id, task_id)


@router.delete("/{task_id}", response_model=MessageOut)
def delete_task(
    task_id: int,
    identity: Identity = Depends(get_current_identity),
    repo: TaskRepository = Depends(get_task_repository),
):
    repo.delete(identity.user_id, task_id)
    return {"message": "Task deleted successfully"}
