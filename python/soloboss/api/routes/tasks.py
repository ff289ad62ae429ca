"""Task (SlayList) routes.

Routes are transport-only:
- Resolve the caller via get_caller
- Call exactly one service function
- Return success(...) or raise ApiError
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from soloboss.api.deps import get_db
from soloboss.auth.middleware import Caller, get_caller
from soloboss.responses import success_response
from soloboss.schemas.task import CreateTaskRequest, UpdateTaskRequest
from soloboss.services import tasks as tasks_service

router = APIRouter()


@router.post("/tasks", status_code=201)
def create_task(
    body: CreateTaskRequest,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Create a task. New tasks always start as pending.

    Errors:
        - 400 E_INVALID_REQUEST: Invalid body
        - 404 E_USER_NOT_FOUND: Caller has no user row
    """
    result = tasks_service.create_task(db, caller.user_id, body)
    return success_response(result.model_dump(mode="json"))


@router.get("/tasks")
def list_tasks(
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """List the caller's tasks, newest first."""
    result = tasks_service.list_tasks(db, caller.user_id)
    return success_response([task.model_dump(mode="json") for task in result])


@router.patch("/tasks/{task_id}")
def update_task(
    task_id: UUID,
    body: UpdateTaskRequest,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Partially update a task.

    Omitted fields are left alone; description and due_date may be cleared
    with an explicit null.

    Errors:
        - 400 E_INVALID_REQUEST: Invalid body or null for a required field
        - 404 E_TASK_NOT_FOUND: Task missing or owned by someone else
    """
    result = tasks_service.update_task(db, caller.user_id, task_id, body)
    return success_response(result.model_dump(mode="json"))


@router.delete("/tasks/{task_id}")
def delete_task(
    task_id: UUID,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Delete a task. data is false when nothing was deleted."""
    return success_response(tasks_service.delete_task(db, caller.user_id, task_id))
