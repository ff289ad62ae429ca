"""Task (SlayList) service layer.

Service functions correspond 1:1 with route handlers. Mutations go through
the owner-scoped helpers in services.ownership.
"""

from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from soloboss.db.models import Task, TaskStatus
from soloboss.errors import ApiErrorCode, NotFoundError
from soloboss.logging import get_logger
from soloboss.schemas.task import CreateTaskRequest, TaskOut, UpdateTaskRequest
from soloboss.services.ownership import delete_owned, insert_owned, owned_select, update_owned

logger = get_logger(__name__)


def task_not_found() -> NotFoundError:
    return NotFoundError(ApiErrorCode.E_TASK_NOT_FOUND, "Task not found or access denied")


def create_task(db: Session, caller_id: UUID, req: CreateTaskRequest) -> TaskOut:
    """Create a pending task owned by the caller.

    Raises:
        NotFoundError(E_USER_NOT_FOUND): If the caller has no user row.
    """
    task = Task(
        id=uuid4(),
        user_id=caller_id,
        title=req.title,
        description=req.description,
        status=TaskStatus.pending.value,
        priority=req.priority,
        due_date=req.due_date,
    )
    insert_owned(db, task)

    logger.info("task_created", task_id=str(task.id), priority=task.priority)
    return TaskOut.model_validate(task)


def list_tasks(db: Session, caller_id: UUID) -> list[TaskOut]:
    """List the caller's tasks, newest first."""
    tasks = db.execute(owned_select(Task, caller_id)).scalars().all()
    return [TaskOut.model_validate(task) for task in tasks]


def update_task(db: Session, caller_id: UUID, task_id: UUID, req: UpdateTaskRequest) -> TaskOut:
    """Apply the fields present in req to one of the caller's tasks.

    Raises:
        NotFoundError(E_TASK_NOT_FOUND): If the task is missing or not the caller's.
    """
    changes = req.changes()
    task = update_owned(db, Task, caller_id, task_id, changes, task_not_found())

    logger.info("task_updated", task_id=str(task_id), fields=sorted(changes))
    return TaskOut.model_validate(task)


def delete_task(db: Session, caller_id: UUID, task_id: UUID) -> bool:
    """Delete one of the caller's tasks. Returns False if nothing matched."""
    deleted = delete_owned(db, Task, caller_id, task_id)
    if deleted:
        logger.info("task_deleted", task_id=str(task_id))
    return deleted
