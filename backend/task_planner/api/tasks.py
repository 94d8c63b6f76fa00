"""Task CRUD, completion toggle, and filtered listing endpoints."""

from __future__ import annotations

from datetime import date, timedelta

from fastapi import APIRouter, Depends, Response, status

from task_planner.api.deps import get_task_repository
from task_planner.core.time import local_day
from task_planner.models.tasks import TaskPriority
from task_planner.schemas.errors import ErrorResponse
from task_planner.schemas.tasks import TaskCreate, TaskRead, TaskUpdate
from task_planner.services.tasks import TaskFilter, TaskRepository
from task_planner.services.windows import UPCOMING_DAYS, DateWindow

RUNTIME_ANNOTATION_TYPES = (date,)

router = APIRouter(prefix="/tasks", tags=["tasks"])
TASKS_DEP = Depends(get_task_repository)
NOT_FOUND_RESPONSE = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}


@router.get("", response_model=list[TaskRead])
async def list_tasks(
    repo: TaskRepository = TASKS_DEP,
    category: str | None = None,
    completed: bool | None = None,
    priority: TaskPriority | None = None,
    upcoming: bool = False,
    window: DateWindow | None = None,
    due_date: date | None = None,
    due_from: date | None = None,
    due_to: date | None = None,
) -> list[TaskRead]:
    """List tasks sorted by due date, optionally filtered.

    `upcoming=true` keeps tasks due between today and seven days out,
    regardless of completion; combine it with `completed=false` if needed.
    """
    if upcoming:
        today = local_day(repo.clock())
        upcoming_end = today + timedelta(days=UPCOMING_DAYS)
        due_from = max(due_from, today) if due_from else today
        due_to = min(due_to, upcoming_end) if due_to else upcoming_end
    criteria = TaskFilter(
        category=category or None,
        completed=completed,
        priority=priority,
        due_date=due_date,
        due_from=due_from,
        due_to=due_to,
        window=window,
    )
    return [TaskRead.model_validate(task, from_attributes=True) for task in repo.filter(criteria)]


@router.get("/{task_id}", response_model=TaskRead, responses=NOT_FOUND_RESPONSE)
async def get_task(task_id: str, repo: TaskRepository = TASKS_DEP) -> TaskRead:
    """Get a task by id."""
    return TaskRead.model_validate(repo.get_by_id(task_id), from_attributes=True)


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def create_task(payload: TaskCreate, repo: TaskRepository = TASKS_DEP) -> TaskRead:
    """Create a task; `dueDate` defaults to tomorrow and `priority` to medium."""
    return TaskRead.model_validate(repo.create(payload), from_attributes=True)


@router.put("/{task_id}", response_model=TaskRead, responses=NOT_FOUND_RESPONSE)
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    repo: TaskRepository = TASKS_DEP,
) -> TaskRead:
    """Merge the supplied fields onto a task."""
    return TaskRead.model_validate(repo.update(task_id, payload), from_attributes=True)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=NOT_FOUND_RESPONSE,
)
async def delete_task(task_id: str, repo: TaskRepository = TASKS_DEP) -> Response:
    """Delete a task."""
    repo.delete(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{task_id}/toggle", response_model=TaskRead, responses=NOT_FOUND_RESPONSE)
async def toggle_task(task_id: str, repo: TaskRepository = TASKS_DEP) -> TaskRead:
    """Flip a task's completion flag."""
    return TaskRead.model_validate(repo.toggle_completion(task_id), from_attributes=True)
