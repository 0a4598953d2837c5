"""Tasks API — CRUD keyed by slug.

GET    /api/v1/tasks          — pending and completed tasks, starred first
POST   /api/v1/tasks          — create a task (slug generated from title)
GET    /api/v1/tasks/{slug}   — task with owner, assignee and comments
PUT    /api/v1/tasks/{slug}   — partial update (the slug itself is immutable)
DELETE /api/v1/tasks/{slug}   — delete task and its comments
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlmodel import Session, select

from taskboard.db.database import get_session
from taskboard.models.comment import Comment
from taskboard.models.task import MAX_TITLE_LENGTH, Progress, Status, Task
from taskboard.models.user import User

router = APIRouter(prefix="/api/v1", tags=["tasks"])


# === Request / Response Models ===


class CreateTaskRequest(BaseModel):
    title: str = Field(min_length=1, max_length=MAX_TITLE_LENGTH)
    task_owner_id: str
    assigned_user_id: str
    progress: Progress = "pending"
    status: Status = "unstarred"


class UpdateTaskRequest(BaseModel):
    """All fields optional. A differing slug is rejected by model validation."""

    title: str | None = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    progress: Progress | None = None
    status: Status | None = None
    task_owner_id: str | None = None
    assigned_user_id: str | None = None
    slug: str | None = None


class UserSummary(BaseModel):
    id: str
    name: str


class CommentResponse(BaseModel):
    id: str
    content: str
    user_id: str
    created_at: datetime


class TaskResponse(BaseModel):
    id: str
    title: str
    slug: str
    progress: str
    status: str
    task_owner_id: str
    assigned_user_id: str
    created_at: datetime
    updated_at: datetime


class TaskDetail(TaskResponse):
    task_owner: UserSummary | None = None
    assigned_user: UserSummary | None = None
    comments: list[CommentResponse] = Field(default_factory=list)


class TaskListResponse(BaseModel):
    pending: list[TaskResponse]
    completed: list[TaskResponse]


def _to_response(task: Task) -> TaskResponse:
    return TaskResponse.model_validate(task, from_attributes=True)


def _user_summary(session: Session, user_id: str) -> UserSummary | None:
    user = session.get(User, user_id)
    if user is None:
        return None
    return UserSummary(id=user.id, name=user.name)


def _get_task_or_404(session: Session, slug: str) -> Task:
    task = session.exec(select(Task).where(Task.slug == slug)).first()
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task not found: {slug}")
    return task


# === Endpoints ===


@router.get("/tasks", response_model=TaskListResponse)
def list_tasks(session: Session = Depends(get_session)) -> TaskListResponse:
    """List tasks grouped by progress; starred before unstarred, newest update first."""
    return TaskListResponse(
        pending=[_to_response(t) for t in Task.of_progress(session, "pending")],
        completed=[_to_response(t) for t in Task.of_progress(session, "completed")],
    )


@router.post("/tasks", response_model=TaskResponse, status_code=201)
def create_task(request: CreateTaskRequest, session: Session = Depends(get_session)) -> TaskResponse:
    """Create a task. The slug is derived from the title at insert time."""
    task = Task(
        title=request.title,
        task_owner_id=request.task_owner_id,
        assigned_user_id=request.assigned_user_id,
        progress=request.progress,
        status=request.status,
    )
    session.add(task)
    session.commit()
    session.refresh(task)
    return _to_response(task)


@router.get("/tasks/{slug}", response_model=TaskDetail)
def get_task(slug: str, session: Session = Depends(get_session)) -> TaskDetail:
    """Get a task with its users and comments (newest first)."""
    task = _get_task_or_404(session, slug)
    comments = session.exec(
        select(Comment)
        .where(Comment.task_id == task.id)
        .order_by(Comment.created_at.desc())  # type: ignore[union-attr]
    ).all()
    return TaskDetail(
        **_to_response(task).model_dump(),
        task_owner=_user_summary(session, task.task_owner_id),
        assigned_user=_user_summary(session, task.assigned_user_id),
        comments=[CommentResponse.model_validate(c, from_attributes=True) for c in comments],
    )


@router.put("/tasks/{slug}", response_model=TaskResponse)
def update_task(slug: str, request: UpdateTaskRequest, session: Session = Depends(get_session)) -> TaskResponse:
    """Update an existing task. Changing the title keeps the slug."""
    task = _get_task_or_404(session, slug)

    update_data = request.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(task, key, value)

    session.add(task)
    session.commit()
    session.refresh(task)
    return _to_response(task)


@router.delete("/tasks/{slug}", status_code=204)
def delete_task(slug: str, session: Session = Depends(get_session)) -> None:
    """Delete a task; its comments go with it (ON DELETE CASCADE)."""
    task = _get_task_or_404(session, slug)
    session.delete(task)
    session.commit()
