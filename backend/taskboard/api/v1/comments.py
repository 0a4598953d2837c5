"""Comments API.

POST /api/v1/comments — add a comment to a task
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlmodel import Session

from taskboard.db.database import get_session
from taskboard.models.comment import MAX_CONTENT_LENGTH, Comment

router = APIRouter(prefix="/api/v1", tags=["comments"])


class CreateCommentRequest(BaseModel):
    content: str = Field(min_length=1, max_length=MAX_CONTENT_LENGTH)
    task_id: str
    user_id: str


class CommentResponse(BaseModel):
    id: str
    content: str
    task_id: str
    user_id: str
    created_at: datetime


@router.post("/comments", response_model=CommentResponse, status_code=201)
def create_comment(request: CreateCommentRequest, session: Session = Depends(get_session)) -> CommentResponse:
    """Create a comment. Unknown task or user ids fail model validation (422)."""
    comment = Comment(content=request.content, task_id=request.task_id, user_id=request.user_id)
    session.add(comment)
    session.commit()
    session.refresh(comment)
    return CommentResponse.model_validate(comment, from_attributes=True)
