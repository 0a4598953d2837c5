"""Users API.

GET  /api/v1/users — list users (id, name)
POST /api/v1/users — sign up
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, model_validator
from sqlmodel import Session, select

from taskboard.db.database import get_session
from taskboard.models.user import MAX_EMAIL_LENGTH, MAX_NAME_LENGTH, MIN_PASSWORD_LENGTH, User
from taskboard.security.passwords import MAX_PASSWORD_BYTES

router = APIRouter(prefix="/api/v1", tags=["users"])


class CreateUserRequest(BaseModel):
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    email: str = Field(min_length=1, max_length=MAX_EMAIL_LENGTH)
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_BYTES)
    password_confirmation: str

    @model_validator(mode="after")
    def passwords_match(self) -> CreateUserRequest:
        if self.password != self.password_confirmation:
            raise ValueError("Password confirmation doesn't match Password")
        return self


class UserListItem(BaseModel):
    id: str
    name: str


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    created_at: datetime


@router.get("/users", response_model=list[UserListItem])
def list_users(session: Session = Depends(get_session)) -> list[UserListItem]:
    """List all users, alphabetically."""
    users = session.exec(select(User).order_by(User.name)).all()
    return [UserListItem(id=u.id, name=u.name) for u in users]


@router.post("/users", response_model=UserResponse, status_code=201)
def create_user(request: CreateUserRequest, session: Session = Depends(get_session)) -> UserResponse:
    """Create a user. The password is stored as a bcrypt digest only."""
    user = User(name=request.name, email=request.email)
    user.set_password(request.password)
    session.add(user)
    session.commit()
    session.refresh(user)
    return UserResponse(id=user.id, name=user.name, email=user.email, created_at=user.created_at)
