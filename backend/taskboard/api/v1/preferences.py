"""Preferences API — one preference row per user, created on first access.

GET   /api/v1/users/{user_id}/preference       — show
PUT   /api/v1/users/{user_id}/preference       — update hour and/or email opt-in
PATCH /api/v1/users/{user_id}/preference/mail  — update email opt-in only
"""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlmodel import Session

from taskboard.db.database import get_session
from taskboard.models.preference import Preference
from taskboard.models.user import User

router = APIRouter(prefix="/api/v1", tags=["preferences"])


class UpdatePreferenceRequest(BaseModel):
    notification_delivery_hour: int | None = Field(default=None, ge=0, le=23)
    receive_email: bool | None = None


class UpdateMailRequest(BaseModel):
    receive_email: bool


class PreferenceResponse(BaseModel):
    user_id: str
    notification_delivery_hour: int
    receive_email: bool
    updated_at: datetime


def _load(session: Session, user_id: str) -> Preference:
    if session.get(User, user_id) is None:
        raise HTTPException(status_code=404, detail=f"User not found: {user_id}")
    return Preference.for_user(session, user_id)


def _save(session: Session, preference: Preference) -> PreferenceResponse:
    session.add(preference)
    session.commit()
    session.refresh(preference)
    return PreferenceResponse.model_validate(preference, from_attributes=True)


@router.get("/users/{user_id}/preference", response_model=PreferenceResponse)
def show_preference(user_id: str, session: Session = Depends(get_session)) -> PreferenceResponse:
    return _save(session, _load(session, user_id))


@router.put("/users/{user_id}/preference", response_model=PreferenceResponse)
def update_preference(
    user_id: str,
    request: UpdatePreferenceRequest,
    session: Session = Depends(get_session),
) -> PreferenceResponse:
    preference = _load(session, user_id)
    for key, value in request.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(preference, key, value)
    return _save(session, preference)


@router.patch("/users/{user_id}/preference/mail", response_model=PreferenceResponse)
def update_mail(
    user_id: str,
    request: UpdateMailRequest,
    session: Session = Depends(get_session),
) -> PreferenceResponse:
    preference = _load(session, user_id)
    preference.receive_email = request.receive_email
    return _save(session, preference)
