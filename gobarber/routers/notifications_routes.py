# gobarber/routers/notifications_routes.py

from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from gobarber.auth import get_current_user
from gobarber.db import get_session
from gobarber.deps import require_provider
from gobarber.errors import NotFoundError
from gobarber.models import User
from gobarber.schemas import NotificationPublic
from gobarber.store import NotificationStore

router = APIRouter(
    prefix="/notifications",
    tags=["notifications"],
)


@router.get("", response_model=List[NotificationPublic])
def list_notifications(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    require_provider(current_user)
    return NotificationStore(session).list_for_user(current_user.id)


@router.put("/{notification_id}", response_model=NotificationPublic)
def mark_notification_read(
    notification_id: int,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    notification = NotificationStore(session).mark_read(notification_id, current_user.id)
    if notification is None:
        raise NotFoundError("Notification not found")
    return notification
