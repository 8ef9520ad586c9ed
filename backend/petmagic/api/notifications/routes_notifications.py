"""Notification API routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from petmagic.api.deps import get_current_user, get_notification_service
from petmagic.api.schemas import Ack, CamelModel, NotificationResponse, UnreadCountResponse
from petmagic.domain.notifications.models import Decision
from petmagic.domain.notifications.services import NotificationService
from petmagic.domain.users.models import User

router = APIRouter()


class NotificationCreateRequest(CamelModel):
    """Create notification request. type defaults to interest when omitted."""
    type: Optional[str] = None
    message: Optional[str] = None
    pet_id: Optional[int] = None
    from_user_id: Optional[int] = None
    to_user_id: Optional[int] = None


class RespondRequest(CamelModel):
    """Owner's decision on an interest notification."""
    decision: Decision


@router.post("", response_model=Ack, status_code=status.HTTP_201_CREATED)
async def create_notification(
    request: NotificationCreateRequest,
    service: NotificationService = Depends(get_notification_service),
):
    """Create a notification addressed to toUserId."""
    notification = await service.create_notification(
        type=request.type,
        message=request.message,
        to_user_id=request.to_user_id,
        pet_id=request.pet_id,
        from_user_id=request.from_user_id,
    )
    return Ack(message="Notification sent", id=notification.id)


@router.get("/{user_id}", response_model=List[NotificationResponse])
async def list_notifications(
    user_id: int,
    unread_only: bool = Query(False, alias="unreadOnly"),
    service: NotificationService = Depends(get_notification_service),
):
    """List notifications addressed to user_id, newest first."""
    notifications = await service.list_notifications(user_id, unread_only=unread_only)
    return [NotificationResponse.model_validate(n) for n in notifications]


@router.get("/{user_id}/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    user_id: int,
    service: NotificationService = Depends(get_notification_service),
):
    """Return unread notification count for user_id."""
    return UnreadCountResponse(unread=await service.count_unread(user_id))


@router.put("/mark-all/{user_id}", response_model=Ack)
async def mark_all_notifications_read(
    user_id: int,
    service: NotificationService = Depends(get_notification_service),
):
    """Mark all notifications for a user as read."""
    updated = await service.mark_all_read(user_id)
    return Ack(message="All notifications marked as read", updated=updated)


@router.put("/{notification_id}", response_model=Ack)
async def mark_notification_read(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service),
):
    """Mark a single notification as read."""
    await service.mark_read(notification_id)
    return Ack(message="Marked as read", id=notification_id)


@router.post(
    "/{notification_id}/respond",
    response_model=NotificationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def respond_to_adoption_request(
    notification_id: str,
    request: RespondRequest,
    current_user: User = Depends(get_current_user),
    service: NotificationService = Depends(get_notification_service),
):
    """Accept or reject an interest notification addressed to the current user."""
    response = await service.respond_to_adoption_request(
        notification_id, request.decision, responder=current_user
    )
    return NotificationResponse.model_validate(response)
