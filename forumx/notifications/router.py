"""Notification API routes.

A user may only read and change their own notifications; admins may act on
anyone's.
"""

from uuid import UUID

from fastapi import APIRouter

from forumx.auth.dependencies import CallerAccount, CurrentUser, ensure_self_or_admin
from forumx.core.schemas import MessageResponse

from .dependencies import NotificationServiceDep
from .schemas import NotificationResponse


router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get(
    "/{user_email}",
    response_model=list[NotificationResponse],
    summary="List a user's notifications",
)
async def list_notifications(
    user_email: str,
    identity: CurrentUser,
    account: CallerAccount,
    service: NotificationServiceDep,
) -> list[NotificationResponse]:
    ensure_self_or_admin(identity, account, user_email)
    notifications = await service.list_for_user(user_email)
    return [NotificationResponse.from_notification(n) for n in notifications]


@router.patch(
    "/{notification_id}/read",
    response_model=MessageResponse,
    summary="Mark a notification as read",
)
async def mark_read(
    notification_id: UUID,
    identity: CurrentUser,
    account: CallerAccount,
    service: NotificationServiceDep,
) -> MessageResponse:
    notification = await service.get(notification_id)
    ensure_self_or_admin(identity, account, notification.user_email)
    await service.mark_read(notification)
    return MessageResponse(message="Notification marked as read")


@router.patch(
    "/{user_email}/read-all",
    response_model=MessageResponse,
    summary="Mark all of a user's notifications as read",
)
async def mark_all_read(
    user_email: str,
    identity: CurrentUser,
    account: CallerAccount,
    service: NotificationServiceDep,
) -> MessageResponse:
    ensure_self_or_admin(identity, account, user_email)
    await service.mark_all_read(user_email)
    return MessageResponse(message="All notifications marked as read")


@router.delete(
    "/{user_email}/clear-all",
    response_model=MessageResponse,
    summary="Delete all of a user's notifications",
)
async def clear_all(
    user_email: str,
    identity: CurrentUser,
    account: CallerAccount,
    service: NotificationServiceDep,
) -> MessageResponse:
    ensure_self_or_admin(identity, account, user_email)
    await service.clear_all(user_email)
    return MessageResponse(message="All notifications cleared")
