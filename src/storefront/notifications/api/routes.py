"""FastAPI routes for the Notifications domain (admin only).

Thin adapters that translate HTTP requests into domain commands.
"""

from fastapi import APIRouter, Depends, HTTPException
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.api.dependencies import require_admin
from storefront.notifications.notification.notification import Notification
from storefront.notifications.notification.retry import RetryNotification

router = APIRouter(prefix="/api/admin/notifications", tags=["notifications"], dependencies=[Depends(require_admin)])


@router.get("")
async def list_notifications(status: str | None = None, recipient: str | None = None):
    """Newest first, optionally filtered by status (Pending/Sent/Failed) or recipient."""
    query = current_domain.repository_for(Notification)._dao.query
    if status:
        query = query.filter(status=status)
    if recipient:
        query = query.filter(recipient=recipient.strip())
    notifications = sorted(query.limit(None).all().items, key=lambda n: n.created_at, reverse=True)
    return [notification.to_dict() for notification in notifications]


@router.post("/{notification_id}/retry")
async def retry_notification(notification_id: str):
    try:
        current_domain.process(RetryNotification(notification_id=notification_id), asynchronous=False)
    except ObjectNotFoundError:
        raise HTTPException(status_code=404, detail="Notification not found") from None
    return current_domain.repository_for(Notification).get(notification_id).to_dict()
