"""Notifications reacts to new accounts with a welcome email."""

from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.identity.user.events import UserRegistered
from storefront.notifications.notification.helpers import create_customer_notification
from storefront.notifications.notification.notification import Notification, NotificationType


@storefront.event_handler(part_of=Notification, stream_category="storefront::user")
class IdentityEventsHandler:
    @handle(UserRegistered)
    def on_user_registered(self, event: UserRegistered) -> None:
        create_customer_notification(
            event.email,
            NotificationType.WELCOME.value,
            {"full_name": event.full_name, "username": event.username},
            source_event_type="Storefront.UserRegistered.v1",
        )
