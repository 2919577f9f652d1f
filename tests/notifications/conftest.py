"""Shared fixtures for notification tests."""

import pytest
from protean.utils.globals import current_domain
from storefront.notifications.notification.notification import Notification, NotificationType


@pytest.fixture()
def queue_notification():
    """Factory: create and persist a notification (which dispatches it) and return its id."""

    def _queue(**overrides):
        defaults = {
            "recipient": "priya@example.com",
            "notification_type": NotificationType.WELCOME.value,
            "subject": "Welcome!",
            "body": "Welcome to Aquatic Store",
        }
        defaults.update(overrides)
        notification = Notification.create(**defaults)
        current_domain.repository_for(Notification).add(notification)
        return str(notification.id)

    return _queue
