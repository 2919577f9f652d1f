"""Shared BDD fixtures and step definitions for Notifications."""

import pytest
from pytest_bdd import given
from storefront.notifications.notification.notification import Notification, NotificationType


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@given("a queued welcome email", target_fixture="notification")
def queued_welcome():
    notification = Notification.create(
        recipient="priya@example.com",
        notification_type=NotificationType.WELCOME.value,
        subject="Welcome to Aquatic Store, Priya!",
        body="Welcome!",
    )
    notification._events.clear()
    return notification
