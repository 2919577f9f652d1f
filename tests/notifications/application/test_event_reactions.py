"""Notifications created in reaction to events from other parts of the store."""

import json

from protean.utils.globals import current_domain
from storefront.catalogue.category.management import CreateCategory
from storefront.catalogue.product.management import CreateProduct
from storefront.identity.user.registration import RegisterUser
from storefront.notifications.notification.notification import Notification, NotificationType, RecipientType
from storefront.ordering.order.placement import PlaceOrder, UpdateOrderStatus

ADDRESS = {
    "first_name": "Asha",
    "last_name": "Verma",
    "email": "asha@example.com",
    "phone": "9876543210",
    "address": "12 MG Road",
    "city": "Bengaluru",
    "state": "KA",
    "zip_code": "560001",
    "country": "India",
}


def _notifications(notification_type):
    repo = current_domain.repository_for(Notification)
    return repo._dao.query.filter(notification_type=notification_type).all().items


def _place_order():
    current_domain.process(CreateCategory(name="Fish"), asynchronous=False)
    product_id = current_domain.process(
        CreateProduct(
            name="Neon Tetra",
            description="Schooling fish",
            price=450.0,
            image_url="https://cdn.example.com/tetra.jpg",
            category="Fish",
            stock=5,
        ),
        asynchronous=False,
    )
    return current_domain.process(
        PlaceOrder(
            items=json.dumps([{"product_id": product_id, "quantity": 2}]),
            shipping_address=json.dumps(ADDRESS),
            payment_method="paypal",
        ),
        asynchronous=False,
    )


class TestUserRegistered:
    def test_welcome_notification(self):
        current_domain.process(
            RegisterUser(email="priya@example.com", password="s3cret-pw", full_name="Priya Sharma"),
            asynchronous=False,
        )

        [welcome] = _notifications(NotificationType.WELCOME.value)
        assert welcome.recipient == "priya@example.com"
        assert welcome.source_event_type == "Storefront.UserRegistered.v1"


class TestOrderPlaced:
    def test_store_inbox_and_shopper_both_notified(self):
        order_id = _place_order()

        [received] = _notifications(NotificationType.ORDER_RECEIVED.value)
        assert received.recipient_type == RecipientType.INTERNAL.value
        assert received.subject == f"New Order #{order_id} Received"

        [confirmation] = _notifications(NotificationType.ORDER_CONFIRMATION.value)
        assert confirmation.recipient == "asha@example.com"
        context = json.loads(confirmation.context_data)
        assert context["total"] == 900.0
        assert context["items"][0]["name"] == "Neon Tetra"


class TestOrderStatusChanged:
    def test_shopper_told_about_each_change(self):
        order_id = _place_order()

        current_domain.process(UpdateOrderStatus(order_id=order_id, status="processing"), asynchronous=False)
        current_domain.process(UpdateOrderStatus(order_id=order_id, status="cancelled"), asynchronous=False)

        subjects = sorted(n.subject for n in _notifications(NotificationType.ORDER_STATUS_UPDATE.value))
        assert subjects == [f"Order #{order_id} is Cancelled", f"Order #{order_id} is Processing"]
