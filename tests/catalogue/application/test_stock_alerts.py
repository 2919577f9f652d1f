"""Application tests for back-in-stock subscriptions."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.catalogue.product.management import AdjustStock
from storefront.catalogue.stock_alert.management import (
    NotifyBackInStock,
    SubscribeToStock,
    pending_subscribers,
)
from storefront.catalogue.stock_alert.subscription import StockSubscription, SubscriptionStatus


@pytest.fixture()
def sold_out_product(women_category, make_product):
    return make_product(name="Silk Saree", stock=0)


def _subscribe(email, product_id):
    return current_domain.process(SubscribeToStock(email=email, product_id=product_id), asynchronous=False)


class TestSubscribe:
    def test_subscription_is_pending(self, sold_out_product):
        subscription_id = _subscribe("Meera@Example.com", sold_out_product)

        subscription = current_domain.repository_for(StockSubscription).get(subscription_id)
        assert subscription.email.address == "meera@example.com"
        assert subscription.product_name == "Silk Saree"
        assert subscription.status == SubscriptionStatus.PENDING.value

    def test_resubscribing_returns_existing_subscription(self, sold_out_product):
        first = _subscribe("meera@example.com", sold_out_product)
        second = _subscribe("MEERA@example.com", sold_out_product)

        assert first == second
        assert len(pending_subscribers(sold_out_product)) == 1

    def test_unknown_product_rejected(self):
        with pytest.raises(ObjectNotFoundError):
            _subscribe("meera@example.com", "no-such-product")

    def test_invalid_email_rejected(self, sold_out_product):
        with pytest.raises(ValidationError):
            _subscribe("not-an-email", sold_out_product)


class TestNotify:
    def test_manual_notify_emails_every_pending_subscriber(self, sold_out_product, outbox):
        _subscribe("meera@example.com", sold_out_product)
        _subscribe("arjun@example.com", sold_out_product)

        notified = current_domain.process(NotifyBackInStock(product_id=sold_out_product), asynchronous=False)

        assert notified == 2
        assert pending_subscribers(sold_out_product) == []
        assert outbox.sent_to("meera@example.com")[0]["subject"] == "Silk Saree Is Now Available!"
        assert len(outbox.sent_to("arjun@example.com")) == 1

    def test_notify_without_subscribers(self, sold_out_product, outbox):
        notified = current_domain.process(NotifyBackInStock(product_id=sold_out_product), asynchronous=False)

        assert notified == 0
        assert outbox.sent_emails == []

    def test_subscribers_are_notified_only_once(self, sold_out_product, outbox):
        _subscribe("meera@example.com", sold_out_product)

        current_domain.process(NotifyBackInStock(product_id=sold_out_product), asynchronous=False)
        second = current_domain.process(NotifyBackInStock(product_id=sold_out_product), asynchronous=False)

        assert second == 0
        assert len(outbox.sent_to("meera@example.com")) == 1


class TestRestockTriggersAlerts:
    def test_restock_from_zero_notifies_subscribers(self, sold_out_product, outbox):
        _subscribe("meera@example.com", sold_out_product)

        current_domain.process(AdjustStock(product_id=sold_out_product, stock=12), asynchronous=False)

        assert len(outbox.sent_to("meera@example.com")) == 1
        assert pending_subscribers(sold_out_product) == []

    def test_stock_change_while_in_stock_does_not_notify(self, women_category, make_product, outbox):
        product_id = make_product(stock=3)
        _subscribe("meera@example.com", product_id)

        current_domain.process(AdjustStock(product_id=product_id, stock=8), asynchronous=False)

        assert outbox.sent_to("meera@example.com") == []
        assert len(pending_subscribers(product_id)) == 1
