"""Every handler, projector and event is registered once the domain is initialized."""

import pytest


def _names(records):
    return {record.cls.__name__ for record in records.values()}


class TestDomainRegistration:
    @pytest.mark.parametrize(
        "handler",
        [
            "NotificationDispatcher",
            "IdentityEventsHandler",
            "OrderingEventsHandler",
            "StockAlertEventsHandler",
            "BackInStockEventHandler",
            "OrderStockEventHandler",
            "ProductCacheInvalidator",
            "CategoryCacheInvalidator",
        ],
    )
    def test_event_handler_registered(self, _storefront_domain, handler):
        assert handler in _names(_storefront_domain.registry.event_handlers)

    @pytest.mark.parametrize("projector", ["UserDirectoryProjector", "OrderSummaryProjector"])
    def test_projector_registered(self, _storefront_domain, projector):
        assert projector in _names(_storefront_domain.registry.projectors)

    @pytest.mark.parametrize(
        "event",
        ["StockAlertRequested", "StockAlertSent", "ProductBackInStock", "OrderPlaced", "NotificationCreated"],
    )
    def test_event_registered(self, _storefront_domain, event):
        assert event in _names(_storefront_domain.registry.events)
