"""Stock alert subscriptions: commands, handlers and lookups."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.catalogue.stock_alert.subscription import StockSubscription, SubscriptionStatus
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="StockSubscription")
class SubscribeToStock:
    email: String(required=True, max_length=254)
    product_id: Identifier(required=True)


@storefront.command(part_of="StockSubscription")
class NotifyBackInStock:
    product_id: Identifier(required=True)


def pending_subscribers(product_id) -> list[StockSubscription]:
    """Subscriptions still waiting for ``product_id`` to come back."""
    return (
        current_domain.repository_for(StockSubscription)
        ._dao.query.filter(product_id=str(product_id), status=SubscriptionStatus.PENDING.value)
        .limit(None)
        .all()
        .items
    )


def notify_subscribers(product_id, product_name) -> int:
    """Email every pending subscriber of a product and mark them notified.

    Each subscriber is marked notified and saved; the StockAlertSent event
    it raises produces the back-in-stock email. Returns the number notified.
    """
    subscribers = pending_subscribers(product_id)
    if not subscribers:
        logger.info("No stock alert subscribers", product_id=str(product_id))
        return 0

    repo = current_domain.repository_for(StockSubscription)
    for subscription in subscribers:
        subscription.product_name = product_name
        subscription.mark_notified()
        repo.add(subscription)

    logger.info("Notified stock alert subscribers", product_id=str(product_id), count=len(subscribers))
    return len(subscribers)


@storefront.command_handler(part_of=StockSubscription)
class StockAlertHandler:
    @handle(SubscribeToStock)
    def subscribe(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        email = command.email.strip().lower()

        for existing in pending_subscribers(product.id):
            if existing.email.address == email:
                logger.info("Already subscribed to stock alert", email=email, product_id=str(product.id))
                return str(existing.id)

        subscription = StockSubscription.subscribe(
            email=email,
            product_id=str(product.id),
            product_name=product.name,
        )
        current_domain.repository_for(StockSubscription).add(subscription)
        logger.info("Subscribed to stock alert", email=email, product_id=str(product.id))
        return str(subscription.id)

    @handle(NotifyBackInStock)
    def notify(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        return notify_subscribers(product.id, product.name)
