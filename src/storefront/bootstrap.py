"""Registers every storefront element and initializes the domain.

``Domain.init()`` only traverses the package holding ``domain.py`` and its
immediate sub-packages. Aggregates, handlers and projections here live one
level deeper, so their modules are imported before ``init()`` runs.
"""

from storefront.catalogue.category import category, events, management  # noqa: F401
from storefront.catalogue.product import (  # noqa: F401
    events as product_events,
    management as product_management,
    ordering_events as product_ordering_events,
    product,
)
from storefront.catalogue.stock_alert import (  # noqa: F401
    events as stock_alert_events,
    management as stock_alert_management,
    product_events as stock_alert_product_events,
    subscription,
)
from storefront.domain import storefront
from storefront.identity.projections import user_directory  # noqa: F401
from storefront.identity.shared import email  # noqa: F401
from storefront.identity.user import (  # noqa: F401
    administration,
    profile,
    registration,
    user,
)
from storefront.identity.user import events as user_events  # noqa: F401
from storefront.notifications.notification import (  # noqa: F401
    dispatch,
    identity_events,
    notification,
    ordering_events,
    retry,
    stock_alert_events as notification_stock_alert_events,
)
from storefront.notifications.notification import events as notification_events  # noqa: F401
from storefront.ordering.cart import cart, items  # noqa: F401
from storefront.ordering.cart import events as cart_events  # noqa: F401
from storefront.ordering.order import order, placement  # noqa: F401
from storefront.ordering.order import events as order_events  # noqa: F401
from storefront.ordering.projections import order_summary  # noqa: F401


def init_domain():
    """Initialize the storefront domain once every element is registered."""
    storefront.init()
    return storefront
