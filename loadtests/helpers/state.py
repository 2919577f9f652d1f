"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state. State tracks ids
returned by the API so follow-up requests can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks a single simulated shopper account."""

    email: str | None = None
    password: str | None = None
    user_id: str | None = None
    signed_in: bool = False


@dataclass
class CatalogueState:
    """Product ids seen while browsing, reused by cart and order journeys."""

    product_ids: list[str] = field(default_factory=list)
    category_names: list[str] = field(default_factory=list)


@dataclass
class CartState:
    product_ids: list[str] = field(default_factory=list)
    item_count: int = 0


@dataclass
class OrderState:
    order_id: str | None = None
    current_status: str = "pending"


@dataclass
class AdminState:
    category_name: str | None = None
    product_id: str | None = None
    order_ids: list[str] = field(default_factory=list)
