"""Back-office dashboard figures."""

from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product
from storefront.config import get_settings
from storefront.identity.user.user import User
from storefront.ordering.order.order import OrderStatus
from storefront.ordering.projections.order_summary import OrderSummary


def _all(aggregate_cls):
    return current_domain.repository_for(aggregate_cls)._dao.query.limit(None).all().items


def dashboard_stats() -> dict:
    """Counts, revenue from orders that were not cancelled, and products running low."""
    products = _all(Product)
    orders = _all(OrderSummary)
    threshold = get_settings().low_stock_threshold

    orders_by_status = {status.value: 0 for status in OrderStatus}
    for order in orders:
        orders_by_status[order.status] = orders_by_status.get(order.status, 0) + 1

    revenue = sum(o.total or 0.0 for o in orders if o.status != OrderStatus.CANCELLED.value)
    low_stock = sorted(
        (
            {"id": str(p.id), "name": p.name, "stock": p.stock}
            for p in products
            if p.stock <= threshold
        ),
        key=lambda item: item["stock"],
    )

    return {
        "products": len(products),
        "categories": len(_all(Category)),
        "orders": len(orders),
        "users": len(_all(User)),
        "revenue": round(revenue, 2),
        "orders_by_status": orders_by_status,
        "low_stock_products": low_stock,
    }
