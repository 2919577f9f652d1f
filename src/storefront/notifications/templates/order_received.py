"""Order received template: tells the store's inbox a new order came in."""

from html import escape

from storefront.notifications.notification.notification import (
    NotificationChannel,
    NotificationType,
)
from storefront.notifications.templates.layout import html_frame
from storefront.ordering.shared.pricing import format_price

_CELL = 'style="padding: 8px; border-bottom: 1px solid #ddd;"'
_HEAD = 'style="padding: 12px 8px; text-align: left; border-bottom: 2px solid #ddd;"'


class OrderReceivedTemplate:
    notification_type = NotificationType.ORDER_RECEIVED.value
    default_channels = [NotificationChannel.EMAIL.value]

    @staticmethod
    def _item_rows(items: list[dict]) -> str:
        rows = []
        for item in items:
            price = float(item.get("price", 0))
            quantity = int(item.get("quantity", 0))
            rows.append(
                "<tr>"
                f"<td {_CELL}>{escape(str(item.get('name', '')))}</td>"
                f"<td {_CELL}>{format_price(price)}</td>"
                f"<td {_CELL}>{quantity}</td>"
                f"<td {_CELL}>{format_price(price * quantity)}</td>"
                "</tr>"
            )
        return "".join(rows)

    @staticmethod
    def render(context: dict) -> dict:
        order_id = context.get("order_id", "N/A")
        total = format_price(context.get("total", 0))
        placed_at = context.get("placed_at", "")
        address = context.get("shipping_address", {})
        items = context.get("items", [])
        customer = f"{address.get('first_name', '')} {address.get('last_name', '')}".strip()

        inner = (
            f"<h2>Order #{escape(str(order_id))} Details</h2>"
            f"<p><strong>Date:</strong> {escape(str(placed_at))}</p>"
            f"<p><strong>Total Amount:</strong> {total}</p>"
            f"<p><strong>Customer:</strong> {escape(customer)}</p>"
            f"<p><strong>Email:</strong> {escape(str(address.get('email', '')))}</p>"
            f"<p><strong>Phone:</strong> {escape(str(address.get('phone', '')))}</p>"
            "<h3>Shipping Address</h3>"
            f"<p>{escape(str(address.get('address', '')))}<br>"
            f"{escape(str(address.get('city', '')))}, {escape(str(address.get('state', '')))}<br>"
            f"{escape(str(address.get('zip_code', '')))}, {escape(str(address.get('country', '')))}</p>"
            "<h3>Order Items</h3>"
            '<table style="width: 100%; border-collapse: collapse;">'
            '<thead><tr style="background-color: #f8f9fa;">'
            f"<th {_HEAD}>Product</th><th {_HEAD}>Price</th><th {_HEAD}>Quantity</th><th {_HEAD}>Subtotal</th>"
            "</tr></thead>"
            f"<tbody>{OrderReceivedTemplate._item_rows(items)}</tbody>"
            '<tfoot><tr><td colspan="3" style="padding: 12px 8px; text-align: right;"><strong>Total:</strong></td>'
            f'<td style="padding: 12px 8px;"><strong>{total}</strong></td></tr></tfoot>'
            "</table>"
            '<div style="margin-top: 30px; background-color: #f8f9fa; padding: 15px; border-radius: 5px;">'
            '<p style="margin: 0;">Please check this order and contact the customer to confirm stock availability.</p>'
            "</div>"
        )

        return {
            "subject": f"New Order #{order_id} Received",
            "body": (
                "New Order Received!\n\n"
                f"Order #{order_id} Details\n"
                f"Date: {placed_at}\n"
                f"Total Amount: {total}\n"
                f"Customer: {customer}\n\n"
                "Please log in to your admin dashboard to see full details."
            ),
            "html_body": html_frame("New Order Received!", inner, context.get("store_name", "")),
        }
