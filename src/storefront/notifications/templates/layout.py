"""Shared HTML frame for storefront emails."""

from datetime import UTC, datetime
from html import escape

BRAND_COLOUR = "#4f46e5"


def html_frame(heading: str, inner_html: str, store_name: str) -> str:
    """Wrap template content in the branded header and footer."""
    year = datetime.now(UTC).year
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        f'<h1 style="background-color: {BRAND_COLOUR}; color: white; padding: 20px; text-align: center;">'
        f"{escape(heading)}</h1>"
        f'<div style="padding: 20px;">{inner_html}</div>'
        f'<div style="background-color: {BRAND_COLOUR}; color: white; padding: 15px; text-align: center;">'
        f'<p style="margin: 0;">&copy; {year} {escape(store_name)}. All rights reserved.</p>'
        "</div></div>"
    )
