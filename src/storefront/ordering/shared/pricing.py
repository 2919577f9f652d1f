"""Rupee price formatting."""

CURRENCY_SYMBOL = "₹"


def _group_indian(digits: str) -> str:
    """Group an integer digit string the Indian way: 1234567 -> 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs) + "," + tail


def format_price(amount) -> str:
    """Render an amount as whole rupees with Indian digit grouping (₹1,23,456).

    Strings that already carry the rupee sign are returned unchanged.
    """
    if isinstance(amount, str):
        if CURRENCY_SYMBOL in amount:
            return amount
        amount = float(amount.replace(",", ""))

    rounded = int(round(abs(float(amount))))
    sign = "-" if amount < 0 and rounded else ""
    return f"{sign}{CURRENCY_SYMBOL}{_group_indian(str(rounded))}"
