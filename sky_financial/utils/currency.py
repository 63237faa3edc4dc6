"""Rupee rounding and display helpers"""

import math


def round_currency(value: float) -> int:
    """Round to the nearest whole rupee, halves rounding up (2.5 -> 3, -2.5 -> -2)"""
    return int(math.floor(value + 0.5))


def format_inr(amount: float) -> str:
    """
    Render an amount as whole rupees with Indian digit grouping.

    The last three digits form one group, every group before that has two:
    1234567 -> "₹12,34,567", -5000 -> "-₹5,000".
    """
    value = round_currency(amount)
    sign = "-" if value < 0 else ""
    digits = str(abs(value))

    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])

    return f"{sign}₹{digits}"
