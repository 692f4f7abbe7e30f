"""
Ledger
======

Derives how much each payer has spent on a list.

Only items with both a payer and a price count; unpriced items and
items nobody has paid for yet are skipped silently. Sums use
``Decimal`` so money never picks up binary floating point drift.

Example::

    from apps.debts.ledger import compute_totals

    totals = compute_totals(shopping_list.items.all())
    # {3: Decimal('30.00'), 7: Decimal('10.00')}
"""

from decimal import Decimal
from typing import Dict, Iterable


def compute_totals(items: Iterable) -> Dict[int, Decimal]:
    """
    Sum item prices per payer.

    Args:
        items: Items of a single list. Anything exposing ``paid_by_id``
            and ``price`` works, so ORM rows and plain objects are both fine.

    Returns:
        dict mapping user id to total outlay, in the order payers are
        first seen while scanning ``items``.
    """
    totals: Dict[int, Decimal] = {}
    for item in items:
        if item.paid_by_id is None or item.price is None:
            continue
        price = item.price if isinstance(item.price, Decimal) else Decimal(str(item.price))
        totals[item.paid_by_id] = totals.get(item.paid_by_id, Decimal('0')) + price
    return totals
