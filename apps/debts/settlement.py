"""
Settlement Engine
=================

Turns the Ledger's per-payer totals into directed debts and manages the
Open -> Settled lifecycle of each debt.

Debts are generated pairwise: for every pair of payers the one who spent
less owes the other half of the difference. This equalizes each pair, not
the whole group, and it does not try to minimise the number of transfers.

Classes:
    DebtDraft: An unsaved debt produced by ``generate_debts``.
    SettlementEngine: Runs the Ledger and records debts through a storage.

Example:
    Three payers::

        >>> generate_debts({1: Decimal('60'), 2: Decimal('30'), 3: Decimal('0')}, list_id=9)
        [DebtDraft(list_id=9, from_user_id=2, to_user_id=1, amount=Decimal('15'), settled=False),
         DebtDraft(list_id=9, from_user_id=3, to_user_id=1, amount=Decimal('30'), settled=False),
         DebtDraft(list_id=9, from_user_id=3, to_user_id=2, amount=Decimal('15'), settled=False)]
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from itertools import combinations
from typing import Dict, List, Sequence

from .exceptions import DebtNotFoundError, SettlementListNotFoundError
from .ledger import compute_totals
from .storage import SettlementStorage

logger = logging.getLogger(__name__)

TWO = Decimal(2)


@dataclass(frozen=True)
class DebtDraft:
    list_id: int
    from_user_id: int
    to_user_id: int
    amount: Decimal
    settled: bool = False


def generate_debts(totals: Dict[int, Decimal], list_id: int) -> List[DebtDraft]:
    """
    Pairwise-halving settlement.

    For each pair ``(p1, p2)`` in the insertion order of ``totals``, with
    ``diff = t1 - t2``:

    - ``diff > 0``: p2 owes p1 ``diff / 2``
    - ``diff < 0``: p1 owes p2 ``-diff / 2``
    - ``diff == 0``: nothing

    Args:
        totals: user id -> total outlay, as returned by ``compute_totals``.
        list_id: List the debts belong to.

    Returns:
        Unsettled drafts, one per pair with unequal totals. Empty when
        there are fewer than two payers or everyone spent the same.
    """
    drafts = []
    for (p1, t1), (p2, t2) in combinations(totals.items(), 2):
        diff = t1 - t2
        if diff > 0:
            drafts.append(DebtDraft(list_id, from_user_id=p2, to_user_id=p1, amount=diff / TWO))
        elif diff < 0:
            drafts.append(DebtDraft(list_id, from_user_id=p1, to_user_id=p2, amount=-diff / TWO))
    return drafts


class SettlementEngine:
    """
    Computes, records and settles debts for lists.

    The engine holds no state of its own; everything goes through the
    storage it was built with.
    """

    def __init__(self, storage: SettlementStorage):
        self.storage = storage

    def totals_for_list(self, list_id: int) -> Dict[int, Decimal]:
        """Ledger totals for a list (read-only)."""
        with self.storage.lock_list(list_id) as exists:
            if not exists:
                raise SettlementListNotFoundError(f"List with ID {list_id} not found")
            return compute_totals(self.storage.get_items_for_list(list_id))

    def compute_and_record(self, list_id: int) -> list:
        """
        Run the Ledger and record a fresh set of debts for the list.

        Earlier debts are left untouched, so calling this twice records
        the same debts twice.

        Raises:
            SettlementListNotFoundError: If the list does not exist.
        """
        with self.storage.lock_list(list_id) as exists:
            if not exists:
                raise SettlementListNotFoundError(f"List with ID {list_id} not found")

            totals = compute_totals(self.storage.get_items_for_list(list_id))
            drafts = generate_debts(totals, list_id)
            debts = [
                self.storage.record_debt(
                    list_id=draft.list_id,
                    from_user_id=draft.from_user_id,
                    to_user_id=draft.to_user_id,
                    amount=draft.amount,
                )
                for draft in drafts
            ]

        logger.info(
            "Recorded %d debts for list %s across %d payers",
            len(debts), list_id, len(totals)
        )
        return debts

    def settle(self, debt_id: int):
        """
        Mark a debt settled. Settling an already settled debt is a no-op.

        Raises:
            DebtNotFoundError: If the debt does not exist.
        """
        debt = self.storage.mark_debt_settled(debt_id)
        if debt is None:
            raise DebtNotFoundError(f"Debt with ID {debt_id} not found")
        logger.info("Debt %s settled", debt_id)
        return debt

    def debts_for_list(self, list_id: int) -> Sequence:
        return self.storage.get_debts_for_list(list_id)
