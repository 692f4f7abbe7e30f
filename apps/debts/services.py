"""
Debt Services Module
====================

Entry points the views use to compute, list and settle debts. They wire
the Settlement Engine to the database storage; pass ``storage`` to run
them against something else.

Example:
    Recording debts for a list and settling one::

        from apps.debts.services import compute_and_record_debts, settle_debt

        debts = compute_and_record_debts(list_id=shopping_list.id)
        settle_debt(debt_id=debts[0].id)
"""

from decimal import Decimal
from typing import Dict, List, Optional, Sequence

from django.db.models import QuerySet

from apps.accounts.models import User

from .db_storage import DjangoSettlementStorage
from .models import Debt
from .settlement import SettlementEngine
from .storage import SettlementStorage


def _engine(storage: Optional[SettlementStorage]) -> SettlementEngine:
    return SettlementEngine(storage or DjangoSettlementStorage())


def compute_and_record_debts(
    *,
    list_id: int,
    storage: Optional[SettlementStorage] = None
) -> List[Debt]:
    """
    Compute pairwise debts for a list and record them as new rows.

    Previous debts of the list are kept; repeated calls accumulate.

    Raises:
        SettlementListNotFoundError: If the list doesn't exist
    """
    return _engine(storage).compute_and_record(list_id)


def settle_debt(
    *,
    debt_id: int,
    storage: Optional[SettlementStorage] = None
) -> Debt:
    """
    Mark a debt as settled (idempotent).

    Raises:
        DebtNotFoundError: If the debt doesn't exist
    """
    return _engine(storage).settle(debt_id)


def get_totals_for_list(
    *,
    list_id: int,
    storage: Optional[SettlementStorage] = None
) -> Dict[int, Decimal]:
    """
    Ledger totals (user id -> outlay) for a list.

    Raises:
        SettlementListNotFoundError: If the list doesn't exist
    """
    return _engine(storage).totals_for_list(list_id)


def get_debts_for_list(
    *,
    list_id: int,
    storage: Optional[SettlementStorage] = None
) -> Sequence[Debt]:
    """All debts recorded for a list, oldest first."""
    return _engine(storage).debts_for_list(list_id)


def get_open_debts_for_user(*, user: User) -> Dict[str, QuerySet[Debt]]:
    """
    Unsettled debts involving the user, split by direction.

    Returns:
        dict with ``owed_by_me`` (user is debtor) and ``owed_to_me``
        (user is creditor).
    """
    open_debts = (
        Debt.objects
        .filter(settled=False)
        .select_related('from_user', 'to_user', 'list')
    )
    return {
        'owed_by_me': open_debts.filter(from_user=user),
        'owed_to_me': open_debts.filter(to_user=user),
    }
