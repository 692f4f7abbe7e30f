"""
Persistence boundary for the settlement engine.

``SettlementEngine`` talks to storage only through ``SettlementStorage``.
``apps.debts.db_storage.DjangoSettlementStorage`` is the database-backed
implementation the API uses; tests hand the engine an in-memory one.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import ContextManager, Optional, Sequence


class SettlementStorage(ABC):
    """CRUD operations the settlement engine needs."""

    @abstractmethod
    def lock_list(self, list_id: int) -> ContextManager[bool]:
        """
        Context manager serializing settlement runs for one list.

        Yields True if the list exists, False otherwise.
        """

    @abstractmethod
    def get_items_for_list(self, list_id: int) -> Sequence:
        """Items of the list, oldest first."""

    @abstractmethod
    def record_debt(self, *, list_id: int, from_user_id: int, to_user_id: int, amount: Decimal):
        """Persist one new, unsettled debt and return it."""

    @abstractmethod
    def get_debts_for_list(self, list_id: int) -> Sequence:
        """All debts of the list, oldest first."""

    @abstractmethod
    def mark_debt_settled(self, debt_id: int) -> Optional[object]:
        """Flip settled to True and return the debt; None if it does not exist."""
