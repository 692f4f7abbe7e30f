"""Django ORM implementation of ``SettlementStorage``."""

from contextlib import contextmanager
from typing import Iterator, List, Optional

from django.db import transaction
from django.utils import timezone

from apps.lists.models import ShoppingList, Item

from .models import Debt
from .storage import SettlementStorage


class DjangoSettlementStorage(SettlementStorage):
    """Storage backed by the project database."""

    @contextmanager
    def lock_list(self, list_id: int) -> Iterator[bool]:
        with transaction.atomic():
            # Row lock on the list serializes concurrent settlement runs
            locked = list(
                ShoppingList.objects
                .select_for_update()
                .filter(id=list_id)
                .values_list('id', flat=True)
            )
            yield bool(locked)

    def get_items_for_list(self, list_id: int) -> List[Item]:
        return list(Item.objects.filter(list_id=list_id).order_by('created_at', 'id'))

    def record_debt(self, *, list_id, from_user_id, to_user_id, amount) -> Debt:
        return Debt.objects.create(
            list_id=list_id,
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            amount=amount,
            settled=False
        )

    def get_debts_for_list(self, list_id: int) -> List[Debt]:
        return list(
            Debt.objects
            .filter(list_id=list_id)
            .select_related('from_user', 'to_user')
        )

    @transaction.atomic
    def mark_debt_settled(self, debt_id: int) -> Optional[Debt]:
        try:
            debt = Debt.objects.select_for_update().get(id=debt_id)
        except Debt.DoesNotExist:
            return None

        if not debt.settled:
            debt.settled = True
            debt.settled_at = timezone.now()
            debt.save(update_fields=['settled', 'settled_at'])
        return debt
