import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from typing import Optional

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User
from apps.debts.storage import SettlementStorage
from apps.lists.models import ShoppingList, ListMembership, Item


# =============================================================================
# In-memory storage
# =============================================================================

@dataclass
class StoredDebt:
    id: int
    list_id: int
    from_user_id: int
    to_user_id: int
    amount: Decimal
    settled: bool = False
    settled_at: Optional[datetime] = None


class InMemorySettlementStorage(SettlementStorage):
    """Dict-backed storage for exercising the engine without a database."""

    def __init__(self):
        self.items = {}
        self.debts = {}
        self._locks = {}
        self._guard = threading.Lock()
        self._next_debt_id = 1

    def add_list(self, list_id):
        self.items.setdefault(list_id, [])

    def add_item(self, list_id, paid_by_id=None, price=None):
        item = SimpleNamespace(paid_by_id=paid_by_id, price=price)
        self.items[list_id].append(item)
        return item

    @contextmanager
    def lock_list(self, list_id):
        with self._guard:
            lock = self._locks.setdefault(list_id, threading.Lock())
        with lock:
            yield list_id in self.items

    def get_items_for_list(self, list_id):
        return list(self.items.get(list_id, []))

    def record_debt(self, *, list_id, from_user_id, to_user_id, amount):
        with self._guard:
            debt = StoredDebt(self._next_debt_id, list_id, from_user_id, to_user_id, amount)
            self.debts[debt.id] = debt
            self._next_debt_id += 1
        return debt

    def get_debts_for_list(self, list_id):
        return [d for d in self.debts.values() if d.list_id == list_id]

    def mark_debt_settled(self, debt_id):
        debt = self.debts.get(debt_id)
        if debt is None:
            return None
        if not debt.settled:
            debt.settled = True
            debt.settled_at = datetime.now(timezone.utc)
        return debt


@pytest.fixture
def memory_storage():
    """Empty in-memory storage with list 1 registered."""
    storage = InMemorySettlementStorage()
    storage.add_list(1)
    return storage


# =============================================================================
# Database fixtures
# =============================================================================

def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def alice(db):
    return User.objects.create_user(username='alice', password='TestPass123!')


@pytest.fixture
def bob(db):
    return User.objects.create_user(username='bob', password='TestPass123!')


@pytest.fixture
def carol(db):
    return User.objects.create_user(username='carol', password='TestPass123!')


@pytest.fixture
def mallory(db):
    """User outside every list."""
    return User.objects.create_user(username='mallory', password='TestPass123!')


@pytest.fixture
def alice_client(alice):
    return _client_for(alice)


@pytest.fixture
def bob_client(bob):
    return _client_for(bob)


@pytest.fixture
def mallory_client(mallory):
    return _client_for(mallory)


@pytest.fixture
def trip_list(db, alice, bob, carol):
    """List shared by alice, bob and carol."""
    shopping_list = ShoppingList.objects.create(name='Ski Trip', created_by=alice, code='Trip42')
    for user in (alice, bob, carol):
        ListMembership.objects.create(list=shopping_list, user=user)
    return shopping_list


@pytest.fixture
def trip_items(trip_list, alice, bob):
    """alice paid 60, bob paid 30, carol nothing; plus an unpaid item."""
    return [
        Item.objects.create(list=trip_list, name='Lift passes', price=Decimal('40.00'), paid_by=alice),
        Item.objects.create(list=trip_list, name='Fuel', price=Decimal('30.00'), paid_by=bob),
        Item.objects.create(list=trip_list, name='Snacks', price=Decimal('20.00'), paid_by=alice),
        Item.objects.create(list=trip_list, name='Chains'),
    ]
