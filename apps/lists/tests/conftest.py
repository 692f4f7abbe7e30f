import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.lists.models import ShoppingList, ListMembership, Item


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
def list_owner(db):
    """Create and return the user who creates the list."""
    return User.objects.create_user(username='owner', password='TestPass123!')


@pytest.fixture
def list_member(db):
    """Create and return a second member."""
    return User.objects.create_user(username='member', password='TestPass123!')


@pytest.fixture
def list_outsider(db):
    """Create and return a user not in any list."""
    return User.objects.create_user(username='outsider', password='TestPass123!')


@pytest.fixture
def owner_client(list_owner):
    """Return API client authenticated as list owner."""
    return _client_for(list_owner)


@pytest.fixture
def member_client(list_member):
    """Return API client authenticated as list member."""
    return _client_for(list_member)


@pytest.fixture
def outsider_client(list_outsider):
    """Return API client authenticated as non-member."""
    return _client_for(list_outsider)


@pytest.fixture
def shopping_list(db, list_owner):
    """Create a list with its owner as the only member."""
    shopping_list = ShoppingList.objects.create(
        name='Weekend Groceries',
        created_by=list_owner,
        code='Abc123',
    )
    ListMembership.objects.create(list=shopping_list, user=list_owner)
    return shopping_list


@pytest.fixture
def shared_list(shopping_list, list_member):
    """List with owner and one more member."""
    ListMembership.objects.create(list=shopping_list, user=list_member)
    return shopping_list


@pytest.fixture
def priced_item(db, shared_list, list_owner):
    """Item paid for by the owner."""
    return Item.objects.create(
        list=shared_list,
        name='Coffee',
        price=Decimal('12.50'),
        paid_by=list_owner,
    )


@pytest.fixture
def unpriced_item(db, shared_list):
    """Item with no price or payer yet."""
    return Item.objects.create(list=shared_list, name='Bread')
