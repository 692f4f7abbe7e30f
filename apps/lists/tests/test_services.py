"""
Service layer unit tests for lists app.

Tests cover:
- Join code generation and collision retries
- Idempotent membership
- Item creation and updates
- Error handling
"""

import pytest
from decimal import Decimal
from unittest.mock import patch

from apps.lists.models import ShoppingList, ListMembership, Item, JOIN_CODE_ALPHABET
from apps.lists.services import (
    create_list,
    get_list_by_id,
    get_list_by_code,
    get_lists_for_user,
    add_member,
    join_by_code,
    get_list_members,
    require_membership,
    add_item,
    update_item,
    get_items_for_list,
)
from apps.lists.services.exceptions import (
    ListNotFoundError,
    ItemNotFoundError,
    NotMemberError,
    InvalidPayerError,
)


# =============================================================================
# List Management Service Tests
# =============================================================================

@pytest.mark.django_db
class TestListManagement:
    """Tests for list_management.py service functions."""

    def test_create_list_adds_creator_as_member(self, list_owner):
        shopping_list = create_list(name='Party', created_by=list_owner)

        assert shopping_list.name == 'Party'
        assert shopping_list.created_by == list_owner
        assert shopping_list.has_member(list_owner)
        assert shopping_list.created_at is not None

    def test_create_list_code_is_six_alphanumerics(self, list_owner):
        shopping_list = create_list(name='Party', created_by=list_owner)

        assert len(shopping_list.code) == 6
        assert all(ch in JOIN_CODE_ALPHABET for ch in shopping_list.code)

    def test_create_list_respects_code_length(self, list_owner, settings):
        settings.JOIN_CODE_LENGTH = 10

        shopping_list = create_list(name='Party', created_by=list_owner)

        assert len(shopping_list.code) == 10

    def test_create_list_codes_are_unique(self, list_owner):
        first = create_list(name='One', created_by=list_owner)
        second = create_list(name='Two', created_by=list_owner)

        assert first.code != second.code

    @pytest.mark.django_db(transaction=True)
    def test_create_list_retries_on_collision(self, list_owner):
        """Gives up after max_retries when every generated code collides."""
        with patch('apps.lists.services.list_management.generate_join_code') as mock_code:
            mock_code.return_value = 'SAME01'
            create_list(name='One', created_by=list_owner)

            with pytest.raises(RuntimeError, match="Failed to generate unique join code"):
                create_list(name='Two', created_by=list_owner, max_retries=3)

            assert mock_code.call_count == 4
        assert ShoppingList.objects.count() == 1

    @pytest.mark.django_db(transaction=True)
    def test_create_list_recovers_after_collision(self, list_owner):
        with patch('apps.lists.services.list_management.generate_join_code') as mock_code:
            mock_code.side_effect = ['SAME01', 'SAME01', 'OTHER2']
            create_list(name='One', created_by=list_owner)

            second = create_list(name='Two', created_by=list_owner)

        assert second.code == 'OTHER2'
        assert second.has_member(list_owner)

    def test_get_list_by_id(self, shopping_list):
        assert get_list_by_id(list_id=shopping_list.id) == shopping_list

    def test_get_list_by_id_not_found(self):
        with pytest.raises(ListNotFoundError):
            get_list_by_id(list_id=999999)

    def test_get_list_by_code(self, shopping_list):
        assert get_list_by_code(code='Abc123') == shopping_list

    def test_get_list_by_code_is_case_sensitive(self, shopping_list):
        with pytest.raises(ListNotFoundError):
            get_list_by_code(code='abc123')

    def test_get_list_by_code_unknown(self, shopping_list):
        with pytest.raises(ListNotFoundError):
            get_list_by_code(code='nope99')

    def test_get_lists_for_user(self, shopping_list, list_owner, list_outsider):
        other = create_list(name='Other', created_by=list_outsider)

        lists = list(get_lists_for_user(user=list_owner))

        assert lists == [shopping_list]
        assert other not in lists


# =============================================================================
# Membership Service Tests
# =============================================================================

@pytest.mark.django_db
class TestMembership:
    """Tests for membership_management.py service functions."""

    def test_join_by_code_adds_member(self, shopping_list, list_member):
        joined = join_by_code(code=shopping_list.code, user=list_member)

        assert joined == shopping_list
        assert shopping_list.has_member(list_member)

    def test_join_by_code_twice_is_noop(self, shopping_list, list_member):
        join_by_code(code=shopping_list.code, user=list_member)
        join_by_code(code=shopping_list.code, user=list_member)

        assert ListMembership.objects.filter(list=shopping_list, user=list_member).count() == 1

    def test_join_by_code_creator_again(self, shopping_list, list_owner):
        join_by_code(code=shopping_list.code, user=list_owner)

        assert shopping_list.memberships.count() == 1

    def test_join_by_code_unknown_code(self, list_member):
        with pytest.raises(ListNotFoundError):
            join_by_code(code='XXXXXX', user=list_member)

    def test_add_member_returns_existing_membership(self, shopping_list, list_owner):
        existing = ListMembership.objects.get(list=shopping_list, user=list_owner)

        assert add_member(list_id=shopping_list.id, user=list_owner) == existing

    def test_add_member_unknown_list(self, list_member):
        with pytest.raises(ListNotFoundError):
            add_member(list_id=999999, user=list_member)

    def test_get_list_members_in_join_order(self, shared_list, list_owner, list_member):
        members = [m.user for m in get_list_members(list_id=shared_list.id)]

        assert members == [list_owner, list_member]

    def test_get_list_members_unknown_list(self):
        with pytest.raises(ListNotFoundError):
            get_list_members(list_id=999999)

    def test_require_membership(self, shopping_list, list_owner, list_outsider):
        assert require_membership(list_id=shopping_list.id, user=list_owner) == shopping_list

        with pytest.raises(NotMemberError):
            require_membership(list_id=shopping_list.id, user=list_outsider)

        with pytest.raises(ListNotFoundError):
            require_membership(list_id=999999, user=list_owner)


# =============================================================================
# Item Service Tests
# =============================================================================

@pytest.mark.django_db
class TestItems:
    """Tests for item_management.py service functions."""

    def test_add_item_defaults(self, shared_list):
        item = add_item(list_id=shared_list.id, name='Milk')

        assert item.completed is False
        assert item.price is None
        assert item.paid_by is None

    def test_add_item_with_price_and_payer(self, shared_list, list_member):
        item = add_item(
            list_id=shared_list.id,
            name='Cheese',
            price=Decimal('7.25'),
            paid_by=list_member
        )

        item.refresh_from_db()
        assert item.price == Decimal('7.25')
        assert item.paid_by == list_member

    def test_add_item_payer_must_be_member(self, shared_list, list_outsider):
        with pytest.raises(InvalidPayerError):
            add_item(list_id=shared_list.id, name='Wine', paid_by=list_outsider)

    def test_add_item_unknown_list(self):
        with pytest.raises(ListNotFoundError):
            add_item(list_id=999999, name='Milk')

    def test_update_item_toggles_completed(self, unpriced_item):
        item = update_item(item_id=unpriced_item.id, completed=True)

        assert item.completed is True
        unpriced_item.refresh_from_db()
        assert unpriced_item.completed is True

    def test_update_item_sets_price_and_payer(self, unpriced_item, list_member):
        update_item(item_id=unpriced_item.id, price=Decimal('3.10'), paid_by=list_member)

        unpriced_item.refresh_from_db()
        assert unpriced_item.price == Decimal('3.10')
        assert unpriced_item.paid_by == list_member

    def test_update_item_clears_payer(self, priced_item):
        update_item(item_id=priced_item.id, paid_by=None)

        priced_item.refresh_from_db()
        assert priced_item.paid_by is None

    def test_update_item_rejects_unknown_fields(self, priced_item):
        with pytest.raises(TypeError):
            update_item(item_id=priced_item.id, list_id=123)

    def test_update_item_not_found(self):
        with pytest.raises(ItemNotFoundError):
            update_item(item_id=999999, completed=True)

    def test_update_item_payer_must_be_member(self, priced_item, list_outsider):
        with pytest.raises(InvalidPayerError):
            update_item(item_id=priced_item.id, paid_by=list_outsider)

    def test_get_items_for_list_oldest_first(self, priced_item, unpriced_item, shared_list):
        assert list(get_items_for_list(list_id=shared_list.id)) == [priced_item, unpriced_item]

    def test_get_items_for_list_unknown_list(self):
        with pytest.raises(ListNotFoundError):
            get_items_for_list(list_id=999999)

    def test_items_cascade_with_list(self, priced_item, shared_list):
        shared_list.delete()

        assert not Item.objects.filter(id=priced_item.id).exists()
