"""
Item management service.

Items are never deleted in normal flow; they are added, then priced,
attributed to a payer or ticked off through updates.
"""

from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.lists.models import ShoppingList, Item

from .exceptions import ListNotFoundError, ItemNotFoundError, InvalidPayerError

UPDATABLE_ITEM_FIELDS = ('name', 'price', 'completed', 'paid_by')


def _check_payer(shopping_list: ShoppingList, paid_by: Optional[User]) -> None:
    if paid_by is not None and not shopping_list.has_member(paid_by):
        raise InvalidPayerError(
            f"{paid_by} is not a member of {shopping_list.name} and cannot be the payer"
        )


@transaction.atomic
def add_item(
    *,
    list_id: int,
    name: str,
    price: Optional[Decimal] = None,
    paid_by: Optional[User] = None
) -> Item:
    """
    Add an item to a list. New items start not completed.

    Raises:
        ListNotFoundError: If list doesn't exist
        InvalidPayerError: If paid_by is not a member of the list
    """
    try:
        shopping_list = ShoppingList.objects.get(id=list_id)
    except ShoppingList.DoesNotExist:
        raise ListNotFoundError(f"List with ID {list_id} not found")

    _check_payer(shopping_list, paid_by)

    return Item.objects.create(
        list=shopping_list,
        name=name,
        price=price,
        paid_by=paid_by,
        completed=False
    )


@transaction.atomic
def update_item(*, item_id: int, **fields) -> Item:
    """
    Partially update an item.

    Only name, price, completed and paid_by may change; anything else
    raises TypeError.

    Raises:
        ItemNotFoundError: If item doesn't exist
        InvalidPayerError: If the new payer is not a member of the list
    """
    unknown = set(fields) - set(UPDATABLE_ITEM_FIELDS)
    if unknown:
        raise TypeError(f"Cannot update item fields: {', '.join(sorted(unknown))}")

    try:
        item = (
            Item.objects
            .select_for_update()
            .select_related('list')
            .get(id=item_id)
        )
    except Item.DoesNotExist:
        raise ItemNotFoundError(f"Item with ID {item_id} not found")

    if 'paid_by' in fields:
        _check_payer(item.list, fields['paid_by'])

    for field, value in fields.items():
        setattr(item, field, value)
    item.save(update_fields=[*fields, 'updated_at'])

    return item


def get_items_for_list(*, list_id: int) -> QuerySet[Item]:
    """
    Items on a list, oldest first.

    Raises:
        ListNotFoundError: If list doesn't exist
    """
    if not ShoppingList.objects.filter(id=list_id).exists():
        raise ListNotFoundError(f"List with ID {list_id} not found")

    return Item.objects.filter(list_id=list_id).select_related('paid_by')
