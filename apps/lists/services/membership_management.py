"""
Membership management service.

Joining is idempotent: adding a user who is already a member is a no-op.
"""

import logging

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.lists.models import ShoppingList, ListMembership

from .exceptions import ListNotFoundError, NotMemberError
from .list_management import get_list_by_code

logger = logging.getLogger(__name__)


@transaction.atomic
def add_member(*, list_id: int, user: User) -> ListMembership:
    """
    Add a user to a list's membership set.

    Uses row-level locking on the list so concurrent joins cannot
    race past the existence check.

    Args:
        list_id: ID of the list
        user: User to add

    Returns:
        The new or already existing ListMembership

    Raises:
        ListNotFoundError: If list doesn't exist
    """
    try:
        shopping_list = (
            ShoppingList.objects
            .select_for_update()
            .get(id=list_id)
        )
    except ShoppingList.DoesNotExist:
        raise ListNotFoundError(f"List with ID {list_id} not found")

    try:
        with transaction.atomic():
            membership, created = ListMembership.objects.get_or_create(
                list=shopping_list,
                user=user
            )
    except IntegrityError:
        # Database constraint caught a concurrent duplicate
        membership = ListMembership.objects.get(list=shopping_list, user=user)
        created = False

    if created:
        logger.info("User %s joined list %s", user.pk, shopping_list.pk)
    return membership


def join_by_code(*, code: str, user: User) -> ShoppingList:
    """
    Join the list whose join code equals ``code``.

    Raises:
        ListNotFoundError: If no list has this code
    """
    shopping_list = get_list_by_code(code=code)
    add_member(list_id=shopping_list.id, user=user)
    return shopping_list


def get_list_members(*, list_id: int) -> QuerySet[ListMembership]:
    """
    Get all members of a list in join order.

    Raises:
        ListNotFoundError: If list doesn't exist
    """
    if not ShoppingList.objects.filter(id=list_id).exists():
        raise ListNotFoundError(f"List with ID {list_id} not found")

    return (
        ListMembership.objects
        .filter(list_id=list_id)
        .select_related('user')
    )


def require_membership(*, list_id: int, user: User) -> ShoppingList:
    """
    Fetch a list, insisting the user belongs to it.

    Raises:
        ListNotFoundError: If list doesn't exist
        NotMemberError: If user is not a member of the list
    """
    try:
        shopping_list = ShoppingList.objects.get(id=list_id)
    except ShoppingList.DoesNotExist:
        raise ListNotFoundError(f"List with ID {list_id} not found")

    if not shopping_list.has_member(user):
        raise NotMemberError(f"You are not a member of {shopping_list.name}")
    return shopping_list
