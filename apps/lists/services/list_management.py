"""
List management service.

Handles list creation and lookups, including join code generation
with uniqueness guarantees.
"""

import logging
from typing import Optional

from django.conf import settings
from django.db import transaction, IntegrityError
from django.db.models import Prefetch, QuerySet

from apps.accounts.models import User
from apps.lists.models import ShoppingList, ListMembership, generate_join_code

from .exceptions import ListNotFoundError

logger = logging.getLogger(__name__)


def create_list(
    *,
    name: str,
    created_by: User,
    code_length: Optional[int] = None,
    max_retries: int = 5
) -> ShoppingList:
    """
    Create a new list and add the creator as its first member.

    This is a multi-step operation wrapped in a transaction:
    1. Generate a join code
    2. Create the list
    3. Create the creator's membership

    Args:
        name: List name
        created_by: User creating the list
        code_length: Join code length (defaults to settings.JOIN_CODE_LENGTH)
        max_retries: Maximum attempts to generate a unique join code

    Returns:
        Created ShoppingList instance

    Raises:
        RuntimeError: If cannot generate unique join code after retries
    """
    code_length = code_length or settings.JOIN_CODE_LENGTH

    # Retry logic outside transaction to handle join code collisions
    for attempt in range(max_retries):
        code = generate_join_code(code_length)

        try:
            with transaction.atomic():
                shopping_list = ShoppingList.objects.create(
                    name=name,
                    created_by=created_by,
                    code=code
                )
                ListMembership.objects.create(list=shopping_list, user=created_by)

            logger.info("List %s created by user %s", shopping_list.pk, created_by.pk)
            return shopping_list

        except IntegrityError:
            logger.warning("Join code collision on attempt %d", attempt + 1)
            if attempt == max_retries - 1:
                raise RuntimeError(
                    f"Failed to generate unique join code after {max_retries} attempts"
                )
            continue

    # Should never reach here
    raise RuntimeError("Unexpected error in list creation")


def get_list_by_id(*, list_id: int) -> ShoppingList:
    """
    Get a list by ID with its memberships prefetched.

    Raises:
        ListNotFoundError: If list doesn't exist
    """
    try:
        return (
            ShoppingList.objects
            .select_related('created_by')
            .prefetch_related(
                Prefetch(
                    'memberships',
                    queryset=ListMembership.objects.select_related('user')
                )
            )
            .get(id=list_id)
        )
    except ShoppingList.DoesNotExist:
        raise ListNotFoundError(f"List with ID {list_id} not found")


def get_list_by_code(*, code: str) -> ShoppingList:
    """
    Look up a list by its join code.

    The match is exact and case-sensitive; codes mix upper and lower case.

    Raises:
        ListNotFoundError: If no list has this code
    """
    shopping_list = (
        ShoppingList.objects
        .select_related('created_by')
        .filter(code=code)
        .first()
    )
    # Some backends (MySQL) compare case-insensitively; re-check in Python
    if shopping_list is None or shopping_list.code != code:
        raise ListNotFoundError(f"No list found for code {code!r}")
    return shopping_list


def get_lists_for_user(*, user: User) -> QuerySet[ShoppingList]:
    """Lists the user is a member of, newest first."""
    return (
        ShoppingList.objects
        .filter(memberships__user=user)
        .select_related('created_by')
        .prefetch_related('memberships')
        .distinct()
    )
