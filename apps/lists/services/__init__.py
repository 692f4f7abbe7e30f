"""
Lists app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    ListsServiceError,
    ListNotFoundError,
    ItemNotFoundError,
    NotMemberError,
    InvalidPayerError,
)

from .list_management import (
    create_list,
    get_list_by_id,
    get_list_by_code,
    get_lists_for_user,
)

from .membership_management import (
    add_member,
    join_by_code,
    get_list_members,
    require_membership,
)

from .item_management import (
    add_item,
    update_item,
    get_items_for_list,
)


__all__ = [
    # Exceptions
    'ListsServiceError',
    'ListNotFoundError',
    'ItemNotFoundError',
    'NotMemberError',
    'InvalidPayerError',

    # List Management
    'create_list',
    'get_list_by_id',
    'get_list_by_code',
    'get_lists_for_user',

    # Membership Management
    'add_member',
    'join_by_code',
    'get_list_members',
    'require_membership',

    # Item Management
    'add_item',
    'update_item',
    'get_items_for_list',
]
