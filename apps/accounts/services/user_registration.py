"""User registration service."""

import logging
from typing import Optional

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    username: str,
    password: str,
    email: Optional[str] = None
) -> User:
    """
    Register a new user.

    Args:
        username: Unique login name
        password: User's password (will be hashed)
        email: Optional email address

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the username is taken
    """
    if User.objects.filter(username=username).exists():
        raise UserRegistrationError(f"Username '{username}' is already taken")

    try:
        user = User.objects.create_user(
            username=username,
            password=password,
            email=email
        )
    except IntegrityError:
        # Lost a race against a concurrent registration
        raise UserRegistrationError(f"Username '{username}' is already taken")

    logger.info("Registered user %s", user.pk)
    return user
