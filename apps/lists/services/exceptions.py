"""
Domain-specific exceptions for lists app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class ListsServiceError(Exception):
    """Base exception for all lists service errors."""
    pass


class ListNotFoundError(ListsServiceError):
    """Raised when a list does not exist or no list has the given code."""
    pass


class ItemNotFoundError(ListsServiceError):
    """Raised when an item does not exist."""
    pass


class NotMemberError(ListsServiceError):
    """Raised when a user tries to perform an action requiring membership."""
    pass


class InvalidPayerError(ListsServiceError):
    """Raised when an item's payer is not a member of the item's list."""
    pass
