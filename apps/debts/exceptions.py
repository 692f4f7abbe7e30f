"""
Domain exceptions for debts app.

The settlement core only ever raises "not found" errors; views turn
them into 404 responses.
"""


class DebtsServiceError(Exception):
    """Base exception for debt service errors."""
    pass


class DebtNotFoundError(DebtsServiceError):
    """Raised when a debt id does not resolve to a debt."""
    pass


class SettlementListNotFoundError(DebtsServiceError):
    """Raised when settling a list that does not exist."""
    pass
