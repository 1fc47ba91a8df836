"""Errors raised across bounded contexts, on top of ``protean.exceptions``.

Domain rules fail with protean's ``ValidationError({"field": [messages]})``
and missing aggregates with ``ObjectNotFoundError``. The classes below cover
what protean has no name for. ``app.py`` maps each family to an HTTP status.
"""

from protean.exceptions import InvalidOperationError, ProteanException, ValidationError


def first_message(messages) -> str:
    """The first human readable message out of protean's ``messages`` payload."""
    if isinstance(messages, dict):
        for value in messages.values():
            if isinstance(value, list | tuple) and value:
                return str(value[0])
            if value:
                return str(value)
        return "Invalid data"
    return str(messages)


class EmptyOrderError(ValidationError):
    def __init__(self, message="Order must have at least one item"):
        super().__init__({"items": [message]})


class ConflictError(InvalidOperationError):
    """The request clashes with the current state, e.g. a duplicate SKU."""


class StockInsufficientError(ConflictError):
    def __init__(self, product_id, requested, available=None):
        self.product_id = product_id
        self.requested = requested
        self.available = available
        detail = f"Insufficient stock for product {product_id}: requested {requested}"
        if available is not None:
            detail += f", available {available}"
        super().__init__({"stock": [detail]})


class AuthenticationError(ProteanException):
    def __init__(self, message="Login required."):
        super().__init__({"session": [message]})


class AuthorizationError(ProteanException):
    def __init__(self, message="Forbidden"):
        super().__init__({"access": [message]})


class DeliveryFailedError(ProteanException):
    """A message could not be handed to the mail relay."""

    def __init__(self, message="Failed to send email"):
        super().__init__({"email": [message]})
