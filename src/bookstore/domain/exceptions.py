"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the HTTP and CLI layers can catch them uniformly and map them to
status codes or user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class AuthenticationError(DomainException):
    """No user is signed in."""


class AuthorizationError(DomainException):
    """The signed-in user may not access the requested entity."""


class InvalidPaymentMethodError(ValidationError):
    """The requested payment method is not one of the supported set."""


class UnknownBookError(ValidationError):
    """An order line references a book that does not exist."""

    def __init__(self, book_id: str) -> None:
        super().__init__(f"Book not found: {book_id}")
        self.book_id = book_id


class InsufficientStockError(ValidationError):
    """A book does not have enough stock for the requested quantity."""

    def __init__(self, book_id: str, title: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for book: {title} "
            f"(need {requested}, have {available})"
        )
        self.book_id = book_id
        self.title = title
        self.requested = requested
        self.available = available


class PaymentGatewayUnavailableError(DomainException):
    """Online payment is not set up for this deployment."""
