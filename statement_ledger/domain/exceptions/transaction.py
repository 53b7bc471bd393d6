"""Transaction construction and parsing exceptions."""

from .base import DomainException


class ValidationException(DomainException):
    """Raised when a transaction is missing a required field."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
        )


class ParseException(DomainException):
    """Raised when a raw field value cannot be parsed."""

    def __init__(self, field: str, value: str, reason: str = ""):
        message = f"invalid {field} '{value}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message=message,
            code="PARSE_ERROR",
        )
        self.field = field
        self.value = value
