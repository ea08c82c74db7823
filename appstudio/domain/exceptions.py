"""Domain-specific exceptions."""


class DomainError(Exception):
    """Base exception for domain errors."""

    pass


class ValidationError(DomainError):
    """Raised when domain validation fails."""

    pass


class MessageValidationError(DomainError):
    """Raised when a design mode message of a known type has a malformed body."""

    def __init__(self, message_type: str, detail: str):
        super().__init__(f"Invalid '{message_type}' message: {detail}")
        self.message_type = message_type
        self.detail = detail
