"""Custom exceptions for param-emitter."""


class EmitterError(Exception):
    """Base exception for all emitter errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidSubscriptionError(EmitterError):
    """Raised when a subscription is registered with bad arguments."""

    pass


class PayloadSerializationError(EmitterError):
    """Raised when a params payload cannot be turned into a canonical key."""

    pass
