"""Parametrized publish/subscribe event emitter."""

from param_emitter.core.exceptions import (
    EmitterError,
    InvalidSubscriptionError,
    PayloadSerializationError,
)
from param_emitter.core.models import EmitterEvent, Subscription, SubscriptionArguments
from param_emitter.emitter import EventEmitter, get_emitter

__version__ = "0.1.0"

__all__ = [
    "EmitterError",
    "EmitterEvent",
    "EventEmitter",
    "InvalidSubscriptionError",
    "PayloadSerializationError",
    "Subscription",
    "SubscriptionArguments",
    "get_emitter",
]
