"""Data model for the emitter registry.

``EmitterEvent`` is a Pydantic model handed to every callback.
``Subscription`` is a plain dataclass compared by identity: two
registrations with the same callback and params are distinct entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

EventCallback = Callable[..., Any]


class EmitterEvent(BaseModel):
    """Descriptor passed as the first argument to every callback."""

    model_config = ConfigDict(extra="allow")

    name: str


@dataclass(eq=False)
class Subscription:
    """One registration in an event-name bucket.

    ``callback`` is cleared once the subscription is removed, so a
    dispatch already in progress can tell it is gone. ``params_key`` is
    fixed at construction; ``None`` means the subscription matches any
    emission for its event name.
    """

    callback: EventCallback | None
    once: bool = False
    params_key: str | None = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "params_key" and "params_key" in self.__dict__:
            raise AttributeError("params_key cannot be changed after creation")
        super().__setattr__(name, value)

    @property
    def is_active(self) -> bool:
        return self.callback is not None

    def matches(self, key: str | None) -> bool:
        """True if an emission canonicalized to *key* reaches this subscription."""
        return self.params_key is None or self.params_key == key


@dataclass
class SubscriptionArguments:
    """Resolved ``(event_name, params?, callback?)`` call shape."""

    event_name: str
    params: Any = None
    callback: EventCallback | None = None
