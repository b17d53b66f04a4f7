"""Parametrized event emitter.

Subscriptions live in per-event-name buckets kept in registration order.
A subscription registered with a params payload only receives emissions
whose payload has the same canonical key; one registered without a
payload receives every emission for its event name. Callbacks run
synchronously, in registration order, over a snapshot of the bucket.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Callable

from param_emitter.config.logging import get_logger
from param_emitter.config.settings import get_settings
from param_emitter.core.exceptions import InvalidSubscriptionError
from param_emitter.core.models import (
    EmitterEvent,
    EventCallback,
    Subscription,
    SubscriptionArguments,
)
from param_emitter.utils.canonical import canonicalize_params

logger = get_logger(__name__)

_MISSING: Any = object()

SubscriptionsList = dict[str, list[Subscription]]


def get_subscription_arguments(
    event_name: str,
    params: Any = None,
    callback: EventCallback | None = None,
) -> SubscriptionArguments:
    """Resolve the ``(event_name, params?, callback?)`` call shape.

    A callable in the *params* slot is the callback, with no payload.
    """
    if callable(params):
        return SubscriptionArguments(event_name=event_name, callback=params)

    return SubscriptionArguments(event_name=event_name, params=params, callback=callback)


def create_subscription(
    arguments: SubscriptionArguments,
    *,
    once: bool = False,
    sort_keys: bool = False,
) -> Subscription:
    """Build a subscription, canonicalizing its payload now.

    Later mutation of the caller's payload object does not affect matching.
    """
    return Subscription(
        callback=arguments.callback,
        once=once,
        params_key=canonicalize_params(arguments.params, sort_keys=sort_keys),
    )


def add_event_subscription(
    event_name: str,
    subscriptions: SubscriptionsList,
    subscription: Subscription,
) -> Subscription:
    """Append *subscription* to the bucket for *event_name*, creating it if needed."""
    subscriptions.setdefault(event_name, []).append(subscription)
    return subscription


def run_event_callback(
    callback: EventCallback,
    event: EmitterEvent,
    params: Any,
    data: Any,
) -> None:
    """Invoke *callback* as ``(event, params, data)`` or ``(event, data)``."""
    if params is not None:
        callback(event, params, data)
    else:
        callback(event, data)


class EventEmitter:
    """In-memory registry of parametrized subscriptions.

    Not thread-safe: callers sharing an emitter across threads must
    provide their own locking.

    Example:
        >>> emitter = EventEmitter()
        >>> unsubscribe = emitter.on("saved", {"id": 1}, lambda event, params, data: print(data))
        >>> _ = emitter.emit("saved", {"id": 1}, "done")
        done
        >>> unsubscribe()
    """

    def __init__(self, *, sort_keys: bool | None = None) -> None:
        """Create an empty registry.

        Args:
            sort_keys: Normalize mapping key order in canonical keys.
                Defaults to ``EmitterSettings.sort_payload_keys``.
        """
        self.sort_keys = get_settings().sort_payload_keys if sort_keys is None else sort_keys
        self._subscriptions: SubscriptionsList = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def on(
        self,
        event_name: str,
        params: Any = None,
        callback: EventCallback | None = None,
    ) -> Callable[[], None]:
        """Subscribe to *event_name*, optionally filtered by *params*.

        Both ``on(name, callback)`` and ``on(name, params, callback)`` are
        accepted.

        Returns:
            A handle that removes exactly this subscription. Calling it
            again is a no-op.

        Raises:
            InvalidSubscriptionError: If *event_name* is empty or no
                callable callback was given.
            PayloadSerializationError: If *params* is not JSON serializable.
        """
        return self._subscribe(get_subscription_arguments(event_name, params, callback))

    def once(
        self,
        event_name: str,
        params: Any = None,
        callback: EventCallback | None = None,
    ) -> Callable[[], None]:
        """Like :meth:`on`, but the subscription is removed after its first match."""
        return self._subscribe(get_subscription_arguments(event_name, params, callback), once=True)

    def _subscribe(self, arguments: SubscriptionArguments, once: bool = False) -> Callable[[], None]:
        event_name = arguments.event_name
        if not isinstance(event_name, str) or not event_name:
            raise InvalidSubscriptionError(
                "Event name must be a non-empty string",
                details={"event_name": event_name},
            )
        if not callable(arguments.callback):
            raise InvalidSubscriptionError(
                "Callback must be callable",
                details={"event_name": event_name, "callback": repr(arguments.callback)},
            )

        subscription = add_event_subscription(
            event_name,
            self._subscriptions,
            create_subscription(arguments, once=once, sort_keys=self.sort_keys),
        )
        logger.debug(
            "emitter.subscribed",
            event_name=event_name,
            once=once,
            params_key=subscription.params_key,
        )

        def unsubscribe() -> None:
            self._detach(event_name, subscription)

        return unsubscribe

    # ------------------------------------------------------------------
    # Deregistration
    # ------------------------------------------------------------------

    def off(
        self,
        event_name: str | None = None,
        params: Any = None,
        callback: EventCallback | None = None,
    ) -> EventEmitter:
        """Remove subscriptions.

        - ``off()`` clears every event name.
        - ``off(name)`` drops the whole bucket for *name*.
        - ``off(name, params?, callback?)`` drops the subscriptions whose
          callback and canonical params key equal the given ones; a filter
          that is not given matches everything.

        Unknown event names are ignored.
        """
        if event_name is None:
            for bucket in self._subscriptions.values():
                _release(bucket)
            self._subscriptions = {}
            logger.debug("emitter.cleared")
            return self

        if params is None and callback is None:
            bucket = self._subscriptions.pop(event_name, None)
            if bucket:
                _release(bucket)
                logger.debug("emitter.unsubscribed", event_name=event_name, removed=len(bucket))
            return self

        bucket = self._subscriptions.get(event_name)
        if not bucket:
            return self

        subscription_to_find = self._create_filter(event_name, params, callback)
        removed = [s for s in bucket if _filter_matches(s, subscription_to_find)]
        if not removed:
            return self

        _release(removed)
        remaining = [s for s in bucket if s.is_active]
        if remaining:
            bucket[:] = remaining
        else:
            del self._subscriptions[event_name]

        logger.debug("emitter.unsubscribed", event_name=event_name, removed=len(removed))
        return self

    def _detach(self, event_name: str, subscription: Subscription) -> bool:
        if not subscription.is_active:
            return False

        subscription.callback = None
        bucket = self._subscriptions.get(event_name)
        if bucket is not None:
            bucket[:] = [s for s in bucket if s is not subscription]
            if not bucket:
                del self._subscriptions[event_name]

        logger.debug("emitter.unsubscribed", event_name=event_name, removed=1)
        return True

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def emit(self, event_name: str, params: Any = _MISSING, data: Any = _MISSING) -> EventEmitter:
        """Dispatch an event to matching subscriptions.

        ``emit(name, data)`` carries no payload and reaches only
        subscriptions registered without params. ``emit(name, params,
        data)`` also reaches subscriptions whose params canonicalize to
        the same key. Filtered subscriptions are called as
        ``callback(event, params, data)``, the rest as
        ``callback(event, data)``.

        Raises:
            PayloadSerializationError: If *params* is not JSON serializable.
                Nothing is dispatched in that case.
        """
        if data is _MISSING:
            params, data = None, (None if params is _MISSING else params)

        bucket = self._subscriptions.get(event_name)
        if not bucket:
            return self

        key = canonicalize_params(params, sort_keys=self.sort_keys)
        event = EmitterEvent(name=event_name)
        dispatched = 0

        for subscription in tuple(bucket):
            callback = subscription.callback
            # removed by an earlier callback in this dispatch
            if callback is None or not subscription.matches(key):
                continue

            if subscription.once:
                self._detach(event_name, subscription)

            run_event_callback(
                callback,
                event,
                params if subscription.params_key is not None else None,
                data,
            )
            dispatched += 1

        logger.debug("emitter.dispatched", event_name=event_name, params_key=key, dispatched=dispatched)
        return self

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def has_listeners(
        self,
        event_name: str | None = None,
        params: Any = None,
        callback: EventCallback | None = None,
    ) -> bool:
        return self.get_listeners_count(event_name, params, callback) > 0

    def get_listeners_count(
        self,
        event_name: str | None = None,
        params: Any = None,
        callback: EventCallback | None = None,
    ) -> int:
        """Count subscriptions.

        Without *event_name* every bucket is counted. With only
        *event_name* that bucket's size is returned. With filters, only
        subscriptions matching them the way :meth:`off` would are counted.
        """
        if event_name is None:
            return sum(len(bucket) for bucket in self._subscriptions.values())

        bucket = self._subscriptions.get(event_name)
        if not bucket:
            return 0

        if params is None and callback is None:
            return len(bucket)

        subscription_to_find = self._create_filter(event_name, params, callback)
        return sum(1 for s in bucket if _filter_matches(s, subscription_to_find))

    def get_callbacks(self, event_name: str, params: Any = None) -> list[EventCallback]:
        """Callbacks an emission of *event_name* with *params* would reach, in order."""
        bucket = self._subscriptions.get(event_name)
        if not bucket:
            return []

        key = canonicalize_params(params, sort_keys=self.sort_keys)
        return [s.callback for s in bucket if s.is_active and s.matches(key)]

    def get_subscriptions(self) -> dict[str, tuple[Subscription, ...]]:
        """Snapshot of the registry."""
        return {name: tuple(bucket) for name, bucket in self._subscriptions.items()}

    def _create_filter(self, event_name: str, params: Any, callback: EventCallback | None) -> Subscription:
        return create_subscription(
            get_subscription_arguments(event_name, params, callback),
            sort_keys=self.sort_keys,
        )


def _filter_matches(existing: Subscription, subscription_to_find: Subscription) -> bool:
    if subscription_to_find.callback is not None and existing.callback != subscription_to_find.callback:
        return False
    if subscription_to_find.params_key is not None and existing.params_key != subscription_to_find.params_key:
        return False
    return True


def _release(subscriptions: list[Subscription]) -> None:
    for subscription in subscriptions:
        subscription.callback = None


@lru_cache
def get_emitter() -> EventEmitter:
    """Get the process-wide default emitter."""
    return EventEmitter()
