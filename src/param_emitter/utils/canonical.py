"""Canonical keys for params payloads.

Payloads are compared by their JSON encoding. By default mapping key
order is part of the key (``{"a": 1, "b": 2}`` and ``{"b": 2, "a": 1}``
do not match); pass ``sort_keys=True`` to normalize it.
"""

from __future__ import annotations

import json
from typing import Any

from param_emitter.core.exceptions import PayloadSerializationError


def canonicalize_params(params: Any, *, sort_keys: bool = False) -> str | None:
    """Compute the canonical key of *params*.

    ``None`` (no payload) has no key. An empty mapping is a payload and
    encodes to ``"{}"``.

    Raises:
        PayloadSerializationError: If *params* holds values JSON cannot
            represent (callables, dates, sets, NaN) or is cyclic.
    """
    if params is None:
        return None

    try:
        return json.dumps(
            params,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
            sort_keys=sort_keys,
        )
    except (TypeError, ValueError) as e:
        raise PayloadSerializationError(
            "Params payload is not JSON serializable",
            details={"error": str(e), "type": type(params).__name__},
        ) from e
