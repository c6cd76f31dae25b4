"""Result aggregation: merge a scan with the previous record."""

from __future__ import annotations

import time
from typing import Any, Mapping

from shascan.scraper.models import ResultRecord, ScanState


def finalize(
    state: ScanState,
    fallback: Mapping[str, Any] | None = None,
    timestamp: int | None = None,
) -> ResultRecord:
    """Build the run's :class:`ResultRecord`.

    Kinds left unresolved by *state* take the value stored under the same key
    in *fallback* (the previous run's record), when it has one.  The error
    list is carried over in full whether or not the run succeeded.
    """
    values: dict[str, str | None] = {}
    from_fallback: list[str] = []

    for kind in state.kinds:
        key = kind.record_key
        value = state.value(kind)
        if value is None and fallback:
            previous = fallback.get(key)
            if isinstance(previous, str) and previous:
                value = previous
                from_fallback.append(key)
        values[key] = value

    return ResultRecord(
        timestamp=timestamp if timestamp is not None else int(time.time() * 1000),
        values=values,
        errors=list(state.errors),
        from_fallback=from_fallback,
    )
