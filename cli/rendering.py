"""Utilities for rendering result records in the CLI."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from shascan.scraper.tokens import TOKEN_KINDS


def render_record(data: Mapping[str, Any]) -> str:
    """Render a persisted record (as loaded from JSON) as aligned text lines."""
    lines = []

    timestamp = data.get("timestamp")
    if isinstance(timestamp, (int, float)):
        when = datetime.fromtimestamp(timestamp / 1000).strftime("%Y-%m-%d %H:%M:%S")
    else:
        when = "unknown"
    width = max(len(kind.name) for kind in TOKEN_KINDS)
    lines.append(f"  {'updated'.ljust(width)} : {when}")
    for kind in TOKEN_KINDS:
        value = data.get(kind.record_key) or "NOT FOUND"
        lines.append(f"  {kind.name.ljust(width)} : {value}")

    errors = data.get("errors") or []
    lines.append(f"  {'errors'.ljust(width)} : {len(errors)}")
    for err in errors:
        lines.append(f"    - {err}")

    return "\n".join(lines)
