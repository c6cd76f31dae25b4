"""Persistence of result records as JSON."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from shascan.scraper.models import ResultRecord


def load_fallback(path: Path) -> dict[str, Any] | None:
    """Load the previous record from *path*. Returns ``None`` if missing/corrupt.

    The content is not validated beyond being a JSON object; unusable values
    are simply ignored by the aggregator.
    """
    if not path.exists():
        print(f"[store] No existing record at {path}")
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"[store] ⚠️  Ignoring unreadable record {path}: {exc}")
        return None

    if not isinstance(data, dict):
        print(f"[store] ⚠️  Ignoring record {path}: not a JSON object")
        return None

    print("[store] Loaded existing SHA values as fallback")
    return data


def save_record(record: ResultRecord, path: Path) -> None:
    """Write *record* to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(record.to_dict(), indent=2), encoding="utf-8")
    print(f"[store] Results written to: {path}")
