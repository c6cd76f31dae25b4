"""Token kind table and document ID extraction."""

from __future__ import annotations

import re
from typing import Iterable

from shascan.scraper.fetcher import asset_name
from shascan.scraper.models import DOCUMENT_ID_PATTERN, ScanState, TokenKind

TOKEN_KINDS: tuple[TokenKind, ...] = (
    TokenKind(
        name="availability",
        marker='"RestaurantsAvailability"',
        record_key="availabilitySha",
    ),
    TokenKind(
        name="multi-search",
        marker='"MultiSearchResults"',
        record_key="multiSha",
    ),
    TokenKind(
        name="autocomplete",
        marker='"autocompleteResults"',
        record_key="autoSha",
    ),
)


def extract_document_id(
    text: str, pattern: re.Pattern[str] = DOCUMENT_ID_PATTERN
) -> str | None:
    """Return the first value *pattern* captures in *text*, or ``None``."""
    match = pattern.search(text)
    if match:
        return match.group(1)
    return None


def scan_body(
    state: ScanState,
    url: str,
    text: str,
    kinds: Iterable[TokenKind] | None = None,
) -> list[TokenKind]:
    """Look for every pending token kind in *text* and record what is found.

    The marker only qualifies the body: when it is present but no
    ``documentId`` assignment follows, the kind stays pending.

    Returns the kinds resolved by this body.
    """
    resolved: list[TokenKind] = []
    for kind in kinds if kinds is not None else state.kinds:
        if state.value(kind) is not None or kind.marker not in text:
            continue
        print(f"[scan] Found {kind.marker} in {asset_name(url)}")
        value = extract_document_id(text, kind.pattern)
        if value is None:
            print(f"[scan] ⚠️  No documentId next to {kind.marker}; still looking.")
            continue
        state.record(kind, value)
        resolved.append(kind)
        print(f"[scan] {kind.name} SHA: {value}")
    return resolved
