"""Data models for the asset discovery and token scanning pipeline."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

# Persisted operation documents are registered as ``x.documentId = "<sha>"``.
DOCUMENT_ID_PATTERN = re.compile(r"""\bdocumentId\s*=\s*['"]([^'"]+)['"]""")


@dataclass(frozen=True)
class FetchOutcome:
    """Result of fetching a single asset: either ``text`` or ``error``, never both."""

    url: str
    text: str | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if (self.text is None) == (self.error is None):
            raise ValueError("FetchOutcome needs exactly one of text or error")

    @property
    def ok(self) -> bool:
        return self.text is not None


class LinkSet:
    """Insertion-ordered set of absolute asset URLs.

    Grows monotonically: there is no way to remove a link once added.
    """

    def __init__(self, links: Iterable[str] = ()) -> None:
        self._links: dict[str, None] = {}
        self.extend(links)

    def add(self, link: str) -> bool:
        """Add *link*; return ``True`` if it was not already present."""
        if link in self._links:
            return False
        self._links[link] = None
        return True

    def extend(self, links: Iterable[str]) -> int:
        """Add every link in *links*; return how many were new."""
        return sum(1 for link in links if self.add(link))

    def __contains__(self, link: object) -> bool:
        return link in self._links

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._links))

    def __len__(self) -> int:
        return len(self._links)

    def __repr__(self) -> str:
        return f"LinkSet({list(self._links)!r})"


@dataclass
class Discovery:
    """Output of the graph walker, handed over to the scanner."""

    links: LinkSet = field(default_factory=LinkSet)
    cache: dict[str, str] = field(default_factory=dict)
    index_links: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TokenKind:
    """One row of the token table: what qualifies a body, how the value is
    extracted from it, and where the value is stored."""

    name: str
    marker: str
    record_key: str
    pattern: re.Pattern[str] = DOCUMENT_ID_PATTERN


@dataclass
class ScanState:
    """Per-run scan progress.

    A value, once recorded for a kind, is never overwritten.
    """

    kinds: tuple[TokenKind, ...]
    values: dict[str, str | None] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        for kind in self.kinds:
            self.values.setdefault(kind.record_key, None)

    def value(self, kind: TokenKind) -> str | None:
        return self.values.get(kind.record_key)

    def record(self, kind: TokenKind, value: str) -> bool:
        """Store *value* for *kind* unless one is already known."""
        if self.values.get(kind.record_key) is not None:
            return False
        self.values[kind.record_key] = value
        return True

    def pending(self) -> list[TokenKind]:
        return [k for k in self.kinds if self.values.get(k.record_key) is None]

    @property
    def complete(self) -> bool:
        return not self.pending()


@dataclass
class ResultRecord:
    """Final snapshot of a run, as persisted to disk."""

    timestamp: int
    values: dict[str, str | None]
    errors: list[str] = field(default_factory=list)
    # Keys whose value came from the previous record rather than this run.
    from_fallback: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return any(v for v in self.values.values())

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-serialisable shape written to the output file."""
        data: dict[str, Any] = {"timestamp": self.timestamp}
        data.update(self.values)
        data["errors"] = list(self.errors)
        return data
