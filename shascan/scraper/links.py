"""Asset link extraction from HTML documents and bundled JavaScript."""

from __future__ import annotations

import re
from typing import Iterable, List, Pattern
from urllib.parse import urljoin

# ---------------------------------------------------------------------------
# URL shape patterns
# ---------------------------------------------------------------------------
# Pass 1: index bundles are announced in the page head through modulepreload
# links or plain script tags.
INDEX_PATTERNS: tuple[Pattern[str], ...] = (
    re.compile(r'href="([^"]*/js/multi-search-[^"]*\.js)"'),
    re.compile(r'script src="([^"]*/js/multi-search-[^"]*\.js)"'),
)

# Pass 2: chunk bundles are referenced from index bundles as string constants.
CHUNK_PATTERNS: tuple[Pattern[str], ...] = (
    re.compile(r"""["']([^"']*/js/chunk-[^"']*\.js)["']"""),
)


def absolutize(link: str, origin: str) -> str:
    """Resolve *link* against *origin*; absolute URLs are returned unchanged."""
    return urljoin(origin, link.strip())


def extract_links(text: str, patterns: Iterable[Pattern[str]], origin: str) -> List[str]:
    """Return the ordered, deduplicated absolute asset URLs found in *text*.

    Each pattern is applied over the whole text in turn and its first group
    is taken as the candidate path.  The first occurrence of a URL wins.
    """
    seen: set[str] = set()
    links: List[str] = []
    for pattern in patterns:
        for m in pattern.finditer(text):
            candidate = m.group(1)
            if not candidate:
                continue
            url = absolutize(candidate, origin)
            if url not in seen:
                seen.add(url)
                links.append(url)
    return links
