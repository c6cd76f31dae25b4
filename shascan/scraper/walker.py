"""Two-level asset discovery: index bundles from the page, chunks from the bundles."""

from __future__ import annotations

from typing import Callable

from shascan.config import Settings, settings as default_settings
from shascan.scraper.fetcher import asset_name, fetch_asset
from shascan.scraper.links import CHUNK_PATTERNS, INDEX_PATTERNS, extract_links
from shascan.scraper.models import Discovery, FetchOutcome, LinkSet

Fetch = Callable[[str, Settings], FetchOutcome]


def discover(
    root_html: str,
    settings: Settings | None = None,
    fetch: Fetch = fetch_asset,
) -> Discovery:
    """Compute the full link set for *root_html* and cache the bodies fetched on the way.

    Every index link is fetched exactly once.  Its body is kept in the cache
    because the scanner needs it again, and is mined for chunk links.  Chunk
    bodies are left for the scanner so it can stop early.

    An empty :class:`Discovery` means the page carried no index links at all;
    the caller must treat that as fatal.
    """
    cfg = settings or default_settings
    index_links = extract_links(root_html, INDEX_PATTERNS, cfg.asset_origin)

    if not index_links:
        print("[discover] ✗ No multi-search JS files found in HTML!")
        if cfg.debug:
            print("\n=== DEBUG: HTML Head Content ===")
            print(root_html)
            print("=== END DEBUG ===\n")
        return Discovery()

    print(f"[discover] Found {len(index_links)} multi-search JS file(s).")

    discovery = Discovery(links=LinkSet(index_links), index_links=index_links)
    for url in index_links:
        print(f"[discover] Fetching multi-search file: {asset_name(url)}")
        outcome = fetch(url, cfg)
        if not outcome.ok:
            print(f"[discover] ⚠️  Failed to fetch multi-search file: {asset_name(url)}")
            discovery.errors.append(outcome.error)
            continue

        discovery.cache[url] = outcome.text
        discovery.links.extend(extract_links(outcome.text, CHUNK_PATTERNS, cfg.asset_origin))

    chunk_count = len(discovery.links) - len(index_links)
    print(
        f"[discover] Found {len(discovery.links)} total JS file(s) to analyze "
        f"({len(index_links)} multi-search + {chunk_count} chunk)."
    )
    return discovery
