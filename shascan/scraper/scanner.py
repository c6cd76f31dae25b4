"""Token scanner: cached bodies first, then the remaining links, stopping early."""

from __future__ import annotations

from typing import Iterable

from shascan.config import Settings, settings as default_settings
from shascan.scraper.fetcher import fetch_asset
from shascan.scraper.models import Discovery, ScanState, TokenKind
from shascan.scraper.schedule import FetchSchedule, build_schedule
from shascan.scraper.tokens import TOKEN_KINDS, scan_body
from shascan.scraper.walker import Fetch


def scan(
    discovery: Discovery,
    settings: Settings | None = None,
    fetch: Fetch = fetch_asset,
    schedule: FetchSchedule | None = None,
    kinds: Iterable[TokenKind] = TOKEN_KINDS,
) -> ScanState:
    """Resolve every token kind from the discovered assets.

    1. Bodies already in ``discovery.cache`` are scanned without any request;
       if they resolve every kind the scan returns right there.
    2. Links not in the cache are fetched through *schedule* (built from
       ``settings.fetch_mode`` when omitted) and scanned as they arrive.
       Failed fetches are recorded in ``state.errors`` and skipped; a failure
       already reported during discovery is not recorded twice.  No new
       request is issued once every kind is resolved.
    """
    cfg = settings or default_settings
    state = ScanState(kinds=tuple(kinds), errors=list(discovery.errors))

    remaining = [url for url in discovery.links if url not in discovery.cache]
    print(f"[scan] Already fetched: {len(discovery.cache)} file(s)")
    print(f"[scan] Still need to fetch: {len(remaining)} file(s)")

    for url, text in discovery.cache.items():
        scan_body(state, url, text)
        if state.complete:
            print("[scan] ✅ All SHAs found in cached files! Skipping remaining downloads.")
            return state

    schedule = schedule or build_schedule(cfg)
    processed = 0
    for outcome in schedule.fetch_all(
        remaining,
        lambda url: fetch(url, cfg),
        lambda: state.complete,
    ):
        processed += 1
        if not outcome.ok:
            # An index bundle that failed during discovery fails the same way here.
            if outcome.error not in state.errors:
                state.errors.append(outcome.error)
            continue
        scan_body(state, outcome.url, outcome.text)

    skipped = len(remaining) - processed
    if state.complete and skipped:
        print(f"[scan] ✅ All SHAs found! Skipped remaining {skipped} file(s).")
    print(f"[scan] Finished scanning with {len(state.errors)} error(s).")
    return state
