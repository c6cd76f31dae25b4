"""Pipeline entry point: root HTML in, persisted result record out.

Public API::

    from shascan.pipeline import collect_document_ids
    result = collect_document_ids(html, settings)
    sys.exit(result.exit_code)
"""

from __future__ import annotations

from dataclasses import dataclass

from shascan.config import Settings, settings as default_settings
from shascan.scraper.aggregator import finalize
from shascan.scraper.fetcher import fetch_asset
from shascan.scraper.models import ResultRecord
from shascan.scraper.scanner import scan
from shascan.scraper.schedule import build_schedule
from shascan.scraper.store import load_fallback, save_record
from shascan.scraper.tokens import TOKEN_KINDS
from shascan.scraper.walker import Fetch, discover


@dataclass
class PipelineResult:
    record: ResultRecord | None
    link_count: int

    @property
    def ok(self) -> bool:
        """``True`` when links were found and at least one SHA is known."""
        return self.record is not None and self.record.succeeded

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


def collect_document_ids(
    root_html: str,
    settings: Settings | None = None,
    fetch: Fetch = fetch_asset,
) -> PipelineResult:
    """Run discovery, scanning and aggregation over *root_html*.

    The record at ``settings.output_path`` (if any) is read first and used to
    fill in kinds this run cannot resolve.  The new record is written back
    only when it holds at least one value; a run with no links or no values
    leaves the previous file untouched.

    Raises:
        ValueError: If ``settings.fetch_mode`` names no known schedule.
    """
    cfg = settings or default_settings
    schedule = build_schedule(cfg)
    fallback = load_fallback(cfg.output_path)

    discovery = discover(root_html, cfg, fetch=fetch)
    if not discovery.links:
        print("[pipeline] ✗ No JS files found!")
        return PipelineResult(record=None, link_count=0)

    state = scan(discovery, cfg, fetch=fetch, schedule=schedule)
    record = finalize(state, fallback)

    if not record.succeeded:
        print("[pipeline] ✗ No valid SHAs found and no existing values to preserve!")
        return PipelineResult(record=record, link_count=len(discovery.links))

    save_record(record, cfg.output_path)
    _print_summary(record)
    return PipelineResult(record=record, link_count=len(discovery.links))


def _print_summary(record: ResultRecord) -> None:
    print("\n=== RESULTS ===")
    for kind in TOKEN_KINDS:
        value = record.values.get(kind.record_key)
        print(f"{kind.name} SHA: {value or 'NOT FOUND'}")
    for key in record.from_fallback:
        print(f"⚠️  Using existing {key} (new value not found)")
    if record.errors:
        print(f"\nErrors encountered: {len(record.errors)}")
