"""Scraper package — asset discovery, fetching and document ID scanning."""

from shascan.scraper.aggregator import finalize
from shascan.scraper.fetcher import fetch_asset
from shascan.scraper.links import CHUNK_PATTERNS, INDEX_PATTERNS, extract_links
from shascan.scraper.models import (
    Discovery,
    FetchOutcome,
    LinkSet,
    ResultRecord,
    ScanState,
    TokenKind,
)
from shascan.scraper.scanner import scan
from shascan.scraper.tokens import TOKEN_KINDS, extract_document_id
from shascan.scraper.walker import discover

__all__ = [
    "fetch_asset",
    "extract_links",
    "INDEX_PATTERNS",
    "CHUNK_PATTERNS",
    "discover",
    "scan",
    "finalize",
    "extract_document_id",
    "TOKEN_KINDS",
    "Discovery",
    "FetchOutcome",
    "LinkSet",
    "ResultRecord",
    "ScanState",
    "TokenKind",
]
