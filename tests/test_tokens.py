"""Tests for document ID extraction and per-body token scanning."""

from __future__ import annotations

import re

import pytest

from shascan.scraper.models import DOCUMENT_ID_PATTERN, ScanState, TokenKind
from shascan.scraper.tokens import TOKEN_KINDS, extract_document_id, scan_body

_URL = "https://www.opentable.com/dapi/js/chunk-1.js"

_AVAILABILITY, _MULTI, _AUTO = TOKEN_KINDS


def _state() -> ScanState:
    return ScanState(kinds=TOKEN_KINDS)


class TestExtractDocumentId:
    @pytest.mark.parametrize(
        "text",
        [
            'e.documentId = "abc123";',
            "e.documentId='abc123';",
            'documentId = "abc123"',
            'x.documentId\n  =\t"abc123"',
        ],
    )
    def test_well_formed_assignment(self, text: str) -> None:
        assert extract_document_id(text) == "abc123"

    @pytest.mark.parametrize(
        "text",
        [
            "e.documentId = abc123;",
            'e.documentId = "";',
            'e.documentId == "abc123"',
            'e.mydocumentId = "abc123"',
            "no assignment here",
        ],
    )
    def test_malformed_or_absent(self, text: str) -> None:
        assert extract_document_id(text) is None

    def test_first_assignment_wins(self) -> None:
        text = 'a.documentId="first";b.documentId="second";'
        assert extract_document_id(text) == "first"


class TestTokenTable:
    def test_record_keys(self) -> None:
        assert [k.record_key for k in TOKEN_KINDS] == ["availabilitySha", "multiSha", "autoSha"]

    def test_markers_are_quoted_literals(self) -> None:
        assert _AVAILABILITY.marker == '"RestaurantsAvailability"'
        assert _MULTI.marker == '"MultiSearchResults"'
        assert _AUTO.marker == '"autocompleteResults"'


class TestScanBody:
    def test_marker_and_assignment_resolve_kind(self) -> None:
        state = _state()
        body = 'n.documentId="abc123";n.operationName="RestaurantsAvailability";'
        resolved = scan_body(state, _URL, body)

        assert resolved == [_AVAILABILITY]
        assert state.value(_AVAILABILITY) == "abc123"
        assert state.value(_MULTI) is None

    def test_marker_without_assignment_stays_pending(self) -> None:
        state = _state()
        resolved = scan_body(state, _URL, 'name:"MultiSearchResults"')

        assert resolved == []
        assert _MULTI in state.pending()

    def test_assignment_without_marker_is_ignored(self) -> None:
        state = _state()
        scan_body(state, _URL, 'n.documentId="abc123";')
        assert state.pending() == list(TOKEN_KINDS)

    def test_unquoted_marker_does_not_match(self) -> None:
        state = _state()
        scan_body(state, _URL, 'RestaurantsAvailability;n.documentId="abc123";')
        assert state.value(_AVAILABILITY) is None

    def test_found_value_is_never_overwritten(self) -> None:
        state = _state()
        scan_body(state, _URL, '"autocompleteResults";n.documentId="old";')
        scan_body(state, _URL, '"autocompleteResults";n.documentId="new";')
        assert state.value(_AUTO) == "old"

    def test_one_body_can_resolve_several_kinds(self) -> None:
        state = _state()
        body = '"RestaurantsAvailability" "MultiSearchResults" "autocompleteResults" q.documentId="f00d"'
        scan_body(state, _URL, body)
        assert state.complete
        assert set(state.values.values()) == {"f00d"}

    def test_each_kind_uses_its_own_pattern(self) -> None:
        hashed = TokenKind(
            name="hashed",
            marker='"HashedQuery"',
            record_key="hashedSha",
            pattern=re.compile(r"sha256Hash:\s*\"([0-9a-f]+)\""),
        )
        state = ScanState(kinds=(hashed, _AUTO))
        body = '"HashedQuery" "autocompleteResults" sha256Hash: "beef" a.documentId="f00d"'
        scan_body(state, _URL, body)
        assert state.values == {"hashedSha": "beef", "autoSha": "f00d"}

    def test_table_rows_default_to_document_id_pattern(self) -> None:
        assert all(kind.pattern is DOCUMENT_ID_PATTERN for kind in TOKEN_KINDS)


class TestScanState:
    def test_starts_with_every_kind_pending(self) -> None:
        state = _state()
        assert state.values == {"availabilitySha": None, "multiSha": None, "autoSha": None}
        assert not state.complete

    def test_record_returns_false_when_known(self) -> None:
        state = _state()
        assert state.record(_MULTI, "a") is True
        assert state.record(_MULTI, "b") is False
        assert state.value(_MULTI) == "a"
