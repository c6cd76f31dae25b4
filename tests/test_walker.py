"""Tests for two-level asset discovery.

The fetcher is replaced by an in-memory fake that serves bodies from a dict
and records every URL requested, so discovery is exercised without HTTP.
"""

from __future__ import annotations

from shascan.config import Settings
from shascan.scraper.models import FetchOutcome
from shascan.scraper.walker import discover

_ORIGIN = "https://www.opentable.com"
_INDEX_A = f"{_ORIGIN}/dapi/js/multi-search-a.js"
_INDEX_B = f"{_ORIGIN}/dapi/js/multi-search-b.js"
_CHUNK_1 = f"{_ORIGIN}/dapi/js/chunk-1.js"
_CHUNK_2 = f"{_ORIGIN}/dapi/js/chunk-2.js"

_ROOT_HTML = (
    '<head><link rel="modulepreload" href="/dapi/js/multi-search-a.js">'
    '<script src="/dapi/js/multi-search-b.js"></script></head>'
)


class FakeFetch:
    def __init__(self, bodies: dict[str, str]) -> None:
        self.bodies = bodies
        self.calls: list[str] = []

    def __call__(self, url: str, settings: Settings) -> FetchOutcome:
        self.calls.append(url)
        if url in self.bodies:
            return FetchOutcome(url=url, text=self.bodies[url])
        return FetchOutcome(url=url, error=f"{url.rsplit('/', 1)[-1]}: HTTP 404")


def _settings(**overrides) -> Settings:
    base = dict(asset_origin=_ORIGIN, debug=False)
    base.update(overrides)
    return Settings(**base)


class TestDiscover:
    def test_collects_index_and_chunk_links(self) -> None:
        fetch = FakeFetch({
            _INDEX_A: 'import("/dapi/js/chunk-1.js");import("/dapi/js/chunk-2.js")',
            _INDEX_B: 'import("/dapi/js/chunk-2.js")',
        })
        discovery = discover(_ROOT_HTML, _settings(), fetch=fetch)

        assert list(discovery.links) == [_INDEX_A, _INDEX_B, _CHUNK_1, _CHUNK_2]
        assert discovery.index_links == [_INDEX_A, _INDEX_B]
        assert discovery.errors == []

    def test_fetches_each_index_link_once_and_no_chunks(self) -> None:
        fetch = FakeFetch({
            _INDEX_A: '"/dapi/js/chunk-1.js"',
            _INDEX_B: '"/dapi/js/chunk-1.js"',
        })
        discovery = discover(_ROOT_HTML, _settings(), fetch=fetch)

        assert fetch.calls == [_INDEX_A, _INDEX_B]
        assert set(discovery.cache) == {_INDEX_A, _INDEX_B}

    def test_link_set_has_no_duplicates(self) -> None:
        html = _ROOT_HTML + '<link href="/dapi/js/multi-search-a.js">'
        fetch = FakeFetch({
            _INDEX_A: '"/dapi/js/chunk-1.js" "/dapi/js/chunk-1.js"',
            _INDEX_B: '"/dapi/js/chunk-1.js"',
        })
        discovery = discover(html, _settings(), fetch=fetch)

        links = list(discovery.links)
        assert len(links) == len(set(links)) == 3

    def test_index_failure_is_tolerated(self) -> None:
        fetch = FakeFetch({_INDEX_B: '"/dapi/js/chunk-2.js"'})
        discovery = discover(_ROOT_HTML, _settings(), fetch=fetch)

        assert _INDEX_A in discovery.links
        assert _INDEX_A not in discovery.cache
        assert list(discovery.cache) == [_INDEX_B]
        assert _CHUNK_2 in discovery.links
        assert discovery.errors == ["multi-search-a.js: HTTP 404"]

    def test_no_index_links_returns_empty_discovery(self, capsys) -> None:
        fetch = FakeFetch({})
        discovery = discover("<head><title>Access denied</title></head>", _settings(), fetch=fetch)

        assert len(discovery.links) == 0
        assert discovery.cache == {}
        assert fetch.calls == []
        assert "No multi-search JS files found" in capsys.readouterr().out

    def test_debug_dumps_html_when_nothing_found(self, capsys) -> None:
        discover("<head>blocked-marker</head>", _settings(debug=True), fetch=FakeFetch({}))
        assert "blocked-marker" in capsys.readouterr().out
