"""HTTP fetcher for JavaScript assets, with timeout and exponential backoff."""

from __future__ import annotations

import time

import httpx

from shascan.config import Settings, settings as default_settings
from shascan.scraper.models import FetchOutcome

# ---------------------------------------------------------------------------
# Browser-like request headers
# ---------------------------------------------------------------------------
# Asset hosts sit behind bot protection that rejects bare HTTP clients, so
# every request carries the header set of a desktop Edge navigation.
_ASSET_HEADERS = {
    "accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,"
        "image/webp,image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7"
    ),
    "accept-language": "en-CA,en;q=0.9,fr;q=0.8,en-US;q=0.7",
    "cache-control": "no-cache",
    "dnt": "1",
    "pragma": "no-cache",
    "priority": "u=0, i",
    "sec-ch-ua": '"Not)A;Brand";v="8", "Chromium";v="138", "Microsoft Edge";v="138"',
    "sec-ch-ua-mobile": "?0",
    "sec-ch-ua-platform": '"Windows"',
    "sec-fetch-dest": "document",
    "sec-fetch-mode": "navigate",
    "sec-fetch-site": "none",
    "sec-fetch-user": "?1",
    "upgrade-insecure-requests": "1",
    "user-agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/138.0.0.0 Safari/537.36 Edg/138.0.0.0"
    ),
}


def asset_name(url: str) -> str:
    """Return the last path segment of *url*, used to keep log lines short."""
    return url.rstrip("/").rsplit("/", 1)[-1] or url


def _describe(exc: Exception, timeout: float) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return f"HTTP {exc.response.status_code}"
    if isinstance(exc, httpx.TimeoutException):
        return f"timed out after {timeout:g}s"
    return str(exc) or type(exc).__name__


def _get_text(url: str, timeout: float) -> str:
    # The client timeout bounds each connect/read step; the deadline bounds
    # the whole request.
    deadline = time.monotonic() + timeout
    with httpx.Client(
        headers=_ASSET_HEADERS,
        timeout=timeout,
        follow_redirects=True,
    ) as client:
        with client.stream("GET", url) as response:
            response.raise_for_status()
            parts: list[str] = []
            for part in response.iter_text():
                if time.monotonic() > deadline:
                    raise httpx.ReadTimeout(
                        f"request exceeded {timeout:g}s", request=response.request
                    )
                parts.append(part)
            return "".join(parts)


def fetch_asset(url: str, settings: Settings | None = None) -> FetchOutcome:
    """Fetch *url* and return a :class:`FetchOutcome`.

    Each attempt is bounded by ``settings.request_timeout``.  A timeout, a
    transport error or a non-2xx status fails the attempt; after failed
    attempt ``n`` the fetcher sleeps ``retry_backoff_factor * 2**n`` seconds
    before trying again.  Once ``fetch_max_attempts`` attempts have failed the
    outcome carries an error message instead of text.  Never raises.
    """
    cfg = settings or default_settings
    name = asset_name(url)
    max_attempts = max(1, cfg.fetch_max_attempts)
    message = "max retries exceeded"

    for attempt in range(1, max_attempts + 1):
        print(f"[fetch] {name} (attempt {attempt}/{max_attempts})")
        try:
            text = _get_text(url, cfg.request_timeout)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            message = _describe(exc, cfg.request_timeout)
            print(f"[fetch] ✗ attempt {attempt} failed for {name}: {message}")
            if attempt < max_attempts:
                delay = cfg.retry_backoff_factor * (2 ** attempt)
                print(f"[fetch]   retrying in {delay:g}s …")
                time.sleep(delay)
            continue

        print(f"[fetch] ✓ {name} ({round(len(text) / 1024)}KB)")
        return FetchOutcome(url=url, text=text)

    return FetchOutcome(url=url, error=f"{name}: {message}")
