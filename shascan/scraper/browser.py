"""Headless browser loader for the root page.

The target page only lists its script bundles once rendered, and the site
rejects obvious automation, so the page is loaded in Chromium with a desktop
viewport, a realistic user agent and ``navigator.webdriver`` hidden.
"""

from __future__ import annotations

import random

from shascan.config import Settings, settings as default_settings

_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-blink-features=AutomationControlled",
    "--disable-dev-shm-usage",
]

_EXTRA_HEADERS = {
    "Accept-Language": "en-US,en;q=0.9",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "DNT": "1",
    "Upgrade-Insecure-Requests": "1",
}

_HIDE_WEBDRIVER = (
    "Object.defineProperty(navigator, 'webdriver', { get: () => undefined });"
)


class PageLoadError(RuntimeError):
    """Raised when the browser cannot produce the root page."""


def head_section(html: str) -> str:
    """Return the part of *html* before ``</head>``, or all of it when absent."""
    return html.split("</head>", 1)[0] or html


def load_root_html(settings: Settings | None = None) -> str:
    """Render ``settings.target_url`` and return its ``<head>`` markup.

    Playwright is imported lazily so the rest of the package (and the test
    suite) does not need a browser installed.

    Raises:
        PageLoadError: If the browser fails to launch or navigate.
    """
    from playwright.sync_api import Error as PlaywrightError  # noqa: PLC0415
    from playwright.sync_api import sync_playwright  # noqa: PLC0415

    cfg = settings or default_settings
    print(f"[browser] Opening {cfg.target_url} …")

    try:
        with sync_playwright() as pw:
            browser = pw.chromium.launch(
                headless=True,
                args=_LAUNCH_ARGS,
                executable_path=cfg.chromium_path,
            )
            try:
                context = browser.new_context(
                    viewport={"width": cfg.viewport_width, "height": cfg.viewport_height},
                    user_agent=cfg.browser_user_agent,
                    extra_http_headers=_EXTRA_HEADERS,
                )
                context.add_init_script(_HIDE_WEBDRIVER)
                page = context.new_page()
                page.goto(
                    cfg.target_url,
                    wait_until="networkidle",
                    timeout=int(cfg.browser_timeout * 1000),
                )
                if cfg.debug:
                    print(f"[browser] Current URL: {page.url}")

                settle = random.uniform(cfg.browser_settle_min, cfg.browser_settle_max)
                page.wait_for_timeout(int(settle * 1000))
                html = page.content()
                final_url = page.url
            finally:
                browser.close()
    except PlaywrightError as exc:
        raise PageLoadError(f"Could not load {cfg.target_url}: {exc}") from exc

    head = head_section(html)
    if len(head) < cfg.short_html_threshold:
        print("[browser] ⚠️  Received very short HTML response - possible bot detection")
        print(f"[browser] First 500 chars: {head[:500]}")

    if cfg.debug:
        cfg.debug_html_path.write_text(html, encoding="utf-8")
        print(f"[browser] Full page saved to {cfg.debug_html_path}")
        print(f"[browser] Final URL: {final_url}")

    return head
