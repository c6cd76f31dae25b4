"""Fetch scheduling policies for the remaining-link phase of a scan.

Two policies share one interface, ``fetch_all(urls, fetch, should_stop)``,
which yields a :class:`FetchOutcome` per fetched link in link order:

  * ``SequentialSchedule`` — one request at a time with a randomised
    human-paced pause between requests.  The default.
  * ``ConcurrentSchedule`` — batches of requests in a thread pool, no pause.

Both consult ``should_stop`` before issuing any new request, so a scan that
has resolved every token kind stops generating traffic immediately.
"""

from __future__ import annotations

import random
import time
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterator, Sequence

from shascan.config import Settings
from shascan.scraper.models import FetchOutcome

FetchOne = Callable[[str], FetchOutcome]
StopCheck = Callable[[], bool]


class FetchSchedule(ABC):
    """Abstract base class for a fetch-scheduling policy."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable policy name."""

    @abstractmethod
    def fetch_all(
        self,
        urls: Sequence[str],
        fetch: FetchOne,
        should_stop: StopCheck,
    ) -> Iterator[FetchOutcome]:
        """Yield outcomes for *urls* until exhausted or ``should_stop()`` is true."""


class SequentialSchedule(FetchSchedule):
    """Fetch one link at a time, sleeping a random delay between requests."""

    def __init__(self, delay_min: float = 2.0, delay_max: float = 4.0) -> None:
        self.delay_min = delay_min
        self.delay_max = max(delay_min, delay_max)

    @property
    def name(self) -> str:
        return "sequential"

    def fetch_all(
        self,
        urls: Sequence[str],
        fetch: FetchOne,
        should_stop: StopCheck,
    ) -> Iterator[FetchOutcome]:
        for i, url in enumerate(urls):
            if should_stop():
                return
            if i > 0:
                time.sleep(random.uniform(self.delay_min, self.delay_max))
            print(f"[scan] Processing file {i + 1}/{len(urls)}")
            yield fetch(url)


class ConcurrentSchedule(FetchSchedule):
    """Fetch links in parallel batches of ``batch_size`` with no pause."""

    def __init__(self, batch_size: int = 4) -> None:
        self.batch_size = max(1, batch_size)

    @property
    def name(self) -> str:
        return "concurrent"

    def fetch_all(
        self,
        urls: Sequence[str],
        fetch: FetchOne,
        should_stop: StopCheck,
    ) -> Iterator[FetchOutcome]:
        for start in range(0, len(urls), self.batch_size):
            if should_stop():
                return
            batch = list(urls[start:start + self.batch_size])
            print(
                f"[scan] Fetching batch of {len(batch)} "
                f"({start + 1}-{start + len(batch)}/{len(urls)})"
            )
            with ThreadPoolExecutor(max_workers=len(batch)) as pool:
                futures = [pool.submit(fetch, url) for url in batch]
                # Yield in link order so first-match-wins stays deterministic.
                outcomes = [future.result() for future in futures]
            yield from outcomes


def build_schedule(settings: Settings) -> FetchSchedule:
    """Return the policy named by ``settings.fetch_mode``."""
    mode = settings.fetch_mode.strip().lower()
    if mode == "sequential":
        return SequentialSchedule(settings.fetch_delay_min, settings.fetch_delay_max)
    if mode == "concurrent":
        return ConcurrentSchedule(settings.fetch_concurrency)
    raise ValueError(
        f"Unknown fetch mode {settings.fetch_mode!r}. Use: sequential | concurrent"
    )
