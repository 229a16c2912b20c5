"""Periodically refreshed view of the report job list."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable

from report_console.core.errors import ReportServiceError
from report_console.core.schema import ReportJob, sort_newest_first

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0

Fetcher = Callable[[], Awaitable[list[ReportJob]]]


class JobListPoller:
    """Keeps the job list fresh on a fixed interval.

    A tick that finds a fetch already in flight is skipped. ``invalidate``
    waits for any in-flight fetch and then always fetches again, so callers
    see state that is newer than their own mutation.
    """

    def __init__(self, fetcher: Fetcher, *, interval: float = DEFAULT_POLL_INTERVAL) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._fetcher = fetcher
        self._interval = interval
        self._lock = asyncio.Lock()
        self._task: asyncio.Task[None] | None = None
        self._jobs: list[ReportJob] = []
        self._stale = True
        self.last_error: ReportServiceError | None = None
        self.last_updated: datetime | None = None
        self.fetch_count = 0

    # ------------------------------------------------------------------
    # cache state
    # ------------------------------------------------------------------
    @property
    def jobs(self) -> list[ReportJob]:
        return list(self._jobs)

    @property
    def is_loading(self) -> bool:
        return self.last_updated is None

    @property
    def is_stale(self) -> bool:
        return self._stale

    @property
    def is_fetching(self) -> bool:
        return self._lock.locked()

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    # ------------------------------------------------------------------
    # fetching
    # ------------------------------------------------------------------
    async def _fetch(self) -> None:
        self.fetch_count += 1
        try:
            jobs = await self._fetcher()
        except ReportServiceError as exc:
            self.last_error = exc
            self._stale = True
            logger.warning("job list refresh failed, keeping previous list: %s", exc.message)
            return
        self._jobs = sort_newest_first(jobs)
        self._stale = False
        self.last_error = None
        self.last_updated = datetime.now(timezone.utc)

    async def poll_once(self) -> bool:
        """Run one polling cycle; returns ``False`` when coalesced."""

        if self._lock.locked():
            logger.debug("job list fetch still in flight, skipping tick")
            return False
        async with self._lock:
            await self._fetch()
        return True

    async def invalidate(self) -> None:
        self._stale = True
        async with self._lock:
            await self._fetch()

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    async def _run(self, immediate: bool) -> None:
        if not immediate:
            await asyncio.sleep(self._interval)
        while True:
            try:
                await self.poll_once()
            except Exception:
                # one bad tick must not end polling; the next tick retries
                logger.exception("job list poll tick failed")
            await asyncio.sleep(self._interval)

    def start(self, *, immediate: bool = True) -> None:
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(immediate), name="report-job-poller")
        logger.info("job list polling started every %.1fs", self._interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("job list polling stopped")


__all__ = ["DEFAULT_POLL_INTERVAL", "JobListPoller"]
