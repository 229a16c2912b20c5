from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import httpx
import pytest

from report_console.application import JobListPoller
from report_console.core.errors import TransportError
from report_console.core.schema import ReportJob
from report_console.infrastructure import ReportServiceClient


def _job(job_id: str, minute: int) -> ReportJob:
    return ReportJob(id=job_id, status="pending", createdAt=datetime(2024, 1, 1, 12, minute, tzinfo=timezone.utc))


def test_results_are_resorted_after_fetch():
    async def fetcher() -> list[ReportJob]:
        return [_job("a", 1), _job("c", 3), _job("b", 2)]

    async def scenario() -> JobListPoller:
        poller = JobListPoller(fetcher)
        assert poller.is_loading
        await poller.poll_once()
        return poller

    poller = asyncio.run(scenario())

    assert [job.id for job in poller.jobs] == ["c", "b", "a"]
    assert not poller.is_loading
    assert not poller.is_stale


def test_overlapping_tick_is_coalesced():
    calls: list[int] = []

    async def scenario() -> tuple[bool, int]:
        gate = asyncio.Event()

        async def fetcher() -> list[ReportJob]:
            calls.append(1)
            await gate.wait()
            return [_job("a", 1)]

        poller = JobListPoller(fetcher)
        first = asyncio.create_task(poller.poll_once())
        await asyncio.sleep(0)
        assert poller.is_fetching
        skipped = await poller.poll_once()
        gate.set()
        await first
        return skipped, poller.fetch_count

    skipped, fetch_count = asyncio.run(scenario())

    assert skipped is False
    assert fetch_count == 1
    assert len(calls) == 1


def test_invalidate_waits_for_in_flight_fetch_then_refetches():
    async def scenario() -> list[str]:
        gate = asyncio.Event()
        responses = [[_job("old", 1)], [_job("old", 1), _job("new", 5)]]

        async def fetcher() -> list[ReportJob]:
            result = responses.pop(0)
            if len(responses) == 1:
                await gate.wait()
            return result

        poller = JobListPoller(fetcher)
        tick = asyncio.create_task(poller.poll_once())
        await asyncio.sleep(0)
        refresh = asyncio.create_task(poller.invalidate())
        await asyncio.sleep(0)
        gate.set()
        await tick
        await refresh
        return [job.id for job in poller.jobs]

    assert asyncio.run(scenario()) == ["new", "old"]


def test_failed_poll_keeps_previous_list():
    async def scenario() -> JobListPoller:
        outcomes: list[object] = [[_job("a", 1)], TransportError("down", status_code=500)]

        async def fetcher() -> list[ReportJob]:
            outcome = outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        poller = JobListPoller(fetcher)
        await poller.poll_once()
        await poller.poll_once()
        return poller

    poller = asyncio.run(scenario())

    assert [job.id for job in poller.jobs] == ["a"]
    assert isinstance(poller.last_error, TransportError)
    assert poller.last_error.status_code == 500


def test_loop_polls_on_interval_until_stopped():
    async def scenario() -> tuple[int, bool]:
        async def fetcher() -> list[ReportJob]:
            return []

        poller = JobListPoller(fetcher, interval=0.01)
        poller.start()
        await asyncio.sleep(0.05)
        running = poller.is_running
        await poller.stop()
        count = poller.fetch_count
        await asyncio.sleep(0.03)
        assert poller.fetch_count == count
        return count, running

    count, running = asyncio.run(scenario())

    assert running
    assert count >= 2


def test_interval_must_be_positive():
    async def fetcher() -> list[ReportJob]:
        return []

    with pytest.raises(ValueError):
        JobListPoller(fetcher, interval=0)


def test_failed_poll_marks_list_stale():
    async def scenario() -> tuple[bool, bool]:
        outcomes: list[object] = [[_job("a", 1)], TransportError("down", status_code=502)]

        async def fetcher() -> list[ReportJob]:
            outcome = outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        poller = JobListPoller(fetcher)
        await poller.poll_once()
        fresh = poller.is_stale
        await poller.poll_once()
        return fresh, poller.is_stale

    fresh, stale = asyncio.run(scenario())

    assert fresh is False
    assert stale is True


def test_loop_survives_unexpected_tick_failure():
    async def scenario() -> tuple[bool, int, list[str]]:
        outcomes: list[object] = [RuntimeError("unexpected"), TransportError("bad body", status_code=200)]

        async def fetcher() -> list[ReportJob]:
            if outcomes:
                outcome = outcomes.pop(0)
                raise outcome
            return [_job("a", 1)]

        poller = JobListPoller(fetcher, interval=0.01)
        poller.start()
        await asyncio.sleep(0.1)
        running = poller.is_running
        await poller.stop()
        return running, poller.fetch_count, [job.id for job in poller.jobs]

    running, fetch_count, ids = asyncio.run(scenario())

    assert running
    assert fetch_count > 2
    assert ids == ["a"]


def test_loop_survives_non_json_list_response():
    responses = [httpx.Response(200, text="<html>proxy error</html>")]

    def handler(request: httpx.Request) -> httpx.Response:
        if responses:
            return responses.pop(0)
        return httpx.Response(200, json=[])

    async def scenario() -> tuple[bool, int, bool]:
        client = ReportServiceClient(
            "http://reports.test",
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        poller = JobListPoller(client.list_reports, interval=0.01)
        poller.start()
        await asyncio.sleep(0.1)
        running = poller.is_running
        await poller.stop()
        return running, poller.fetch_count, poller.is_loading

    running, fetch_count, loading = asyncio.run(scenario())

    assert running
    assert fetch_count > 1
    assert not loading
