from __future__ import annotations

import json
import sys
from pathlib import Path

import httpx
import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))


class FakeReportService:
    """In-memory stand-in for the report service behind ``httpx.MockTransport``."""

    def __init__(self) -> None:
        self.jobs: list[dict] = []
        self.user: dict | None = {"id": "user-1", "role": "admin", "username": "operator"}
        self.created_bodies: list[dict] = []
        self.requests: list[tuple[str, str]] = []
        self.create_error: tuple[int, object] | None = None
        self.list_status = 200
        self.user_status = 200
        self.html_responses: set[tuple[str, str]] = set()
        self._counter = 0

    def add_job(self, job_id: str, created_at: str, *, status: str = "pending", **extra: object) -> dict:
        job = {
            "id": job_id,
            "status": status,
            "createdBy": "user-1",
            "createdByUsername": "operator",
            "createdAt": created_at,
            "updatedAt": created_at,
        }
        job.update(extra)
        self.jobs.append(job)
        return job

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append((request.method, path))

        if (request.method, path) in self.html_responses:
            return httpx.Response(200, text="<html>proxy error</html>")

        if path == "/api/current-user":
            if self.user_status != 200:
                return httpx.Response(self.user_status, json={"message": "unavailable"})
            if self.user is None:
                return httpx.Response(200, json={"success": False, "message": "Oturum yok"})
            return httpx.Response(200, json={"success": True, "data": self.user})

        if path == "/api/reports" and request.method == "GET":
            if self.list_status != 200:
                return httpx.Response(self.list_status, json={"message": "boom"})
            return httpx.Response(200, json=self.jobs)

        if path == "/api/reports" and request.method == "POST":
            body = json.loads(request.content.decode("utf-8"))
            self.created_bodies.append(body)
            if self.create_error is not None:
                status, error_body = self.create_error
                if isinstance(error_body, str):
                    return httpx.Response(status, text=error_body)
                return httpx.Response(status, json=error_body)
            self._counter += 1
            job = self.add_job(f"new-job-{self._counter:04d}-abcdef", f"2030-01-01T00:00:{self._counter:02d}Z")
            return httpx.Response(201, json=job)

        if path.startswith("/api/reports/"):
            job_id = path.rsplit("/", 1)[-1]
            for job in self.jobs:
                if job["id"] == job_id:
                    return httpx.Response(200, json=job)
            return httpx.Response(404, json={"message": "not found"})

        return httpx.Response(404)


@pytest.fixture()
def service() -> FakeReportService:
    return FakeReportService()


@pytest.fixture()
def transport(service: FakeReportService) -> httpx.MockTransport:
    return httpx.MockTransport(service.handler)
