"""HTTP client for the external report service."""
from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote, urlparse

import httpx
from pydantic import ValidationError as SchemaError

from report_console.core.errors import ReportServiceError, TransportError, ValidationError
from report_console.core.schema import CurrentUser, CurrentUserEnvelope, ReportJob, sort_newest_first

logger = logging.getLogger(__name__)


class ReportServiceClient:
    """Async client for the report job endpoints of the report service."""

    def __init__(
        self,
        api_base: str,
        *,
        session_cookie: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        parsed = urlparse(api_base)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("api_base must include scheme and host")

        self._api_base = api_base.rstrip("/")
        self._headers: dict[str, str] = {"Accept": "application/json"}
        if session_cookie:
            self._headers["Cookie"] = session_cookie

        if http_client is None:
            client_kwargs: dict[str, Any] = {}
            if timeout is not None:
                client_kwargs["timeout"] = timeout
            http_client = httpx.AsyncClient(**client_kwargs)
            self._owns_client = True
        else:
            self._owns_client = False
        self._client = http_client

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    def _url(self, path: str) -> str:
        return f"{self._api_base}{path}"

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, self._url(path), headers=self._headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("report service %s %s failed: %s", method, path, exc)
            raise TransportError(f"Rapor servisine ulaşılamadı: {exc}") from exc

    @staticmethod
    def _error_message(response: httpx.Response) -> str | None:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict):
            message = body.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return None

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            logger.warning("report service returned a non-JSON body: status=%s", response.status_code)
            raise TransportError(
                f"Rapor servisi geçersiz yanıt döndü: {response.status_code}",
                status_code=response.status_code,
            ) from exc

    @staticmethod
    def _parse_job(data: Any) -> ReportJob:
        try:
            return ReportJob.model_validate(data)
        except SchemaError as exc:
            raise TransportError(f"Rapor verisi okunamadı: {exc.error_count()} hata") from exc

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------
    async def list_reports(self) -> list[ReportJob]:
        response = await self._request("GET", "/api/reports")
        if not response.is_success:
            raise TransportError(
                f"Raporlar alınamadı: {response.status_code}",
                status_code=response.status_code,
            )
        payload = self._json(response)
        if not isinstance(payload, list):
            raise TransportError("Rapor listesi beklenmeyen biçimde döndü", status_code=response.status_code)
        return sort_newest_first([self._parse_job(item) for item in payload])

    async def create_report(self, payload: dict[str, Any]) -> dict[str, Any]:
        logger.debug("creating report job: %s", payload)
        response = await self._request("POST", "/api/reports", json=payload)
        if not response.is_success:
            message = self._error_message(response)
            logger.error(
                "report creation rejected: status=%s message=%s",
                response.status_code,
                message,
            )
            if response.is_client_error and message:
                raise ValidationError(message, status_code=response.status_code)
            raise TransportError(
                f"Rapor oluşturulamadı: {response.status_code}",
                status_code=response.status_code,
            )

        result = self._json(response)
        logger.info("report job created: %s", result.get("id") if isinstance(result, dict) else result)
        return result

    async def fetch_report(self, job_id: str) -> ReportJob:
        response = await self._request("GET", f"/api/reports/{quote(job_id, safe='')}")
        if not response.is_success:
            raise TransportError(
                f"Rapor detayları alınamadı: {response.status_code}",
                status_code=response.status_code,
            )
        return self._parse_job(self._json(response))

    async def fetch_current_user(self) -> CurrentUser:
        response = await self._request("GET", "/api/current-user")
        if not response.is_success:
            raise TransportError(
                f"Kullanıcı alınamadı: {response.status_code}",
                status_code=response.status_code,
            )
        body = self._json(response)
        try:
            envelope = CurrentUserEnvelope.model_validate(body)
        except SchemaError as exc:
            raise TransportError("Kullanıcı yanıtı okunamadı") from exc
        if not envelope.success or envelope.data is None:
            raise ReportServiceError(envelope.message or "Kullanıcı alınamadı")
        return envelope.data

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = ["ReportServiceClient"]
