"""
HTTP Utilities

Instrumented httpx client shared by the outbound API integrations.
Errors are recorded and re-raised; nothing is retried or translated.
"""

import logging
import time
from typing import Optional

import httpx

from vulnreport.core.metrics import (
    external_api_duration_seconds,
    external_api_errors_total,
    external_api_requests_total,
)

logger = logging.getLogger(__name__)


class InstrumentedAsyncClient:
    """
    A wrapper around httpx.AsyncClient that automatically records metrics.

    Usage:
        async with InstrumentedAsyncClient("GitLab API", base_url=url, timeout=30.0) as client:
            response = await client.get("/api/v4/projects/1/pipelines")

    Extra keyword arguments (base_url, headers, transport, ...) are passed
    to httpx.AsyncClient.
    """

    def __init__(
        self,
        service_name: str,
        timeout: float = 30.0,
        **kwargs,
    ):
        self.service_name = service_name
        self._client: Optional[httpx.AsyncClient] = None
        self._timeout = timeout
        self._kwargs = kwargs
        self._NOT_STARTED_MSG = "Client not started. Use 'async with' or call start()."

    @property
    def is_started(self) -> bool:
        return self._client is not None

    async def start(self) -> None:
        """Start the underlying client (for long-lived usage)."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, **self._kwargs)

    async def close(self) -> None:
        """Close the underlying client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "InstrumentedAsyncClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _record_request(self) -> None:
        external_api_requests_total.labels(service=self.service_name).inc()

    def _record_success(self, duration: float) -> None:
        external_api_duration_seconds.labels(service=self.service_name).observe(duration)

    def _record_error(self) -> None:
        external_api_errors_total.labels(service=self.service_name).inc()

    async def get(self, url: str, **kwargs) -> httpx.Response:
        """
        Make a GET request with metrics.

        Non-2xx responses raise httpx.HTTPStatusError.
        """
        if self._client is None:
            raise RuntimeError(self._NOT_STARTED_MSG)

        start_time = time.time()
        self._record_request()
        logger.debug(f"GET {url} ({self.service_name})")
        try:
            response = await self._client.get(url, **kwargs)
            response.raise_for_status()
            self._record_success(time.time() - start_time)
            return response
        except httpx.HTTPError as e:
            self._record_error()
            logger.warning(f"{self.service_name} request GET {url} failed: {e}")
            raise
