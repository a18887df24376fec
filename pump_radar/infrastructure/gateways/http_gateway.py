import logging
from typing import Any, Dict, List, Optional

import httpx

from pump_radar.core.exceptions import UpstreamRateLimited, UpstreamUnavailable

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class HttpJsonGateway:
    """
    Shared GET-and-decode plumbing for the public market APIs.
    One short-lived AsyncClient per call; `transport` is injectable so
    tests can answer without the network.
    """
    source = "http"

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.transport = transport

    async def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                return await client.get(url, params=params)
        except httpx.TimeoutException as e:
            logger.error(f"[{self.source}] Timeout after {self.timeout}s: {url}")
            raise UpstreamUnavailable(f"{self.source} request timed out: {e}", self.source) from e
        except httpx.HTTPError as e:
            logger.error(f"[{self.source}] Request error: {e}")
            raise UpstreamUnavailable(f"{self.source} request failed: {e}", self.source) from e

    def _decode(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"[{self.source}] Non-JSON body (HTTP {response.status_code})")
            raise UpstreamUnavailable(
                f"{self.source} returned a non-JSON body (HTTP {response.status_code})", self.source
            ) from e

    async def _get_records(
        self, url: str, params: Optional[Dict[str, Any]] = None, records_key: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Fetches a record list that arrives either as a bare JSON array or
        under `records_key` of a JSON object.
        """
        response = await self._get(url, params)
        if response.status_code == 429:
            logger.warning(f"[{self.source}] Rate limited (HTTP 429)")
            raise UpstreamRateLimited(f"{self.source} rate limit exceeded", self.source)

        data = self._decode(response)
        if records_key is not None and isinstance(data, dict):
            data = data.get(records_key)

        logger.info(
            f"[{self.source}] HTTP {response.status_code}, "
            f"records={len(data) if isinstance(data, list) else 0}"
        )
        if not isinstance(data, list):
            logger.warning(f"[{self.source}] Unexpected payload shape: {type(data).__name__}")
            return []
        return data
