"""
httpx-backed walletd client.

The Authorization header and the timeout are fixed when the client is built.
The timeout bounds each httpx phase and the call as a whole. ``NativeClient.new``
also pings the node once so a wrong URL or password fails at construction.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import Optional

import httpx

from sia_client.config import ClientConf
from sia_client.errors import (
    ApiTimeoutError,
    BuildError,
    NodeUnreachableError,
    TransportError,
)
from sia_client.sia_api.client import ApiClient, ApiClientHelpers
from sia_client.sia_api.endpoints import ConsensusTipRequest
from sia_client.sia_api.schema import EndpointSchema

logger = logging.getLogger(__name__)


def build_auth_header(password: str) -> str:
    """Return ``Basic base64(":" + password)``; walletd ignores the user name."""
    if not isinstance(password, str):
        raise BuildError("API password must be a string.")
    try:
        credential = f":{password}".encode("utf-8")
    except UnicodeEncodeError as exc:
        raise BuildError("API password contains characters that cannot be encoded.") from exc
    return "Basic " + base64.b64encode(credential).decode("ascii")


def _parse_base_url(raw: str) -> httpx.URL:
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError) as exc:
        raise BuildError(f"Invalid base URL: {raw!r}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise BuildError(f"Base URL must be an absolute http(s) URL: {raw!r}")
    return url


class NativeClient(ApiClient[httpx.Request, httpx.Response], ApiClientHelpers):
    """Async walletd client; safe to share between concurrent tasks."""

    def __init__(
        self,
        conf: ClientConf,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = _parse_base_url(conf.url)
        self.timeout = conf.effective_timeout
        headers = {"Authorization": build_auth_header(conf.password)}
        self._client = httpx.AsyncClient(
            headers=headers,
            timeout=httpx.Timeout(self.timeout),
            transport=transport,
        )

    @classmethod
    async def new(
        cls,
        conf: ClientConf,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "NativeClient":
        """Build a client and confirm the node answers the consensus tip request."""
        client = cls(conf, transport=transport)
        try:
            await client.dispatch(ConsensusTipRequest())
        except BaseException:
            await client.aclose()
            raise
        logger.debug("walletd client ready for %s", client.base_url)
        return client

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "NativeClient":
        return self

    async def __aexit__(self, *_exc_info) -> None:
        await self.aclose()

    def process_schema(self, schema: EndpointSchema) -> httpx.Request:
        url = schema.build_url(self.base_url)
        if schema.body is None:
            return self._client.build_request(schema.method.value, url)
        return self._client.build_request(schema.method.value, url, json=schema.body)

    async def execute_request(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        try:
            return await asyncio.wait_for(self._client.send(request), self.timeout)
        except asyncio.TimeoutError as exc:
            raise ApiTimeoutError(f"Request exceeded the {self.timeout}s deadline", url=url) from exc
        except httpx.TimeoutException as exc:
            raise ApiTimeoutError(f"Request timed out after {self.timeout}s", url=url) from exc
        except httpx.ConnectError as exc:
            raise NodeUnreachableError("Node unreachable", url=url) from exc
        except httpx.RequestError as exc:
            raise TransportError(f"Transport error: {exc}", url=url) from exc

    def status_code_of(self, response: httpx.Response) -> int:
        return response.status_code

    def response_body(self, response: httpx.Response) -> bytes:
        return response.content

    def url_of(self, request: httpx.Request) -> Optional[str]:
        return str(request.url)
