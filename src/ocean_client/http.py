"""httpx-backed requests that the rate-limit gate can perform.

These requests only forward the credential and decode the body. They do not
retry anything; transport errors from httpx propagate to the caller.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import json
import logging
from typing import Any
from urllib.parse import urljoin

import httpx

from ocean_client.constants import DEFAULT_API_ROOT, NETWORK_TIMEOUT
from ocean_client.core.types import Response

logger = logging.getLogger(__name__)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except json.JSONDecodeError:
            logger.debug("Response claimed JSON but did not parse; returning text")
    return response.text


@dataclass(frozen=True)
class HttpRequest:
    """A single API call: method, URL, and optional JSON body.

    When ``client`` is None, each ``perform`` opens and closes its own
    ``httpx.AsyncClient``.
    """

    method: str
    url: str
    json_body: Any = None
    params: Mapping[str, str] | None = None
    client: httpx.AsyncClient | None = field(default=None, repr=False, compare=False)
    timeout: float = NETWORK_TIMEOUT

    async def perform(self, credential: str) -> Response[Any]:
        """Send this request with ``credential`` as a bearer token."""
        headers = {
            "Authorization": f"Bearer {credential}",
            "Accept": "application/json",
        }
        logger.debug("%s %s", self.method, self.url)
        if self.client is not None:
            raw = await self._send(self.client, headers)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                raw = await self._send(client, headers)
        return Response(
            status_code=raw.status_code,
            headers=dict(raw.headers.items()),
            body=_decode_body(raw),
        )

    async def _send(
        self, client: httpx.AsyncClient, headers: dict[str, str]
    ) -> httpx.Response:
        return await client.request(
            self.method,
            self.url,
            headers=headers,
            json=self.json_body,
            params=self.params,
        )


class RequestBuilder:
    """Builds ``HttpRequest``s relative to one API root."""

    def __init__(
        self,
        root: str = DEFAULT_API_ROOT,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = NETWORK_TIMEOUT,
    ) -> None:
        self.root = root if root.endswith("/") else f"{root}/"
        self._client = client
        self._timeout = timeout

    def url(self, path: str) -> str:
        return urljoin(self.root, path.lstrip("/"))

    def build(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: Mapping[str, str] | None = None,
    ) -> HttpRequest:
        return HttpRequest(
            method=method.upper(),
            url=self.url(path),
            json_body=json_body,
            params=params,
            client=self._client,
            timeout=self._timeout,
        )

    def get(self, path: str, *, params: Mapping[str, str] | None = None) -> HttpRequest:
        return self.build("GET", path, params=params)

    def post(self, path: str, json_body: Any = None) -> HttpRequest:
        return self.build("POST", path, json_body=json_body)

    def put(self, path: str, json_body: Any = None) -> HttpRequest:
        return self.build("PUT", path, json_body=json_body)

    def delete(self, path: str) -> HttpRequest:
        return self.build("DELETE", path)
