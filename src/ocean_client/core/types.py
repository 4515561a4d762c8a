"""Core data types shared between the gate and request implementations.

Responses are immutable once built. The gate only ever reads the status code
and headers; the body is carried through untouched.
"""

from __future__ import annotations

import dataclasses
from types import MappingProxyType
import typing

T_co = typing.TypeVar("T_co", covariant=True)


def _freeze_headers(headers: typing.Mapping[str, str]) -> typing.Mapping[str, str]:
    """Return a read-only view of ``headers``.

    Case-insensitive mappings (httpx.Headers and friends) are copied into a
    plain dict, so lookups must go through ``find_header``.
    """
    if isinstance(headers, MappingProxyType):
        return headers
    return MappingProxyType(dict(headers.items()))


def find_header(headers: typing.Mapping[str, str], name: str) -> str | None:
    """Case-insensitive header lookup."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


@dataclasses.dataclass(frozen=True, slots=True)
class ResponseHead:
    """Status and headers of a completed request."""

    status_code: int
    headers: typing.Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _freeze_headers(self.headers))


@dataclasses.dataclass(frozen=True, slots=True)
class Response[T]:
    """A completed request: status, headers and a decoded body."""

    status_code: int
    headers: typing.Mapping[str, str]
    body: T

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _freeze_headers(self.headers))

    @property
    def head(self) -> ResponseHead:
        return ResponseHead(self.status_code, self.headers)

    @classmethod
    def from_parts(cls, head: ResponseHead, body: T) -> Response[T]:
        return cls(status_code=head.status_code, headers=head.headers, body=body)

    def header(self, name: str) -> str | None:
        return find_header(self.headers, name)


@typing.runtime_checkable
class PerformableRequest(typing.Protocol[T_co]):
    """A request that can be performed against the API with a credential.

    Implementations must not retry internally; the rate-limit gate owns
    retries and may call ``perform`` again with the same credential.
    """

    async def perform(self, credential: str) -> Response[T_co]:
        """Send the request authenticated with ``credential``."""
        ...
