"""HTTP transport used by the request pipeline."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import requests

from vineapple.config import TIMEOUT_SECONDS
from vineapple.errors import TransportError

if TYPE_CHECKING:
    from vineapple.pipeline import RequestDescriptor


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    text: str


@runtime_checkable
class Transport(Protocol):
    """
    Performs one HTTP exchange for the request pipeline.

    Implementations receive a fully built descriptor (absolute url, merged headers)
    and must raise TransportError when the exchange itself fails. They must not keep
    state between exchanges (cookies included): the session header is the only
    authorization the service sees.
    """

    async def exchange(self, descriptor: "RequestDescriptor") -> TransportResponse: ...


class RequestsTransport:
    """
    requests-backed transport.

    Every exchange is a standalone requests.request() call run in a worker thread
    (asyncio.to_thread), so the event loop is never blocked, nothing is shared
    between concurrent exchanges, and no cookie set by the service is replayed.
    Failures raised by requests surface as TransportError with the original
    exception as `cause`.
    """

    def __init__(self, *, timeout: float = TIMEOUT_SECONDS) -> None:
        self.timeout = timeout

    def _request(self, descriptor: "RequestDescriptor") -> TransportResponse:
        response = requests.request(
            descriptor.method,
            descriptor.url,
            headers=descriptor.headers,
            params=descriptor.qs or None,
            data=descriptor.form or None,
            timeout=self.timeout,
        )
        return TransportResponse(status_code=response.status_code, text=response.text)

    async def exchange(self, descriptor: "RequestDescriptor") -> TransportResponse:
        try:
            return await asyncio.to_thread(self._request, descriptor)
        except requests.exceptions.RequestException as e:
            raise TransportError(e) from e
