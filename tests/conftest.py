"""
Pytest config.

Pins the repo root on sys.path so `import vineapple` works without an install, and
provides an in-memory transport that records every exchange.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, List, Optional, Union


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()

import pytest  # noqa: E402

from vineapple.client import Vineapple  # noqa: E402
from vineapple.config import ClientConfig, load_client_config  # noqa: E402
from vineapple.transport import TransportResponse  # noqa: E402


class FakeTransport:
    """Replays queued responses (or raises queued exceptions) and records requests."""

    def __init__(self) -> None:
        self.calls: List[Any] = []
        self._queue: List[Union[TransportResponse, BaseException]] = []

    def reply(self, body: Union[str, dict], status: int = 200) -> "FakeTransport":
        text = body if isinstance(body, str) else json.dumps(body)
        self._queue.append(TransportResponse(status_code=status, text=text))
        return self

    def fail(self, exc: BaseException) -> "FakeTransport":
        self._queue.append(exc)
        return self

    async def exchange(self, descriptor: Any) -> TransportResponse:
        self.calls.append(descriptor)
        item: Optional[Union[TransportResponse, BaseException]] = self._queue.pop(0) if self._queue else None
        if item is None:
            return TransportResponse(status_code=200, text='{"data":null}')
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture(autouse=True)
def _fresh_env_config():
    load_client_config.cache_clear()
    yield
    load_client_config.cache_clear()


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_origin="https://vine.test/")


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(config: ClientConfig, transport: FakeTransport) -> Vineapple:
    return Vineapple(config=config, transport=transport)


@pytest.fixture
def signed_in(config: ClientConfig, transport: FakeTransport) -> Vineapple:
    return Vineapple(
        {"key": "sess-1", "userId": "906345798374060032", "username": "dave"},
        config=config,
        transport=transport,
    )
