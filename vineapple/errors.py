"""Error taxonomy for the Vine API client."""

from __future__ import annotations

import json
from typing import Any, Optional


class VineappleError(Exception):
    """Base class for every error raised by this package."""


class InvalidCredentialsError(VineappleError, ValueError):
    """Raised synchronously by login() before any network activity."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Invalid credentials. Missing {field}.")


class NotAuthenticatedError(VineappleError):
    """Raised synchronously by endpoints that address the signed-in user."""


class InvalidRequestError(VineappleError, ValueError):
    """A path or request options could not be turned into a request descriptor."""


class TransportError(VineappleError):
    """The network exchange itself failed (DNS, connection, transport timeout)."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(f"{type(cause).__name__}: {cause}")


class ParseError(VineappleError):
    """The response body was not valid JSON after identifier repair."""

    def __init__(self, cause: BaseException, body: str = "") -> None:
        self.cause = cause
        self.body = body
        super().__init__(f"Invalid JSON response: {cause}")


class ApiError(VineappleError):
    """The service's envelope reported an error; `error` holds it verbatim."""

    def __init__(self, error: Any, *, status_code: Optional[int] = None) -> None:
        self.error = error
        self.status_code = status_code
        super().__init__(_render(error))


def _render(error: Any) -> str:
    if isinstance(error, str):
        return error
    try:
        return json.dumps(error, sort_keys=True)
    except (TypeError, ValueError):
        return str(error)
