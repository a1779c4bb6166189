"""
Client for the (undocumented) Vine HTTP API.

Every call goes through one request pipeline that attaches the session header,
protects large numeric ids from precision loss, and unwraps the service's
{data, error} envelope.
"""

from vineapple.callbacks import drain
from vineapple.client import Vineapple
from vineapple.config import ClientConfig, load_client_config
from vineapple.errors import (
    ApiError,
    InvalidCredentialsError,
    InvalidRequestError,
    NotAuthenticatedError,
    ParseError,
    TransportError,
    VineappleError,
)
from vineapple.session import Session

login = Vineapple.sign_in

__all__ = [
    "ApiError",
    "ClientConfig",
    "InvalidCredentialsError",
    "InvalidRequestError",
    "NotAuthenticatedError",
    "ParseError",
    "Session",
    "TransportError",
    "Vineapple",
    "VineappleError",
    "drain",
    "load_client_config",
    "login",
]
