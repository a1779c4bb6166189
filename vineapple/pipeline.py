"""
Request pipeline: the single path every API call takes.

build() merges the fixed identification headers under caller overrides and adds
the session header when a credential is held; send() performs the exchange,
repairs and parses the body, and unwraps the {data, error} envelope.

Concurrency: sends are independent (no queue, dedup or rate limit). The session
credential is read once, when headers are built, so a logout that completes while
a request is in flight does not change that request, only later ones. Callers that
need login/logout ordered against other calls must serialize them themselves.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from vineapple.config import ClientConfig
from vineapple.envelope import parse_body, unwrap
from vineapple.errors import ApiError, InvalidRequestError, ParseError, TransportError
from vineapple.session import Session
from vineapple.transport import Transport

logger = logging.getLogger(__name__)


class RequestDescriptor(BaseModel):
    model_config = ConfigDict(extra="forbid")

    method: str = Field(default="GET")
    url: str
    headers: Dict[str, str] = Field(default_factory=dict)
    qs: Optional[Dict[str, Any]] = None
    form: Optional[Dict[str, Any]] = None

    @field_validator("method", mode="before")
    @classmethod
    def _method_upper(cls, v: Any) -> str:
        return (str(v or "") or "GET").strip().upper()

    @field_validator("url", mode="before")
    @classmethod
    def _url_relative(cls, v: Any) -> str:
        s = str(v or "").strip()
        if "://" in s:
            raise ValueError("url must be a path relative to the API origin")
        return s.lstrip("/")

    @field_validator("headers", mode="before")
    @classmethod
    def _headers_obj(cls, v: Any) -> Dict[str, str]:
        if v and not isinstance(v, Mapping):
            raise ValueError("headers must be a mapping")
        # Header values go on the wire as text; None entries are ignored.
        return {str(k): str(x) for k, x in dict(v).items() if x is not None} if v else {}

    @field_validator("qs", mode="before")
    @classmethod
    def _qs_drop_none(cls, v: Any) -> Optional[Dict[str, Any]]:
        # Omitted options (page=None, size=None) are never sent.
        if not v:
            return None
        if not isinstance(v, Mapping):
            raise ValueError("qs must be a mapping")
        return {k: x for k, x in dict(v).items() if x is not None} or None

    @classmethod
    def coerce(cls, value: Union[str, Mapping[str, Any], "RequestDescriptor"]) -> "RequestDescriptor":
        """Normalize a path or options into a new descriptor that shares nothing with `value`."""
        try:
            if isinstance(value, RequestDescriptor):
                return value.model_copy(deep=True)
            if isinstance(value, str):
                return cls(url=value)
            return cls.model_validate(copy.deepcopy(dict(value)))
        except ValidationError as e:
            raise InvalidRequestError(str(e)) from e


PathOrOptions = Union[str, Mapping[str, Any], RequestDescriptor]


class RequestPipeline:
    def __init__(self, config: ClientConfig, session: Session, transport: Transport) -> None:
        self.config = config
        self.session = session
        self.transport = transport

    def build(self, path_or_options: PathOrOptions) -> RequestDescriptor:
        """Outbound descriptor: absolute url, defaults < caller headers, session header if authenticated."""
        descriptor = RequestDescriptor.coerce(path_or_options)

        headers = self.config.default_headers()
        headers.update(descriptor.headers)

        credential = self.session.credential
        if credential:
            headers[self.config.session_header] = credential

        return descriptor.model_copy(update={"url": self.config.url_for(descriptor.url), "headers": headers})

    async def send(self, path_or_options: PathOrOptions) -> Any:
        outbound = self.build(path_or_options)
        authenticated = self.config.session_header in outbound.headers
        logger.debug("%s %s (authenticated=%s)", outbound.method, outbound.url, authenticated)

        try:
            response = await self.transport.exchange(outbound)
        except TransportError as e:
            logger.warning("Vine request failed: %s %s: %s", outbound.method, outbound.url, e)
            raise

        try:
            payload = parse_body(response.text)
        except ParseError as e:
            logger.warning(
                "Vine response was not JSON: %s %s (status=%s): %s",
                outbound.method,
                outbound.url,
                response.status_code,
                e.cause,
            )
            raise

        try:
            data = unwrap(payload, status_code=response.status_code)
        except ApiError as e:
            logger.warning(
                "Vine API error: %s %s (status=%s): %s", outbound.method, outbound.url, response.status_code, e
            )
            raise

        logger.debug("%s %s -> %s", outbound.method, outbound.url, response.status_code)
        return data
