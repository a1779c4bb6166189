"""
Response body handling: identifier repair, JSON parsing and envelope unwrapping.

The service emits ids as bare JSON numbers that exceed 2**53. Python ints would
survive json.loads, but the ids are opaque handles and must round-trip as the
exact text the service sent (and stay strings for consumers that re-serialize to
JSON for other runtimes), so they are quoted before parsing.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from vineapple.errors import ApiError, ParseError

logger = logging.getLogger(__name__)

IDENTIFIER_FIELDS = ("commentId", "likeId", "postId", "tagId", "userId", "venueId", "id")

# "<field>" <ws> : <ws> <integer>, not followed by a fraction or exponent.
# The leading quote anchors the whole key, so "parentPostId" is left alone.
_IDENTIFIER_RE = re.compile(r'"(' + "|".join(IDENTIFIER_FIELDS) + r')"(\s*):(\s*)(-?\d+)(?![\d.eE])')


class Envelope(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: Any = None
    error: Any = None


def repair_identifiers(text: str) -> str:
    """Quote integer ids so they parse as strings with their exact digits."""
    repaired, n = _IDENTIFIER_RE.subn(r'"\1"\2:\3"\4"', text)
    if n:
        logger.debug("Quoted %d numeric identifier(s) in response body", n)
    return repaired


def parse_body(text: str) -> Any:
    repaired = repair_identifiers(text or "")
    try:
        return json.loads(repaired)
    except json.JSONDecodeError as e:
        raise ParseError(e, body=repaired) from e


def unwrap(payload: Any, *, status_code: Optional[int] = None) -> Any:
    """
    Return the envelope's `data`, or raise ApiError when `error` is non-empty.

    The HTTP status is informational only: a 200 carrying an error still fails,
    and a non-object document resolves to None.
    """
    if not isinstance(payload, dict):
        return None
    envelope = Envelope.model_validate(payload)
    if envelope.error:
        raise ApiError(envelope.error, status_code=status_code)
    return envelope.data
