from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


def _first(settings: Mapping[str, Any], *keys: str) -> Optional[str]:
    for k in keys:
        v = settings.get(k)
        if v is not None and str(v).strip():
            # User ids arrive as strings after identifier repair; str() keeps
            # caller-supplied ints exact as well.
            return str(v).strip()
    return None


@dataclass
class Session:
    """
    Authorization state of one client.

    Either all three fields are set (authenticated) or none is (unauthenticated).
    Only authorize() mutates the record.
    """

    credential: Optional[str] = None
    user_id: Optional[str] = None
    username: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.credential is not None

    def authorize(self, settings: Optional[Mapping[str, Any]] = None) -> "Session":
        """
        Adopt `settings` or, when absent/incomplete, clear the session.

        Accepts the authenticate payload keys (key, userId, username) as well as
        the Python spellings (credential, user_id, username).
        """
        credential = user_id = username = None
        if settings:
            credential = _first(settings, "key", "credential")
            user_id = _first(settings, "userId", "user_id")
            username = _first(settings, "username")
            if not (credential and user_id and username):
                if credential or user_id or username:
                    logger.warning("Discarding incomplete session settings (keys=%s)", sorted(settings.keys()))
                credential = user_id = username = None

        self.credential = credential
        self.user_id = user_id
        self.username = username
        return self

    def clear(self) -> "Session":
        return self.authorize(None)

    def as_settings(self) -> Dict[str, Optional[str]]:
        return {"key": self.credential, "userId": self.user_id, "username": self.username}

    def __repr__(self) -> str:
        state = "authenticated" if self.is_authenticated else "unauthenticated"
        return f"Session({state}, user_id={self.user_id!r}, username={self.username!r})"
