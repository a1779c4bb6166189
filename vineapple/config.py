from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Optional

API_ORIGIN = "https://api.vineapp.com/"

# Mobile client identification the service expects on every request.
USER_AGENT = "com.vine.iphone/1.0.3 (unknown, iPhone OS 6.0.1, iPhone, Scale/2.000000)"
ACCEPT_LANGUAGE = (
    "en, sv, fr, de, ja, nl, it, es, pt, pt-PT, da, fi, nb, ko, zh-Hans, zh-Hant, ru, pl, tr, uk, ar, hr, cs, "
    "el, he, ro, sk, th, id, ms, en-GB, ca, hu, vi, en-us;q=0.8"
)
CLIENT_TAG = "ios/1.0.3"

SESSION_HEADER = "vine-session-id"
DEVICE_TOKEN_SEED = "Vine"
TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class ClientConfig:
    api_origin: str = API_ORIGIN
    user_agent: str = USER_AGENT
    accept_language: str = ACCEPT_LANGUAGE
    client_tag: str = CLIENT_TAG
    session_header: str = SESSION_HEADER

    # Device token sent at login: fixed when set, otherwise derived from the seed + credentials.
    device_token: Optional[str] = None
    device_token_seed: str = DEVICE_TOKEN_SEED

    # Transport-level only; the request pipeline itself never times out.
    timeout_seconds: float = TIMEOUT_SECONDS

    def default_headers(self) -> Dict[str, str]:
        """Fresh copy of the fixed identification headers (callers may mutate it)."""
        return {
            "X-Vine-Client": self.client_tag,
            "Accept-Language": self.accept_language,
            "User-Agent": self.user_agent,
        }

    def url_for(self, path: str) -> str:
        return f"{self.api_origin.rstrip('/')}/{(path or '').lstrip('/')}"


def _env_str(name: str, default: str) -> str:
    return (os.getenv(name, "") or "").strip() or default


def _env_timeout(name: str, default: float) -> float:
    raw = (os.getenv(name, "") or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


@lru_cache(maxsize=1)
def load_client_config() -> ClientConfig:
    """
    Load client configuration from environment variables.

    Every VINEAPPLE_* variable is optional; blank values fall back to the built-in
    mobile client defaults. Pass an explicit ClientConfig to a client instead when
    several configurations must coexist in one process.
    """
    return ClientConfig(
        api_origin=_env_str("VINEAPPLE_API_ORIGIN", API_ORIGIN),
        user_agent=_env_str("VINEAPPLE_USER_AGENT", USER_AGENT),
        accept_language=_env_str("VINEAPPLE_ACCEPT_LANGUAGE", ACCEPT_LANGUAGE),
        client_tag=_env_str("VINEAPPLE_CLIENT_TAG", CLIENT_TAG),
        session_header=_env_str("VINEAPPLE_SESSION_HEADER", SESSION_HEADER),
        device_token=(os.getenv("VINEAPPLE_DEVICE_TOKEN", "") or "").strip() or None,
        device_token_seed=_env_str("VINEAPPLE_DEVICE_TOKEN_SEED", DEVICE_TOKEN_SEED),
        timeout_seconds=_env_timeout("VINEAPPLE_TIMEOUT_SECONDS", TIMEOUT_SECONDS),
    )
