from __future__ import annotations

import hashlib
from typing import Optional


def device_token_for(username: str, password: str, *, seed: str, fixed: Optional[str] = None) -> str:
    """Device token sent at login: `fixed` if configured, else sha256(seed + username + password)."""
    if fixed:
        return fixed
    return hashlib.sha256(f"{seed}{username}{password}".encode("utf-8")).hexdigest()
