from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

SAFETY_MARGIN_MS = 60_000


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class CachedToken:
    token: str
    expires_at_ms: int


class TokenCache:
    """Single-slot holder for the proxy's OAuth access token.

    The proxy authenticates as one client identity, so there is exactly one
    slot shared by every request in the process. A token counts as usable
    only while ``now < expires_at - SAFETY_MARGIN_MS``; a stale slot is left in
    place and simply overwritten by the next ``set``.

    There is no locking: two requests that miss at the same time both acquire
    a token and the last write wins.
    """

    def __init__(self, clock: Callable[[], int] = _now_ms, safety_margin_ms: int = SAFETY_MARGIN_MS):
        self._clock = clock
        self._safety_margin_ms = safety_margin_ms
        self._slot: CachedToken | None = None

    def get(self) -> CachedToken | None:
        slot = self._slot
        if slot is None:
            return None
        if self._clock() < slot.expires_at_ms - self._safety_margin_ms:
            return slot
        return None

    def set(self, token: str, expires_in_seconds: int) -> CachedToken:
        slot = CachedToken(token=token, expires_at_ms=self._clock() + int(expires_in_seconds) * 1000)
        self._slot = slot
        return slot
