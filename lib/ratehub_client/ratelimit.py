"""Quota state carried by API response headers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

HEADER_LIMIT = "x-ratelimit-limit"
HEADER_REMAINING = "x-ratelimit-remaining"
HEADER_RESET = "x-ratelimit-reset"


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


@dataclass(frozen=True)
class RateLimitState:
    remaining: int
    limit: int | None = None
    reset: int | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RateLimitState | None:
        """Read quota headers from one response.

        Returns ``None`` when the server does not report a remaining count,
        which is how servers without quota enforcement respond. ``headers``
        should be case-insensitive (``httpx.Headers``); plain dicts are
        expected to use lower-case keys.
        """
        remaining = _parse_int(headers.get(HEADER_REMAINING))
        if remaining is None:
            return None
        return cls(
            remaining=remaining,
            limit=_parse_int(headers.get(HEADER_LIMIT)),
            reset=_parse_int(headers.get(HEADER_RESET)),
        )

    @property
    def exhausted(self) -> bool:
        return self.remaining == 0

    def wait_ms(self, now_ms: float) -> int:
        if self.reset is None:
            return 0
        return max(0, int(self.reset * 1000 - now_ms))
