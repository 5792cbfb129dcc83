from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional


@dataclass
class WindowEntry:
    count: int
    reset_at: float
    blocked_until: Optional[float] = None


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int
    remaining: int
    reset_at: float
    blocked: bool = False

    def retry_after_seconds(self, now: float) -> int:
        return max(1, int(self.reset_at - now + 0.999))


class FixedWindowRateLimiter:
    """
    Fixed window counter with optional block extension:
      max_requests per window_seconds, keyed by an opaque identity (client IP).
      Going over the limit blocks the identity for block_duration_seconds
      when configured.

    Process-local state; one instance per app (see app.main).
    """
    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        block_duration_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.max_requests = int(max_requests)
        self.window_seconds = float(window_seconds)
        self.block_duration_seconds = block_duration_seconds
        self._clock = clock
        self._entries: Dict[str, WindowEntry] = {}
        self._next_prune_at = clock() + self.window_seconds

    def check_and_record(self, identity: str) -> RateLimitResult:
        now = self._clock()
        if now >= self._next_prune_at:
            # sweep once per window so idle identities do not pile up
            self.prune()
            self._next_prune_at = now + self.window_seconds

        e = self._entries.get(identity)

        if e is not None and e.blocked_until and e.blocked_until > now:
            return RateLimitResult(
                allowed=False, limit=self.max_requests, remaining=0,
                reset_at=e.blocked_until, blocked=True,
            )

        # new window
        if e is None or e.reset_at <= now:
            e = WindowEntry(count=1, reset_at=now + self.window_seconds)
            self._entries[identity] = e
            return RateLimitResult(
                allowed=True, limit=self.max_requests,
                remaining=self.max_requests - 1, reset_at=e.reset_at,
            )

        e.count += 1
        if e.count > self.max_requests:
            if self.block_duration_seconds:
                e.blocked_until = now + float(self.block_duration_seconds)
                return RateLimitResult(
                    allowed=False, limit=self.max_requests, remaining=0,
                    reset_at=e.blocked_until, blocked=True,
                )
            return RateLimitResult(
                allowed=False, limit=self.max_requests, remaining=0, reset_at=e.reset_at,
            )

        return RateLimitResult(
            allowed=True, limit=self.max_requests,
            remaining=self.max_requests - e.count, reset_at=e.reset_at,
        )

    def prune(self) -> int:
        """Drop entries whose window and block have both expired."""
        now = self._clock()
        stale = [
            k for k, e in self._entries.items()
            if e.reset_at <= now and (not e.blocked_until or e.blocked_until <= now)
        ]
        for k in stale:
            del self._entries[k]
        return len(stale)


# Presets
# LOGIN: 5 attempts / 15 min, then blocked for 1 hour
# REGISTRATION: 50 / hour, then blocked for 1 hour
# SELECTION: 30 / minute (guards participant-number guessing)
def login_limiter() -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(max_requests=5, window_seconds=15 * 60, block_duration_seconds=60 * 60)


def registration_limiter() -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(max_requests=50, window_seconds=60 * 60, block_duration_seconds=60 * 60)


def selection_limiter() -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(max_requests=30, window_seconds=60)
