# Login rate limiting (sliding window per client IP)
from datetime import datetime, timedelta, timezone
from typing import Dict, List
import logging
import threading

from fastapi import HTTPException, Request, status

from user_portal.core.config import settings

LOGGER = logging.getLogger(__name__)


class SlidingWindowLimiter:
    """Allows `max_requests` per `window_seconds` for each client."""

    def __init__(self, max_requests: int, window_seconds: int):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        # {client_id: [timestamp1, timestamp2, ...]}
        self._hits: Dict[str, List[datetime]] = {}
        self._last_sweep = datetime.now(timezone.utc)
        self._lock = threading.Lock()

    def _sweep(self, now: datetime, cutoff: datetime) -> None:
        """Drop clients with no hit inside the window. Runs at most once per window."""
        if now - self._last_sweep < timedelta(seconds=self.window_seconds):
            return
        stale = [cid for cid, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for cid in stale:
            del self._hits[cid]
        self._last_sweep = now

    def hit(self, client_id: str) -> bool:
        """Record a request. Returns False when the client is over the limit."""
        now = datetime.now(timezone.utc)
        cutoff = now - timedelta(seconds=self.window_seconds)

        with self._lock:
            self._sweep(now, cutoff)
            recent = [ts for ts in self._hits.get(client_id, []) if ts > cutoff]
            if len(recent) >= self.max_requests:
                self._hits[client_id] = recent
                return False
            recent.append(now)
            self._hits[client_id] = recent
            return True

    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._last_sweep = datetime.now(timezone.utc)


login_limiter = SlidingWindowLimiter(
    max_requests=settings.RATE_LIMIT_REQUESTS,
    window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
)


def _get_client_id(request: Request) -> str:
    """Get client identifier (IP address)."""
    if request.client:
        return request.client.host
    return "unknown"


def check_login_rate_limit(request: Request) -> None:
    """FastAPI dependency. Raises 429 when the caller exceeds the login limit."""
    client_id = _get_client_id(request)

    if not login_limiter.hit(client_id):
        LOGGER.warning("Login rate limit exceeded for %s", client_id)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=(
                f"Rate limit exceeded: {login_limiter.max_requests} requests "
                f"per {login_limiter.window_seconds} seconds"
            ),
        )
