"""
Per-user session context store.

Holds the merged HealthContext for each user between turns. Contexts are
immutable; the store only swaps references, so a request handler that
reads, computes and saves without awaiting in between is serialized per
user by the event loop.
"""

from datetime import datetime, timedelta

from config.config import get_settings
from config.logging_config import get_logger
from models.wellness_models import HealthContext

logger = get_logger(__name__)


class SessionStore:
    """
    Manage per-user health contexts with expiry.

    Expired entries are swept every `cleanup_interval` saves, so users who
    never return do not stay in memory for the life of the process.
    """

    CLEANUP_INTERVAL = 100

    def __init__(self, timeout: timedelta | None = None, cleanup_interval: int | None = None):
        if timeout is None:
            timeout = timedelta(minutes=get_settings().session_timeout_minutes)
        self.session_timeout = timeout
        self.cleanup_interval = max(1, cleanup_interval or self.CLEANUP_INTERVAL)
        self._sessions: dict[str, tuple[HealthContext, datetime]] = {}
        self._saves_since_cleanup = 0

    def get(self, user_id: str) -> HealthContext | None:
        """Return the stored context, or None when missing or expired."""
        entry = self._sessions.get(user_id)
        if entry is None:
            return None
        context, updated_at = entry
        if datetime.now() - updated_at > self.session_timeout:
            del self._sessions[user_id]
            logger.debug("Session expired", user_id=user_id)
            return None
        return context

    def save(self, user_id: str, context: HealthContext) -> None:
        self._sessions[user_id] = (context, datetime.now())
        self._saves_since_cleanup += 1
        if self._saves_since_cleanup >= self.cleanup_interval:
            self.cleanup_expired()

    def clear_session(self, user_id: str) -> bool:
        """Clear a user's session. Returns True when one existed."""
        return self._sessions.pop(user_id, None) is not None

    def cleanup_expired(self) -> int:
        """Remove expired sessions. Returns count of removed sessions."""
        self._saves_since_cleanup = 0
        now = datetime.now()
        expired = [
            uid for uid, (_, updated_at) in self._sessions.items()
            if now - updated_at > self.session_timeout
        ]
        for uid in expired:
            del self._sessions[uid]
        if expired:
            logger.info("Expired sessions removed", count=len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


_store_instance: SessionStore | None = None


def get_session_store() -> SessionStore:
    """Get the singleton session store instance."""
    global _store_instance
    if _store_instance is None:
        _store_instance = SessionStore()
    return _store_instance
