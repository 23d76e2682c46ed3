"""In-memory session store for merge editing sessions."""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from ..registry import PlaceholderRegistry

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class MergeSession:
    """One editing session: a template and the registry it is merged with."""

    session_id: str
    registry: PlaceholderRegistry
    template: str = ""
    created_at: datetime = field(default_factory=_utc_now)
    expires_at: datetime = field(default_factory=_utc_now)


class SessionNotFoundError(Exception):
    """Raised when a session id is unknown or its session has expired."""

    pass


class SessionStore:
    """In-memory store of merge sessions.

    Each session owns its registry; sessions never share state. Expiry slides
    forward every time a session is fetched. Async variants serialize access
    with an asyncio.Lock.
    """

    def __init__(self, ttl_minutes: int = 120, max_sessions: int = 1000):
        self._sessions: dict[str, MergeSession] = {}
        self._ttl = ttl_minutes
        self._max_sessions = max(1, max_sessions)  # Room for at least the new session
        self._lock = asyncio.Lock()

    def create(self, template: str = "", strict: bool = True) -> MergeSession:
        """
        Open a new session with an empty registry.

        Args:
            template: Initial template text
            strict: Whether the session's registry raises on unknown ids

        Returns:
            The new session
        """
        if len(self._sessions) >= self._max_sessions:
            self.cleanup_expired()
        if len(self._sessions) >= self._max_sessions:
            oldest = min(self._sessions.values(), key=lambda s: s.expires_at)
            del self._sessions[oldest.session_id]
            logger.warning(f"Session limit reached, evicted session {oldest.session_id}")

        session = MergeSession(
            session_id=str(uuid.uuid4()),
            registry=PlaceholderRegistry(strict=strict),
            template=template,
        )
        self._touch(session)
        self._sessions[session.session_id] = session

        logger.info(f"Created session {session.session_id}")
        return session

    async def create_async(self, template: str = "", strict: bool = True) -> MergeSession:
        """Thread-safe async version of create."""
        async with self._lock:
            return self.create(template, strict)

    def get(self, session_id: str) -> MergeSession:
        """
        Retrieve a live session and extend its expiry.

        Raises:
            SessionNotFoundError: If the session is unknown or expired
        """
        session = self._sessions.get(session_id)

        if session is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")

        if _utc_now() > session.expires_at:
            del self._sessions[session_id]
            logger.info(f"Session {session_id} expired")
            raise SessionNotFoundError(f"Session expired: {session_id}")

        self._touch(session)
        return session

    async def get_async(self, session_id: str) -> MergeSession:
        """Thread-safe async version of get."""
        async with self._lock:
            return self.get(session_id)

    def remove(self, session_id: str) -> bool:
        """
        Remove a session.

        Returns:
            True if removed, False if not found
        """
        if session_id in self._sessions:
            del self._sessions[session_id]
            logger.info(f"Removed session {session_id}")
            return True
        return False

    async def remove_async(self, session_id: str) -> bool:
        """Thread-safe async version of remove."""
        async with self._lock:
            return self.remove(session_id)

    def cleanup_expired(self) -> int:
        """
        Remove all expired sessions.

        Returns:
            Number of sessions removed
        """
        now = _utc_now()
        expired_ids = [
            session_id
            for session_id, session in self._sessions.items()
            if now > session.expires_at
        ]

        for session_id in expired_ids:
            del self._sessions[session_id]

        if expired_ids:
            logger.info(f"Cleaned up {len(expired_ids)} expired sessions")
        return len(expired_ids)

    def clear(self):
        """Remove every session."""
        self._sessions.clear()

    def size(self) -> int:
        return len(self._sessions)

    def _touch(self, session: MergeSession) -> None:
        session.expires_at = _utc_now() + timedelta(minutes=self._ttl)
