from __future__ import annotations

import asyncio
import logging
import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Literal

logger = logging.getLogger(__name__)

SESSION_TIMEOUT = timedelta(hours=24)
MAX_HISTORY_LENGTH = 10
CLEANUP_INTERVAL_SECONDS = 60 * 60

MessageRole = Literal["user", "assistant"]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_session_id() -> str:
    return secrets.token_hex(16)


@dataclass(frozen=True)
class Message:
    role: MessageRole
    content: str
    timestamp: str


@dataclass
class Session:
    id: str
    created_at: datetime
    last_activity: datetime
    history: list[Message] = field(default_factory=list)


@dataclass(frozen=True)
class SessionStats:
    total_sessions: int
    session_ages: list[int]
    average_history_length: float


class SessionStore:
    """In-memory conversation sessions with sliding expiry and bounded history.

    Every public method holds the store lock for its whole read-modify-write,
    so concurrent requests on the same session id never interleave an append
    with a truncation. None of the methods await.
    """

    def __init__(
        self,
        timeout: timedelta = SESSION_TIMEOUT,
        max_history: int = MAX_HISTORY_LENGTH,
        clock: Callable[[], datetime] = _utc_now,
    ):
        if max_history < 1:
            raise ValueError("max_history must be at least 1")
        self._timeout = timeout
        self._max_history = max_history
        self._clock = clock
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    @property
    def timeout(self) -> timedelta:
        return self._timeout

    @property
    def max_history(self) -> int:
        return self._max_history

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _is_expired(self, session: Session, now: datetime) -> bool:
        return now - session.last_activity > self._timeout

    def _create_locked(self) -> Session:
        session_id = generate_session_id()
        while session_id in self._sessions:
            session_id = generate_session_id()
        now = self._clock()
        session = Session(id=session_id, created_at=now, last_activity=now)
        self._sessions[session_id] = session
        logger.info("session_created session_id=%s", session_id)
        return session

    def _get_locked(self, session_id: str) -> Session | None:
        session = self._sessions.get(session_id)
        if session is None:
            logger.debug("session_not_found session_id=%s", session_id)
            return None

        now = self._clock()
        if self._is_expired(session, now):
            del self._sessions[session_id]
            logger.info("session_expired session_id=%s", session_id)
            return None

        session.last_activity = now
        return session

    def create_session(self) -> Session:
        with self._lock:
            return self._create_locked()

    def get_session(self, session_id: str) -> Session | None:
        with self._lock:
            return self._get_locked(session_id)

    def get_or_create_session(self, session_id: str | None = None) -> Session:
        """Return the live session for ``session_id`` or a brand-new one.

        An unknown or expired id is never adopted: callers must use the id of
        the returned session.
        """
        with self._lock:
            if session_id:
                session = self._get_locked(session_id)
                if session is not None:
                    return session
            return self._create_locked()

    def add_message(self, session_id: str, role: MessageRole, content: str) -> None:
        with self._lock:
            session = self._get_locked(session_id)
            if session is None:
                logger.warning("session_add_message_skipped session_id=%s reason=not_found", session_id)
                return

            now = self._clock()
            session.history.append(Message(role=role, content=content, timestamp=now.isoformat()))
            if len(session.history) > self._max_history:
                del session.history[: -self._max_history]
            session.last_activity = now

    def get_history(self, session_id: str) -> list[Message]:
        with self._lock:
            session = self._get_locked(session_id)
            if session is None:
                return []
            return list(session.history)

    def clear_session(self, session_id: str) -> bool:
        with self._lock:
            deleted = self._sessions.pop(session_id, None) is not None
        if deleted:
            logger.info("session_cleared session_id=%s", session_id)
        return deleted

    def cleanup_expired_sessions(self) -> int:
        with self._lock:
            now = self._clock()
            expired = [sid for sid, s in self._sessions.items() if self._is_expired(s, now)]
            for sid in expired:
                del self._sessions[sid]
        if expired:
            logger.info("session_cleanup removed=%s", len(expired))
        return len(expired)

    def get_stats(self) -> SessionStats:
        with self._lock:
            now = self._clock()
            sessions = list(self._sessions.values())
            ages = [int((now - s.created_at).total_seconds() // 60) for s in sessions]
            total_history = sum(len(s.history) for s in sessions)

        average = total_history / len(sessions) if sessions else 0.0
        return SessionStats(
            total_sessions=len(sessions),
            session_ages=ages,
            average_history_length=average,
        )


async def run_periodic_cleanup(
    store: SessionStore,
    stop_event: asyncio.Event,
    interval_s: float = CLEANUP_INTERVAL_SECONDS,
) -> None:
    """Sweep expired sessions now and then every ``interval_s`` until stopped."""
    while not stop_event.is_set():
        try:
            store.cleanup_expired_sessions()
        except Exception as exc:  # pragma: no cover - the sweep must keep running
            logger.warning("session_cleanup_failed: %s", exc)
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=interval_s)
        except asyncio.TimeoutError:
            continue
