import logging
import random
import string
import threading
from typing import Callable, Dict, List, Optional

from .session import GameSession, SessionState

logger = logging.getLogger(__name__)


class SessionNotFound(LookupError):
    """Raised when no live session has the requested code."""


class RegistryFull(RuntimeError):
    """Raised when the registry already holds its maximum number of sessions."""


def normalize_code(code) -> str:
    """Canonical form of a session code: stripped and upper case."""
    return (code or '').strip().upper()


def generate_session_code(existing, length=4, rng=None):
    """Generate a short session code not present in existing."""
    rng = rng or random
    while True:
        code = ''.join(rng.choices(string.ascii_uppercase + string.digits, k=length))
        if code not in existing:
            return code


class SessionRegistry:
    """Owns the live sessions of a process, keyed by session code.

    Codes are case-insensitive. Removing a session always disposes it, so a
    session dropped from the registry never keeps its countdown running.
    Finished sessions are evicted to make room when the registry is full.
    """

    def __init__(self, max_sessions: Optional[int] = None):
        self.max_sessions = max_sessions
        self._sessions: Dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def create(self, **session_kwargs) -> GameSession:
        evicted = []
        with self._lock:
            if self.max_sessions is not None and len(self._sessions) >= self.max_sessions:
                evicted = self._pop_finished()
            if self.max_sessions is not None and len(self._sessions) >= self.max_sessions:
                raise RegistryFull(f"at most {self.max_sessions} sessions may be active")
            code = generate_session_code(self._sessions)
            session = GameSession(session_code=code, **session_kwargs)
            self._sessions[code] = session
        for old in evicted:
            old.dispose()
            logger.info(f"[session-evict] session={old.session_code}")
        return session

    def _pop_finished(self) -> List[GameSession]:
        finished = [s for s in self._sessions.values() if s.state is not SessionState.RUNNING]
        for session in finished:
            del self._sessions[session.session_code]
        return finished

    def get(self, code) -> GameSession:
        with self._lock:
            session = self._sessions.get(normalize_code(code))
        if session is None:
            raise SessionNotFound(code)
        return session

    def dispose(self, code) -> None:
        with self._lock:
            session = self._sessions.pop(normalize_code(code), None)
        if session is None:
            raise SessionNotFound(code)
        session.dispose()

    def schedule_dispose(
        self,
        session: GameSession,
        delay_sec: float,
        spawn: Callable,
        sleep: Callable[[float], None],
        on_disposed: Optional[Callable[[str], None]] = None,
    ) -> None:
        """Dispose session after delay_sec unless it was already removed."""

        def _runner():
            sleep(delay_sec)
            with self._lock:
                if self._sessions.get(session.session_code) is not session:
                    return
                del self._sessions[session.session_code]
            session.dispose()
            logger.info(f"[session-expire] session={session.session_code} hold={delay_sec}s")
            if on_disposed is not None:
                on_disposed(session.session_code)

        spawn(_runner)

    def dispose_all(self) -> None:
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            session.dispose()

    def __contains__(self, code) -> bool:
        with self._lock:
            return normalize_code(code) in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
