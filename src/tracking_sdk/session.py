from __future__ import annotations

import threading
import uuid
from typing import Any, Callable, Dict, Mapping, Optional

from .models import Session, utcnow


class SessionManager:
    """Owns the single active session of one tracking client.

    ``identify`` always starts a fresh session and discards the previous one
    (attributes are not merged). ``end`` reports the elapsed duration in
    milliseconds once per session; repeated calls return ``None`` until the
    next ``identify``.
    """

    def __init__(self, *, clock: Optional[Callable[[], Any]] = None) -> None:
        self._clock = clock or utcnow
        self._session: Optional[Session] = None
        self._ended = False
        self._lock = threading.Lock()

    def identify(
        self, user_id: str, attributes: Optional[Mapping[str, Any]] = None
    ) -> Session:
        session = Session(
            session_id=str(uuid.uuid4()),
            user_id=user_id,
            start_time=self._clock(),
            user_attributes=dict(attributes or {}),
        )
        with self._lock:
            self._session = session
            self._ended = False
        return session

    def end(self) -> Optional[Dict[str, Any]]:
        with self._lock:
            session = self._session
            if session is None or self._ended:
                return None
            self._ended = True
        elapsed = self._clock() - session.start_time
        duration = max(0, round(elapsed.total_seconds() * 1000))
        return {"duration": duration, "sessionId": session.session_id}

    @property
    def current(self) -> Optional[Session]:
        with self._lock:
            return self._session

    @property
    def session_id(self) -> Optional[str]:
        session = self.current
        return session.session_id if session else None

    @property
    def user_id(self) -> Optional[str]:
        session = self.current
        return session.user_id if session else None

    @property
    def ended(self) -> bool:
        with self._lock:
            return self._ended
