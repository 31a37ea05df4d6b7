from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional

import requests

from .buffer import InteractionBuffer
from .config import DEFAULT_ENDPOINT, DEFAULT_MAX_BUFFERED_SAMPLES, DEFAULT_TIMEOUT, TrackerConfig
from .dispatcher import EventDispatcher, Executor
from .environment import detect_browser, detect_operating_system
from .logger import DiagnosticLog
from .models import (
    ClickSample,
    ErrorReport,
    EventEnvelope,
    NavigationTiming,
    PaintTiming,
    ScrollSample,
    Session,
    isoformat,
    utcnow,
)
from .session import SessionManager


class TrackingClient:
    """Behavioral telemetry client for one page.

    Each instance owns its own session, interaction buffer and dispatcher, so
    several isolated clients can live in the same process.
    """

    def __init__(
        self,
        api_key: str,
        project_id: Optional[str] = None,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = DEFAULT_TIMEOUT,
        max_buffered_samples: int = DEFAULT_MAX_BUFFERED_SAMPLES,
        session: Optional[requests.Session] = None,
        executor: Optional[Executor] = None,
        clock: Optional[Callable[[], Any]] = None,
        log: Optional[DiagnosticLog] = None,
    ) -> None:
        self.config = TrackerConfig(
            api_key=api_key,
            project_id=project_id,
            endpoint=endpoint,
            timeout=timeout,
            max_buffered_samples=max_buffered_samples,
        )
        self.config.validate()
        self._clock = clock or utcnow
        self.log = log or DiagnosticLog()
        self.sessions = SessionManager(clock=self._clock)
        self.buffer = InteractionBuffer(
            max_samples=self.config.max_buffered_samples, clock=self._clock
        )
        self.dispatcher = EventDispatcher(
            self.config,
            user_id=lambda: self.sessions.user_id,
            session=session,
            executor=executor,
            log=self.log,
            clock=self._clock,
        )

    @classmethod
    def from_config(cls, config: TrackerConfig, **options: Any) -> "TrackingClient":
        return cls(
            config.api_key,
            config.project_id,
            endpoint=config.endpoint,
            timeout=config.timeout,
            max_buffered_samples=config.max_buffered_samples,
            **options,
        )

    @classmethod
    def from_env(cls, **options: Any) -> "TrackingClient":
        return cls.from_config(TrackerConfig.from_env(), **options)

    @property
    def session(self) -> Optional[Session]:
        return self.sessions.current

    @property
    def session_id(self) -> Optional[str]:
        return self.sessions.session_id

    @property
    def user_id(self) -> Optional[str]:
        return self.sessions.user_id

    # sessions

    def identify(
        self, user_id: str, attributes: Optional[Mapping[str, Any]] = None
    ) -> Session:
        session = self.sessions.identify(user_id, attributes)
        self.log.debug("session", f"started session {session.session_id}")
        return session

    def end_session(self) -> Optional[EventEnvelope]:
        payload = self.sessions.end()
        if payload is None:
            self.log.debug("session", "no active session to end")
            return None
        return self.dispatcher.send("session_end", payload)

    # discrete events

    def track(
        self, event_name: str, properties: Optional[Mapping[str, Any]] = None
    ) -> EventEnvelope:
        return self.dispatcher.send(event_name, properties or {})

    def track_page_view(
        self, url: str, title: str, user_agent: Optional[str] = None
    ) -> EventEnvelope:
        return self.dispatcher.send(
            "page_view",
            {
                "url": url,
                "title": title,
                "os": detect_operating_system(user_agent),
                "browser": detect_browser(user_agent),
            },
        )

    def track_error(self, report: ErrorReport) -> EventEnvelope:
        error_data = {
            "sessionId": self.session_id,
            "message": report.message,
            "source": report.source,
            "lineno": report.lineno,
            "colno": report.colno,
            "error": str(report.error) if report.error is not None else None,
            "timestamp": isoformat(self._clock()),
        }
        return self.dispatcher.send("error_track", {"errors": error_data})

    def track_performance(
        self,
        navigation: Optional[Iterable[NavigationTiming]],
        paints: Optional[Iterable[PaintTiming]],
        width: Optional[int],
    ) -> Optional[EventEnvelope]:
        """Report page-load timings; ``None`` entries mean timing is unsupported."""
        if navigation is None or paints is None:
            return None
        navigation_entry = next(iter(navigation), None)
        paint_times = {}
        for entry in paints:
            paint_times.setdefault(entry.name, entry.start_time)
        performance_data = {
            "sessionId": self.session_id,
            "loadTime": (
                navigation_entry.load_event_end - navigation_entry.start_time
                if navigation_entry
                else 0
            ),
            "firstPaint": paint_times.get("first-paint") or 0,
            "firstContentfulPaint": paint_times.get("first-contentful-paint") or 0,
            "width": width,
            "timestamp": isoformat(self._clock()),
        }
        return self.dispatcher.send("performance_track", {"performance": performance_data})

    # interactions

    def record_click(self, x: float, y: float) -> ClickSample:
        return self.buffer.record_click(self.session_id, x, y)

    def record_scroll(self, scroll_x: float, scroll_y: float) -> ScrollSample:
        return self.buffer.record_scroll(self.session_id, scroll_x, scroll_y)

    def flush_heatmap(self) -> Optional[EventEnvelope]:
        """Send buffered clicks and scrolls as one ``heat_map`` event and empty the buffer.

        Nothing is sent when both streams are empty.
        """
        if not len(self.buffer):
            self.log.debug("heatmap", "nothing buffered, skipping flush")
            return None
        return self.dispatcher.send("heat_map", self.buffer.drain())

    def shutdown(self) -> None:
        """Page teardown: flush buffered interactions, then end the session.

        The heatmap is skipped when nothing was buffered, and ``session_end`` is
        skipped when there is no session or it already ended.
        """
        self.flush_heatmap()
        self.end_session()
