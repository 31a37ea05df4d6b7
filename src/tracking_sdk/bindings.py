"""Glue between host page signals and the tracking client."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, DefaultDict, Dict, List, Optional

from .client import TrackingClient
from .models import ErrorReport, NavigationTiming, PaintTiming

Listener = Callable[[Any], None]


@dataclass
class ClickEvent:
    client_x: float
    client_y: float


@dataclass
class Page:
    """In-process stand-in for a browser window and document."""

    url: str = "about:blank"
    title: str = ""
    user_agent: str = ""
    inner_width: int = 0
    scroll_x: float = 0
    scroll_y: float = 0
    # None means the performance timeline is not available.
    timing: Optional[Dict[str, List[Any]]] = None
    _listeners: DefaultDict[str, List[Listener]] = field(
        default_factory=lambda: defaultdict(list), repr=False
    )

    def add_event_listener(self, name: str, callback: Listener) -> None:
        self._listeners[name].append(callback)

    def dispatch(self, name: str, event: Any = None) -> None:
        for callback in list(self._listeners.get(name, [])):
            callback(event)

    def get_entries_by_type(self, entry_type: str) -> Optional[List[Any]]:
        if self.timing is None:
            return None
        return list(self.timing.get(entry_type, []))

    def navigate(self, url: str, title: Optional[str] = None, *, hash_only: bool = False) -> None:
        self.url = url
        if title is not None:
            self.title = title
        self.dispatch("hashchange" if hash_only else "popstate")

    def scroll_to(self, scroll_x: float, scroll_y: float) -> None:
        self.scroll_x = scroll_x
        self.scroll_y = scroll_y
        self.dispatch("scroll")


class CaptureBindings:
    def __init__(self, client: TrackingClient, page: Page) -> None:
        self.client = client
        self.page = page

    def attach(self) -> None:
        self.setup_page_view_tracking()
        self.setup_interaction_tracking()
        self.setup_error_and_performance_tracking()

    def setup_page_view_tracking(self) -> None:
        for name in ("load", "popstate", "hashchange"):
            self.page.add_event_listener(name, self._on_page_view)

    def setup_interaction_tracking(self) -> None:
        self.page.add_event_listener("click", self._on_click)
        self.page.add_event_listener("scroll", self._on_scroll)
        self.page.add_event_listener("beforeunload", self._on_unload)

    def setup_error_and_performance_tracking(self) -> None:
        self.page.add_event_listener("error", self._on_error)
        self.page.add_event_listener("load", self._on_performance)

    def _on_page_view(self, _event: Any) -> None:
        self.client.track_page_view(self.page.url, self.page.title, self.page.user_agent)

    def _on_click(self, event: ClickEvent) -> None:
        self.client.record_click(event.client_x, event.client_y)

    def _on_scroll(self, _event: Any) -> None:
        self.client.record_scroll(self.page.scroll_x, self.page.scroll_y)

    def _on_unload(self, _event: Any) -> None:
        self.client.shutdown()

    def _on_error(self, event: ErrorReport) -> None:
        self.client.track_error(event)

    def _on_performance(self, _event: Any) -> None:
        navigation = self.page.get_entries_by_type("navigation")
        paints = self.page.get_entries_by_type("paint")
        self.client.track_performance(
            _typed(navigation, NavigationTiming),
            _typed(paints, PaintTiming),
            self.page.inner_width,
        )


def _typed(entries: Optional[List[Any]], kind: type) -> Optional[List[Any]]:
    if entries is None:
        return None
    return [entry for entry in entries if isinstance(entry, kind)]
