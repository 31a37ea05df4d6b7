from __future__ import annotations

import threading
from collections import deque
from typing import Any, Callable, Deque, Dict, List, Optional

from .config import DEFAULT_MAX_BUFFERED_SAMPLES
from .models import ClickSample, JSONValue, ScrollSample, utcnow


class InteractionBuffer:
    """In-memory click and scroll streams awaiting the next heatmap flush."""

    def __init__(
        self,
        *,
        max_samples: int = DEFAULT_MAX_BUFFERED_SAMPLES,
        clock: Optional[Callable[[], Any]] = None,
    ) -> None:
        self._clock = clock or utcnow
        # Oldest samples fall off once a stream is full.
        self._clicks: Deque[ClickSample] = deque(maxlen=max_samples)
        self._scrolls: Deque[ScrollSample] = deque(maxlen=max_samples)
        self._lock = threading.Lock()

    def record_click(self, session_id: Optional[str], x: float, y: float) -> ClickSample:
        sample = ClickSample(session_id=session_id, x=x, y=y, timestamp=self._clock())
        with self._lock:
            self._clicks.append(sample)
        return sample

    def record_scroll(
        self, session_id: Optional[str], scroll_x: float, scroll_y: float
    ) -> ScrollSample:
        sample = ScrollSample(
            session_id=session_id,
            scroll_x=scroll_x,
            scroll_y=scroll_y,
            timestamp=self._clock(),
        )
        with self._lock:
            self._scrolls.append(sample)
        return sample

    def drain(self) -> Dict[str, List[Dict[str, JSONValue]]]:
        """Return the heatmap payload for everything buffered and empty the streams."""
        with self._lock:
            clicks = list(self._clicks)
            scrolls = list(self._scrolls)
            self._clicks.clear()
            self._scrolls.clear()
        return {
            "clicks": [sample.to_payload() for sample in clicks],
            "scrolls": [sample.to_payload() for sample in scrolls],
        }

    @property
    def clicks(self) -> List[ClickSample]:
        with self._lock:
            return list(self._clicks)

    @property
    def scrolls(self) -> List[ScrollSample]:
        with self._lock:
            return list(self._scrolls)

    def __len__(self) -> int:
        with self._lock:
            return len(self._clicks) + len(self._scrolls)
