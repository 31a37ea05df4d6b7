from __future__ import annotations

import threading
from typing import Any, Callable, Dict, Optional

import requests

from .config import TrackerConfig
from .errors import DeliveryError, InvalidEventError
from .logger import DiagnosticLog
from .models import EventEnvelope, to_json_value, utcnow

Executor = Callable[[Callable[[], None]], None]


def background_executor(job: Callable[[], None]) -> None:
    worker = threading.Thread(target=job, daemon=True)
    worker.start()


class EventDispatcher:
    """Builds event envelopes and POSTs them to the collection endpoint.

    Delivery is best effort: every envelope gets exactly one attempt, run by
    ``executor`` so the caller never waits on the network. Non-2xx answers,
    unparseable bodies and transport errors (including plain ``OSError`` from
    an injected session) are logged and dropped.
    """

    def __init__(
        self,
        config: TrackerConfig,
        *,
        user_id: Optional[Callable[[], Optional[str]]] = None,
        session: Optional[requests.Session] = None,
        executor: Optional[Executor] = None,
        log: Optional[DiagnosticLog] = None,
        clock: Optional[Callable[[], Any]] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        self.executor = executor or background_executor
        self.log = log or DiagnosticLog()
        self._user_id = user_id or (lambda: None)
        self._clock = clock or utcnow

    def build_envelope(self, event_name: str, data: Any = None) -> EventEnvelope:
        if not isinstance(event_name, str) or not event_name.strip():
            raise InvalidEventError("Event name is required.")
        return EventEnvelope(
            project_id=self.config.project_id,
            user_id=self._user_id(),
            event_name=event_name,
            data=to_json_value({} if data is None else data),
            date=self._clock(),
        )

    def send(self, event_name: str, data: Any = None) -> EventEnvelope:
        envelope = self.build_envelope(event_name, data)
        self.executor(lambda: self._deliver(envelope))
        return envelope

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
        }

    def _deliver(self, envelope: EventEnvelope) -> None:
        try:
            response = self.session.post(
                self.config.endpoint,
                headers=self._headers(),
                json=envelope.to_wire(),
                timeout=self.config.timeout,
            )
            if not 200 <= response.status_code < 300:
                raise DeliveryError(f"HTTP error! status: {response.status_code}")
            body = response.json()
        except (requests.RequestException, OSError, DeliveryError, ValueError) as exc:
            self.log.warning(
                "dispatch", f"Error tracking event {envelope.event_name}: {exc}"
            )
            return
        self.log.debug(
            "dispatch", f"Event {envelope.event_name} tracked successfully: {body}"
        )
