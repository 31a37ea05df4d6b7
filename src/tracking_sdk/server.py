"""Local collection endpoint for exercising the tracking wire contract."""

from __future__ import annotations

import os
import threading
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Header, HTTPException
from pydantic import BaseModel, Field


class EnvelopePayload(BaseModel):
    projectId: Optional[str] = None
    userId: Optional[str] = None
    event: str = Field(..., min_length=1)
    data: Dict[str, Any] = Field(default_factory=dict)
    date: str = Field(..., min_length=1)


class EnvelopeStore:
    def __init__(self) -> None:
        self._envelopes: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def add(self, envelope: EnvelopePayload) -> int:
        with self._lock:
            self._envelopes.append(envelope.model_dump())
            return len(self._envelopes)

    @property
    def envelopes(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._envelopes)


def create_app(
    *, api_key: Optional[str] = None, store: Optional[EnvelopeStore] = None
) -> FastAPI:
    collector = store or EnvelopeStore()
    app = FastAPI(
        title="Tracking Collector",
        version="1.0.0",
        description="Accepts tracking envelopes and keeps them in memory.",
    )
    app.state.store = collector

    def _authorize(authorization: Optional[str]) -> None:
        scheme, _, token = (authorization or "").partition(" ")
        if scheme != "Bearer" or not token.strip():
            raise HTTPException(status_code=401, detail="missing bearer token")
        if api_key and token != api_key:
            raise HTTPException(status_code=401, detail="invalid api key")

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/submitEvent")
    def submit_event(
        envelope: EnvelopePayload,
        authorization: Optional[str] = Header(default=None),
    ) -> Dict[str, Any]:
        _authorize(authorization)
        count = collector.add(envelope)
        return {"status": "accepted", "received": count}

    @app.get("/events")
    def list_events() -> List[Dict[str, Any]]:
        return collector.envelopes

    return app


app = create_app(api_key=os.getenv("TRACKING_COLLECTOR_API_KEY"))
