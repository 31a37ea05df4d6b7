"""Client-side behavioral telemetry: sessions, interactions and event delivery."""

from .bindings import CaptureBindings, ClickEvent, Page
from .client import TrackingClient
from .config import TrackerConfig
from .environment import detect_browser, detect_operating_system
from .errors import ConfigurationError, DeliveryError, InvalidEventError, TrackingError
from .models import (
    Browser,
    ClickSample,
    ErrorReport,
    EventEnvelope,
    NavigationTiming,
    OperatingSystem,
    PaintTiming,
    ScrollSample,
    Session,
)

__all__ = [
    "CaptureBindings",
    "ClickEvent",
    "Page",
    "TrackingClient",
    "TrackerConfig",
    "detect_browser",
    "detect_operating_system",
    "ConfigurationError",
    "DeliveryError",
    "InvalidEventError",
    "TrackingError",
    "Browser",
    "ClickSample",
    "ErrorReport",
    "EventEnvelope",
    "NavigationTiming",
    "OperatingSystem",
    "PaintTiming",
    "ScrollSample",
    "Session",
]
