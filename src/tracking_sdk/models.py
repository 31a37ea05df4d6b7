from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, is_dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from .errors import InvalidEventError

JSONValue = Union[None, bool, int, float, str, List["JSONValue"], Dict[str, "JSONValue"]]


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def isoformat(moment: datetime) -> str:
    """Render ``moment`` like ``Date.toISOString``: UTC, milliseconds, ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def to_json_value(value: Any) -> JSONValue:
    """Normalize a caller payload into plain JSON values.

    Mappings must use string keys; dataclasses, enums, datetimes and tuples are
    converted. Anything else raises :class:`InvalidEventError`. The result never
    shares mutable containers with ``value``.
    """
    if isinstance(value, Enum):
        return to_json_value(value.value)
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        return str(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidEventError(f"non-finite number in event payload: {value!r}")
        return value
    if isinstance(value, datetime):
        return isoformat(value)
    if isinstance(value, date):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return to_json_value(asdict(value))
    if isinstance(value, Mapping):
        normalized: Dict[str, JSONValue] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise InvalidEventError(f"event payload keys must be strings, got {key!r}")
            normalized[key] = to_json_value(item)
        return normalized
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    raise InvalidEventError(
        f"unsupported value of type {type(value).__name__} in event payload"
    )


class OperatingSystem(str, Enum):
    MAC_OS = "Mac OS"
    IOS = "iOS"
    WINDOWS = "Windows"
    ANDROID = "Android"
    LINUX = "Linux"
    UNKNOWN = "Unknown OS"


class Browser(str, Enum):
    FIREFOX = "Mozilla Firefox"
    SAMSUNG_INTERNET = "Samsung Internet"
    OPERA = "Opera"
    INTERNET_EXPLORER = "Microsoft Internet Explorer"
    EDGE = "Microsoft Edge"
    CHROME = "Google Chrome"
    SAFARI = "Safari"
    UNKNOWN = "Unknown Browser"


@dataclass(frozen=True)
class Session:
    session_id: str
    user_id: Optional[str]
    start_time: datetime
    user_attributes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ClickSample:
    session_id: Optional[str]
    x: float
    y: float
    timestamp: datetime

    def to_payload(self) -> Dict[str, JSONValue]:
        return {
            "sessionId": self.session_id,
            "x": self.x,
            "y": self.y,
            "timestamp": isoformat(self.timestamp),
        }


@dataclass(frozen=True)
class ScrollSample:
    session_id: Optional[str]
    scroll_x: float
    scroll_y: float
    timestamp: datetime

    def to_payload(self) -> Dict[str, JSONValue]:
        return {
            "sessionId": self.session_id,
            "scrollX": self.scroll_x,
            "scrollY": self.scroll_y,
            "timestamp": isoformat(self.timestamp),
        }


InteractionSample = Union[ClickSample, ScrollSample]


@dataclass(frozen=True)
class EventEnvelope:
    project_id: Optional[str]
    user_id: Optional[str]
    event_name: str
    data: JSONValue
    date: datetime

    def to_wire(self) -> Dict[str, JSONValue]:
        return {
            "projectId": self.project_id,
            "userId": self.user_id,
            "event": self.event_name,
            "data": self.data,
            "date": isoformat(self.date),
        }


@dataclass
class NavigationTiming:
    start_time: float
    load_event_end: float


@dataclass
class PaintTiming:
    name: str
    start_time: float


@dataclass
class ErrorReport:
    message: str
    source: Optional[str] = None
    lineno: Optional[int] = None
    colno: Optional[int] = None
    error: Optional[BaseException | str] = None
