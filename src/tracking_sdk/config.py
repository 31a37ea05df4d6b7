from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

DEFAULT_ENDPOINT = "https://purring-agency-slow.functions.on-fleek.app/submitEvent"
DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_BUFFERED_SAMPLES = 10_000


@dataclass
class TrackerConfig:
    api_key: str
    project_id: Optional[str] = None
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    max_buffered_samples: int = DEFAULT_MAX_BUFFERED_SAMPLES

    def validate(self) -> None:
        if not isinstance(self.api_key, str) or not self.api_key.strip():
            raise ConfigurationError("apiKey is required to initialize the SDK")
        self.endpoint = (self.endpoint or "").strip()
        if not self.endpoint:
            raise ConfigurationError("endpoint must be a non-empty URL")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if self.max_buffered_samples <= 0:
            raise ConfigurationError("max_buffered_samples must be positive")

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        mapping = {
            "api_key": "TRACKING_API_KEY",
            "project_id": "TRACKING_PROJECT_ID",
            "endpoint": "TRACKING_ENDPOINT",
            "timeout": "TRACKING_TIMEOUT",
            "max_buffered_samples": "TRACKING_MAX_BUFFERED_SAMPLES",
        }
        values = {}
        for name, env_var in mapping.items():
            value = os.getenv(env_var)
            if value:
                values[name] = value
        try:
            if "timeout" in values:
                values["timeout"] = float(values["timeout"])
            if "max_buffered_samples" in values:
                values["max_buffered_samples"] = int(values["max_buffered_samples"])
        except ValueError as exc:
            raise ConfigurationError(f"invalid tracking setting: {exc}") from exc
        config = cls(api_key=values.pop("api_key", ""), **values)
        config.validate()
        return config
