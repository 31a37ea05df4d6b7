import pytest

from tracking_sdk import ConfigurationError, TrackerConfig
from tracking_sdk.config import DEFAULT_ENDPOINT

pytestmark = pytest.mark.unit


def test_defaults_point_at_collection_endpoint():
    config = TrackerConfig(api_key="k")
    config.validate()
    assert config.endpoint == DEFAULT_ENDPOINT
    assert config.project_id is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"api_key": ""},
        {"endpoint": "  "},
        {"timeout": 0},
        {"max_buffered_samples": 0},
    ],
)
def test_invalid_settings_are_rejected(overrides):
    values = {"api_key": "k"}
    values.update(overrides)
    with pytest.raises(ConfigurationError):
        TrackerConfig(**values).validate()


def test_from_env_reads_settings(monkeypatch):
    monkeypatch.setenv("TRACKING_API_KEY", "env-key")
    monkeypatch.setenv("TRACKING_ENDPOINT", "http://localhost:8000/submitEvent")
    monkeypatch.setenv("TRACKING_TIMEOUT", "2.5")
    monkeypatch.setenv("TRACKING_MAX_BUFFERED_SAMPLES", "50")
    monkeypatch.delenv("TRACKING_PROJECT_ID", raising=False)
    config = TrackerConfig.from_env()
    assert config.api_key == "env-key"
    assert config.endpoint == "http://localhost:8000/submitEvent"
    assert config.timeout == 2.5
    assert config.max_buffered_samples == 50


def test_from_env_requires_api_key(monkeypatch):
    monkeypatch.delenv("TRACKING_API_KEY", raising=False)
    with pytest.raises(ConfigurationError):
        TrackerConfig.from_env()


def test_from_env_rejects_non_numeric_timeout(monkeypatch):
    monkeypatch.setenv("TRACKING_API_KEY", "env-key")
    monkeypatch.setenv("TRACKING_TIMEOUT", "soon")
    with pytest.raises(ConfigurationError):
        TrackerConfig.from_env()
