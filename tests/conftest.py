from datetime import datetime, timedelta, timezone

import pytest


class FakeClock:
    def __init__(self, start=None):
        self.now = start or datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **delta):
        self.now = self.now + timedelta(**delta)


class RecordingPost:
    """Stands in for ``requests.Session.post`` and remembers every call."""

    def __init__(self, status_code=200, body=None, exc=None):
        self.status_code = status_code
        self.body = {"ok": True} if body is None else body
        self.exc = exc
        self.calls = []

    def __call__(self, url, headers=None, json=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        status_code = self.status_code
        body = self.body

        class Response:
            def __init__(self):
                self.status_code = status_code

            def json(self):
                if isinstance(body, Exception):
                    raise body
                return body

        return Response()

    @property
    def envelopes(self):
        return [call["json"] for call in self.calls]


class FakeSession:
    def __init__(self, post):
        self.post = post


def immediate(job):
    job()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def post():
    return RecordingPost()


@pytest.fixture
def make_client(clock, post):
    from tracking_sdk import TrackingClient

    def factory(api_key="k", project_id="p1", **options):
        options.setdefault("session", FakeSession(post))
        options.setdefault("executor", immediate)
        options.setdefault("clock", clock)
        return TrackingClient(api_key, project_id, **options)

    return factory
