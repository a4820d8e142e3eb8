from __future__ import annotations

import pytest

from actorsync.core.error_reporter import ErrorReporter
from actorsync.core.events import EventLogger
from actorsync.core.identity.store import IdentityStore
from tests.helpers.fakes import FakeIdentityService, SilentLogger


@pytest.fixture
def service():
    return FakeIdentityService()


@pytest.fixture
def logger():
    return SilentLogger()


@pytest.fixture
def error_reporter(tmp_path):
    return ErrorReporter(path=str(tmp_path / "logs" / "errors.jsonl"))


@pytest.fixture
def event_logger(tmp_path):
    return EventLogger(path=str(tmp_path / "logs" / "identity_events.jsonl"))


@pytest.fixture
def store(service, logger, error_reporter, event_logger):
    s = IdentityStore(service=service, logger=logger, error_reporter=error_reporter, event_logger=event_logger)
    s.init()
    return s
