"""Tests for event retrieval."""

import logging
from unittest.mock import MagicMock

import pytest

from logplane.base.cancellation import CancellationToken
from logplane.base.config import MemoryConfig
from logplane.base.control_plane import ControlPlaneBlueprint
from logplane.base.exceptions import ResourceNotFoundError
from logplane.base.models import LogEvent, Page
from logplane.lifecycle.events import iter_log_events, retrieve_all_events
from logplane.memory.control_plane import ControlPlane as MemoryControlPlane


@pytest.fixture
def plane():
    cp = MagicMock(spec=ControlPlaneBlueprint)
    cp.provider = "mock"
    return cp


def _events(*stamps, token=None):
    return Page(items=[LogEvent(timestamp=t, message=f"m{t}") for t in stamps], next_token=token)


class TestIterLogEvents:
    def test_follows_pages(self, plane):
        plane.get_log_events.side_effect = [_events(1, 2, token="f1"), _events(3)]
        assert [e.timestamp for e in iter_log_events(plane, "g", "s")] == [1, 2, 3]
        plane.get_log_events.assert_any_call("g", "s", "f1", start_time=None, end_time=None)

    def test_missing_stream_warns(self, plane, caplog):
        plane.get_log_events.side_effect = ResourceNotFoundError("missing")
        with caplog.at_level(logging.WARNING, logger="logplane"):
            assert list(iter_log_events(plane, "g", "s")) == []
        assert "retrieve from missing stream: g/s" in caplog.text

    def test_passes_time_window(self, plane):
        plane.get_log_events.return_value = _events(5)
        list(iter_log_events(plane, "g", "s", start_time=5, end_time=10))
        plane.get_log_events.assert_called_once_with("g", "s", None, start_time=5, end_time=10)


class TestRetrieveAllEvents:
    def test_merges_and_sorts_streams(self, plane):
        pages = {"a": _events(3, 1), "b": _events(2)}
        plane.get_log_events.side_effect = lambda g, s, token, **kw: pages[s]
        events = retrieve_all_events(plane, "g", ["a", "b"], 3, 1.0, delay=0.01)
        assert [e.timestamp for e in events] == [1, 2, 3]

    def test_repeats_until_expected_count(self, plane):
        plane.get_log_events.side_effect = [_events(1), _events(1, 2)]
        events = retrieve_all_events(plane, "g", ["s"], 2, 1.0, delay=0.01)
        assert [e.timestamp for e in events] == [1, 2]
        assert plane.get_log_events.call_count == 2

    def test_timeout_returns_partial(self, plane):
        plane.get_log_events.return_value = _events(1)
        events = retrieve_all_events(plane, "g", ["s"], 5, 0.05, delay=0.01)
        assert len(events) == 1

    def test_cancelled_returns_immediately(self, plane):
        token = CancellationToken()
        token.cancel()
        assert retrieve_all_events(plane, "g", ["s"], 1, 5.0, cancel_token=token) == []
        plane.get_log_events.assert_not_called()

    def test_window_excludes_older_events(self, clock):
        plane = MemoryControlPlane(MemoryConfig(), clock=clock)
        plane.create_log_group("g")
        plane.create_log_stream("g", "s")
        plane.put_log_events("g", "s", [LogEvent(timestamp=t, message=f"m{t}") for t in (1, 5, 9)])
        events = retrieve_all_events(plane, "g", ["s"], 2, 0.05, delay=0.01, start_time=5)
        assert [e.timestamp for e in events] == [5, 9]
        events = retrieve_all_events(plane, "g", ["s"], 1, 0.05, delay=0.01, start_time=2, end_time=9)
        assert [e.timestamp for e in events] == [5]
