"""Tests for the simulated, eventually-consistent control plane."""

import pytest

from logplane.base.config import MemoryConfig
from logplane.base.exceptions import ResourceNotFoundError
from logplane.base.models import LogEvent, Outcome
from logplane.memory.control_plane import ControlPlane


def _names(page):
    return [item.name for item in page.items]


class TestGroups:
    def test_create_becomes_visible_after_delay(self, delayed_plane, clock):
        assert delayed_plane.create_log_group("g1") is Outcome.APPLIED
        assert delayed_plane.list_log_groups("g1").items == []
        clock.advance(1.0)
        assert _names(delayed_plane.list_log_groups("g1")) == ["g1"]

    def test_create_twice(self, delayed_plane):
        delayed_plane.create_log_group("g1")
        assert delayed_plane.create_log_group("g1") is Outcome.ALREADY_EXISTS

    def test_create_while_deleting_conflicts(self, delayed_plane, clock):
        delayed_plane.create_log_group("g1")
        clock.advance(1.0)
        delayed_plane.delete_log_group("g1")
        assert delayed_plane.create_log_group("g1") is Outcome.CONFLICT
        clock.advance(1.0)
        assert delayed_plane.create_log_group("g1") is Outcome.APPLIED

    def test_delete_lingers_until_delay(self, delayed_plane, clock):
        delayed_plane.create_log_group("g1")
        clock.advance(1.0)
        assert delayed_plane.delete_log_group("g1") is Outcome.APPLIED
        assert _names(delayed_plane.list_log_groups()) == ["g1"]
        assert delayed_plane.delete_log_group("g1") is Outcome.CONFLICT
        clock.advance(1.0)
        assert delayed_plane.list_log_groups().items == []
        assert delayed_plane.delete_log_group("g1") is Outcome.NOT_FOUND

    def test_delete_missing(self, delayed_plane):
        assert delayed_plane.delete_log_group("nope") is Outcome.NOT_FOUND

    def test_pagination(self, delayed_plane, clock):
        for name in ("a", "b", "c"):
            delayed_plane.create_log_group(name)
        clock.advance(1.0)
        first = delayed_plane.list_log_groups()
        assert _names(first) == ["a", "b"]
        second = delayed_plane.list_log_groups("", first.next_token)
        assert _names(second) == ["c"]
        assert second.is_last

    def test_prefix_over_matches(self, delayed_plane, clock):
        for name in ("foo", "foobar", "bar"):
            delayed_plane.create_log_group(name)
        clock.advance(1.0)
        assert _names(delayed_plane.list_log_groups("foo")) == ["foo", "foobar"]


class TestStreams:
    def test_create_in_missing_group(self, delayed_plane):
        assert delayed_plane.create_log_stream("g1", "s1") is Outcome.NOT_FOUND

    def test_list_in_missing_group(self, delayed_plane):
        with pytest.raises(ResourceNotFoundError):
            delayed_plane.list_log_streams("g1")

    def test_lifecycle(self, delayed_plane, clock):
        delayed_plane.create_log_group("g1")
        assert delayed_plane.create_log_stream("g1", "s1") is Outcome.APPLIED
        assert delayed_plane.create_log_stream("g1", "s1") is Outcome.ALREADY_EXISTS
        clock.advance(1.0)
        assert _names(delayed_plane.list_log_streams("g1")) == ["s1"]
        assert delayed_plane.delete_log_stream("g1", "s1") is Outcome.APPLIED
        clock.advance(1.0)
        assert delayed_plane.list_log_streams("g1").items == []
        assert delayed_plane.delete_log_stream("g1", "s1") is Outcome.NOT_FOUND

    def test_group_deletion_hides_streams(self, delayed_plane, clock):
        delayed_plane.create_log_group("g1")
        delayed_plane.create_log_stream("g1", "s1")
        clock.advance(1.0)
        delayed_plane.delete_log_group("g1")
        clock.advance(1.0)
        with pytest.raises(ResourceNotFoundError):
            delayed_plane.list_log_streams("g1")
        assert delayed_plane.delete_log_stream("g1", "s1") is Outcome.NOT_FOUND


class TestEvents:
    def test_put_and_get(self, clock):
        plane = ControlPlane(MemoryConfig(), clock=clock)
        plane.create_log_group("g")
        plane.create_log_stream("g", "s")
        plane.put_log_events("g", "s", [
            LogEvent(timestamp=2, message="b"),
            LogEvent(timestamp=1, message="a"),
        ])
        page = plane.get_log_events("g", "s")
        assert [e.message for e in page.items] == ["a", "b"]
        assert page.is_last

    def test_events_delayed(self, delayed_plane, clock):
        delayed_plane.create_log_group("g")
        delayed_plane.create_log_stream("g", "s")
        clock.advance(1.0)
        delayed_plane.put_log_events("g", "s", [LogEvent(timestamp=1, message="a")])
        assert delayed_plane.get_log_events("g", "s").items == []
        clock.advance(1.0)
        assert len(delayed_plane.get_log_events("g", "s").items) == 1

    def test_put_to_missing_stream(self, delayed_plane):
        with pytest.raises(ResourceNotFoundError):
            delayed_plane.put_log_events("g", "s", [LogEvent(timestamp=1, message="a")])

    def test_get_from_invisible_stream(self, delayed_plane):
        delayed_plane.create_log_group("g")
        delayed_plane.create_log_stream("g", "s")
        with pytest.raises(ResourceNotFoundError):
            delayed_plane.get_log_events("g", "s")

    def test_get_time_window(self, clock):
        plane = ControlPlane(MemoryConfig(), clock=clock)
        plane.create_log_group("g")
        plane.create_log_stream("g", "s")
        plane.put_log_events("g", "s", [LogEvent(timestamp=t, message=str(t)) for t in (1, 2, 3, 4)])
        assert [e.timestamp for e in plane.get_log_events("g", "s", start_time=2).items] == [2, 3, 4]
        assert [e.timestamp for e in plane.get_log_events("g", "s", end_time=3).items] == [1, 2]
