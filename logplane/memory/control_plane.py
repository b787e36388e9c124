"""In-process simulation of an eventually-consistent logging control plane.

Creates and deletes are accepted immediately but only become visible to
list calls after ``visibility_delay`` seconds, which is enough to drive
the lifecycle waiters the same way a real service does. Used by the
test-suite, the example script and ``logplane --provider memory``.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, TypeVar

from logplane.base.control_plane import ControlPlaneBlueprint
from logplane.base.config import MemoryConfig
from logplane.base.exceptions import ResourceNotFoundError
from logplane.base.models import LogEvent, LogGroup, LogStream, Outcome, Page

T = TypeVar("T")

_NOT_FOUND_CODE = "ResourceNotFoundException"
_ARN_PREFIX = "arn:memory:logs:local:000000000000:log-group"


@dataclass
class _Record:
    created_ms: int
    visible_at: float
    removed_at: float | None = None

    def pending_removal(self) -> bool:
        return self.removed_at is not None

    def visible(self, now: float, delay: float) -> bool:
        if now < self.visible_at:
            return False
        return self.removed_at is None or now < self.removed_at + delay

    def gone(self, now: float, delay: float) -> bool:
        return self.removed_at is not None and now >= self.removed_at + delay


@dataclass
class _StreamRecord(_Record):
    events: list[tuple[float, LogEvent]] = field(default_factory=list)


@dataclass
class _GroupRecord(_Record):
    streams: dict[str, _StreamRecord] = field(default_factory=dict)


def _transition(record: _Record | None) -> Outcome | None:
    """Outcome for a create against an existing record, ``None`` if free."""
    if record is None:
        return None
    return Outcome.CONFLICT if record.pending_removal() else Outcome.ALREADY_EXISTS


class ControlPlane(ControlPlaneBlueprint):
    """Thread-safe, in-memory control plane with delayed visibility.

    Args:
        config: Visibility delay and page size.
        clock: Monotonic clock in seconds; injectable for tests.
    """

    provider = "memory"

    def __init__(self, config: MemoryConfig, clock: Callable[[], float] = time.monotonic) -> None:
        self.delay = config.visibility_delay
        self.page_size = config.page_size
        self._clock = clock
        self._lock = threading.Lock()
        self._groups: dict[str, _GroupRecord] = {}

    # --- internals ---

    def _now(self) -> float:
        now = self._clock()
        for name in [n for n, g in self._groups.items() if g.gone(now, self.delay)]:
            del self._groups[name]
        for group in self._groups.values():
            for name in [n for n, s in group.streams.items() if s.gone(now, self.delay)]:
                del group.streams[name]
        return now

    def _live_stream(self, group: str, stream: str) -> _StreamRecord | None:
        g = self._groups.get(group)
        if g is None or g.pending_removal():
            return None
        s = g.streams.get(stream)
        if s is None or s.pending_removal():
            return None
        return s

    def _visible_stream(self, group: str, stream: str, now: float) -> _StreamRecord:
        g = self._groups.get(group)
        s = g.streams.get(stream) if g is not None else None
        if g is None or s is None or not (g.visible(now, self.delay) and s.visible(now, self.delay)):
            raise ResourceNotFoundError(
                f"The specified log stream does not exist: {group}/{stream}", _NOT_FOUND_CODE
            )
        return s

    def _page(self, items: list[T], next_token: str | None) -> Page[T]:
        start = int(next_token) if next_token else 0
        end = start + self.page_size
        return Page(items=items[start:end], next_token=str(end) if end < len(items) else None)

    # --- Log group lifecycle ---

    def create_log_group(self, name: str) -> Outcome:
        with self._lock:
            now = self._now()
            existing = _transition(self._groups.get(name))
            if existing is not None:
                return existing
            self._groups[name] = _GroupRecord(
                created_ms=int(time.time() * 1000), visible_at=now + self.delay
            )
            return Outcome.APPLIED

    def delete_log_group(self, name: str) -> Outcome:
        with self._lock:
            now = self._now()
            record = self._groups.get(name)
            if record is None:
                return Outcome.NOT_FOUND
            if record.pending_removal():
                return Outcome.CONFLICT
            record.removed_at = now
            return Outcome.APPLIED

    def list_log_groups(self, prefix: str = "", next_token: str | None = None) -> Page[LogGroup]:
        with self._lock:
            now = self._now()
            matches = [
                LogGroup(name=name, creation_time=g.created_ms, arn=f"{_ARN_PREFIX}:{name}")
                for name, g in sorted(self._groups.items())
                if name.startswith(prefix or "") and g.visible(now, self.delay)
            ]
            return self._page(matches, next_token)

    # --- Log stream lifecycle ---

    def create_log_stream(self, group: str, stream: str) -> Outcome:
        with self._lock:
            now = self._now()
            g = self._groups.get(group)
            if g is None or g.pending_removal():
                return Outcome.NOT_FOUND
            existing = _transition(g.streams.get(stream))
            if existing is not None:
                return existing
            g.streams[stream] = _StreamRecord(
                created_ms=int(time.time() * 1000), visible_at=now + self.delay
            )
            return Outcome.APPLIED

    def delete_log_stream(self, group: str, stream: str) -> Outcome:
        with self._lock:
            now = self._now()
            g = self._groups.get(group)
            s = g.streams.get(stream) if g is not None and not g.pending_removal() else None
            if s is None:
                return Outcome.NOT_FOUND
            if s.pending_removal():
                return Outcome.CONFLICT
            s.removed_at = now
            return Outcome.APPLIED

    def list_log_streams(
        self, group: str, prefix: str = "", next_token: str | None = None
    ) -> Page[LogStream]:
        with self._lock:
            now = self._now()
            g = self._groups.get(group)
            if g is None or not g.visible(now, self.delay):
                raise ResourceNotFoundError(
                    f"The specified log group does not exist: {group}", _NOT_FOUND_CODE
                )
            matches = [
                LogStream(
                    group_name=group,
                    name=name,
                    creation_time=s.created_ms,
                    arn=f"{_ARN_PREFIX}:{group}:log-stream:{name}",
                )
                for name, s in sorted(g.streams.items())
                if name.startswith(prefix or "") and s.visible(now, self.delay)
            ]
            return self._page(matches, next_token)

    # --- Log events ---

    def put_log_events(self, group: str, stream: str, events: list[LogEvent]) -> None:
        with self._lock:
            now = self._now()
            s = self._live_stream(group, stream)
            if s is None:
                raise ResourceNotFoundError(
                    f"The specified log stream does not exist: {group}/{stream}", _NOT_FOUND_CODE
                )
            s.events.extend((now + self.delay, ev) for ev in events)

    def get_log_events(
        self,
        group: str,
        stream: str,
        next_token: str | None = None,
        *,
        start_time: int | None = None,
        end_time: int | None = None,
    ) -> Page[LogEvent]:
        with self._lock:
            now = self._now()
            s = self._visible_stream(group, stream, now)
            visible = sorted(
                (
                    ev for at, ev in s.events
                    if now >= at
                    and (start_time is None or ev.timestamp >= start_time)
                    and (end_time is None or ev.timestamp < end_time)
                ),
                key=lambda ev: ev.timestamp,
            )
            return self._page(visible, next_token)
