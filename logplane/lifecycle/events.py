"""Reading log events back out of streams."""

from __future__ import annotations

import time
from typing import Iterator

from logplane.base.cancellation import CancellationToken
from logplane.base.control_plane import ControlPlaneBlueprint
from logplane.base.exceptions import ResourceNotFoundError
from logplane.base.logger import lp_logger
from logplane.base.models import LogEvent

from .pagination import paginate


def iter_log_events(
    control_plane: ControlPlaneBlueprint,
    group: str,
    stream: str,
    *,
    start_time: int | None = None,
    end_time: int | None = None,
) -> Iterator[LogEvent]:
    """Yield every event in a stream, oldest first.

    *start_time* (inclusive) and *end_time* (exclusive) are epoch ms and
    limit the read to that window. A missing group or stream is logged
    and yields nothing.
    """
    try:
        yield from paginate(
            lambda token: control_plane.get_log_events(
                group, stream, token, start_time=start_time, end_time=end_time
            )
        )
    except ResourceNotFoundError:
        lp_logger.warning(
            f"retrieve from missing stream: {group}/{stream}",
            provider=control_plane.provider,
            operation="get_log_events",
            resource=f"{group}/{stream}",
        )


def retrieve_all_events(
    control_plane: ControlPlaneBlueprint,
    group: str,
    streams: list[str],
    expected_count: int,
    timeout: float,
    *,
    delay: float = 0.25,
    start_time: int | None = None,
    end_time: int | None = None,
    cancel_token: CancellationToken | None = None,
) -> list[LogEvent]:
    """Re-read *streams* until *expected_count* events are visible.

    Written events can take seconds to become readable, so each pass reads
    every stream from the head and replaces the previous pass's result.
    Only events inside ``[start_time, end_time)`` are counted, so older
    events in a long-lived stream do not satisfy the count.
    Returns whatever the last pass saw once the count is reached, the
    timeout elapses, or the token is cancelled, sorted by timestamp.
    Events carry no record of their source stream.
    """
    token = cancel_token or CancellationToken()
    result: list[LogEvent] = []
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline and not token.cancelled:
        result = [
            ev
            for stream in streams
            for ev in iter_log_events(
                control_plane, group, stream, start_time=start_time, end_time=end_time
            )
        ]
        if len(result) >= expected_count:
            break
        if not token.sleep(delay):
            break
    return sorted(result, key=lambda ev: ev.timestamp)
