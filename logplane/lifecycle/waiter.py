"""
Bounded, interruptible polling until a resource appears or disappears.

A :class:`Waiter` repeatedly calls a check at a fixed interval. It stops
in one of two terminal states: ``CONFIRMED`` when the check returns a
value, or ``GAVE_UP`` when the deadline passes or the cancellation token
fires. Giving up is not an error; the resource may still converge later.
"""

from __future__ import annotations

import enum
import time
from typing import Callable, Generic, TypeVar

from logplane.base.cancellation import CancellationToken
from logplane.base.control_plane import ControlPlaneBlueprint
from logplane.base.logger import lp_logger
from logplane.base.models import LogGroup, LogStream

from .describe import describe_log_group, describe_log_stream

T = TypeVar("T")

#: Seconds between describe checks while a resource is transitioning.
DEFAULT_RETRY_INTERVAL = 0.05


class WaitState(enum.Enum):
    POLLING = "polling"
    CONFIRMED = "confirmed"
    GAVE_UP = "gave_up"


class Waiter(Generic[T]):
    """Poll *check* until it returns something other than ``None``.

    The deadline is tested before every check, so a waiter returns no
    later than ``timeout + retry_interval`` plus the duration of one
    in-flight check.

    Args:
        check: Returns the confirmed value, or ``None`` to keep waiting.
        timeout: Seconds before giving up; ``0`` gives up without checking.
        retry_interval: Seconds to sleep between checks.
        cancel_token: Checked before each sleep; wakes the sleep when set.
        clock: Monotonic clock in seconds.
    """

    def __init__(
        self,
        check: Callable[[], T | None],
        timeout: float,
        *,
        retry_interval: float = DEFAULT_RETRY_INTERVAL,
        cancel_token: CancellationToken | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.check = check
        self.timeout = timeout
        self.retry_interval = retry_interval
        self.cancel_token = cancel_token or CancellationToken()
        self.clock = clock
        self.state = WaitState.POLLING
        self.cancelled = False
        self.attempts = 0

    def wait(self) -> T | None:
        """Run the polling loop; returns the check's value or ``None``."""
        self.state = WaitState.POLLING
        deadline = self.clock() + self.timeout
        while self.clock() < deadline:
            if self.cancel_token.cancelled:
                return self._give_up(cancelled=True)
            self.attempts += 1
            result = self.check()
            if result is not None:
                self.state = WaitState.CONFIRMED
                return result
            if not self.cancel_token.sleep(self.retry_interval):
                return self._give_up(cancelled=True)
        return self._give_up(cancelled=False)

    def _give_up(self, *, cancelled: bool) -> None:
        self.state = WaitState.GAVE_UP
        self.cancelled = cancelled
        return None


def _report(waiter: Waiter, what: str, resource: str, operation: str) -> None:
    if waiter.state is not WaitState.GAVE_UP:
        return
    if waiter.cancelled:
        lp_logger.debug(f"cancelled while waiting for {what}: {resource}",
                        operation=operation, resource=resource)
    else:
        lp_logger.warning(f"timeout expired waiting for {what}: {resource}",
                          operation=operation, resource=resource)


def wait_until_group_created(
    control_plane: ControlPlaneBlueprint,
    name: str,
    timeout: float,
    *,
    retry_interval: float = DEFAULT_RETRY_INTERVAL,
    cancel_token: CancellationToken | None = None,
) -> LogGroup | None:
    """Wait for *name* to become describable; ``None`` on timeout or cancel."""
    waiter = Waiter(
        lambda: describe_log_group(control_plane, name),
        timeout,
        retry_interval=retry_interval,
        cancel_token=cancel_token,
    )
    group = waiter.wait()
    _report(waiter, "log group creation", name, "create_log_group")
    return group


def wait_until_stream_created(
    control_plane: ControlPlaneBlueprint,
    group: str,
    stream: str,
    timeout: float,
    *,
    retry_interval: float = DEFAULT_RETRY_INTERVAL,
    cancel_token: CancellationToken | None = None,
) -> LogStream | None:
    """Wait for the stream (and its group) to become describable.

    A group that is not yet visible simply reads as "stream not there yet".
    """
    waiter = Waiter(
        lambda: describe_log_stream(control_plane, group, stream),
        timeout,
        retry_interval=retry_interval,
        cancel_token=cancel_token,
    )
    result = waiter.wait()
    _report(waiter, "log stream creation", f"{group}/{stream}", "create_log_stream")
    return result


def wait_until_group_deleted(
    control_plane: ControlPlaneBlueprint,
    name: str,
    timeout: float,
    *,
    retry_interval: float = DEFAULT_RETRY_INTERVAL,
    cancel_token: CancellationToken | None = None,
) -> bool:
    """Wait for *name* to stop being describable; ``False`` on timeout or cancel."""
    waiter = Waiter(
        lambda: True if describe_log_group(control_plane, name) is None else None,
        timeout,
        retry_interval=retry_interval,
        cancel_token=cancel_token,
    )
    gone = waiter.wait() is not None
    _report(waiter, "log group deletion", name, "delete_log_group")
    return gone


def wait_until_stream_deleted(
    control_plane: ControlPlaneBlueprint,
    group: str,
    stream: str,
    timeout: float,
    *,
    retry_interval: float = DEFAULT_RETRY_INTERVAL,
    cancel_token: CancellationToken | None = None,
) -> bool:
    """Wait for the stream to stop being describable.

    A vanished group counts as the stream being gone.
    """
    waiter = Waiter(
        lambda: True if describe_log_stream(control_plane, group, stream) is None else None,
        timeout,
        retry_interval=retry_interval,
        cancel_token=cancel_token,
    )
    gone = waiter.wait() is not None
    _report(waiter, "log stream deletion", f"{group}/{stream}", "delete_log_stream")
    return gone
