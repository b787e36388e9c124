"""Idempotent create/delete of log groups and streams.

:class:`LogLifecycle` issues each create or delete exactly once, maps
the classified :class:`~logplane.base.models.Outcome` onto "wait",
"done" or "fail", and then confirms the result by polling describe.
Three results are possible for every call: a confirmed value, a
"not confirmed" sentinel (``None`` / ``False``) after a timeout or
cancellation, or a raised :class:`~logplane.base.exceptions.ControlPlaneError`.
"""

from __future__ import annotations

from logplane.base.cancellation import CancellationToken
from logplane.base.config import LifecycleSettings
from logplane.base.control_plane import ControlPlaneBlueprint
from logplane.base.exceptions import ResourceNotFoundError
from logplane.base.logger import lp_logger
from logplane.base.models import LogEvent, LogGroup, LogStream, Outcome

from . import describe, events, waiter


class LogLifecycle:
    """Create, delete and describe log groups and streams on a control plane.

    Holds no remote state between calls; every existence check is a fresh
    describe.

    Attributes:
        control_plane: Provider used for every request.
        settings: Retry interval and default timeout.
    """

    def __init__(
        self,
        control_plane: ControlPlaneBlueprint,
        settings: LifecycleSettings | None = None,
    ) -> None:
        self.control_plane = control_plane
        self.settings = settings or LifecycleSettings()

    def _timeout(self, timeout: float | None) -> float:
        return self.settings.default_timeout if timeout is None else timeout

    def _log(self, message: str, operation: str, resource: str) -> None:
        lp_logger.debug(
            message,
            provider=self.control_plane.provider,
            operation=operation,
            resource=resource,
        )

    # --- Describe ---

    def describe_log_groups(self, prefix: str | None = "") -> list[LogGroup]:
        return describe.describe_log_groups(self.control_plane, prefix)

    def describe_log_group(self, name: str) -> LogGroup | None:
        return describe.describe_log_group(self.control_plane, name)

    def describe_log_streams(self, group: str, prefix: str | None = "") -> list[LogStream]:
        return describe.describe_log_streams(self.control_plane, group, prefix)

    def describe_log_stream(self, group: str, stream: str) -> LogStream | None:
        return describe.describe_log_stream(self.control_plane, group, stream)

    # --- Create ---

    def create_log_group(
        self,
        name: str,
        timeout: float | None = None,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> LogGroup | None:
        """Create a log group and wait until it is describable.

        Succeeds whether this call created the group, it already existed,
        or another actor is creating it concurrently.

        Args:
            name: Log group name.
            timeout: Seconds to wait for the group to appear.
            cancel_token: Stops the wait early when cancelled.

        Returns:
            The described group, or ``None`` if it was not visible before
            the timeout or cancellation (it may still appear later).

        Raises:
            ControlPlaneError: On an unclassified remote failure.
        """
        self._log(f"creating log group: {name}", "create_log_group", name)
        outcome = self.control_plane.create_log_group(name)
        if outcome is Outcome.NOT_FOUND:
            raise ResourceNotFoundError(f"Failed to create log group '{name}'", "ResourceNotFoundException")
        return waiter.wait_until_group_created(
            self.control_plane,
            name,
            self._timeout(timeout),
            retry_interval=self.settings.retry_interval,
            cancel_token=cancel_token,
        )

    def create_log_stream(
        self,
        group: str,
        stream: str,
        timeout: float | None = None,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> LogStream | None:
        """Create a log stream, creating its group first if needed.

        The full *timeout* applies separately to the group and to the
        stream, so the worst-case wait is twice the value passed.

        Returns:
            The described stream, or ``None`` if either the group or the
            stream was not confirmed before the timeout or cancellation.

        Raises:
            ResourceNotFoundError: If the group disappeared before the
                stream could be created.
            ControlPlaneError: On an unclassified remote failure.
        """
        resource = f"{group}/{stream}"
        self._log(f"creating log stream: {resource}", "create_log_stream", resource)
        if self.describe_log_group(group) is None:
            if self.create_log_group(group, timeout, cancel_token=cancel_token) is None:
                return None
        outcome = self.control_plane.create_log_stream(group, stream)
        if outcome is Outcome.NOT_FOUND:
            raise ResourceNotFoundError(
                f"Failed to create log stream '{resource}': log group does not exist",
                "ResourceNotFoundException",
            )
        return waiter.wait_until_stream_created(
            self.control_plane,
            group,
            stream,
            self._timeout(timeout),
            retry_interval=self.settings.retry_interval,
            cancel_token=cancel_token,
        )

    # --- Delete ---

    def delete_log_group(
        self,
        name: str,
        timeout: float | None = None,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> bool:
        """Delete a log group and wait until it is no longer describable.

        Returns:
            ``True`` if the group is confirmed gone (including when it never
            existed), ``False`` on timeout or cancellation.
        """
        self._log(f"deleting log group: {name}", "delete_log_group", name)
        if self.control_plane.delete_log_group(name) is Outcome.NOT_FOUND:
            return True
        return waiter.wait_until_group_deleted(
            self.control_plane,
            name,
            self._timeout(timeout),
            retry_interval=self.settings.retry_interval,
            cancel_token=cancel_token,
        )

    def delete_log_stream(
        self,
        group: str,
        stream: str,
        timeout: float | None = None,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> bool:
        """Delete a log stream and wait until it is no longer describable.

        Returns:
            ``True`` if the stream is confirmed gone (including when it or
            its group never existed), ``False`` on timeout or cancellation.
        """
        resource = f"{group}/{stream}"
        self._log(f"deleting log stream: {resource}", "delete_log_stream", resource)
        if self.control_plane.delete_log_stream(group, stream) is Outcome.NOT_FOUND:
            return True
        return waiter.wait_until_stream_deleted(
            self.control_plane,
            group,
            stream,
            self._timeout(timeout),
            retry_interval=self.settings.retry_interval,
            cancel_token=cancel_token,
        )

    # --- Events ---

    def write_events(self, group: str, stream: str, events: list[LogEvent]) -> None:
        """Append *events* to a stream; the group and stream must already exist."""
        self.control_plane.put_log_events(group, stream, events)

    def retrieve_all_events(
        self,
        group: str,
        streams: list[str],
        expected_count: int,
        timeout: float | None = None,
        *,
        start_time: int | None = None,
        end_time: int | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> list[LogEvent]:
        """See :func:`logplane.lifecycle.events.retrieve_all_events`."""
        return events.retrieve_all_events(
            self.control_plane,
            group,
            streams,
            expected_count,
            self._timeout(timeout),
            delay=self.settings.retry_interval,
            start_time=start_time,
            end_time=end_time,
            cancel_token=cancel_token,
        )
