"""Control-plane blueprint for log group / log stream management."""

from abc import ABC, abstractmethod

from .models import LogEvent, LogGroup, LogStream, Outcome, Page


class ControlPlaneBlueprint(ABC):
    """Abstract interface to a managed logging service's control plane.

    Maps to AWS CloudWatch Logs and to the in-process simulation used in
    tests. Creates and deletes are asynchronous on the remote side: a
    returned :class:`Outcome` says the request was accepted, not that a
    subsequent list call will reflect it.

    Mutating calls classify the expected failure modes into an
    :class:`Outcome`; anything else is raised as
    :class:`~logplane.base.exceptions.ControlPlaneError`.
    """

    #: Provider name used in log context.
    provider: str = ""

    # --- Log group lifecycle ---

    @abstractmethod
    def create_log_group(self, name: str) -> Outcome:
        """Request creation of a log group."""

    @abstractmethod
    def delete_log_group(self, name: str) -> Outcome:
        """Request deletion of a log group and all of its streams."""

    @abstractmethod
    def list_log_groups(self, prefix: str = "", next_token: str | None = None) -> Page[LogGroup]:
        """Return one page of log groups whose names start with *prefix*.

        An empty *prefix* matches every group.
        """

    # --- Log stream lifecycle ---

    @abstractmethod
    def create_log_stream(self, group: str, stream: str) -> Outcome:
        """Request creation of a stream inside *group*.

        Returns :attr:`Outcome.NOT_FOUND` if the group does not exist.
        """

    @abstractmethod
    def delete_log_stream(self, group: str, stream: str) -> Outcome:
        """Request deletion of a stream."""

    @abstractmethod
    def list_log_streams(
        self, group: str, prefix: str = "", next_token: str | None = None
    ) -> Page[LogStream]:
        """Return one page of streams in *group* whose names start with *prefix*.

        Raises:
            ResourceNotFoundError: If *group* does not exist.
        """

    # --- Log events ---

    @abstractmethod
    def put_log_events(self, group: str, stream: str, events: list[LogEvent]) -> None:
        """Append events to a stream.

        Raises:
            ResourceNotFoundError: If the group or stream does not exist.
        """

    @abstractmethod
    def get_log_events(
        self,
        group: str,
        stream: str,
        next_token: str | None = None,
        *,
        start_time: int | None = None,
        end_time: int | None = None,
    ) -> Page[LogEvent]:
        """Return one page of events, reading forward from the head of the stream.

        Args:
            start_time: Epoch ms; events before it are skipped.
            end_time: Epoch ms; events at or after it are skipped.

        Raises:
            ResourceNotFoundError: If the group or stream does not exist.
        """
