"""Eventually-consistent lifecycle management for log groups and streams."""

from .describe import (
    describe_log_group,
    describe_log_groups,
    describe_log_stream,
    describe_log_streams,
)
from .events import iter_log_events, retrieve_all_events
from .orchestrator import LogLifecycle
from .pagination import list_all, paginate
from .waiter import (
    DEFAULT_RETRY_INTERVAL,
    Waiter,
    WaitState,
    wait_until_group_created,
    wait_until_group_deleted,
    wait_until_stream_created,
    wait_until_stream_deleted,
)

__all__ = [
    "LogLifecycle",
    "Waiter",
    "WaitState",
    "DEFAULT_RETRY_INTERVAL",
    "describe_log_group",
    "describe_log_groups",
    "describe_log_stream",
    "describe_log_streams",
    "iter_log_events",
    "retrieve_all_events",
    "list_all",
    "paginate",
    "wait_until_group_created",
    "wait_until_group_deleted",
    "wait_until_stream_created",
    "wait_until_stream_deleted",
]
