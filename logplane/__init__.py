"""Logplane — eventually-consistent lifecycle management for log groups
and log streams.

Entry point for the library::

    from logplane import lifecycle_factory

    logs = lifecycle_factory("aws", {"region_name": "us-east-1"})
    stream = logs.create_log_stream("/app/web", "instance-1", timeout=30)
    if stream is None:
        ...  # not visible yet; may still appear later
"""

from .base import (
    CancellationToken,
    ControlPlaneBlueprint,
    ControlPlaneError,
    LogEvent,
    LogGroup,
    LogStream,
    LogplaneError,
    Outcome,
)
from .lifecycle import LogLifecycle
from .factory import control_plane_factory, lifecycle_factory

__all__ = [
    "CancellationToken",
    "ControlPlaneBlueprint",
    "ControlPlaneError",
    "LogEvent",
    "LogGroup",
    "LogStream",
    "LogplaneError",
    "Outcome",
    "LogLifecycle",
    "control_plane_factory",
    "lifecycle_factory",
]
