"""Describe log groups and streams by prefix or by exact name.

The control plane only offers prefix listing, so a describe for ``foo``
also returns ``foobar``; the single-resource helpers filter down to an
exact name match. Every call is a fresh round trip.
"""

from __future__ import annotations

from logplane.base.control_plane import ControlPlaneBlueprint
from logplane.base.models import LogGroup, LogStream

from .pagination import list_all


def describe_log_groups(control_plane: ControlPlaneBlueprint, prefix: str | None = "") -> list[LogGroup]:
    """All log groups whose names start with *prefix* (everything if empty)."""
    return list_all(control_plane.list_log_groups, prefix)


def describe_log_group(control_plane: ControlPlaneBlueprint, name: str) -> LogGroup | None:
    """The log group named exactly *name*, or ``None`` if it does not exist."""
    for group in describe_log_groups(control_plane, name):
        if group.name == name:
            return group
    return None


def describe_log_streams(
    control_plane: ControlPlaneBlueprint, group: str, prefix: str | None = ""
) -> list[LogStream]:
    """All streams in *group* starting with *prefix*; empty if the group is missing."""
    return list_all(
        lambda p, token: control_plane.list_log_streams(group, p, token), prefix
    )


def describe_log_stream(
    control_plane: ControlPlaneBlueprint, group: str, stream: str
) -> LogStream | None:
    """The stream named exactly *stream*, or ``None`` if it or its group is missing."""
    for candidate in describe_log_streams(control_plane, group, stream):
        if candidate.name == stream:
            return candidate
    return None
