"""Read-only projections of remote log resources.

Nothing here is constructed by the lifecycle layer itself: providers
build these from control-plane responses and callers only observe them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class Outcome(enum.Enum):
    """Classification of a mutating control-plane call."""

    APPLIED = "applied"
    ALREADY_EXISTS = "already_exists"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"


class LogGroup(BaseModel):
    """A named log group."""

    model_config = ConfigDict(frozen=True)

    name: str
    creation_time: int | None = None
    retention_in_days: int | None = None
    arn: str | None = None


class LogStream(BaseModel):
    """A log stream, unique by name within its group."""

    model_config = ConfigDict(frozen=True)

    group_name: str
    name: str
    creation_time: int | None = None
    arn: str | None = None


class LogEvent(BaseModel):
    """A single log event; ``timestamp`` is epoch milliseconds."""

    model_config = ConfigDict(frozen=True)

    timestamp: int
    message: str
    ingestion_time: int | None = None


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a list call. An empty or missing token marks the last page."""

    items: list[T] = field(default_factory=list)
    next_token: str | None = None

    @property
    def is_last(self) -> bool:
        return not self.next_token
