"""AWS CloudWatch Logs implementation of the control-plane blueprint."""

from __future__ import annotations

from typing import Any, NoReturn

import boto3
from botocore.exceptions import ClientError

from logplane.base.control_plane import ControlPlaneBlueprint
from logplane.base.exceptions import (
    ControlPlaneError,
    ResourceNotFoundError,
    ResourceAlreadyExistsError,
    OperationAbortedError,
    ThrottlingError,
)
from logplane.base.config import AWSConfig
from logplane.base.models import LogEvent, LogGroup, LogStream, Outcome, Page
from logplane.base.retry import retry

_ERROR_MAP: dict[str, type[ControlPlaneError]] = {
    "ResourceNotFoundException": ResourceNotFoundError,
    "ResourceAlreadyExistsException": ResourceAlreadyExistsError,
    "OperationAbortedException": OperationAbortedError,
    "ThrottlingException": ThrottlingError,
}

# Error codes that a create/delete call reports as an expected transition.
_OUTCOME_MAP: dict[str, Outcome] = {
    "ResourceAlreadyExistsException": Outcome.ALREADY_EXISTS,
    "OperationAbortedException": Outcome.CONFLICT,
    "ResourceNotFoundException": Outcome.NOT_FOUND,
}


def _handle(e: ClientError, msg: str) -> NoReturn:
    code = e.response["Error"]["Code"]
    exc = _ERROR_MAP.get(code)
    raise (exc or ControlPlaneError)(msg, code) from e


def _classify(e: ClientError, msg: str) -> Outcome:
    outcome = _OUTCOME_MAP.get(e.response["Error"]["Code"])
    if outcome is None:
        _handle(e, msg)
    return outcome


# PutLogEvents limits: events per request, request bytes (message
# UTF-8 size plus a fixed per-event overhead), and span between the
# oldest and newest event in one request.
_MAX_BATCH_EVENTS = 10_000
_MAX_BATCH_BYTES = 1_048_576
_EVENT_OVERHEAD_BYTES = 26
_MAX_BATCH_SPAN_MS = 24 * 60 * 60 * 1000 - 1


def _batches(ordered: list[LogEvent]) -> list[list[LogEvent]]:
    """Split timestamp-ordered events into requests CloudWatch will accept.

    A single event that is over the byte limit on its own still gets a
    batch, so that the service reports it rather than it being dropped.
    """
    batches: list[list[LogEvent]] = []
    batch: list[LogEvent] = []
    batch_bytes = 0
    for ev in ordered:
        size = len(ev.message.encode("utf-8")) + _EVENT_OVERHEAD_BYTES
        if batch and (
            len(batch) >= _MAX_BATCH_EVENTS
            or batch_bytes + size > _MAX_BATCH_BYTES
            or ev.timestamp > batch[0].timestamp + _MAX_BATCH_SPAN_MS
        ):
            batches.append(batch)
            batch, batch_bytes = [], 0
        batch.append(ev)
        batch_bytes += size
    if batch:
        batches.append(batch)
    return batches


def _to_group(raw: dict[str, Any]) -> LogGroup:
    return LogGroup(
        name=raw["logGroupName"],
        creation_time=raw.get("creationTime"),
        retention_in_days=raw.get("retentionInDays"),
        arn=raw.get("arn"),
    )


def _to_stream(group: str, raw: dict[str, Any]) -> LogStream:
    return LogStream(
        group_name=group,
        name=raw["logStreamName"],
        creation_time=raw.get("creationTime"),
        arn=raw.get("arn"),
    )


class ControlPlane(ControlPlaneBlueprint):
    """AWS CloudWatch Logs control plane.

    Reads are retried on ``ThrottlingException``; creates and deletes are
    issued exactly once.

    Attributes:
        client: boto3 CloudWatch Logs client.
    """

    provider = "aws"

    def __init__(self, config: AWSConfig) -> None:
        """Initialize the CloudWatch Logs client.

        Args:
            config: AWS configuration object containing credentials and region.
        """
        self.client = boto3.client(
            "logs",
            aws_access_key_id=config.aws_access_key_id,
            aws_secret_access_key=config.aws_secret_access_key,
            region_name=config.region_name,
        )

    # --- Log group lifecycle ---

    def create_log_group(self, name: str) -> Outcome:
        try:
            self.client.create_log_group(logGroupName=name)
        except ClientError as e:
            return _classify(e, f"Failed to create log group '{name}'")
        return Outcome.APPLIED

    def delete_log_group(self, name: str) -> Outcome:
        try:
            self.client.delete_log_group(logGroupName=name)
        except ClientError as e:
            return _classify(e, f"Failed to delete log group '{name}'")
        return Outcome.APPLIED

    @retry()
    def list_log_groups(self, prefix: str = "", next_token: str | None = None) -> Page[LogGroup]:
        """Return one page of ``DescribeLogGroups``.

        Raises:
            ThrottlingError: If still throttled after all retries.
            ControlPlaneError: On any other CloudWatch API failure.
        """
        params: dict[str, Any] = {}
        if prefix:
            params["logGroupNamePrefix"] = prefix
        if next_token:
            params["nextToken"] = next_token
        try:
            resp = self.client.describe_log_groups(**params)
        except ClientError as e:
            _handle(e, "Failed to list log groups")
        return Page(
            items=[_to_group(g) for g in resp.get("logGroups", [])],
            next_token=resp.get("nextToken"),
        )

    # --- Log stream lifecycle ---

    def create_log_stream(self, group: str, stream: str) -> Outcome:
        try:
            self.client.create_log_stream(logGroupName=group, logStreamName=stream)
        except ClientError as e:
            return _classify(e, f"Failed to create log stream '{group}/{stream}'")
        return Outcome.APPLIED

    def delete_log_stream(self, group: str, stream: str) -> Outcome:
        try:
            self.client.delete_log_stream(logGroupName=group, logStreamName=stream)
        except ClientError as e:
            return _classify(e, f"Failed to delete log stream '{group}/{stream}'")
        return Outcome.APPLIED

    @retry()
    def list_log_streams(
        self, group: str, prefix: str = "", next_token: str | None = None
    ) -> Page[LogStream]:
        """Return one page of ``DescribeLogStreams`` for *group*.

        Raises:
            ResourceNotFoundError: If the log group does not exist.
            ThrottlingError: If still throttled after all retries.
        """
        params: dict[str, Any] = {"logGroupName": group}
        if prefix:
            params["logStreamNamePrefix"] = prefix
        if next_token:
            params["nextToken"] = next_token
        try:
            resp = self.client.describe_log_streams(**params)
        except ClientError as e:
            _handle(e, f"Failed to list log streams in '{group}'")
        return Page(
            items=[_to_stream(group, s) for s in resp.get("logStreams", [])],
            next_token=resp.get("nextToken"),
        )

    # --- Log events ---

    def put_log_events(self, group: str, stream: str, events: list[LogEvent]) -> None:
        """Write events to a stream, ordered by timestamp as CloudWatch requires.

        Events are sent in as many ``PutLogEvents`` requests as the count,
        size and 24-hour span limits require. A failure stops at the
        failing batch; earlier batches have already been written.

        Raises:
            ResourceNotFoundError: If the group or stream does not exist.
            ControlPlaneError: On any other CloudWatch API failure.
        """
        ordered = sorted(events, key=lambda ev: ev.timestamp)
        for batch in _batches(ordered):
            try:
                self.client.put_log_events(
                    logGroupName=group,
                    logStreamName=stream,
                    logEvents=[{"timestamp": ev.timestamp, "message": ev.message} for ev in batch],
                )
            except ClientError as e:
                _handle(e, f"Failed to write events to '{group}/{stream}'")

    @retry()
    def get_log_events(
        self,
        group: str,
        stream: str,
        next_token: str | None = None,
        *,
        start_time: int | None = None,
        end_time: int | None = None,
    ) -> Page[LogEvent]:
        """Return one page of ``GetLogEvents``, reading forward from the head.

        CloudWatch always returns a forward token; the end of the stream is
        signalled by it echoing the request token, which is mapped to
        ``next_token=None`` here.

        Args:
            start_time: Epoch ms; only events at or after it.
            end_time: Epoch ms; only events before it.

        Raises:
            ResourceNotFoundError: If the group or stream does not exist.
        """
        params: dict[str, Any] = {
            "logGroupName": group,
            "logStreamName": stream,
            "startFromHead": True,
        }
        if start_time is not None:
            params["startTime"] = start_time
        if end_time is not None:
            params["endTime"] = end_time
        if next_token:
            params["nextToken"] = next_token
        try:
            resp = self.client.get_log_events(**params)
        except ClientError as e:
            _handle(e, f"Failed to read events from '{group}/{stream}'")
        forward = resp.get("nextForwardToken")
        return Page(
            items=[
                LogEvent(
                    timestamp=ev.get("timestamp", 0),
                    message=ev.get("message", ""),
                    ingestion_time=ev.get("ingestionTime"),
                )
                for ev in resp.get("events", [])
            ],
            next_token=None if forward == next_token else forward,
        )
