"""Logplane CLI — create, delete and describe log resources from the shell.

Usage examples::

    logplane --provider aws create-stream /app/web instance-1 --timeout 30
    logplane --provider aws describe-groups --prefix /app
    logplane --provider memory -c '{"visibility_delay": 0.1}' create-group demo
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from pydantic import BaseModel, ValidationError

from logplane.base.exceptions import LogplaneError

_EXIT_NOT_CONFIRMED = 2


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``logplane`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="logplane",
        description="Idempotent log group / log stream management",
    )
    parser.add_argument(
        "--provider", "-p",
        default="aws",
        choices=["aws", "memory"],
        help="Control-plane provider",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="{}",
        help='JSON provider config (e.g. \'{"region_name":"us-east-1"}\')',
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help="Seconds to wait for creates/deletes to become visible",
    )
    parser.add_argument(
        "--retry-interval",
        type=float,
        default=None,
        help="Seconds between describe checks",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    for name in ("create-group", "delete-group", "describe-group"):
        sub.add_parser(name).add_argument("group")
    for name in ("create-stream", "delete-stream", "describe-stream"):
        p = sub.add_parser(name)
        p.add_argument("group")
        p.add_argument("stream")
    sub.add_parser("describe-groups").add_argument("--prefix", default="")
    p = sub.add_parser("describe-streams")
    p.add_argument("group")
    p.add_argument("--prefix", default="")
    sub.add_parser("account", help="Print the AWS account ID (or 'unknown')")
    return parser


def _render(result: Any) -> str:
    if isinstance(result, BaseModel):
        return json.dumps(result.model_dump(), indent=2)
    if isinstance(result, list):
        return json.dumps([r.model_dump() for r in result], indent=2)
    return str(result)


def _run(ns: argparse.Namespace, config: dict[str, Any]) -> Any:
    # Lazy-import so that argument errors don't pay for boto3
    from logplane.factory import lifecycle_factory

    if ns.command == "account":
        from logplane.aws.identity import get_account_id, UNKNOWN_ACCOUNT
        from logplane.base.config import AWSConfig

        if ns.provider != "aws":
            return UNKNOWN_ACCOUNT
        return get_account_id(AWSConfig(**config))

    settings: dict[str, Any] = {}
    if ns.retry_interval is not None:
        settings["retry_interval"] = ns.retry_interval
    logs = lifecycle_factory(ns.provider, config, settings)

    dispatch = {
        "create-group": lambda: logs.create_log_group(ns.group, ns.timeout),
        "create-stream": lambda: logs.create_log_stream(ns.group, ns.stream, ns.timeout),
        "delete-group": lambda: logs.delete_log_group(ns.group, ns.timeout),
        "delete-stream": lambda: logs.delete_log_stream(ns.group, ns.stream, ns.timeout),
        "describe-group": lambda: logs.describe_log_group(ns.group),
        "describe-stream": lambda: logs.describe_log_stream(ns.group, ns.stream),
        "describe-groups": lambda: logs.describe_log_groups(ns.prefix),
        "describe-streams": lambda: logs.describe_log_streams(ns.group, ns.prefix),
    }
    return dispatch[ns.command]()


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Exit status is 0 for a confirmed result, 2 when a create/delete was
    accepted but not confirmed in time (or a describe found nothing), and
    1 for invalid input or a control-plane error.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    try:
        config: dict[str, Any] = json.loads(ns.config)
    except json.JSONDecodeError as e:
        print(f"Invalid --config JSON: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        result = _run(ns, config)
    except (ValueError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except LogplaneError as e:
        print(f"Operation failed: {e}", file=sys.stderr)
        sys.exit(1)

    if result is None or result is False:
        print(f"{ns.command}: not confirmed", file=sys.stderr)
        sys.exit(_EXIT_NOT_CONFIRMED)
    if result is True:
        print("OK")
    else:
        print(_render(result))


if __name__ == "__main__":
    main()
