"""Best-effort AWS account lookup."""

from __future__ import annotations

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from logplane.base.config import AWSConfig
from logplane.base.logger import lp_logger

UNKNOWN_ACCOUNT = "unknown"


def get_account_id(config: AWSConfig) -> str:
    """Return the account ID for *config*'s credentials, or ``"unknown"``.

    Issues a single STS ``GetCallerIdentity`` call. Any failure to resolve
    credentials or reach STS is logged at debug level and reported as
    ``"unknown"`` rather than raised.
    """
    try:
        sts = boto3.client(
            "sts",
            aws_access_key_id=config.aws_access_key_id,
            aws_secret_access_key=config.aws_secret_access_key,
            region_name=config.region_name,
        )
        return str(sts.get_caller_identity()["Account"])
    except (BotoCoreError, ClientError) as e:
        lp_logger.debug(f"unable to determine account ID: {e}", provider="aws", operation="get_account_id")
        return UNKNOWN_ACCOUNT
