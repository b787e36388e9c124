"""
Pydantic configuration models for control-plane providers and the
lifecycle layer.

Validates configs at initialization time instead of silently passing
bad values to SDK clients or polling loops.
"""

from __future__ import annotations

import os
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, model_validator


class AWSConfig(BaseModel):
    """Configuration for the CloudWatch Logs provider.

    Credentials are resolved in order:
    1. Explicit values passed in the config dict.
    2. Environment variables (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_DEFAULT_REGION).
    3. If neither is set, fields are left as None so boto3 can fall back to its
       own credential chain (instance metadata, ~/.aws/credentials, etc.).
    """

    model_config = ConfigDict(extra="forbid")

    aws_access_key_id: str | None = Field(default=None, description="AWS access key ID")
    aws_secret_access_key: str | None = Field(default=None, description="AWS secret access key")
    region_name: str | None = Field(default=None, description="AWS region (e.g. 'us-east-1')")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to environment variables for missing credentials."""
        env_map = {
            "aws_access_key_id": "AWS_ACCESS_KEY_ID",
            "aws_secret_access_key": "AWS_SECRET_ACCESS_KEY",
            "region_name": "AWS_DEFAULT_REGION",
        }
        for field, env_var in env_map.items():
            if not values.get(field):
                values[field] = os.environ.get(env_var)
        return values


class MemoryConfig(BaseModel):
    """Configuration for the in-process simulated control plane."""

    model_config = ConfigDict(extra="forbid")

    visibility_delay: float = Field(
        default=0.0,
        ge=0,
        description="Seconds before a create/delete becomes visible to list calls",
    )
    page_size: int = Field(default=50, ge=1, description="Items returned per list page")


class LifecycleSettings(BaseModel):
    """Tunables for the create/delete/wait operations.

    ``retry_interval`` is the fixed sleep between describe checks; it is
    independent of the per-call timeout.
    """

    model_config = ConfigDict(extra="forbid")

    retry_interval: float = Field(default=0.05, gt=0, description="Seconds between checks")
    default_timeout: float = Field(default=30.0, ge=0, description="Seconds to wait by default")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to LOGPLANE_* environment variables for missing values."""
        env_map = {
            "retry_interval": "LOGPLANE_RETRY_INTERVAL",
            "default_timeout": "LOGPLANE_DEFAULT_TIMEOUT",
        }
        for field, env_var in env_map.items():
            if values.get(field) is None and os.environ.get(env_var):
                values[field] = os.environ[env_var]
        return values


# Map provider names to their config models for dynamic validation
CONFIG_REGISTRY: dict[str, type[BaseModel]] = {
    "aws": AWSConfig,
    "memory": MemoryConfig,
}


def validate_config(provider: str, config: dict) -> BaseModel:
    """Validate and return a typed config model for the given provider.

    Args:
        provider: The provider name (e.g. 'aws', 'memory').
        config: Raw configuration dictionary.

    Returns:
        A validated Pydantic config model.

    Raises:
        ValueError: If the provider is unknown.
        pydantic.ValidationError: If the config is invalid.
    """
    model = CONFIG_REGISTRY.get(provider)
    if model is None:
        raise ValueError(f"No config model registered for provider: {provider}")
    return model(**config)


__all__ = [
    "AWSConfig",
    "MemoryConfig",
    "LifecycleSettings",
    "CONFIG_REGISTRY",
    "validate_config",
]
