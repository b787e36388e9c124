"""Control-plane factory.

Provides :func:`control_plane_factory`, the single entry-point for
creating a provider. The provider config is validated by its pydantic
model before the provider is constructed.
"""

from typing import Any

from logplane.base import ControlPlaneBlueprint, existing_providers
from logplane.base.config import LifecycleSettings, validate_config
from logplane.aws.control_plane import ControlPlane as AWSControlPlane
from logplane.memory.control_plane import ControlPlane as MemoryControlPlane
from logplane.lifecycle import LogLifecycle


_PROVIDER_REGISTRY: dict[str, type[ControlPlaneBlueprint]] = {
    "aws": AWSControlPlane,
    "memory": MemoryControlPlane,
}


def control_plane_factory(provider: existing_providers, config: dict) -> ControlPlaneBlueprint:
    """
    Create a control-plane client for the given provider.
    Args:
        provider: The provider name ('aws' or 'memory').
        config: Configuration dictionary validated against the provider's model.
    Returns:
        A :class:`ControlPlaneBlueprint` instance.
    Raises:
        ValueError: If the provider is not supported.
        pydantic.ValidationError: If the config is invalid.
    """
    if provider not in _PROVIDER_REGISTRY:
        raise ValueError(f"Unsupported provider: {provider}")

    config_obj = validate_config(provider, config)
    return _PROVIDER_REGISTRY[provider](config_obj)


def lifecycle_factory(
    provider: existing_providers,
    config: dict,
    settings: dict[str, Any] | None = None,
) -> LogLifecycle:
    """Shortcut for ``LogLifecycle(control_plane_factory(...), LifecycleSettings(...))``."""
    return LogLifecycle(
        control_plane_factory(provider, config),
        LifecycleSettings(**(settings or {})),
    )
