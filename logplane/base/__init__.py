"""Control-plane blueprint, models and core utilities.

Every provider inherits from :class:`ControlPlaneBlueprint`. Import the
models and exceptions from here to type-hint your own code.
"""

from .control_plane import ControlPlaneBlueprint
from .cancellation import CancellationToken
from .models import LogEvent, LogGroup, LogStream, Outcome, Page
from .exceptions import (
    LogplaneError,
    ControlPlaneError,
    ResourceNotFoundError,
    ResourceAlreadyExistsError,
    OperationAbortedError,
    ThrottlingError,
)
from .supported_providers import existing_providers


__all__ = [
    "ControlPlaneBlueprint",
    "CancellationToken",
    "LogEvent",
    "LogGroup",
    "LogStream",
    "Outcome",
    "Page",
    "LogplaneError",
    "ControlPlaneError",
    "ResourceNotFoundError",
    "ResourceAlreadyExistsError",
    "OperationAbortedError",
    "ThrottlingError",
    "existing_providers",
]
