"""
Logplane exception hierarchy.

Only conditions the lifecycle layer cannot classify are raised to
callers. Expected transitions (already exists, not found, operation in
progress) travel as :class:`~logplane.base.models.Outcome` tags instead.
"""


# ── Base ──────────────────────────────────────────────────────────────
class LogplaneError(Exception):
    """Root exception for all Logplane errors."""


# ── Control plane ─────────────────────────────────────────────────────
class ControlPlaneError(LogplaneError):
    """Unclassified failure reported by the remote control plane.

    Attributes:
        code: Remote error code, when the provider reported one.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class ResourceNotFoundError(ControlPlaneError):
    """Log group or log stream does not exist."""


class ResourceAlreadyExistsError(ControlPlaneError):
    """Log group or log stream already exists."""


class OperationAbortedError(ControlPlaneError):
    """Another actor is mid-way through a conflicting create/delete."""


class ThrottlingError(ControlPlaneError):
    """Request rate exceeded; safe to retry after a delay."""
