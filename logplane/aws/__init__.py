"""CloudWatch Logs provider."""

from .control_plane import ControlPlane
from .identity import get_account_id

__all__ = ["ControlPlane", "get_account_id"]
