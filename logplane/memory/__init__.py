"""In-process, eventually-consistent control plane."""

from .control_plane import ControlPlane

__all__ = ["ControlPlane"]
