"""Core package exports for the player graph."""

# Re-export commonly used modules for convenience.
from . import geometry, hover, samples, tooltip

__all__ = [
    "geometry",
    "hover",
    "samples",
    "tooltip",
]
