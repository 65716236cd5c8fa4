"""
Depths package root.

Procedural dungeon floors, raycast field of view and multi-level navigation.
Rendering, input and entity management stay outside of this package; callers
drive it through plain data and method calls.
"""
from importlib.metadata import version, PackageNotFoundError

__all__ = ["__version__"]

try:
    __version__ = version("depths")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"
