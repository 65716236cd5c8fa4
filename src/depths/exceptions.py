class DepthsError(Exception):
    """Base exception for the Depths project."""


class TileOutOfBounds(DepthsError, IndexError):
    """Raised when a coordinate falls outside a grid's [0, width) x [0, height)."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"Tile out of bounds: ({x},{y}) not in [0,{width})x[0,{height})")
        self.x = x
        self.y = y


class GenerationError(DepthsError):
    """Raised when a floor cannot be generated (e.g., no empty tile to sample)."""


class ConfigError(DepthsError, ValueError):
    """Raised for invalid settings values."""
