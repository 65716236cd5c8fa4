from .field import LightLevel, VisibilityField
from .raycast import compute_visibility

__all__ = ["LightLevel", "VisibilityField", "compute_visibility"]
