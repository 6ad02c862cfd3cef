from .normalize import XYData, normalize_xy

__all__ = ["XYData", "normalize_xy"]
