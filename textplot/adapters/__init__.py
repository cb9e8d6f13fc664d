from .normalize import PointData, normalize_points, normalize_xy

__all__ = ["PointData", "normalize_points", "normalize_xy"]
