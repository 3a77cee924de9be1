"""Geometric image transforms: rotation and region extraction."""

from .errors import GeometryError, InvalidArgumentError, OutOfBoundsError, TransformError
from .filters import ImageFilter, apply_filters
from .region import (
    AbsoluteSize, AnchoredRegion, ClampedRegion, Positions, Region, RegionExtract,
    RelativeSize, extract_region, resolve_region,
)
from .rotation import (
    LEFT_90, RIGHT_90, ROTATE_180, FastRotate, GeneralRotate, new_rotator, rotate,
    rotate_right_angle,
)

__all__ = [
    "TransformError", "InvalidArgumentError", "OutOfBoundsError", "GeometryError",
    "ImageFilter", "apply_filters",
    "Region", "ClampedRegion", "AnchoredRegion", "Positions", "AbsoluteSize",
    "RelativeSize", "RegionExtract", "resolve_region", "extract_region",
    "FastRotate", "GeneralRotate", "new_rotator", "rotate", "rotate_right_angle",
    "LEFT_90", "RIGHT_90", "ROTATE_180",
]
