"""Extraction of a rectangular region from an image.

A requested region may extend past any edge of the source image. It is
first intersected with the source bounds by :func:`resolve_region`, then
copied out by :func:`extract_region`.
"""

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

import numpy as np

from .errors import InvalidArgumentError, OutOfBoundsError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Region:
    """A requested crop in source pixel coordinates (origin top-left)."""

    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class ClampedRegion:
    """A region lying fully inside its source image."""

    x: int
    y: int
    width: int
    height: int
    warnings: Tuple[str, ...] = field(default=(), compare=False)

    @property
    def was_clamped(self):
        """True if the requested region had to be adjusted."""
        return bool(self.warnings)


class Positions(enum.Enum):
    """Named anchors for placing a region inside an enclosing rectangle."""

    TOP_LEFT = ("left", "top")
    TOP_CENTER = ("center", "top")
    TOP_RIGHT = ("right", "top")
    CENTER_LEFT = ("left", "center")
    CENTER = ("center", "center")
    CENTER_RIGHT = ("right", "center")
    BOTTOM_LEFT = ("left", "bottom")
    BOTTOM_CENTER = ("center", "bottom")
    BOTTOM_RIGHT = ("right", "bottom")

    def calculate(self, enclosing_width, enclosing_height, width, height):
        """Return the ``(x, y)`` of a ``width`` x ``height`` rectangle at
        this anchor."""
        horizontal, vertical = self.value
        return (_align(horizontal, enclosing_width, width),
                _align(vertical, enclosing_height, height))


def _align(edge, enclosing, size):
    if edge in ("left", "top"):
        return 0
    if edge == "center":
        return enclosing // 2 - size // 2
    return enclosing - size


@dataclass(frozen=True)
class AbsoluteSize:
    """A fixed size in pixels."""

    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidArgumentError(
                f"Size must be positive, got {self.width}x{self.height}"
            )

    def calculate(self, source_width, source_height):
        return self.width, self.height


@dataclass(frozen=True)
class RelativeSize:
    """A size expressed as a fraction of the source image."""

    scale: float

    def __post_init__(self):
        if not 0.0 < self.scale <= 1.0:
            raise InvalidArgumentError(
                f"Scale must be in (0, 1], got {self.scale}"
            )

    def calculate(self, source_width, source_height):
        # Halves round up
        return (max(1, int(math.floor(source_width * self.scale + 0.5))),
                max(1, int(math.floor(source_height * self.scale + 0.5))))


@dataclass(frozen=True)
class AnchoredRegion:
    """A region placed at a named anchor of the source image."""

    position: Positions
    size: Union[AbsoluteSize, RelativeSize]

    def locate(self, source_width, source_height):
        """Turn the anchor and size into a concrete :class:`Region`."""
        width, height = self.size.calculate(source_width, source_height)
        x, y = self.position.calculate(source_width, source_height, width, height)
        return Region(x, y, width, height)


def _clamp_axis(name, position, size, source_size, warnings):
    """Clamp one axis of a region to ``[0, source_size)``.

    Returns the clamped ``(position, size)``.
    """
    if position >= source_size:
        raise OutOfBoundsError(
            f"Region {name}={position} lies past the source edge ({source_size})"
        )
    if position < 0:
        if position + size <= 0:
            raise OutOfBoundsError(
                f"Region {name}={position} with size {size} ends before the source origin"
            )
        warnings.append(f"{name} clamped from {position} to 0, size reduced by {-position}")
        size += position
        position = 0
    if position + size > source_size:
        warnings.append(
            f"size along {name} truncated from {size} to {source_size - position} at the source edge"
        )
        size = source_size - position
    return position, size


def resolve_region(requested: Union[Region, AnchoredRegion],
                   source_width: int, source_height: int) -> ClampedRegion:
    """Intersect ``requested`` with a ``source_width`` x ``source_height`` image.

    A negative origin is moved to 0 and the size shrunk by the overflow; an
    extent past the right or bottom edge is truncated at that edge.

    Raises:
        InvalidArgumentError: If the requested size or the source size is
            not positive.
        OutOfBoundsError: If the region does not intersect the source.
    """
    if source_width <= 0 or source_height <= 0:
        raise InvalidArgumentError(
            f"Source size must be positive, got {source_width}x{source_height}"
        )
    if isinstance(requested, AnchoredRegion):
        requested = requested.locate(source_width, source_height)
    if requested.width <= 0 or requested.height <= 0:
        raise InvalidArgumentError(
            f"Region size must be positive, got {requested.width}x{requested.height}"
        )

    warnings = []
    x, width = _clamp_axis("x", requested.x, requested.width, source_width, warnings)
    y, height = _clamp_axis("y", requested.y, requested.height, source_height, warnings)

    for message in warnings:
        logger.debug("Region %s: %s", requested, message)
    return ClampedRegion(x, y, width, height, tuple(warnings))


def extract_region(image: np.ndarray, region: ClampedRegion) -> np.ndarray:
    """Copy the pixels inside ``region`` into a new array.

    Raises:
        OutOfBoundsError: If ``region`` was resolved against a larger image.
    """
    img_h, img_w = image.shape[:2]
    if (region.x < 0 or region.y < 0 or region.width <= 0 or region.height <= 0
            or region.x + region.width > img_w
            or region.y + region.height > img_h):
        raise OutOfBoundsError(f"{region} does not fit a {img_w}x{img_h} image")

    return image[region.y:region.y + region.height,
                 region.x:region.x + region.width].copy()


@dataclass(frozen=True)
class RegionExtract:
    """Crop images to a region; with no region, images pass through as is."""

    region: Optional[Union[Region, AnchoredRegion]] = None

    def apply(self, image):
        if self.region is None:
            return image
        img_h, img_w = image.shape[:2]
        return extract_region(image, resolve_region(self.region, img_w, img_h))
