"""Rotation of images held as OpenCV-style numpy arrays.

Two paths are provided:

* the fast path (:func:`rotate_right_angle`, :class:`FastRotate`) only accepts
  multiples of 90 degrees and is an exact pixel permutation;
* the general path (:func:`rotate`, :class:`GeneralRotate`) accepts any finite
  angle and renders into a canvas sized to the bounding box of the rotated
  image.

Positive angles turn the image clockwise on screen, since the image y axis
points down. Canvas area not covered by the rotated image is filled with
zeros in every channel: fully transparent for BGRA images, black for gray
and BGR images.
"""

import logging
from dataclasses import dataclass

import cv2
import numpy as np

from .errors import GeometryError, InvalidArgumentError

logger = logging.getLogger(__name__)


def image_size(image):
    """Return ``(width, height)`` of an image array."""
    return image.shape[1], image.shape[0]


def _check_image(image):
    if image.ndim not in (2, 3) or (image.ndim == 3 and image.shape[2] not in (1, 3, 4)):
        raise InvalidArgumentError(
            f"Expected (H, W) or (H, W, C) with C in [1, 3, 4], got {image.shape}"
        )
    width, height = image_size(image)
    if width == 0 or height == 0:
        raise InvalidArgumentError(f"Cannot rotate an empty {width}x{height} image")


# Transparent for BGRA, black for gray and BGR
BACKGROUND = (0, 0, 0, 0)

# Pixel types cv2.warpAffine can interpolate
WARP_DTYPES = (np.uint8, np.uint16, np.int16, np.float32, np.float64)


def rotate_right_angle(image: np.ndarray, angle_degrees: float) -> np.ndarray:
    """Rotate ``image`` by a multiple of 90 degrees.

    The result has swapped dimensions for odd quarter turns and the input
    dimensions otherwise. No pixel is interpolated, clipped or padded.

    Raises:
        InvalidArgumentError: If the angle is not a multiple of 90, or the
            image is empty.
    """
    if angle_degrees % 90 != 0:
        raise InvalidArgumentError(
            f"The specified angle is not a multiple of 90: {angle_degrees}"
        )
    _check_image(image)

    quarter_turns = int(angle_degrees // 90) % 4
    # np.rot90 turns counter-clockwise for positive k
    return np.rot90(image, k=-quarter_turns).copy()


def compute_rotated_corners(width, height, angle_degrees):
    """Rotate the corners of a ``width`` x ``height`` rectangle about the origin.

    Order: (0, 0), (w, 0), (0, h), (w, h).
    """
    angle_rad = np.radians(angle_degrees)
    cos_a = np.cos(angle_rad)
    sin_a = np.sin(angle_rad)

    corners = np.array([
        [0, 0],
        [width, 0],
        [0, height],
        [width, height]
    ], dtype=np.float64)

    rotation_matrix = np.array([
        [cos_a, -sin_a],
        [sin_a, cos_a]
    ], dtype=np.float64)

    return corners @ rotation_matrix.T


def rotated_canvas_size(width, height, angle_degrees):
    """Size of the canvas holding a ``width`` x ``height`` image rotated by
    ``angle_degrees``.

    The bounding-box extent is truncated, not rounded, so the canvas can be
    one pixel short of the exact extent on a fractional boundary.

    Raises:
        GeometryError: If the angle is not finite or the canvas is empty.
    """
    if not np.isfinite(angle_degrees):
        raise GeometryError(f"Rotation angle must be finite, got {angle_degrees}")

    corners = compute_rotated_corners(width, height, angle_degrees)
    if not np.all(np.isfinite(corners)):
        raise GeometryError(f"Non-finite corners for angle {angle_degrees}")

    extent = corners.max(axis=0) - corners.min(axis=0)
    new_width = int(extent[0])
    new_height = int(extent[1])

    if new_width <= 0 or new_height <= 0:
        raise GeometryError(
            f"Rotating {width}x{height} by {angle_degrees} degrees gives an "
            f"empty {new_width}x{new_height} canvas"
        )
    return new_width, new_height


def canvas_transform(width, height, new_width, new_height, angle_degrees):
    """Affine matrix mapping source pixels onto the rotated canvas.

    The source is first placed centered in the canvas (offset truncated to
    whole pixels), then the canvas content is rotated about the canvas
    center. Pixel (i, j) covers the unit square whose center is
    (i + 0.5, j + 0.5); OpenCV addresses pixels by that center as (i, j).
    """
    angle_rad = np.radians(angle_degrees)
    cos_a = np.cos(angle_rad)
    sin_a = np.sin(angle_rad)
    linear = np.array([[cos_a, -sin_a], [sin_a, cos_a]], dtype=np.float64)

    offset = np.array([int((new_width - width) / 2.0),
                       int((new_height - height) / 2.0)], dtype=np.float64)
    center = np.array([new_width / 2.0, new_height / 2.0])

    translation = linear @ (offset + 0.5 - center) + center - 0.5
    return np.hstack([linear, translation.reshape(2, 1)])


def rotate(image: np.ndarray, angle_degrees: float) -> np.ndarray:
    """Rotate ``image`` by an arbitrary angle without clipping its content.

    Raises:
        InvalidArgumentError: If the image is empty, has an unsupported
            channel layout or a pixel type OpenCV cannot interpolate.
        GeometryError: If the angle is not finite.
    """
    _check_image(image)
    if image.dtype not in WARP_DTYPES:
        raise InvalidArgumentError(
            f"Cannot rotate {image.dtype} pixels by an arbitrary angle, expected one of "
            f"{[np.dtype(t).name for t in WARP_DTYPES]}"
        )
    width, height = image_size(image)
    new_width, new_height = rotated_canvas_size(width, height, angle_degrees)
    logger.debug("Rotating %dx%d by %s degrees onto a %dx%d canvas",
                 width, height, angle_degrees, new_width, new_height)

    matrix = canvas_transform(width, height, new_width, new_height, angle_degrees)
    result = cv2.warpAffine(np.ascontiguousarray(image), matrix, (new_width, new_height),
                            flags=cv2.INTER_LINEAR,
                            borderMode=cv2.BORDER_CONSTANT,
                            borderValue=BACKGROUND)

    # OpenCV drops a trailing single channel
    if image.ndim == 3 and result.ndim == 2:
        result = result[:, :, np.newaxis]
    return result


@dataclass(frozen=True)
class FastRotate:
    """Rotation by a multiple of 90 degrees."""

    angle: float

    def __post_init__(self):
        if self.angle % 90 != 0:
            raise InvalidArgumentError(
                f"The specified angle is not a multiple of 90: {self.angle}"
            )

    def apply(self, image):
        return rotate_right_angle(image, self.angle)


@dataclass(frozen=True)
class GeneralRotate:
    """Rotation by an arbitrary angle onto a canvas that fits the result."""

    angle: float

    def apply(self, image):
        return rotate(image, self.angle)


def new_rotator(angle_degrees):
    """Create a filter rotating images by ``angle_degrees``."""
    return GeneralRotate(angle_degrees)


LEFT_90 = FastRotate(-90)
RIGHT_90 = FastRotate(90)
ROTATE_180 = FastRotate(180)
