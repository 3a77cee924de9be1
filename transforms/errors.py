"""Exceptions raised by the geometric transforms."""


class TransformError(ValueError):
    """Base class for every error raised by a transform."""


class InvalidArgumentError(TransformError):
    """An argument is malformed, e.g. a fast-path angle that is not a
    multiple of 90 or a region with a non-positive size."""


class OutOfBoundsError(TransformError):
    """A requested region does not intersect the source image."""


class GeometryError(TransformError):
    """A rotation produced a non-finite or empty canvas."""
