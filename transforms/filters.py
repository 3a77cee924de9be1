"""The common shape of every transform and how transforms are chained."""

from typing import Iterable, Protocol

import numpy as np


class ImageFilter(Protocol):
    """Anything with an ``apply`` method taking and returning an image.

    Implementations must not modify the image they are given.
    """

    def apply(self, image: np.ndarray) -> np.ndarray:
        ...


def apply_filters(image: np.ndarray, filters: Iterable[ImageFilter]) -> np.ndarray:
    """Pass ``image`` through ``filters`` left to right."""
    for image_filter in filters:
        image = image_filter.apply(image)
    return image
