"""Image filters operating on BGR frames held in ``numpy`` arrays."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
from scipy import ndimage

# Luma weights for blue, green and red, in that order.
_GRAY_WEIGHTS = np.array([0.114, 0.587, 0.299])

# Rows produce blue, green and red; columns read blue, green and red.
SEPIA_KERNEL = np.array(
    [
        [0.272, 0.534, 0.131],
        [0.349, 0.686, 0.168],
        [0.393, 0.769, 0.189],
    ],
    dtype=np.float32,
)

# Fixed kernels used for the smallest apertures when no sigma is given.
_SMALL_GAUSSIAN_KERNELS = {
    1: [1.0],
    3: [0.25, 0.5, 0.25],
    5: [0.0625, 0.25, 0.375, 0.25, 0.0625],
    7: [0.03125, 0.109375, 0.21875, 0.28125, 0.21875, 0.109375, 0.03125],
}

_TAN_22_5 = np.tan(np.pi / 8)
_TAN_67_5 = np.tan(3 * np.pi / 8)

CANNY_LOW_THRESHOLD = 100
CANNY_HIGH_THRESHOLD = 200
BLUR_TRACKBAR_MAX = 31


def _require_bgr(frame) -> np.ndarray:
    image = np.asarray(frame)
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"expected a 3-channel BGR image, got shape {image.shape}")
    return image


def _to_uint8(data: np.ndarray) -> np.ndarray:
    return np.clip(np.rint(data), 0, 255).astype(np.uint8)


def _to_gray(frame) -> np.ndarray:
    image = _require_bgr(frame)
    return _to_uint8(image.astype(np.float64) @ _GRAY_WEIGHTS)


def _gray_to_bgr(gray: np.ndarray) -> np.ndarray:
    return np.repeat(gray[..., np.newaxis], 3, axis=2)


def _gaussian_kernel(size: int) -> np.ndarray:
    """Gaussian kernel of odd ``size`` with sigma derived from the size."""
    if size in _SMALL_GAUSSIAN_KERNELS:
        return np.array(_SMALL_GAUSSIAN_KERNELS[size])
    sigma = 0.3 * ((size - 1) * 0.5 - 1) + 0.8
    offsets = np.arange(size) - (size - 1) / 2
    kernel = np.exp(-(offsets**2) / (2 * sigma**2))
    return kernel / kernel.sum()


def _canny(gray: np.ndarray, low: float, high: float) -> np.ndarray:
    """Canny edge map (0 or 255) of a single-channel image."""
    data = gray.astype(np.float64)
    gx = ndimage.sobel(data, axis=1, mode="nearest")
    gy = ndimage.sobel(data, axis=0, mode="nearest")
    ax, ay = np.abs(gx), np.abs(gy)
    magnitude = ax + ay

    rows, cols = magnitude.shape
    padded = np.pad(magnitude, 1)

    def neighbour(dy: int, dx: int) -> np.ndarray:
        return padded[1 + dy : 1 + dy + rows, 1 + dx : 1 + dx + cols]

    horizontal = ay <= ax * _TAN_22_5
    vertical = ay > ax * _TAN_67_5
    diagonal = ~(horizontal | vertical)
    same_sign = gx * gy > 0

    m = magnitude
    local_max = (
        (horizontal & (m > neighbour(0, -1)) & (m >= neighbour(0, 1)))
        | (vertical & (m > neighbour(-1, 0)) & (m >= neighbour(1, 0)))
        | (diagonal & same_sign & (m > neighbour(-1, -1)) & (m > neighbour(1, 1)))
        | (diagonal & ~same_sign & (m > neighbour(-1, 1)) & (m > neighbour(1, -1)))
    )

    candidates = local_max & (magnitude > low)
    strong = candidates & (magnitude > high)
    labels, _ = ndimage.label(candidates, structure=np.ones((3, 3), dtype=bool))
    kept = np.unique(labels[strong])
    edges = np.isin(labels, kept[kept > 0])
    return np.where(edges, 255, 0).astype(np.uint8)


class Filter(ABC):
    """A transformation applied to a BGR frame."""

    @abstractmethod
    def apply(self, frame) -> np.ndarray:
        """Return the filtered copy of ``frame``."""

    def create_trackbar(self, window) -> None:
        """Expose the filter's parameters on ``window``; none by default."""


class GrayscaleFilter(Filter):
    """Converts frames to grayscale while keeping three channels."""

    def apply(self, frame) -> np.ndarray:
        return _gray_to_bgr(_to_gray(frame))


class BlurFilter(Filter):
    """Gaussian blur with an adjustable kernel size."""

    def __init__(self) -> None:
        self.blur_size = 11
        self._trackbar_created = False

    def apply(self, frame) -> np.ndarray:
        image = np.asarray(frame)
        size = self.blur_size if self.blur_size % 2 == 1 else self.blur_size + 1
        kernel = _gaussian_kernel(size)
        data = image.astype(np.float64)
        data = ndimage.correlate1d(data, kernel, axis=0, mode="mirror")
        data = ndimage.correlate1d(data, kernel, axis=1, mode="mirror")
        return _to_uint8(data)

    def create_trackbar(self, window) -> None:
        if self._trackbar_created:
            return
        window.create_trackbar(
            "Blur Size", self.blur_size, BLUR_TRACKBAR_MAX, self.set_blur_size
        )
        self._trackbar_created = True

    def set_blur_size(self, size: int) -> None:
        """Set the kernel size, never below 1."""
        self.blur_size = max(1, int(size))


class EdgeDetectionFilter(Filter):
    """Canny edge detection, returned as a three-channel image."""

    def apply(self, frame) -> np.ndarray:
        edges = _canny(_to_gray(frame), CANNY_LOW_THRESHOLD, CANNY_HIGH_THRESHOLD)
        return _gray_to_bgr(edges)


class SepiaFilter(Filter):
    """Sepia tone through a fixed colour matrix."""

    def apply(self, frame) -> np.ndarray:
        image = _require_bgr(frame)
        data = image.astype(np.float32) / np.float32(255.0)
        data = data @ SEPIA_KERNEL.T
        data = np.minimum(data, np.float32(1.0))
        return _to_uint8(data * np.float32(255.0))