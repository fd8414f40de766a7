"""Colour-space conversion and tile dissimilarity metrics."""

from __future__ import annotations

from typing import Protocol

import numpy as np
from skimage.color import rgb2lab

from pixel_tiles.errors import InvalidConfiguration

# Full-range ITU-R BT.601 (JPEG) RGB -> YCbCr
YCBCR_MATRIX = np.array(
    [
        [0.299, 0.587, 0.114],
        [-0.168736, -0.331264, 0.5],
        [0.5, -0.418688, -0.081312],
    ],
)
YCBCR_OFFSET = np.array([0.0, 128.0, 128.0])


class Distance(Protocol):
    """Symmetric, non-negative dissimilarity between two RGB colours."""

    def __call__(self, a: np.ndarray, b: np.ndarray) -> float: ...


def rgb_to_ycbcr(rgb: np.ndarray) -> np.ndarray:
    """Convert (..., 3) uint8 RGB → (..., 3) float64 YCbCr."""
    return np.asarray(rgb, dtype=np.float64) @ YCBCR_MATRIX.T + YCBCR_OFFSET


def rgb_to_lab(rgb: np.ndarray) -> np.ndarray:
    """Convert (..., 3) uint8 RGB → (..., 3) float64 CIELAB."""
    rgb = np.asarray(rgb)
    flat = rgb.astype(np.float64).reshape(1, -1, 3) / 255.0
    return rgb2lab(flat).reshape(rgb.shape)


def luma(color: np.ndarray) -> float:
    """Brightness (the Y channel) of a single RGB colour."""
    return float(np.dot(YCBCR_MATRIX[0], np.asarray(color, dtype=np.float64)))


def ycbcr_distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance in luma/chroma space.

    Brightness and colour are separated, which clusters tiles more smoothly
    than raw channel differences. The YCbCr offset cancels out, so only the
    linear part of the transform is applied to the RGB difference.
    """
    diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return float(np.linalg.norm(YCBCR_MATRIX @ diff))


def lab_distance(a: np.ndarray, b: np.ndarray) -> float:
    """CIE76 ΔE between two RGB colours."""
    lab = rgb_to_lab(np.stack([np.asarray(a), np.asarray(b)]).astype(np.uint8))
    return float(np.linalg.norm(lab[0] - lab[1]))


def rgb_distance(a: np.ndarray, b: np.ndarray) -> float:
    diff = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return float(np.sqrt(np.sum(diff ** 2)))


DISTANCE_METRICS: dict[str, Distance] = {
    "ycbcr": ycbcr_distance,
    "lab": lab_distance,
    "rgb": rgb_distance,
}


def get_distance(name: str) -> Distance:
    """Look up a metric by name (``"ycbcr"``, ``"lab"`` or ``"rgb"``)."""
    try:
        return DISTANCE_METRICS[name]
    except KeyError:
        raise InvalidConfiguration(
            f"Unknown metric '{name}'. Choose from: {sorted(DISTANCE_METRICS)}"
        ) from None
