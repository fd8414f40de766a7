"""Block samplers: pick one representative colour for a block.

A sampler is any callable ``sampler(grid, x, y) -> colour``. Samplers read
the grid live on every call, they never cache. Before a block has been
filled uniformly, :class:`RandomPixelSampler` may return a different pixel
each time it is asked; afterwards all samplers agree.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from pixel_tiles.grid import TileGrid


class Sampler(Protocol):
    def __call__(self, grid: TileGrid, x: int, y: int) -> np.ndarray: ...


class RandomPixelSampler:
    """Return the pixel at a uniformly random offset inside the block.

    The sampler owns its generator, so sampling never consumes draws from
    the random source driving the shuffle or the optimizer.
    """

    def __init__(self, seed: int | np.random.Generator | None = None) -> None:
        self.rng = np.random.default_rng(seed)

    def __call__(self, grid: TileGrid, x: int, y: int) -> np.ndarray:
        x0, y0, _, _ = grid.block_rect(x, y)
        ox = int(self.rng.integers(grid.block_size))
        oy = int(self.rng.integers(grid.block_size))
        return grid.pixels[y0 + oy, x0 + ox].copy()


class OriginPixelSampler:
    """Deterministic: the block's top-left pixel."""

    def __call__(self, grid: TileGrid, x: int, y: int) -> np.ndarray:
        x0, y0, _, _ = grid.block_rect(x, y)
        return grid.pixels[y0, x0].copy()


class PredicatePixelSampler:
    """First pixel (row-major) in the block for which *predicate* holds.

    Falls back to the top-left pixel when no pixel matches.
    """

    def __init__(self, predicate: Callable[[np.ndarray], bool]) -> None:
        self.predicate = predicate

    def __call__(self, grid: TileGrid, x: int, y: int) -> np.ndarray:
        x0, y0, x1, y1 = grid.block_rect(x, y)
        block = grid.pixels[y0:y1, x0:x1].reshape(-1, 3)
        for color in block:
            if self.predicate(color):
                return color.copy()
        return block[0].copy()
