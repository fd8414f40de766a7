"""Biased Fisher-Yates shuffle of grid blocks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from pixel_tiles.errors import InvalidConfiguration
from pixel_tiles.grid import Point, TileGrid
from pixel_tiles.samplers import Sampler

logger = logging.getLogger(__name__)


class BiasPredicate(Protocol):
    """Decide whether the candidate swap of *p1* and *p2* goes ahead."""

    def __call__(self, grid: TileGrid, p1: Point, p2: Point) -> bool: ...


def unbiased(grid: TileGrid, p1: Point, p2: Point) -> bool:
    return True


@dataclass(frozen=True)
class ChannelThreshold:
    """Swap only when the candidate block's *channel* is below *threshold*.

    Attributes:
        channel:   0 = red, 1 = green, 2 = blue.
        threshold: Exclusive upper bound on the sampled channel value.
    """

    channel: int = 2
    threshold: int = 128

    def __post_init__(self) -> None:
        if self.channel not in (0, 1, 2):
            raise InvalidConfiguration(f"channel must be 0, 1 or 2, got {self.channel}")

    def __call__(self, grid: TileGrid, p1: Point, p2: Point) -> bool:
        return int(grid.color_at(*p2)[self.channel]) < self.threshold


def shuffle(
    grid: TileGrid,
    rng: np.random.Generator,
    bias: BiasPredicate = unbiased,
    sampler: Sampler | None = None,
) -> int:
    """Permute the blocks of *grid* in place.

    Walks the flat block index from the last block down to 1, pairing each
    block with one drawn uniformly from ``[0, i]`` and swapping them when
    *bias* agrees. With :func:`unbiased` this is a uniform random
    permutation. Block colours are read with *sampler* (default: the grid's
    own sampler). One draw is taken from *rng* per step.

    Returns:
        Number of swaps performed.
    """
    swaps = 0
    for i in range(grid.num_blocks - 1, 0, -1):
        j = int(rng.integers(0, i + 1))
        p1 = grid.index_to_coord(i)
        p2 = grid.index_to_coord(j)
        if bias(grid, p1, p2):
            grid.swap(p1, p2, sampler=sampler)
            swaps += 1
    logger.info("Shuffled %d blocks (%d swaps)", grid.num_blocks, swaps)
    return swaps
