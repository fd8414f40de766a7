"""Deterministic per-row ordering of blocks."""

from __future__ import annotations

import logging
from collections.abc import Callable

import numpy as np

from pixel_tiles.color_utils import luma
from pixel_tiles.grid import TileGrid

logger = logging.getLogger(__name__)


def sort_rows(
    grid: TileGrid,
    key: Callable[[np.ndarray], float] = luma,
) -> TileGrid:
    """Reorder the blocks of every row by ascending *key* (stable)."""
    for y in range(grid.rows):
        colors = [grid.color_at(x, y) for x in range(grid.cols)]
        for x, color in enumerate(sorted(colors, key=key)):
            grid.fill_block(x, y, color)
    logger.info("Sorted %d rows", grid.rows)
    return grid
