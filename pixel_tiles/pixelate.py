"""Down-sample a grid into uniform-coloured blocks."""

from __future__ import annotations

import logging

from pixel_tiles.errors import InvalidConfiguration
from pixel_tiles.grid import TileGrid
from pixel_tiles.samplers import Sampler

logger = logging.getLogger(__name__)


def pixelate(grid: TileGrid, columns: int, sampler: Sampler | None = None) -> TileGrid:
    """Coarsen *grid* to *columns* blocks across, in place.

    The block size is ``width // columns`` and the row count follows from
    the height. Every block is filled with one colour chosen by *sampler*
    (default: the grid's own sampler), then the raster is cropped to a
    whole number of blocks.

    Raises:
        InvalidConfiguration: *columns* is not positive, exceeds the image
            width, or leaves no complete row. The grid is left untouched.
    """
    if columns <= 0:
        raise InvalidConfiguration(f"columns must be positive, got {columns}")
    block_size = grid.width // columns
    if block_size == 0:
        raise InvalidConfiguration(
            f"columns ({columns}) exceeds image width ({grid.width} px)"
        )
    rows = grid.height // block_size
    if rows == 0:
        raise InvalidConfiguration(
            f"block size {block_size} px exceeds image height ({grid.height} px)"
        )

    sample = sampler if sampler is not None else grid.sampler

    grid.cols = columns
    grid.rows = rows
    grid.block_size = block_size

    # blocks are disjoint, so fill order does not matter
    for x in range(grid.cols):
        for y in range(grid.rows):
            grid.fill_block(x, y, sample(grid, x, y))

    grid.crop()
    logger.info(
        "Pixelated to %dx%d blocks of %d px (%dx%d)",
        grid.cols, grid.rows, block_size, grid.width, grid.height,
    )
    return grid
