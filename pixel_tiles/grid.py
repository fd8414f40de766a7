"""The tile grid: owner of the raster buffer and its block geometry."""

from __future__ import annotations

import numpy as np
from PIL import Image

from pixel_tiles.samplers import RandomPixelSampler, Sampler

Point = tuple[int, int]


class TileGrid:
    """A raster split into ``cols x rows`` square blocks of ``block_size`` px.

    A freshly built grid maps every pixel to its own block
    (``block_size == 1``); :func:`pixel_tiles.pixelate.pixelate` coarsens it.
    Blocks are never stored: their rectangle is derived from the coordinates
    and their colour is read through :attr:`sampler` on demand.

    Attributes:
        pixels:     (H, W, 3) uint8 raster, mutated in place.
        cols:       Block columns.
        rows:       Block rows.
        block_size: Edge length of a block in pixels.
        sampler:    Colour accessor used by :meth:`color_at` and :meth:`swap`.
    """

    def __init__(self, pixels: np.ndarray, sampler: Sampler | None = None) -> None:
        pixels = np.array(pixels, dtype=np.uint8)
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) array, got {pixels.shape}")
        self.pixels = pixels
        self.rows, self.cols = pixels.shape[:2]
        self.block_size = 1
        self.sampler: Sampler = sampler if sampler is not None else RandomPixelSampler()

    @classmethod
    def from_image(cls, img: Image.Image, sampler: Sampler | None = None) -> TileGrid:
        return cls(np.asarray(img.convert("RGB")), sampler=sampler)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def num_blocks(self) -> int:
        return self.cols * self.rows

    # -- geometry ------------------------------------------------------

    def block_rect(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Half-open pixel box ``(x0, y0, x1, y1)`` of block (x, y).

        Callers are responsible for passing in-bounds coordinates.
        """
        bs = self.block_size
        return x * bs, y * bs, (x + 1) * bs, (y + 1) * bs

    def index_to_coord(self, bn: int) -> Point:
        return bn % self.cols, bn // self.cols

    def coord_to_index(self, x: int, y: int) -> int:
        return y * self.cols + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    # -- pixels --------------------------------------------------------

    def fill_block(self, x: int, y: int, color: np.ndarray) -> None:
        x0, y0, x1, y1 = self.block_rect(x, y)
        self.pixels[y0:y1, x0:x1] = color

    def color_at(self, x: int, y: int) -> np.ndarray:
        return self.sampler(self, x, y)

    def swap(self, p1: Point, p2: Point, sampler: Sampler | None = None) -> None:
        """Exchange the colours of two blocks.

        Both colours are re-sampled first (with *sampler*, default the
        grid's own), so the exchange is only exact once the blocks are
        uniform.
        """
        sample = sampler if sampler is not None else self.sampler
        c1 = sample(self, *p1)
        c2 = sample(self, *p2)
        self.fill_block(*p2, c1)
        self.fill_block(*p1, c2)

    def crop(self) -> None:
        """Drop the partial strips right of and below the last full block."""
        h = self.rows * self.block_size
        w = self.cols * self.block_size
        self.pixels = self.pixels[:h, :w].copy()

    def block_colors(self) -> np.ndarray:
        """(rows, cols, 3) array holding the top-left pixel of every block."""
        bs = self.block_size
        h = self.rows * bs
        w = self.cols * bs
        return self.pixels[:h:bs, :w:bs].copy()
