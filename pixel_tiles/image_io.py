"""Image decoding, encoding and animation export."""

from __future__ import annotations

from pathlib import Path

from PIL import Image

from pixel_tiles.errors import DecodeError, EncodeError
from pixel_tiles.grid import TileGrid
from pixel_tiles.samplers import Sampler


def decode(path: str | Path, sampler: Sampler | None = None) -> TileGrid:
    """Load an image as a 1:1 tile grid (one block per pixel).

    Raises:
        DecodeError: the file is missing, unreadable or not an image.
    """
    try:
        with Image.open(path) as img:
            return TileGrid.from_image(img, sampler=sampler)
    except (OSError, Image.DecompressionBombError) as exc:
        raise DecodeError(f"Cannot decode {path}: {exc}") from exc


def encode(grid: TileGrid, path: str | Path, upscale: int = 1) -> None:
    """Save the grid, nearest-neighbour upscaled by *upscale*.

    The format follows the file extension.

    Raises:
        EncodeError: the file cannot be created or the format is unknown.
    """
    img = grid.to_image()
    if upscale > 1:
        img = img.resize((grid.width * upscale, grid.height * upscale), Image.NEAREST)
    try:
        img.save(path)
    except (OSError, ValueError) as exc:
        raise EncodeError(f"Cannot write {path}: {exc}") from exc


def save_animation(
    frames: list[Image.Image],
    path: str | Path,
    duration: int = 120,
) -> None:
    """Write *frames* as a looping animated GIF."""
    try:
        frames[0].save(
            Path(path),
            save_all=True,
            append_images=frames[1:],
            duration=duration,
            loop=0,
        )
    except (OSError, ValueError) as exc:
        raise EncodeError(f"Cannot write {path}: {exc}") from exc
