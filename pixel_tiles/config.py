"""Centralised configuration via a frozen dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class TileConfig:
    """All tuneable parameters for a tiling run.

    Attributes:
        columns:     Number of block columns after pixelation.
        shuffle:     Randomly permute the blocks after pixelation.
        sort_rows:   Sort the blocks of every row by luma.
        iterations:  Optimizer steps to run before output.
        frequency:   Fraction of all blocks relocated per optimizer step.
        metric:      Colour distance - "ycbcr", "lab" or "rgb".
        seed:        Random seed (None = non-deterministic).
        upscale:     Each output pixel becomes n x n in the saved image.
        gif_frames:  Snapshot count for the optimizer animation GIF.
        output:      Path the final image is written to.
    """

    # Pixelation
    columns: int = 10

    # Rearrangement
    shuffle: bool = False
    sort_rows: bool = False
    iterations: int = 0
    frequency: float = 0.05
    metric: str = "ycbcr"
    seed: int | None = None

    # Output
    upscale: int = 1
    gif_frames: int = 60
    output: Path = field(default_factory=lambda: Path("out.png"))

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset(
        {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff", ".tif", ".webp"}
    )
