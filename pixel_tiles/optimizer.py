"""Greedy local search that clusters similar tiles, with optional GIF export."""

from __future__ import annotations

import logging
import math
import time
from pathlib import Path

import numpy as np
from PIL import Image

from pixel_tiles.color_utils import Distance, ycbcr_distance
from pixel_tiles.errors import InvalidConfiguration
from pixel_tiles.grid import Point, TileGrid
from pixel_tiles.image_io import save_animation

logger = logging.getLogger(__name__)

# Enumeration order is the tie-break order: first minimum wins.
NEIGHBOUR_OFFSETS: tuple[Point, ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)
)


def relocation_score(
    grid: TileGrid,
    pt: Point,
    dest: Point,
    distance: Distance,
) -> float:
    """Dissimilarity of exchanging the tiles at *pt* and *dest*.

    Sums how badly the tile at *pt* fits the 3x3 neighbourhood of *dest*
    and how badly the tile at *dest* fits the 3x3 neighbourhood of *pt*.
    For ``dest == pt`` this counts the tile's current neighbourhood twice.
    """
    x, y = pt
    nx, ny = dest
    mover = grid.color_at(x, y)
    moved = grid.color_at(nx, ny)
    score = 0.0
    for dx, dy in NEIGHBOUR_OFFSETS:
        if grid.in_bounds(nx + dx, ny + dy):
            score += distance(mover, grid.color_at(nx + dx, ny + dy))
        if grid.in_bounds(x + dx, y + dy):
            score += distance(moved, grid.color_at(x + dx, y + dy))
    return score


def relocation_scores(
    grid: TileGrid,
    pt: Point,
    distance: Distance,
) -> list[tuple[Point, float]]:
    """Score every in-bounds destination around *pt*, in enumeration order."""
    x, y = pt
    scores = []
    for dx, dy in NEIGHBOUR_OFFSETS:
        dest = (x + dx, y + dy)
        if grid.in_bounds(*dest):
            scores.append((dest, relocation_score(grid, pt, dest, distance)))
    return scores


def best_relocation(grid: TileGrid, pt: Point, distance: Distance) -> Point:
    """Lowest-scoring destination for *pt*; ties keep the earliest offset."""
    best, best_score = pt, math.inf
    for dest, score in relocation_scores(grid, pt, distance):
        if score < best_score:
            best, best_score = dest, score
    return best


def step(
    grid: TileGrid,
    frequency: float,
    distance: Distance,
    rng: np.random.Generator,
) -> int:
    """Run ``floor(num_blocks * frequency)`` greedy relocation attempts.

    Each attempt draws one block index from *rng*, finds its best
    destination with :func:`best_relocation` and swaps the two tiles when
    the destination differs from the source. Scoring takes no draws.

    Returns:
        Number of tiles actually moved.

    Raises:
        InvalidConfiguration: *frequency* is outside ``[0, 1]``.
    """
    if not 0.0 <= frequency <= 1.0:
        raise InvalidConfiguration(f"frequency must be in [0, 1], got {frequency}")

    n = grid.num_blocks
    iterations = math.floor(n * frequency)
    moves = 0
    for _ in range(iterations):
        pt = grid.index_to_coord(int(rng.integers(0, n)))
        dest = best_relocation(grid, pt, distance)
        if dest != pt:
            grid.swap(pt, dest)
            moves += 1
    logger.debug("Step: %d attempts, %d moves", iterations, moves)
    return moves


def neighbourhood_cost(grid: TileGrid, distance: Distance = ycbcr_distance) -> float:
    """Total distance over every unordered pair of 8-connected blocks."""
    total = 0.0
    for y in range(grid.rows):
        for x in range(grid.cols):
            c = grid.color_at(x, y)
            # each pair counted once: right, down-left, down, down-right
            for dx, dy in ((1, 0), (-1, 1), (0, 1), (1, 1)):
                if grid.in_bounds(x + dx, y + dy):
                    total += distance(c, grid.color_at(x + dx, y + dy))
    return total


def optimize(
    grid: TileGrid,
    steps: int,
    frequency: float,
    distance: Distance,
    rng: np.random.Generator,
    gif_path: Path | None = None,
    gif_frames: int = 60,
    upscale: int = 1,
) -> TileGrid:
    """Run *steps* optimizer steps on *grid*, logging progress.

    Args:
        grid:       Pixelated grid, modified in place.
        steps:      Number of :func:`step` calls.
        frequency:  Fraction of blocks relocated per step.
        distance:   Colour metric.
        rng:        Random source for the block draws.
        gif_path:   If given, save an animated GIF showing the run.
        gif_frames: How many snapshots to capture for the GIF.
        upscale:    Upscale factor for GIF frames.

    Returns:
        The same grid.
    """
    if steps < 0:
        raise InvalidConfiguration(f"steps must be >= 0, got {steps}")
    if not 0.0 <= frequency <= 1.0:
        raise InvalidConfiguration(f"frequency must be in [0, 1], got {frequency}")

    cost = neighbourhood_cost(grid, distance)
    logger.info(
        "Optimize start | steps=%s  frequency=%.3f  cost=%.0f",
        f"{steps:,}", frequency, cost,
    )

    frames: list[Image.Image] = []
    frame_interval = (
        max(1, steps // gif_frames) if gif_frames > 0 else steps + 1
    )

    def _capture_frame() -> None:
        if gif_path is None:
            return
        img = grid.to_image()
        if upscale > 1:
            img = img.resize((grid.width * upscale, grid.height * upscale), Image.NEAREST)
        frames.append(img)

    _capture_frame()

    moves = 0
    t0 = time.perf_counter()
    for it in range(steps):
        moves += step(grid, frequency, distance, rng)
        if (it + 1) % frame_interval == 0:
            _capture_frame()
            logger.info(
                "  step %s/%s  moves=%s  (%.1f s)",
                f"{it + 1:,}", f"{steps:,}", f"{moves:,}", time.perf_counter() - t0,
            )

    # last frame always shows the final grid
    if steps % frame_interval != 0:
        _capture_frame()

    cost = neighbourhood_cost(grid, distance)
    logger.info(
        "Optimize done  | cost=%.0f  moves=%s  (%.1f s)",
        cost, f"{moves:,}", time.perf_counter() - t0,
    )

    if gif_path is not None and frames:
        save_animation(frames, gif_path)
        logger.info("Animation saved: %s (%d frames)", gif_path, len(frames))

    return grid
