"""Rich command-line interface powered by Typer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import numpy as np
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from pixel_tiles.color_utils import DISTANCE_METRICS, get_distance
from pixel_tiles.config import TileConfig
from pixel_tiles.errors import PixelTilesError
from pixel_tiles.grid import TileGrid
from pixel_tiles.image_io import decode, encode
from pixel_tiles.optimizer import optimize
from pixel_tiles.pixelate import pixelate
from pixel_tiles.samplers import RandomPixelSampler
from pixel_tiles.shuffle import shuffle
from pixel_tiles.sorting import sort_rows

app = typer.Typer(
    name="pixel-tiles",
    help="Pixelate an image and rearrange its tiles so similar colours cluster.",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=True)],
    )


def _random_sources(seed: int | None) -> tuple[np.random.Generator, RandomPixelSampler]:
    """Independent engine generator and sampler seeded from one *seed*."""
    engine_seq, sampler_seq = np.random.SeedSequence(seed).spawn(2)
    return (
        np.random.default_rng(engine_seq),
        RandomPixelSampler(np.random.default_rng(sampler_seq)),
    )


def _prepare(
    input_path: Path,
    columns: int,
    do_shuffle: bool,
    do_sort_rows: bool,
    rng: np.random.Generator,
    sampler: RandomPixelSampler,
) -> TileGrid:
    grid = decode(input_path, sampler=sampler)
    logging.getLogger("pixel_tiles").info(
        "Loaded %s (%dx%d)", input_path.name, grid.width, grid.height,
    )
    pixelate(grid, columns)
    if do_shuffle:
        shuffle(grid, rng)
    if do_sort_rows:
        sort_rows(grid)
    return grid


# Defaults come from TileConfig - single source of truth
_DEFAULTS = TileConfig()

_METRIC_HELP = f"Colour distance: {', '.join(sorted(DISTANCE_METRICS))}"


# -- batch command -----------------------------------------------------

@app.command()
def run(
    input_path: Path = typer.Argument(..., help="Image to pixelate"),
    output: Path = typer.Option(_DEFAULTS.output, "--output", "-o", help="Output image"),
    columns: int = typer.Option(
        _DEFAULTS.columns, "--columns", "-b", min=1, help="Tile columns",
    ),
    do_shuffle: bool = typer.Option(
        _DEFAULTS.shuffle, "--shuffle/--no-shuffle", "-s", help="Shuffle the tiles",
    ),
    do_sort_rows: bool = typer.Option(
        _DEFAULTS.sort_rows, "--sort-rows/--no-sort-rows", help="Sort each row by luma",
    ),
    iterations: int = typer.Option(
        _DEFAULTS.iterations, "--iters", min=0, help="Clustering steps to run",
    ),
    frequency: float = typer.Option(
        _DEFAULTS.frequency, "--frequency", "-f", min=0.0, max=1.0,
        help="Fraction of tiles relocated per step",
    ),
    metric: str = typer.Option(_DEFAULTS.metric, "--metric", help=_METRIC_HELP),
    seed: int | None = typer.Option(_DEFAULTS.seed, "--seed", help="Random seed"),
    upscale: int = typer.Option(
        _DEFAULTS.upscale, "--upscale", "-u", min=1, help="Output upscale factor",
    ),
    gif: Path | None = typer.Option(None, "--gif", help="Save a clustering GIF"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Pixelate INPUT_PATH, rearrange its tiles and write the result."""
    _setup_logging(verbose)

    console.print(Panel.fit(
        f"[bold]PIXEL TILES[/bold]\n"
        f"Columns: {columns}  |  Shuffle: {do_shuffle}  |  Sort rows: {do_sort_rows}\n"
        f"Steps: {iterations}  |  Frequency: {frequency}  |  Metric: {metric}",
        border_style="cyan",
    ))
    t_total = time.perf_counter()

    try:
        distance = get_distance(metric)
        rng, sampler = _random_sources(seed)
        grid = _prepare(input_path, columns, do_shuffle, do_sort_rows, rng, sampler)
        if iterations:
            optimize(
                grid, iterations, frequency, distance, rng,
                gif_path=gif, gif_frames=_DEFAULTS.gif_frames, upscale=upscale,
            )
        encode(grid, output, upscale)
    except PixelTilesError as exc:
        console.print(f"[red]✗[/red] {exc}")
        raise typer.Exit(1) from exc

    elapsed = time.perf_counter() - t_total
    console.print(
        f"  [green]✓[/green] {output}  "
        f"[dim]{grid.cols}x{grid.rows} tiles of {grid.block_size} px"
        f"  time={elapsed:.1f}s[/dim]"
    )


# -- interactive command -----------------------------------------------

@app.command()
def view(
    input_path: Path = typer.Argument(..., help="Image to pixelate"),
    output: Path = typer.Option(
        _DEFAULTS.output, "--output", "-o", help="Image written by the [bold]s[/bold] key",
    ),
    columns: int = typer.Option(
        _DEFAULTS.columns, "--columns", "-b", min=1, help="Tile columns",
    ),
    do_shuffle: bool = typer.Option(
        _DEFAULTS.shuffle, "--shuffle/--no-shuffle", "-s", help="Shuffle the tiles",
    ),
    do_sort_rows: bool = typer.Option(
        _DEFAULTS.sort_rows, "--sort-rows/--no-sort-rows", help="Sort each row by luma",
    ),
    iterations: int = typer.Option(
        _DEFAULTS.iterations, "--iters", min=0,
        help="Clustering steps to run before the window opens",
    ),
    frequency: float = typer.Option(
        _DEFAULTS.frequency, "--frequency", "-f", min=0.0, max=1.0,
        help="Fraction of tiles relocated per step",
    ),
    metric: str = typer.Option(_DEFAULTS.metric, "--metric", help=_METRIC_HELP),
    seed: int | None = typer.Option(_DEFAULTS.seed, "--seed", help="Random seed"),
    upscale: int = typer.Option(
        _DEFAULTS.upscale, "--upscale", "-u", min=1, help="Output upscale factor",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Open a window: [bold]space[/bold] runs a step, [bold]s[/bold] saves."""
    _setup_logging(verbose)

    # matplotlib is only needed for the window
    from pixel_tiles.viewer import TileViewer

    try:
        distance = get_distance(metric)
        rng, sampler = _random_sources(seed)
        grid = _prepare(input_path, columns, do_shuffle, do_sort_rows, rng, sampler)
        if iterations:
            optimize(grid, iterations, frequency, distance, rng)
        viewer = TileViewer(grid, output, frequency, distance, rng, upscale=upscale)
        viewer.show()
    except PixelTilesError as exc:
        console.print(f"[red]✗[/red] {exc}")
        raise typer.Exit(1) from exc


if __name__ == "__main__":
    app()
