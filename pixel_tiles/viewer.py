"""Interactive matplotlib window for stepping the optimizer by hand.

Keys:
    space  run one optimizer step and redraw
    s      save the current grid to the output path
    q      close the window (matplotlib default)
"""

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from pixel_tiles.color_utils import Distance
from pixel_tiles.errors import EncodeError
from pixel_tiles.grid import TileGrid
from pixel_tiles.image_io import encode
from pixel_tiles.optimizer import step

logger = logging.getLogger(__name__)


class TileViewer:
    def __init__(
        self,
        grid: TileGrid,
        output: Path,
        frequency: float,
        distance: Distance,
        rng: np.random.Generator,
        upscale: int = 1,
    ) -> None:
        self.grid = grid
        self.output = output
        self.frequency = frequency
        self.distance = distance
        self.rng = rng
        self.upscale = upscale
        self.steps = 0
        self.error: EncodeError | None = None

        self.fig, self.ax = plt.subplots()
        self.ax.set_axis_off()
        self.artist = self.ax.imshow(grid.pixels, interpolation="nearest")
        self.fig.canvas.mpl_connect("key_press_event", self.on_key)
        self._update_title()

    def _update_title(self) -> None:
        self.ax.set_title(
            f"{self.grid.cols}x{self.grid.rows} tiles  step {self.steps}  "
            "[space] step  [s] save"
        )

    def present(self) -> None:
        self.artist.set_data(self.grid.pixels)
        self._update_title()
        self.fig.canvas.draw_idle()

    def on_key(self, event) -> None:
        if event.key == " ":
            moves = step(self.grid, self.frequency, self.distance, self.rng)
            self.steps += 1
            logger.info("Step %d: %d moves", self.steps, moves)
            self.present()
        elif event.key == "s":
            try:
                encode(self.grid, self.output, self.upscale)
            except EncodeError as exc:
                # fatal: close the window and re-raise from show()
                self.error = exc
                plt.close(self.fig)
            else:
                logger.info("Saved %s", self.output)

    def show(self) -> None:
        # free "s" from the save-figure dialog while the window is open
        keymap = [k for k in plt.rcParams["keymap.save"] if k != "s"]
        with plt.rc_context({"keymap.save": keymap}):
            plt.show()
        if self.error is not None:
            raise self.error
