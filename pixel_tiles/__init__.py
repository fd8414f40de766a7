"""
Pixel Tiles
===========

Pixelate any image into a grid of uniform tiles, then rearrange them:

- **Shuffle** (biased Fisher-Yates permutation)
- **Row sort** (order each row by brightness)
- **Local search** (move tiles next to similar-coloured neighbours)
"""

__version__ = "1.0.0"

from pixel_tiles.color_utils import (
    DISTANCE_METRICS,
    get_distance,
    lab_distance,
    rgb_distance,
    ycbcr_distance,
)
from pixel_tiles.config import TileConfig
from pixel_tiles.errors import (
    DecodeError,
    EncodeError,
    InvalidConfiguration,
    PixelTilesError,
)
from pixel_tiles.grid import TileGrid
from pixel_tiles.image_io import decode, encode
from pixel_tiles.optimizer import neighbourhood_cost, optimize, step
from pixel_tiles.pixelate import pixelate
from pixel_tiles.samplers import (
    OriginPixelSampler,
    PredicatePixelSampler,
    RandomPixelSampler,
)
from pixel_tiles.shuffle import ChannelThreshold, shuffle, unbiased
from pixel_tiles.sorting import sort_rows

__all__ = [
    "DISTANCE_METRICS",
    "ChannelThreshold",
    "DecodeError",
    "EncodeError",
    "InvalidConfiguration",
    "OriginPixelSampler",
    "PixelTilesError",
    "PredicatePixelSampler",
    "RandomPixelSampler",
    "TileConfig",
    "TileGrid",
    "decode",
    "encode",
    "get_distance",
    "lab_distance",
    "neighbourhood_cost",
    "optimize",
    "pixelate",
    "rgb_distance",
    "shuffle",
    "sort_rows",
    "step",
    "unbiased",
    "ycbcr_distance",
]
