"""Exception hierarchy."""

from __future__ import annotations


class PixelTilesError(Exception):
    """Base class for every error raised by pixel_tiles."""


class InvalidConfiguration(PixelTilesError, ValueError):
    """A parameter is out of range; raised before the grid is touched."""


class DecodeError(PixelTilesError):
    """The input image could not be read or decoded."""


class EncodeError(PixelTilesError):
    """The output image could not be written."""
