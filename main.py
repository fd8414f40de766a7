#!/usr/bin/env python3
"""
main.py - Quick-start entry point.

    python main.py run photo.jpg -o tiles.png --shuffle --iters 50
    python main.py view photo.jpg --shuffle

Or use the installed script:

    pixel-tiles run --help
"""

from pixel_tiles.cli import app

if __name__ == "__main__":
    app()
