"""
Renderer module - drives the camera over the whole image.

Implements:
- Tile-based parallel rendering (thread or process pool)
- Progress reporting
- Optional per-pixel error recovery

Every pixel is a pure function of the immutable scene, so tiles can be
computed in any order by any number of workers; only the final writes
into the canvas happen on the calling thread.
"""

from __future__ import annotations
import logging
import os
import time
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import Callable, List, Optional, Tuple

import numpy as np

from .camera import Camera
from .canvas import Canvas
from .color import Color
from .errors import RaytracerError
from .world import MAX_DEPTH, World

logger = logging.getLogger(__name__)

Tile = Tuple[int, int, int, int]


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    max_depth: int = MAX_DEPTH
    tile_size: int = 16
    num_threads: int = 0  # 0 = auto-detect
    use_processes: bool = False
    error_color: Optional[Color] = None  # None = errors abort the render

    def __post_init__(self):
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4
        if self.tile_size < 1:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")


def render_tile(
    camera: Camera,
    world: World,
    tile: Tile,
    max_depth: int = MAX_DEPTH,
    error_color: Optional[Color] = None,
) -> Tuple[Tile, np.ndarray]:
    """Render one rectangular tile of the image.

    Args:
        camera: Camera generating the pixel rays
        world: Scene to trace
        tile: (x0, y0, x1, y1) pixel bounds, end-exclusive
        max_depth: Recursion budget for reflection and refraction
        error_color: Sentinel written for pixels that fail, or None to raise

    Returns:
        The tile and its colors as an array of shape (y1 - y0, x1 - x0, 3)
    """
    x0, y0, x1, y1 = tile
    pixels = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.int64)

    for y in range(y0, y1):
        for x in range(x0, x1):
            try:
                ray = camera.ray_for_pixel(x, y)
                color = world.color_at(ray, max_depth)
            except RaytracerError as exc:
                if error_color is None:
                    raise
                logger.warning("Pixel (%d, %d) failed: %s", x, y, exc)
                color = error_color
            pixels[y - y0, x - x0] = color.to_array()

    return tile, pixels


class Renderer:
    """Parallel whole-image renderer."""

    def __init__(self, settings: Optional[RenderSettings] = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, world: World, camera: Camera) -> Canvas:
        """Render the world through the camera.

        Args:
            world: The scene to render
            camera: The camera to render from

        Returns:
            Canvas holding the clamped pixel colors
        """
        canvas = Canvas(camera.hsize, camera.vsize)
        tiles = self.generate_tiles(camera.hsize, camera.vsize)
        total_tiles = len(tiles)

        logger.info(
            "Rendering %dx%d in %d tiles with %d %s (max depth %d)",
            camera.hsize, camera.vsize, total_tiles, self.settings.num_threads,
            "processes" if self.settings.use_processes else "threads",
            self.settings.max_depth,
        )
        start = time.perf_counter()

        work = partial(
            render_tile,
            camera,
            world,
            max_depth=self.settings.max_depth,
            error_color=self.settings.error_color,
        )

        if self.settings.num_threads > 1 and total_tiles > 1:
            executor = self._executor()
            try:
                for completed, (tile, pixels) in enumerate(executor.map(work, tiles), 1):
                    self._store_tile(canvas, tile, pixels)
                    self._report(completed, total_tiles)
            except BaseException:
                # Drop queued tiles so a fatal pixel stops the render promptly
                executor.shutdown(wait=True, cancel_futures=True)
                raise
            executor.shutdown(wait=True)
        else:
            for completed, tile in enumerate(tiles, 1):
                _, pixels = work(tile)
                self._store_tile(canvas, tile, pixels)
                self._report(completed, total_tiles)

        logger.info("Render finished in %.2f seconds", time.perf_counter() - start)
        return canvas

    def _executor(self) -> Executor:
        if self.settings.use_processes:
            return ProcessPoolExecutor(max_workers=self.settings.num_threads)
        return ThreadPoolExecutor(max_workers=self.settings.num_threads)

    @staticmethod
    def _store_tile(canvas: Canvas, tile: Tile, pixels: np.ndarray) -> None:
        x0, y0, x1, y1 = tile
        for y in range(y0, y1):
            for x in range(x0, x1):
                canvas.write_pixel(x, y, Color.from_array(pixels[y - y0, x - x0]))

    def _report(self, completed: int, total: int) -> None:
        logger.debug("Tile %d/%d done", completed, total)
        if self._progress_callback:
            self._progress_callback(completed / total)

    def generate_tiles(self, width: int, height: int) -> List[Tile]:
        """Split the image into tiles for parallel rendering.

        Args:
            width: Image width
            height: Image height

        Returns:
            List of tiles as (x0, y0, x1, y1) tuples, end-exclusive
        """
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles
