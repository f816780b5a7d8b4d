"""
Canvas: the pixel grid the camera renders into.

Implements:
- Bounds-checked pixel access
- Plain PPM (P3) serialization
- Image file output through Pillow
"""

from __future__ import annotations
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from .color import Color
from .errors import PixelOutOfBoundsError

PPM_LINE_LENGTH = 70


class Canvas:
    """A width x height grid of colors, initially black."""

    def __init__(self, width: int, height: int):
        """Create a blank canvas.

        Args:
            width: Number of pixel columns
            height: Number of pixel rows
        """
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.int64)

    def _check_bounds(self, x: int, y: int) -> None:
        if not 0 <= x < self.width:
            raise PixelOutOfBoundsError(f"x = {x} out of range, width is {self.width}")
        if not 0 <= y < self.height:
            raise PixelOutOfBoundsError(f"y = {y} out of range, height is {self.height}")

    def write_pixel(self, x: int, y: int, color: Color) -> None:
        """Write a color at column x, row y.

        Raises:
            PixelOutOfBoundsError: If (x, y) is outside the canvas
        """
        self._check_bounds(x, y)
        self.pixels[y, x] = color.to_array()

    def get_pixel(self, x: int, y: int) -> Color:
        """Read the color at column x, row y.

        Raises:
            PixelOutOfBoundsError: If (x, y) is outside the canvas
        """
        self._check_bounds(x, y)
        return Color.from_array(self.pixels[y, x])

    def to_ppm(self) -> str:
        """Serialize the canvas as a plain PPM document.

        Channel values are clamped to 0-255 and no line exceeds 70
        characters.
        """
        lines = ["P3", f"{self.width} {self.height}", "255"]
        clamped = np.clip(self.pixels, 0, 255)

        for row in clamped:
            line = ""
            for value in row.flatten():
                token = str(int(value))
                if not line:
                    line = token
                elif len(line) + 1 + len(token) > PPM_LINE_LENGTH:
                    lines.append(line)
                    line = token
                else:
                    line = f"{line} {token}"
            if line:
                lines.append(line)

        return "\n".join(lines) + "\n"

    def to_image(self) -> Image.Image:
        """Return the canvas as an 8-bit RGB Pillow image."""
        data = np.clip(self.pixels, 0, 255).astype(np.uint8)
        return Image.fromarray(data, 'RGB')

    def save(self, filename: Union[str, Path]) -> None:
        """Save the canvas to a file.

        Args:
            filename: Output filename (extension determines format; .ppm is
                written as plain text, anything else goes through Pillow)
        """
        path = Path(filename)
        if path.suffix.lower() == '.ppm':
            path.write_text(self.to_ppm())
        else:
            self.to_image().save(path)

    def __repr__(self) -> str:
        return f"Canvas({self.width}x{self.height})"
