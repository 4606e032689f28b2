from __future__ import annotations

import asyncio
import io
import logging
from pathlib import Path

import cairosvg
from PIL import Image

from .imaging import fit_contain
from .registry import SizeSpec

logger = logging.getLogger(__name__)

DEFAULT_DENSITY = 300
CSS_DPI = 96


class SvgRasterizer:
    """Render one SVG into one PNG, optionally contain-fitted into a target box.

    Sized targets are decoded at a fixed density so small icons are downsampled
    from a sharp raster rather than upscaled from a coarse one.
    """

    def __init__(self, density: int = DEFAULT_DENSITY):
        if density <= 0:
            raise ValueError("density must be positive")
        self.density = density

    async def __call__(self, source: Path, output: Path, size: SizeSpec | None = None) -> None:
        await asyncio.to_thread(self.render, source, output, size)

    def decode(self, source: Path, scale: float) -> Image.Image:
        png = cairosvg.svg2png(url=Path(source).resolve().as_uri(), dpi=self.density, scale=scale)
        img = Image.open(io.BytesIO(png))
        img.load()
        return img.convert("RGBA")

    def render(self, source: Path, output: Path, size: SizeSpec | None = None) -> None:
        if size is None:
            img = self.decode(source, scale=1.0)
        else:
            img = fit_contain(self.decode(source, scale=self.density / CSS_DPI), size)
        logger.debug("Writing %s (%dx%d)", output, img.width, img.height)
        img.save(output, format="PNG", optimize=True, compress_level=9)
