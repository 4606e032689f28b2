from __future__ import annotations

from PIL import Image, ImageOps

from .registry import SizeSpec

TRANSPARENT = (0, 0, 0, 0)


def fit_contain(img: Image.Image, size: SizeSpec) -> Image.Image:
    """Scale img to fit inside size, centered on a transparent canvas of exactly size."""
    fitted = ImageOps.contain(img, size.box, Image.Resampling.LANCZOS)
    canvas = Image.new("RGBA", size.box, TRANSPARENT)
    x = (size.width - fitted.width) // 2
    y = (size.height - fitted.height) // 2
    canvas.paste(fitted, (x, y))
    return canvas
