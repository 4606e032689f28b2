"""Convert SVG sources into PNG favicons, social images and home-screen icons."""

__version__ = "1.2.0"

from .convert import ConversionError, Converter, RunState, convert
from .registry import KNOWN_IMAGES, ImagePlan, SizeSpec, resolve_plan

__all__ = [
    "KNOWN_IMAGES",
    "ConversionError",
    "Converter",
    "ImagePlan",
    "RunState",
    "SizeSpec",
    "__version__",
    "convert",
    "resolve_plan",
]
