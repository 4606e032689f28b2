from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

SVG_EXT = ".svg"
PNG_EXT = ".png"


class SizeSpec(BaseModel):
    """Target raster box. Square specs keep width == height."""

    model_config = ConfigDict(frozen=True)

    width: PositiveInt
    height: PositiveInt

    @classmethod
    def square(cls, n: int) -> SizeSpec:
        return cls(width=n, height=n)

    @classmethod
    def rect(cls, width: int, height: int) -> SizeSpec:
        return cls(width=width, height=height)

    @property
    def is_square(self) -> bool:
        return self.width == self.height

    @property
    def box(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def label(self) -> str:
        return f"{self.width}x{self.height}"


class SuffixRule(str, Enum):
    SIZED = "sized"  # "-{w}x{h}"
    FIXED = "fixed"  # constant string, usually empty


class ImagePlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    sizes: tuple[SizeSpec, ...] = Field(min_length=1)
    suffix: SuffixRule = SuffixRule.FIXED
    fixed_suffix: str = ""
    fallback: str | None = None

    @field_validator("sizes", mode="before")
    @classmethod
    def _coerce_sizes(cls, v: object) -> object:
        # Allow bare ints for square sizes and (w, h) pairs for rectangles.
        if isinstance(v, (list, tuple)):
            out = []
            for s in v:
                if isinstance(s, int):
                    out.append({"width": s, "height": s})
                elif isinstance(s, (list, tuple)) and len(s) == 2:
                    out.append({"width": s[0], "height": s[1]})
                else:
                    out.append(s)
            return tuple(out)
        return v


def suffix_for(plan: ImagePlan, size: SizeSpec) -> str:
    if plan.suffix is SuffixRule.SIZED:
        return f"-{size.label}"
    return plan.fixed_suffix


def output_name(base: str, plan: ImagePlan, size: SizeSpec) -> str:
    return f"{base}{suffix_for(plan, size)}{PNG_EXT}"


def validate_registry(registry: Mapping[str, ImagePlan]) -> None:
    """Check that every fallback resolves and that no fallback chain loops.

    Raises ValueError describing the first offending entry.
    """
    keys = {k.lower(): k for k in registry}
    for name, plan in registry.items():
        if plan.fallback is not None and plan.fallback.lower() not in keys:
            raise ValueError(f"{name}: unknown fallback {plan.fallback!r}")

    for name in registry:
        seen = [name.lower()]
        current = registry[name].fallback
        while current is not None:
            low = current.lower()
            if low in seen:
                chain = " -> ".join([*seen, low])
                raise ValueError(f"Fallback cycle: {chain}")
            seen.append(low)
            current = registry[keys[low]].fallback


_SIZED = SuffixRule.SIZED

KNOWN_IMAGES: Mapping[str, ImagePlan] = MappingProxyType(
    {
        "favicon": ImagePlan(sizes=[16, 32, 48, 64, 128, 256], suffix=_SIZED),
        "favicon-16x16": ImagePlan(sizes=[16], fallback="favicon"),
        "favicon-32x32": ImagePlan(sizes=[32], fallback="favicon"),
        "apple-touch-icon": ImagePlan(sizes=[180], fallback="favicon"),
        "og-image": ImagePlan(sizes=[(1200, 630)]),
        "twitter-image": ImagePlan(sizes=[(1200, 600)]),
        "android-chrome-192x192": ImagePlan(sizes=[192], fallback="favicon"),
        "android-chrome-512x512": ImagePlan(sizes=[512], fallback="favicon"),
    }
)

validate_registry(KNOWN_IMAGES)


def base_name(path: Path | str) -> str:
    """File name without its .svg extension (matched case-insensitively)."""
    name = Path(path).name
    if name.lower().endswith(SVG_EXT):
        return name[: -len(SVG_EXT)]
    return name


def resolve_plan(
    name: str, registry: Mapping[str, ImagePlan] = KNOWN_IMAGES
) -> ImagePlan | None:
    """Exact, case-insensitive lookup. No prefix or glob matching."""
    low = name.lower()
    for key, plan in registry.items():
        if key.lower() == low:
            return plan
    return None
