from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from .registry import KNOWN_IMAGES, SVG_EXT, ImagePlan, base_name


@dataclass(frozen=True)
class MissingFallback:
    name: str
    plan: ImagePlan
    source: Path


def find_fallback_source(root: Path, fallback: str) -> Path | None:
    # Looked up directly in root only, whatever the scan depth was.
    candidate = root / f"{fallback}{SVG_EXT}"
    if candidate.exists():
        return candidate
    return None


def find_missing(
    root: Path,
    sources: Iterable[Path],
    registry: Mapping[str, ImagePlan] = KNOWN_IMAGES,
) -> list[MissingFallback]:
    """Known images with no source of their own whose fallback source exists in root.

    Results follow registry order.
    """
    existing = {base_name(p).lower() for p in sources}
    results: list[MissingFallback] = []
    for name, plan in registry.items():
        if not plan.fallback:
            continue
        if name.lower() in existing:
            continue
        src = find_fallback_source(root, plan.fallback)
        if src is not None:
            results.append(MissingFallback(name=name, plan=plan, source=src))
    return results
