from __future__ import annotations

import os
from pathlib import Path

from .registry import SVG_EXT

UNLIMITED_DEPTH = -1


def find_svg_files(root: Path | str, max_depth: int = UNLIMITED_DEPTH) -> list[Path]:
    """Collect absolute paths of *.svg files under root.

    The root sits at depth 0; a directory deeper than max_depth is neither entered nor
    collected from. max_depth == -1 means unlimited. Symlinked entries are not followed.
    A missing root raises FileNotFoundError instead of yielding an empty list.
    """
    results: list[Path] = []
    stack: list[tuple[Path, int]] = [(Path(root).resolve(), 0)]

    while stack:
        current, depth = stack.pop()
        if max_depth != UNLIMITED_DEPTH and depth > max_depth:
            continue
        subdirs: list[Path] = []
        with os.scandir(current) as it:
            for entry in it:
                if entry.is_dir(follow_symlinks=False):
                    subdirs.append(Path(entry.path))
                elif entry.is_file(follow_symlinks=False) and entry.name.lower().endswith(SVG_EXT):
                    results.append(Path(entry.path))
        # Reverse so subdirectories come off the stack in listing order.
        stack.extend((d, depth + 1) for d in reversed(subdirs))

    return results
