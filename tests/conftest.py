from __future__ import annotations

import logging
from pathlib import Path

import pytest

from svgicons.registry import SizeSpec


def make_svg(width: int, height: int) -> str:
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}"><rect width="{width}" height="{height}" fill="red"/></svg>'
    )


def write_svg(path: Path, width: int = 64, height: int = 64) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(make_svg(width, height), encoding="utf-8")
    return path


class FakeRasterizer:
    """Records every call and writes a placeholder output file."""

    def __init__(self, fail_on: set[str] | None = None):
        self.calls: list[tuple[Path, Path, SizeSpec | None]] = []
        self.fail_on = fail_on or set()

    async def __call__(self, source: Path, output: Path, size: SizeSpec | None = None) -> None:
        self.calls.append((source, output, size))
        if output.name in self.fail_on or source.name in self.fail_on:
            raise OSError(f"cannot render {source.name}")
        output.write_bytes(b"png")

    def outputs(self) -> list[str]:
        return [out.name for _, out, _ in self.calls]


@pytest.fixture
def raster() -> FakeRasterizer:
    return FakeRasterizer()


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)


def png_names(directory: Path) -> set[str]:
    return {p.name for p in directory.iterdir() if p.suffix == ".png"}
