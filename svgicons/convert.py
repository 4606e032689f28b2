from __future__ import annotations

import logging
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable

from .fallbacks import MissingFallback, find_missing
from .registry import KNOWN_IMAGES, PNG_EXT, ImagePlan, SizeSpec, base_name, output_name, resolve_plan
from .scanner import UNLIMITED_DEPTH, find_svg_files

logger = logging.getLogger(__name__)

Rasterizer = Callable[[Path, Path, SizeSpec | None], Awaitable[None]]


class RunState(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    CONVERTING_DISCOVERED = "converting_discovered"
    PLANNING_FALLBACKS = "planning_fallbacks"
    CONVERTING_FALLBACKS = "converting_fallbacks"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ConversionFailure:
    source: Path
    target: str
    error: Exception


class ConversionError(RuntimeError):
    """Raised in strict mode when at least one conversion failed."""

    def __init__(self, failures: list[ConversionFailure]):
        self.failures = failures
        super().__init__(f"{len(failures)} conversion(s) failed")


class Converter:
    """Scan a directory, convert every SVG found, then fill in missing fallback images.

    A run is single-pass: each conversion is awaited before the next one starts.
    Per-item errors are logged and kept in ``failures``; only a missing root directory
    aborts the run.
    """

    def __init__(
        self,
        rasterizer: Rasterizer | None = None,
        *,
        depth: int = UNLIMITED_DEPTH,
        verbose: bool = False,
        strict: bool = False,
        registry: Mapping[str, ImagePlan] = KNOWN_IMAGES,
    ):
        if rasterizer is None:
            from .rasterize import SvgRasterizer

            rasterizer = SvgRasterizer()
        self.rasterizer = rasterizer
        self.depth = depth
        self.verbose = verbose
        self.strict = strict
        self.registry = registry
        self.state = RunState.IDLE
        self.failures: list[ConversionFailure] = []

    def _progress(self, msg: str, *args: object) -> None:
        logger.log(logging.INFO if self.verbose else logging.DEBUG, msg, *args)

    async def run(self, directory: Path | str) -> list[Path]:
        self.state = RunState.IDLE
        self.failures = []
        root = Path(directory).resolve()
        if not root.exists():
            self.state = RunState.FAILED
            raise FileNotFoundError(f"Directory not found: {root}")

        self.state = RunState.SCANNING
        try:
            sources = find_svg_files(root, self.depth)
        except OSError:
            self.state = RunState.FAILED
            raise

        if not sources:
            self._progress("No SVG files found in %s", root)
            self.state = RunState.DONE
            return []
        self._progress("Found %d SVG file(s)", len(sources))

        self.state = RunState.CONVERTING_DISCOVERED
        for src in sources:
            await self.convert_source(src)

        self.state = RunState.PLANNING_FALLBACKS
        missing = find_missing(root, sources, self.registry)
        if missing:
            self._progress("Generating %d image(s) from fallbacks", len(missing))

        self.state = RunState.CONVERTING_FALLBACKS
        for item in missing:
            await self.generate_fallback(root, item)

        self.state = RunState.DONE
        if self.strict and self.failures:
            raise ConversionError(self.failures)
        return sources

    async def convert_source(self, source: Path) -> None:
        name = base_name(source)
        plan = resolve_plan(name, self.registry)

        if plan is None:
            output = source.with_name(name + PNG_EXT)
            try:
                await self.rasterizer(source, output, None)
            except Exception as e:
                logger.error("Error processing file %s: %s", source, e)
                self._record(source, output.name, e)
                return
            self._progress("Created: %s", output)
            return

        for size in plan.sizes:
            output = source.with_name(output_name(name, plan, size))
            try:
                await self.rasterizer(source, output, size)
            except Exception as e:
                logger.error("Error processing file %s: %s", source, e)
                self._record(source, output.name, e)
                continue
            self._progress("Created: %s (%s)", output, size.label)

    async def generate_fallback(self, root: Path, item: MissingFallback) -> None:
        try:
            for size in item.plan.sizes:
                output = root / output_name(item.name, item.plan, size)
                await self.rasterizer(item.source, output, size)
                self._progress("Created: %s (%s) [from %s]", output, size.label, item.source.name)
        except Exception as e:
            logger.error("Error generating %s from fallback: %s", item.name, e)
            self._record(item.source, item.name, e)

    def _record(self, source: Path, target: str, error: Exception) -> None:
        self.failures.append(ConversionFailure(source=source, target=target, error=error))


async def convert(
    directory: Path | str = ".",
    *,
    depth: int = UNLIMITED_DEPTH,
    verbose: bool = False,
    strict: bool = False,
    rasterizer: Rasterizer | None = None,
) -> list[Path]:
    """Convert every SVG under directory and return the discovered source paths.

    Raises FileNotFoundError if the directory does not exist. Individual conversion
    errors are only logged, unless strict is set.
    """
    converter = Converter(rasterizer, depth=depth, verbose=verbose, strict=strict)
    return await converter.run(directory)
