from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from logging.handlers import RotatingFileHandler

from dotenv import load_dotenv

from . import __version__
from .config import Settings, load_settings
from .convert import convert

FILE_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

EPILOG = (
    "Supported automatic conversions:\n"
    "  favicon.svg            -> Multiple sizes (16, 32, 48, 64, 128, 256)\n"
    "  favicon-16x16.svg      -> 16x16 PNG\n"
    "  favicon-32x32.svg      -> 32x32 PNG\n"
    "  apple-touch-icon.svg   -> 180x180 PNG\n"
    "  og-image.svg           -> 1200x630 PNG\n"
    "  twitter-image.svg      -> 1200x600 PNG\n"
    "  android-chrome-*.svg   -> Respective sizes\n"
    "\n"
    "Missing favicon-16x16, favicon-32x32, apple-touch-icon and android-chrome\n"
    "images are generated from favicon.svg when it sits in the target directory.\n"
    "Other SVG files are converted to PNG at original size."
)

log = logging.getLogger(__name__)


class _BelowWarning(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def make_rasterizer(density: int):
    from .rasterize import SvgRasterizer

    return SvgRasterizer(density)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="convert-svgs",
        description="Convert SVG files to PNG with automatic sizing",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("directory", nargs="?", default=".", help="Target directory to scan (default: .)")
    parser.add_argument(
        "--depth", type=int, default=None, help="Maximum directory depth to scan (-1 for unlimited)"
    )
    parser.add_argument("--verbose", action="store_true", default=None, help="Enable verbose output")
    parser.add_argument(
        "--strict", action="store_true", default=None, help="Exit with an error if any conversion failed"
    )
    parser.add_argument("-v", "--version", action="version", version=__version__)
    return parser


def setup_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level, logging.INFO)
    if settings.verbose:
        level = min(level, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    out = logging.StreamHandler(sys.stdout)
    out.addFilter(_BelowWarning())
    out.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(out)

    err = logging.StreamHandler(sys.stderr)
    err.setLevel(logging.WARNING)
    err.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(err)

    if settings.log_file:
        try:
            settings.log_file.parent.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(
                settings.log_file,
                maxBytes=settings.log_max_bytes,
                backupCount=settings.log_backups,
                encoding="utf-8",
            )
            fh.setLevel(level)
            fh.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
            root.addHandler(fh)
        except OSError:
            log.exception("Failed to set up file logging")


async def _run(settings: Settings) -> int:
    if not settings.directory.exists():
        log.error("Directory not found: %s", settings.directory)
        return 1
    try:
        files = await convert(
            settings.directory,
            depth=settings.depth,
            verbose=settings.verbose,
            strict=settings.strict,
            rasterizer=make_rasterizer(settings.density),
        )
    except Exception as e:
        log.error("Error: %s", e)
        return 1
    if settings.verbose and files:
        log.info("Conversion complete!")
    return 0


def main(argv: list[str] | None = None) -> int:
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as e:
        # -h/--version exit 0; usage errors map to the fatal exit code
        if e.code:
            return 1
        raise
    # Load .env if present
    load_dotenv()
    try:
        settings = load_settings(args.directory, depth=args.depth, verbose=args.verbose, strict=args.strict)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    setup_logging(settings)
    return asyncio.run(_run(settings))


def run() -> None:
    sys.exit(main())
