import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, field_validator

_TRUE = {"1", "true", "yes", "y"}


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    directory: Path = Path(".")
    depth: int = -1
    verbose: bool = False
    strict: bool = False
    density: int = 300
    # Logging
    log_level: str = "INFO"
    log_file: Path | None = None
    log_max_bytes: int = 5 * 1024 * 1024
    log_backups: int = 5

    @field_validator("directory", mode="before")
    @classmethod
    def _ensure_path(cls, v: Path | str) -> Path:
        return Path(v or ".").expanduser().resolve()

    @field_validator("depth")
    @classmethod
    def _check_depth(cls, v: int) -> int:
        if v < -1:
            raise ValueError("depth must be -1 (unlimited) or a non-negative integer")
        return v

    @field_validator("density")
    @classmethod
    def _check_density(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("density must be positive")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return (v or "INFO").upper()

    @field_validator("log_file", mode="before")
    @classmethod
    def _ensure_log_path(cls, v: str | Path | None) -> Path | None:
        if not v:
            return None
        return Path(v).expanduser().resolve()


def load_settings(
    directory: str | Path = ".",
    depth: int | None = None,
    verbose: bool | None = None,
    strict: bool | None = None,
) -> Settings:
    """Build Settings from explicit arguments, falling back to the environment."""
    if depth is None:
        depth = int(os.getenv("CONVERT_DEPTH", "-1") or -1)
    if verbose is None:
        verbose = _env_bool("CONVERT_VERBOSE")
    if strict is None:
        strict = _env_bool("CONVERT_STRICT")

    return Settings(
        directory=directory,
        depth=depth,
        verbose=verbose,
        strict=strict,
        density=int(os.getenv("SVG_DENSITY", "300") or 300),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=os.getenv("LOG_FILE", "").strip() or None,
        log_max_bytes=int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024))),
        log_backups=int(os.getenv("LOG_BACKUPS", "5")),
    )
