"""Shared console, environment settings, and logging setup."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

console = Console()

ENV_WAD = "WADMAP_WAD"
ENV_LOG_LEVEL = "WADMAP_LOG_LEVEL"
ENV_PERF_DIR = "WADMAP_PERF_DIR"


@dataclass(frozen=True)
class Settings:
    wad_path: Optional[str] = None
    log_level: str = "WARNING"
    perf_dir: str = "runs"


def load_settings() -> Settings:
    """Read settings from the environment.

    Call ``load_dotenv()`` first if a .env file should be honoured.
    """
    return Settings(
        wad_path=os.environ.get(ENV_WAD) or None,
        log_level=os.environ.get(ENV_LOG_LEVEL, "WARNING").upper(),
        perf_dir=os.environ.get(ENV_PERF_DIR, "runs"),
    )


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Route the package logger through rich. Safe to call more than once."""
    log = logging.getLogger("wadmap")
    if not any(isinstance(h, RichHandler) for h in log.handlers):
        handler = RichHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="%H:%M:%S"))
        log.addHandler(handler)
    log.setLevel(getattr(logging, level, logging.WARNING))
    log.propagate = False
    return log
