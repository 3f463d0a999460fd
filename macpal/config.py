"""
Runtime settings for MacPal.

Values come from the environment, optionally seeded from a .env file in
the working directory:
- MACPAL_HOME: directory for user data (default ~/.macpal)
- MACPAL_PROGRESS_DB: progress database path (default $MACPAL_HOME/progress.db)
- MACPAL_ASSETS_DIR: directory holding help images (default ./assets)
- MACPAL_LOG_LEVEL: logging level name (default INFO)
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from macpal.classroom.progress import DEFAULT_PROGRESS_DIR


LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class Settings(BaseModel):
    home_dir: Path = DEFAULT_PROGRESS_DIR
    progress_db: Path = DEFAULT_PROGRESS_DIR / "progress.db"
    assets_dir: Path = Path("assets")
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (tests)
            dotenv: Load .env into os.environ first
        """
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        home = Path(environ.get("MACPAL_HOME", DEFAULT_PROGRESS_DIR)).expanduser()
        progress_db = environ.get("MACPAL_PROGRESS_DB")
        return cls(
            home_dir=home,
            progress_db=Path(progress_db).expanduser() if progress_db else home / "progress.db",
            assets_dir=Path(environ.get("MACPAL_ASSETS_DIR", "assets")).expanduser(),
            log_level=environ.get("MACPAL_LOG_LEVEL", "INFO"),
        )


def configure_logging(level: str = "INFO"):
    """Configure root logging the same way for the app and scripts."""
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)
