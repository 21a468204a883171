"""
Runtime settings read from the environment.

Call ``load_env()`` first if values should come from a ``.env`` file.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from .scoring.keywords import MATCH_MODES

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    db_path: Path = Path("data/ats_scores.db")
    keyword_match_mode: str = "substring"
    fetch_timeout: float = 15.0
    fetch_retries: int = 3
    ignored: List[Tuple[str, str]] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ATS_* environment variables.

        Invalid values are replaced by the default and listed in ``ignored``
        so the caller can report them once logging is configured.
        """
        settings = cls()
        problems = settings.ignored

        level = os.getenv("ATS_LOG_LEVEL")
        if level:
            if level.upper() in LOG_LEVELS:
                settings.log_level = level.upper()
            else:
                problems.append(("ATS_LOG_LEVEL", level))

        if os.getenv("ATS_LOG_DIR"):
            settings.log_dir = Path(os.environ["ATS_LOG_DIR"])

        if os.getenv("ATS_DB_PATH"):
            settings.db_path = Path(os.environ["ATS_DB_PATH"])

        mode = os.getenv("ATS_KEYWORD_MATCH_MODE")
        if mode:
            if mode.lower() in MATCH_MODES:
                settings.keyword_match_mode = mode.lower()
            else:
                problems.append(("ATS_KEYWORD_MATCH_MODE", mode))

        timeout = os.getenv("ATS_FETCH_TIMEOUT")
        if timeout:
            try:
                settings.fetch_timeout = float(timeout)
            except ValueError:
                problems.append(("ATS_FETCH_TIMEOUT", timeout))

        retries = os.getenv("ATS_FETCH_RETRIES")
        if retries:
            try:
                settings.fetch_retries = max(int(retries), 0)
            except ValueError:
                problems.append(("ATS_FETCH_RETRIES", retries))

        return settings
