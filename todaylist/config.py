"""Environment-driven configuration for todaylist.

Values are read from the process environment, with a local ``.env`` file
loaded first when present.
"""

import logging
import os
from datetime import tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

from todaylist.models.constants import DEFAULT_RESET_CHECK_INTERVAL_SECONDS

load_dotenv()

# Database URL - SQLite by default
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./todaylist.db")


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean flag ("true"/"false") from the environment."""
    return os.getenv(name, str(default)).lower() == "true"


def get_timezone() -> Optional[tzinfo]:
    """Timezone used for the daily boundary (``None`` means system local)."""
    name = os.getenv("TODAYLIST_TIMEZONE", "").strip()
    if not name:
        return None
    return ZoneInfo(name)


def get_reset_check_interval() -> float:
    return float(os.getenv("RESET_CHECK_INTERVAL_SECONDS", str(DEFAULT_RESET_CHECK_INTERVAL_SECONDS)))


def configure_logging() -> None:
    """Configure root logging from ``LOG_LEVEL`` (default INFO)."""
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
