# alloydb_check/main.py
from __future__ import annotations

import logging
import os
import sys
from typing import Any, Optional, TextIO

from dotenv import load_dotenv

from .config import Settings
from .db import fetch_server_time, open_pool
from .errors import AlloyDBCheckError

logger = logging.getLogger(__name__)


def log_level(name: Optional[str]) -> int:
    """Numeric level for a level name; unknown names fall back to INFO."""
    level = logging.getLevelName((name or "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def run(settings: Settings, out: Optional[TextIO] = None) -> Any:
    """Connect, query the server time and print it. Errors propagate."""
    out = out or sys.stdout
    with open_pool(settings) as engine:
        now = fetch_server_time(engine)
        print(f"Current timestamp from database: {now}", file=out)
    return now


def main() -> None:
    load_dotenv()

    logging.basicConfig(
        level=log_level(os.getenv("LOG_LEVEL")),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = Settings.from_env()
        run(settings)
    except AlloyDBCheckError as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
