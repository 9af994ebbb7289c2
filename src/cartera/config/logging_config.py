"""Logging configuration."""

import logging
import sys
from typing import Optional

from cartera.config.settings import get_settings


def setup_logging(level: Optional[str] = None) -> None:
    """Configure application logging; ``level`` overrides settings.log_level."""
    settings = get_settings()
    level_name = (level or settings.log_level).upper()

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    # Request lines only when debugging
    logging.getLogger("uvicorn.access").setLevel(
        logging.INFO if level_name == "DEBUG" else logging.WARNING
    )
    logging.getLogger(__name__).info("Reading snapshots from %s", settings.get_data_dir())
