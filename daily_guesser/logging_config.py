import logging
import sys

from daily_guesser.config import settings


def setup_logging(level_name=None) -> None:
    """Configure root logger for the application."""
    level_name = level_name or settings.log_level
    level = getattr(logging, level_name.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stdout,
    )

    # Streamlit and the data download are chatty at INFO
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("fiona").setLevel(logging.WARNING)
