import logging
import sys

from loguru import logger

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure stdlib logging and the loguru sink at the same level."""
    level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("clinic_inventory").setLevel(level)

    logger.remove()
    logger.add(sys.stderr, level=level)
