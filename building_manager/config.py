# ABOUTME: Environment driven configuration for logging and save file locations
# ABOUTME: Reads .env once via python-dotenv, then os.getenv with inline defaults

import logging
import os
from typing import Optional

import structlog
from dotenv import load_dotenv

# Load configuration from .env file
load_dotenv()

LOG_FORMAT = "%(asctime)s %(name)s [%(levelname)s]: %(message)s"


def default_save_path() -> str:
    return os.getenv("BMS_SAVE_FILE", "config/buildings.txt")


def file_encoding() -> str:
    return os.getenv("BMS_FILE_ENCODING", "utf-8")


def configure_logging(level: Optional[str] = None):
    """Set up stdlib logging and route structlog output through it"""
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_level = logging.getLevelName(level_name)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(level=log_level, format=LOG_FORMAT)

    logfile = os.getenv("LOGFILE")
    if logfile:
        file_handler = logging.FileHandler(logfile)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger("").addHandler(file_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
