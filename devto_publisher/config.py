# devto_publisher/config.py
"""
Settings for the publisher, read from the environment (and a .env file when
present), plus the logging configuration applied by entry points.
"""
import logging
import logging.config
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://dev.to/api'
DEFAULT_ARTICLES_DIRECTORY = 'articles'
DEFAULT_LOG_LEVEL = 'INFO'
DEFAULT_LOG_DIR = 'logs'


@dataclass(frozen=True)
class Settings:
    api_key: Optional[str]
    base_url: str
    articles_directory: str
    log_level: str
    log_dir: Path


def load_settings(dotenv_path: Optional[str | Path] = None) -> Settings:
    """
    Loads settings from the environment, after merging a .env file.

    Variables already set in the environment win over the .env file.
    """
    load_dotenv(dotenv_path=dotenv_path)

    settings = Settings(
        api_key=os.getenv('DEVTO_API_KEY') or None,
        base_url=os.getenv('DEVTO_BASE_URL', DEFAULT_BASE_URL),
        articles_directory=os.getenv('ARTICLES_DIRECTORY', DEFAULT_ARTICLES_DIRECTORY),
        log_level=os.getenv('LOG_LEVEL', DEFAULT_LOG_LEVEL).upper(),
        log_dir=Path(os.getenv('LOG_DIR', DEFAULT_LOG_DIR)),
    )
    if not settings.api_key:
        logger.warning("DEVTO_API_KEY is not set; API calls will be refused.")
    return settings


def build_logging_config(log_dir: Path, level: str = DEFAULT_LOG_LEVEL) -> Dict[str, Any]:
    """Console output plus a rotating file for the devto_publisher logger tree."""
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'verbose': {
                'format': '{levelname} {asctime} {module} P{process:d} T{thread:d} {message}',
                'style': '{',
                'datefmt': '%Y-%m-%d %H:%M:%S',
            },
            'simple': {
                'format': '{levelname} {asctime} {name}: {message}',
                'style': '{',
                'datefmt': '%Y-%m-%d %H:%M:%S',
            },
        },
        'handlers': {
            'console': {
                'level': level,
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
            },
            'publisher_file': {
                'level': 'DEBUG',
                'class': 'logging.handlers.RotatingFileHandler',
                'filename': str(log_dir / 'publisher.log'),
                'maxBytes': 1024 * 1024 * 5,  # 5 MB
                'backupCount': 5,
                'formatter': 'verbose',
                'encoding': 'utf-8',
            },
        },
        'loggers': {
            'devto_publisher': {
                'handlers': ['console', 'publisher_file'],
                'level': 'DEBUG',
                'propagate': False,
            },
        },
    }


def configure_logging(settings: Settings) -> None:
    """Creates the log directory and applies the logging configuration."""
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(settings.log_dir, settings.log_level))
    logger.info(f"Logging configured (level {settings.log_level}, dir {settings.log_dir})")
