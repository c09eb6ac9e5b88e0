"""
Utility modules.

This package contains shared utility functions and configurations:
- Backup utilities
- Logging configuration
- Shared constants and configurations
"""

from .logging_config import setup_logging, get_logger
from .constants import (
    SubtitleFormat,
    ENCODING_PRIORITY,
    UTF8_BOM,
    BACKUP_SUFFIX,
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_DATE_FORMAT,
    APP_NAME,
    APP_VERSION,
    APP_DESCRIPTION,
)

__all__ = [
    'setup_logging',
    'get_logger',
    'SubtitleFormat',
    'ENCODING_PRIORITY',
    'UTF8_BOM',
    'BACKUP_SUFFIX',
    'DEFAULT_LOG_FORMAT',
    'DEFAULT_LOG_DATE_FORMAT',
    'APP_NAME',
    'APP_VERSION',
    'APP_DESCRIPTION',
]
