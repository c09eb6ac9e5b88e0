"""
Backup File Manager

This module provides the backup step used before a subtitle file is rewritten in place.
"""

import shutil
from pathlib import Path
from typing import Optional

from subkit.core.errors import SubtitleIOError
from subkit.utils.constants import BACKUP_SUFFIX
from subkit.utils.logging_config import get_logger

logger = get_logger(__name__)


class BackupManager:
    """Manages backup files for in-place subtitle rewrites."""

    def __init__(self, backup_suffix: str = BACKUP_SUFFIX):
        """
        Initialize the backup manager.

        Args:
            backup_suffix: Suffix appended to the original file name
        """
        self.backup_suffix = backup_suffix

    def backup_path(self, original_file: Path) -> Path:
        return original_file.with_suffix(original_file.suffix + self.backup_suffix)

    def create_backup(self, original_file: Path) -> Optional[Path]:
        """
        Create a backup of the original file.

        Args:
            original_file: Path to the original file

        Returns:
            Path to the backup file, or None if the original does not exist

        Raises:
            SubtitleIOError: If the copy fails
        """
        original_file = Path(original_file)
        if not original_file.exists():
            logger.warning(f"Original file not found, no backup created: {original_file}")
            return None

        backup_file = self.backup_path(original_file)
        try:
            shutil.copy2(original_file, backup_file)
        except OSError as e:
            raise SubtitleIOError(f"creating backup {backup_file} failed: {e}") from e

        logger.info(f"Created backup: {backup_file}")
        return backup_file
