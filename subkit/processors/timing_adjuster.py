"""
Timing adjustment processor for subtitle documents.

This module provides functionality for shifting subtitle timing by a fixed
offset, forcing a document to a given duration and correcting linear drift
between two calibration points.
"""

import re
from datetime import timedelta
from pathlib import Path
from typing import Optional
from subkit.core.models import Item, Subtitles
from subkit.core.subtitle_formats import SubtitleFormatFactory
from subkit.core.timing_utils import TimeConverter, parse_duration
from subkit.utils.backup_manager import BackupManager
from subkit.utils.constants import DUMMY_ITEM_DURATION, DUMMY_ITEM_TEXT
from subkit.utils.logging_config import get_logger

logger = get_logger(__name__)

OFFSET_PATTERN = re.compile(r'^([+-]?)(.*)$')


class TimingAdjuster:
    """Handles timing adjustments for subtitle documents and files."""

    def __init__(self, create_backup: bool = False):
        """
        Initialize the timing adjuster.

        Args:
            create_backup: Whether to back up files before rewriting them in place
        """
        self.create_backup = create_backup
        self.backup_manager = BackupManager() if create_backup else None

    @staticmethod
    def add(subtitles: Subtitles, delta: timedelta) -> None:
        """
        Shift every item by a signed offset.

        Items ending at or before zero after the shift are dropped; items
        straddling zero are kept with their start clamped to zero.

        Args:
            subtitles: Document to adjust in place
            delta: Offset (positive = delay, negative = advance)

        Example:
            >>> TimingAdjuster.add(subtitles, timedelta(seconds=-2.47))
        """
        kept = []
        for item in subtitles.items:
            item.start_at += delta
            item.end_at += delta
            if item.end_at <= timedelta(0) and item.start_at <= timedelta(0):
                continue
            if item.start_at <= timedelta(0):
                item.start_at = timedelta(0)
            kept.append(item)

        dropped = len(subtitles.items) - len(kept)
        if dropped:
            logger.debug(f"Dropped {dropped} items shifted before zero")
        subtitles.items = kept

    @staticmethod
    def force_duration(subtitles: Subtitles, duration: timedelta, add_dummy_item: bool = False) -> None:
        """
        Make the document last exactly ``duration`` where possible.

        A longer document is cut: the first item starting at or after the
        target and everything after it are removed, and an item running past
        the target ends at the target. When ``add_dummy_item`` is set and the
        document (possibly after that cut) ends before the target, a 1 ms "..."
        item ending at the target is appended.

        Args:
            subtitles: Document to adjust in place, in chronological order
            duration: Target duration
            add_dummy_item: Whether to pad a shorter document with a placeholder item
        """
        current = subtitles.duration()
        if current == duration:
            return

        if current > duration:
            for index, item in enumerate(subtitles.items):
                if item.start_at >= duration:
                    logger.debug(f"Truncating {len(subtitles.items) - index} items past {duration}")
                    del subtitles.items[index:]
                    break
                if item.end_at > duration:
                    item.end_at = duration

        # Truncation can leave the document shorter than the target too
        if add_dummy_item and subtitles.duration() < duration:
            subtitles.items.append(Item.from_text(duration - DUMMY_ITEM_DURATION, duration, DUMMY_ITEM_TEXT))
            logger.debug(f"Added placeholder item ending at {duration}")

    @staticmethod
    def apply_linear_correction(subtitles: Subtitles, actual1: timedelta, desired1: timedelta,
                                actual2: timedelta, desired2: timedelta) -> None:
        """
        Remap every item through the affine map fitted on two calibration points.

        Args:
            subtitles: Document to adjust in place
            actual1: Time of the first reference point in the document
            desired1: Where the first reference point should be
            actual2: Time of the second reference point in the document
            desired2: Where the second reference point should be

        Raises:
            ValueError: If both actual reference times are equal

        Example:
            >>> # Stretch everything by a factor of 2
            >>> TimingAdjuster.apply_linear_correction(
            ...     subtitles, timedelta(0), timedelta(0), timedelta(seconds=10), timedelta(seconds=20))
        """
        if actual1 == actual2:
            raise ValueError("Linear correction needs two distinct actual reference times")

        scale = (desired2 - desired1) / (actual2 - actual1)
        offset = desired1 - actual1 * scale
        logger.debug(f"Applying linear correction: scale={scale:.6f}, offset={offset}")

        for item in subtitles.items:
            item.start_at = item.start_at * scale + offset
            item.end_at = item.end_at * scale + offset

    @staticmethod
    def parse_offset(offset_str: str) -> timedelta:
        """
        Parse an offset string.

        Args:
            offset_str: Offset string (e.g., "2.5s", "-1500ms", "00:00:02,500", "-00:00:02.500")

        Returns:
            Offset as a duration

        Raises:
            ValueError: If offset string format is invalid
        """
        offset_str = offset_str.strip()

        # Handle timestamp format (HH:MM:SS,mmm or HH:MM:SS.mmm) with an optional sign
        if ':' in offset_str:
            sign, timestamp = OFFSET_PATTERN.match(offset_str).groups()
            separator = ',' if ',' in timestamp else '.'
            duration = parse_duration(timestamp, separator, 3)
            return -duration if sign == '-' else duration

        # Handle milliseconds (e.g., "1500ms", "-2470ms")
        if offset_str.lower().endswith('ms'):
            try:
                return timedelta(milliseconds=int(offset_str[:-2]))
            except ValueError:
                pass

        # Handle seconds (e.g., "2.5s", "-1.5s")
        elif offset_str.lower().endswith('s'):
            try:
                return timedelta(seconds=float(offset_str[:-1]))
            except ValueError:
                pass

        else:
            # Handle plain numbers (assume milliseconds)
            try:
                return timedelta(milliseconds=int(offset_str))
            except ValueError:
                pass

            # Handle decimal numbers (assume seconds)
            try:
                return timedelta(seconds=float(offset_str))
            except ValueError:
                pass

        raise ValueError(f"Invalid offset format: {offset_str}. "
                         f"Supported formats: '1500ms', '2.5s', '00:00:02,500', or plain numbers")

    def adjust_file_by_offset(self, input_path: Path, offset: timedelta,
                              output_path: Optional[Path] = None) -> Subtitles:
        """
        Shift a subtitle file by a fixed offset.

        Args:
            input_path: Path to input subtitle file
            offset: Offset (positive = delay, negative = advance)
            output_path: Path for output file (if None, overwrites input)

        Returns:
            The adjusted document

        Example:
            >>> adjuster = TimingAdjuster(create_backup=True)
            >>> adjuster.adjust_file_by_offset(Path("sub.srt"), timedelta(milliseconds=-2470))
        """
        input_path = Path(input_path)
        target = Path(output_path) if output_path is not None else input_path

        subtitles = SubtitleFormatFactory.open_file(input_path)
        logger.info(f"Loaded {len(subtitles.items)} items from {input_path.name}")

        if self.backup_manager is not None and target == input_path:
            self.backup_manager.create_backup(input_path)

        self.add(subtitles, offset)
        SubtitleFormatFactory.write_file(subtitles, target)

        direction = "delayed" if offset > timedelta(0) else "advanced"
        logger.info(f"Successfully {direction} {len(subtitles.items)} items by "
                    f"{TimeConverter.format_readable(abs(offset))} in {target.name}")
        return subtitles
