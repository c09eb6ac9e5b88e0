"""
Fragmenting and unfragmenting of subtitle items.

Fragmenting splits items at multiples of a fixed period so that no item spans
two fragment windows, which is what segmented delivery needs. Unfragmenting
merges the touching same-text pieces back together.
"""

from datetime import timedelta
from subkit.core.models import Subtitles
from subkit.utils.logging_config import get_logger

logger = get_logger(__name__)


class Fragmenter:
    """Splits and re-joins items around fixed-size time windows."""

    @staticmethod
    def fragment(subtitles: Subtitles, period: timedelta) -> None:
        """
        Split items crossing a multiple of ``period``.

        Windows ``[start, start + period)`` are walked from zero while the
        window start is before the end of the last item. In every window an
        item strictly straddling the window start (or else the window end) is
        cut there: the item keeps the left part and a copy starting at the
        boundary is inserted right after it. Items are ordered afterwards.

        Args:
            subtitles: Document to fragment in place
            period: Window length

        Raises:
            ValueError: If the period is not positive

        Example:
            >>> Fragmenter.fragment(subtitles, timedelta(seconds=2))
        """
        if period <= timedelta(0):
            raise ValueError(f"Fragment period must be positive, got {period}")
        if not subtitles.items:
            return

        original_count = len(subtitles.items)
        items = subtitles.items
        window_start = timedelta(0)
        while window_start < items[-1].end_at:
            window_end = window_start + period
            fragmented = []
            for item in items:
                fragmented.append(item)
                if item.start_at < window_start < item.end_at:
                    boundary = window_start
                elif item.start_at < window_end < item.end_at:
                    boundary = window_end
                else:
                    continue

                right = item.copy()
                right.start_at = boundary
                item.end_at = boundary
                fragmented.append(right)
            items = fragmented
            window_start = window_end

        subtitles.items = items
        subtitles.order()
        logger.debug(f"Fragmented {original_count} items into {len(subtitles.items)}")

    @staticmethod
    def unfragment(subtitles: Subtitles) -> None:
        """
        Merge touching or overlapping items with the same text.

        After ordering, each item absorbs the following items with identical
        text as long as they start no later than its (growing) end; the scan
        for an item stops at the first later item that starts after its end.

        Args:
            subtitles: Document to unfragment in place
        """
        if not subtitles.items:
            return

        subtitles.order()
        items = subtitles.items
        original_count = len(items)

        i = 0
        while i < len(items) - 1:
            current = items[i]
            j = i + 1
            while j < len(items):
                candidate = items[j]
                if current.end_at < candidate.start_at:
                    break
                if str(current) == str(candidate):
                    if candidate.end_at > current.end_at:
                        current.end_at = candidate.end_at
                    del items[j]
                else:
                    j += 1
            i += 1

        logger.debug(f"Unfragmented {original_count} items into {len(items)}")
