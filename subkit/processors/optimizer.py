"""
Style and region hygiene for subtitle documents.

This module provides:
- Merging two documents into one
- Removing styles and regions no item uses
- Stripping all styling to get plain timed text
"""

from typing import Set
from subkit.core.models import Subtitles
from subkit.utils.logging_config import get_logger

logger = get_logger(__name__)


class StyleOptimizer:
    """Collection-level operations on the style and region tables."""

    @staticmethod
    def merge(subtitles: Subtitles, other: Subtitles) -> None:
        """
        Append another document's items, then add its unknown regions and styles.

        On an ID collision the receiver's region or style is kept. Items coming
        from ``other`` keep referencing ``other``'s objects.

        Args:
            subtitles: Receiving document, modified in place
            other: Document whose items, regions and styles are added
        """
        subtitles.items.extend(other.items)
        subtitles.order()

        for region_id, region in other.regions.items():
            subtitles.regions.setdefault(region_id, region)
        for style_id, style in other.styles.items():
            subtitles.styles.setdefault(style_id, style)

        logger.debug(f"Merged {len(other.items)} items; document now has {len(subtitles.items)}")

    @staticmethod
    def optimize(subtitles: Subtitles) -> None:
        """Remove unused regions and styles; a document without items is left untouched."""
        if not subtitles.items:
            return
        StyleOptimizer.remove_unused_regions_and_styles(subtitles)

    @staticmethod
    def remove_unused_regions_and_styles(subtitles: Subtitles) -> None:
        """
        Delete every region and style no item references.

        Used styles are those of items, of line items and of used regions.
        Parent styles are not followed.

        Args:
            subtitles: Document to clean up in place
        """
        used_regions: Set[str] = set()
        used_styles: Set[str] = set()

        for item in subtitles.items:
            if item.region is not None:
                used_regions.add(item.region.id)
            if item.style is not None:
                used_styles.add(item.style.id)
            for line in item.lines:
                for line_item in line.items:
                    if line_item.style is not None:
                        used_styles.add(line_item.style.id)

        for region_id, region in subtitles.regions.items():
            if region_id in used_regions and region.style is not None:
                used_styles.add(region.style.id)

        unused_regions = [region_id for region_id in subtitles.regions if region_id not in used_regions]
        unused_styles = [style_id for style_id in subtitles.styles if style_id not in used_styles]
        for region_id in unused_regions:
            del subtitles.regions[region_id]
        for style_id in unused_styles:
            del subtitles.styles[style_id]

        if unused_regions or unused_styles:
            logger.debug(f"Removed {len(unused_regions)} unused regions and {len(unused_styles)} unused styles")

    @staticmethod
    def remove_styling(subtitles: Subtitles) -> None:
        """
        Turn the document into plain timed text.

        Args:
            subtitles: Document to strip in place
        """
        for region in subtitles.regions.values():
            region.style = None
            region.inline_style = None
        subtitles.regions = {}
        subtitles.styles = {}

        for item in subtitles.items:
            item.region = None
            item.style = None
            item.inline_style = None
            for line in item.lines:
                for line_item in line.items:
                    line_item.style = None
                    line_item.inline_style = None
