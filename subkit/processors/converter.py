"""
Format conversion processor for subtitle files.

This module reads a subtitle file in one format and writes it in another,
optionally cleaning up or stripping styles on the way.
"""

from pathlib import Path
from subkit.core.models import Subtitles
from subkit.core.subtitle_formats import SubtitleFormatFactory
from subkit.processors.optimizer import StyleOptimizer
from subkit.utils.logging_config import get_logger

logger = get_logger(__name__)


class FormatConverter:
    """Converts subtitle files between the supported formats."""

    def __init__(self, strip_styles: bool = False, optimize: bool = False):
        """
        Initialize the converter.

        Args:
            strip_styles: Remove all styling and write plain timed text
            optimize: Drop styles and regions no item uses
        """
        self.strip_styles = strip_styles
        self.optimize = optimize

    def convert_file(self, input_path: Path, output_path: Path) -> Subtitles:
        """
        Convert a subtitle file to the format of the output extension.

        Args:
            input_path: Path to the input subtitle file
            output_path: Path of the output file; its extension picks the writer

        Returns:
            The converted document

        Example:
            >>> converter = FormatConverter(optimize=True)
            >>> converter.convert_file(Path("movie.ass"), Path("movie.vtt"))
        """
        input_path, output_path = Path(input_path), Path(output_path)
        # Fail on an unsupported output extension before doing any work
        SubtitleFormatFactory.get_handler_for_path(output_path)

        subtitles = SubtitleFormatFactory.open_file(input_path)
        logger.info(f"Converting {input_path.name} ({len(subtitles.items)} items) to {output_path.name}")

        if self.strip_styles:
            StyleOptimizer.remove_styling(subtitles)
        elif self.optimize:
            StyleOptimizer.optimize(subtitles)

        SubtitleFormatFactory.write_file(subtitles, output_path)
        return subtitles
