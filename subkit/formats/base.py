"""
Reader/writer contract shared by the format handlers.

A handler turns a byte stream into a Subtitles document (read) and a document
back into bytes (write). Handlers for formats this package does not implement
(EBU-STL, Teletext, TTML) can be plugged in through
SubtitleFormatFactory.register_handler as long as they follow this contract.
"""

import io
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator, Optional
from subkit.core.encoding_detection import EncodingDetector
from subkit.core.errors import NoSubtitlesError
from subkit.core.models import Subtitles
from subkit.core.scanner import LineScanner
from subkit.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class TeletextOptions:
    """Page selection for teletext readers."""
    page: int = 0
    magazine: int = 0


@dataclass
class STLOptions:
    """Profile for EBU-STL readers."""
    ignore_timecode_start_of_programme: bool = False


@dataclass
class Options:
    """Open/read options; only the fields relevant to a format are used."""
    filename: str = ""
    teletext: TeletextOptions = field(default_factory=TeletextOptions)
    stl: STLOptions = field(default_factory=STLOptions)


class SubtitleHandler:
    """Base class for subtitle format readers and writers."""

    name = "subtitle"

    @classmethod
    def read(cls, stream: BinaryIO, options: Optional[Options] = None) -> Subtitles:
        """
        Read a document from a binary stream.

        Raises:
            FormatError: If the content is malformed
        """
        raise NotImplementedError

    @classmethod
    def write(cls, subtitles: Subtitles, stream: BinaryIO) -> None:
        """
        Write a document to a binary stream.

        Raises:
            NoSubtitlesError: If the document has no items
        """
        raise NotImplementedError

    @staticmethod
    def read_lines(stream: BinaryIO) -> Iterator[str]:
        """
        Decode a binary stream and iterate over its lines.

        Args:
            stream: Binary stream positioned at the start of the document

        Returns:
            Iterator of decoded lines without terminators
        """
        text, encoding = EncodingDetector.decode(stream.read())
        logger.debug(f"Decoded subtitle payload as {encoding}")
        return iter(LineScanner(io.StringIO(text)))

    @classmethod
    def check_not_empty(cls, subtitles: Subtitles) -> None:
        if subtitles.is_empty():
            raise NoSubtitlesError(f"No subtitles to write as {cls.name}")

    @staticmethod
    def write_text(stream: BinaryIO, text: str) -> None:
        stream.write(text.encode('utf-8'))
