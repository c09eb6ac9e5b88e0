"""
Top-level dispatch between file extensions and subtitle format handlers.

This module provides:
- SubtitleFormatFactory for selecting a reader/writer by extension
- open_file / open_subtitles / write_file convenience functions

SRT, SSA/ASS and WebVTT handlers ship with the package. EBU-STL, Teletext
(.ts) and TTML are recognised extensions whose handlers are registered by
external collaborators with SubtitleFormatFactory.register_handler.
"""

import io
from pathlib import Path
from typing import Dict, Optional, Type, Union
from subkit.core.errors import SubtitleIOError, UnsupportedFormatError
from subkit.core.models import Subtitles
from subkit.formats.base import Options, SubtitleHandler
from subkit.formats.srt import SRTHandler
from subkit.formats.ssa import SSAHandler
from subkit.formats.webvtt import WebVTTHandler
from subkit.utils.constants import SubtitleFormat
from subkit.utils.logging_config import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]

__all__ = ['Options', 'SubtitleFormatFactory', 'open_file', 'open_subtitles', 'write_file']


class SubtitleFormatFactory:
    """Factory class for selecting subtitle readers and writers."""

    _handlers: Dict[SubtitleFormat, Type[SubtitleHandler]] = {
        SubtitleFormat.SRT: SRTHandler,
        SubtitleFormat.VTT: WebVTTHandler,
        SubtitleFormat.ASS: SSAHandler,
        SubtitleFormat.SSA: SSAHandler,
    }

    @classmethod
    def register_handler(cls, format_type: SubtitleFormat, handler: Type[SubtitleHandler]) -> None:
        """
        Register (or replace) the handler of a format.

        Args:
            format_type: Subtitle format
            handler: SubtitleHandler subclass implementing read and write
        """
        logger.debug(f"Registering {handler.__name__} for {format_type.value}")
        cls._handlers[format_type] = handler

    @classmethod
    def get_handler(cls, format_type: SubtitleFormat) -> Type[SubtitleHandler]:
        """
        Get the handler for the specified format.

        Args:
            format_type: Subtitle format

        Returns:
            Handler class

        Raises:
            UnsupportedFormatError: If no handler is registered for the format
        """
        if format_type not in cls._handlers:
            raise UnsupportedFormatError(f"No handler registered for subtitle format: {format_type.value}")
        return cls._handlers[format_type]

    @classmethod
    def get_handler_for_path(cls, path: PathLike) -> Type[SubtitleHandler]:
        """
        Get the handler matching a file's extension.

        Raises:
            UnsupportedFormatError: If the extension is unknown or has no handler
        """
        return cls.get_handler(SubtitleFormat.from_extension(Path(path).suffix))

    @classmethod
    def open_file(cls, path: PathLike, options: Optional[Options] = None) -> Subtitles:
        """
        Read a subtitle file, detecting the format from its extension.

        Args:
            path: Path to the subtitle file
            options: Reader options; the filename field is ignored

        Returns:
            Parsed Subtitles

        Raises:
            UnsupportedFormatError: If the extension is not supported
            FormatError: If the content is malformed
            SubtitleIOError: If the file cannot be opened

        Example:
            >>> subtitles = SubtitleFormatFactory.open_file("movie.srt")
            >>> print(f"{len(subtitles.items)} items")
        """
        path = Path(path)
        handler = cls.get_handler_for_path(path)

        try:
            stream = open(path, 'rb')
        except OSError as e:
            raise SubtitleIOError(f"opening {path} failed: {e}") from e

        with stream:
            logger.debug(f"Reading {path.name} with {handler.__name__}")
            return handler.read(stream, options)

    @classmethod
    def write_file(cls, subtitles: Subtitles, path: PathLike) -> None:
        """
        Write a subtitle file in the format matching its extension.

        The file is created (or truncated) only once the extension is known
        to be supported and the document has been rendered successfully.

        Args:
            subtitles: Document to write
            path: Output file path

        Raises:
            UnsupportedFormatError: If the extension is not supported
            NoSubtitlesError: If the document has no items
            SubtitleIOError: If the file cannot be created
        """
        path = Path(path)
        handler = cls.get_handler_for_path(path)

        # Render first so a failing writer leaves an existing file untouched
        buffer = io.BytesIO()
        handler.write(subtitles, buffer)

        try:
            stream = open(path, 'wb')
        except OSError as e:
            raise SubtitleIOError(f"creating {path} failed: {e}") from e

        with stream:
            stream.write(buffer.getvalue())
        logger.info(f"Created {handler.name} file: {path}")


def open_file(path: PathLike, options: Optional[Options] = None) -> Subtitles:
    """Read a subtitle file; see SubtitleFormatFactory.open_file."""
    return SubtitleFormatFactory.open_file(path, options)


def open_subtitles(options: Options) -> Subtitles:
    """
    Read the subtitle file named by ``options.filename``.

    Args:
        options: Reader options carrying the filename

    Returns:
        Parsed Subtitles
    """
    return SubtitleFormatFactory.open_file(options.filename, options)


def write_file(subtitles: Subtitles, path: PathLike) -> None:
    """Write a subtitle file; see SubtitleFormatFactory.write_file."""
    SubtitleFormatFactory.write_file(subtitles, path)
