"""
SubRip (.srt) reader and writer.

Supports the usual SubRip extensions: ``<b>``, ``<i>``, ``<u>`` and
``<font color="...">`` tags inside cue text and a leading ``{\\anN}`` numpad
position override.
"""

import re
from datetime import timedelta
from typing import BinaryIO, List, Optional, Tuple
from subkit.core.errors import FormatError
from subkit.core.models import Item, Line, LineItem, Subtitles
from subkit.core.style_attributes import Dialect, StyleAttributes
from subkit.core.timing_utils import format_duration, parse_duration
from subkit.formats.base import Options, SubtitleHandler
from subkit.utils.logging_config import get_logger

logger = get_logger(__name__)

TIME_ARROW = "-->"
POSITION_PATTERN = re.compile(r'^\{\\an([1-9])\}')
TAG_PATTERN = re.compile(r'(<[^>]*>)')
TAG_NAME_PATTERN = re.compile(r'^<\s*(/?)\s*([a-zA-Z]+)')
FONT_COLOR_PATTERN = re.compile(r'color\s*=\s*["\']?([^"\'\s>]+)', re.IGNORECASE)


def _parse_timestamp(text: str) -> timedelta:
    """SubRip uses a comma, but a period is common enough to accept."""
    separator = ',' if ',' in text else '.'
    return parse_duration(text, separator, 3)


def _parse_timing_line(line: str) -> Tuple[timedelta, timedelta]:
    """
    Parse a "start --> end [coordinates]" line.

    Raises:
        FormatError: If either timestamp is malformed
    """
    left, _, right = line.partition(TIME_ARROW)
    right_fields = right.split()
    if not left.strip() or not right_fields:
        raise FormatError(f"Invalid SRT timing line: {line}")
    return _parse_timestamp(left.strip()), _parse_timestamp(right_fields[0])


class SRTHandler(SubtitleHandler):
    """Reader and writer for SubRip subtitles."""

    name = "srt"

    @classmethod
    def read(cls, stream: BinaryIO, options: Optional[Options] = None) -> Subtitles:
        """
        Parse SubRip content.

        Args:
            stream: Binary stream with SRT content
            options: Unused

        Returns:
            Subtitles with one item per cue

        Raises:
            FormatError: If a timing line is malformed
        """
        subtitles = Subtitles()
        item: Optional[Item] = None
        text_lines: List[str] = []

        for line in cls.read_lines(stream):
            if TIME_ARROW in line:
                next_index = cls._trim_block(text_lines)
                if item is not None:
                    cls._finish_item(item, text_lines)
                    subtitles.items.append(item)

                start_at, end_at = _parse_timing_line(line)
                item = Item(start_at=start_at, end_at=end_at,
                            index=next_index if next_index is not None else len(subtitles.items) + 1)
                text_lines = []
            else:
                text_lines.append(line)

        if item is not None:
            cls._trim_block(text_lines)
            cls._finish_item(item, text_lines)
            subtitles.items.append(item)

        logger.info(f"Parsed {len(subtitles.items)} items from SRT")
        return subtitles

    @staticmethod
    def _trim_block(text_lines: List[str]) -> Optional[int]:
        """
        Drop trailing blank lines and the next cue's index line.

        Returns:
            The index number that was removed, if any
        """
        while text_lines and not text_lines[-1].strip():
            text_lines.pop()
        index = None
        if text_lines and text_lines[-1].strip().isdigit():
            if len(text_lines) == 1 or not text_lines[-2].strip():
                index = int(text_lines.pop().strip())
        while text_lines and not text_lines[-1].strip():
            text_lines.pop()
        return index

    @classmethod
    def _finish_item(cls, item: Item, text_lines: List[str]) -> None:
        for raw in text_lines:
            if not raw.strip():
                continue
            match = POSITION_PATTERN.match(raw)
            if match:
                raw = raw[match.end():]
                item.inline_style = item.inline_style or StyleAttributes()
                item.inline_style.srt_position = int(match.group(1))
                item.inline_style.propagate(Dialect.SRT)
            line = cls._parse_text(raw)
            if line.items:
                item.lines.append(line)

    @staticmethod
    def _parse_text(raw: str) -> Line:
        """Split a text line into line items at formatting tags."""
        line = Line()
        bold = italics = underline = False
        colors: List[Optional[str]] = []

        for token in TAG_PATTERN.split(raw):
            if not token:
                continue
            tag = TAG_NAME_PATTERN.match(token) if token.startswith('<') else None
            name = tag.group(2).lower() if tag else ""
            if name in ("b", "i", "u", "font"):
                opening = not tag.group(1)
                if name == "b":
                    bold = opening
                elif name == "i":
                    italics = opening
                elif name == "u":
                    underline = opening
                elif opening:
                    color = FONT_COLOR_PATTERN.search(token)
                    colors.append(color.group(1) if color else None)
                elif colors:
                    colors.pop()
                continue

            color = colors[-1] if colors else None
            inline_style = None
            if bold or italics or underline or color:
                inline_style = StyleAttributes(srt_bold=bold, srt_italics=italics,
                                               srt_underline=underline, srt_color=color)
                inline_style.propagate(Dialect.SRT)
            line.items.append(LineItem(text=token, inline_style=inline_style))
        return line

    @classmethod
    def write(cls, subtitles: Subtitles, stream: BinaryIO) -> None:
        """
        Write SubRip content.

        Args:
            subtitles: Document to write, in its current item order
            stream: Binary output stream

        Raises:
            NoSubtitlesError: If the document has no items
        """
        cls.check_not_empty(subtitles)

        blocks = []
        for number, item in enumerate(subtitles.items, start=1):
            block = [str(number),
                     f"{format_duration(item.start_at, ',', 3)} {TIME_ARROW} "
                     f"{format_duration(item.end_at, ',', 3)}"]
            position = ""
            if item.inline_style is not None and item.inline_style.srt_position:
                position = f"{{\\an{item.inline_style.srt_position}}}"
            for line_number, line in enumerate(item.lines):
                text = "".join(cls._render_line_item(line_item) for line_item in line.items)
                block.append((position if line_number == 0 else "") + text)
            blocks.append("\n".join(block) + "\n")

        cls.write_text(stream, "\n".join(blocks))
        logger.info(f"Wrote {len(subtitles.items)} items as SRT")

    @staticmethod
    def _render_line_item(line_item: LineItem) -> str:
        style = line_item.inline_style
        if style is None:
            return line_item.text

        opening, closing = [], []
        if style.srt_color:
            opening.append(f'<font color="{style.srt_color}">')
            closing.append('</font>')
        for enabled, tag in ((style.srt_bold, "b"), (style.srt_italics, "i"), (style.srt_underline, "u")):
            if enabled:
                opening.append(f"<{tag}>")
                closing.append(f"</{tag}>")
        return "".join(opening) + line_item.text + "".join(reversed(closing))
