"""
WebVTT (.vtt) reader and writer.

Handled syntax:
- ``WEBVTT`` header line and ``X-TIMESTAMP-MAP`` header
- ``NOTE`` comment blocks, ``REGION`` definition blocks (``STYLE`` blocks are skipped)
- Cue identifiers and cue settings (align, line, position, region, size, vertical)
- Cue text tags (``<v>``, ``<b>``, ``<i>``, ``<u>``, ``<c>``, ``<lang>``, ``<ruby>``, ...)
  and inline karaoke timestamps
"""

import re
from datetime import timedelta
from typing import BinaryIO, Dict, List, Optional
from subkit.core.errors import FormatError
from subkit.core.models import (
    Item, Line, LineItem, Region, Subtitles, WebVTTTimestampMap,
    escape_html, unescape_html,
)
from subkit.core.style_attributes import Dialect, StyleAttributes, WebVTTTag
from subkit.core.timing_utils import format_duration, parse_duration
from subkit.formats.base import Options, SubtitleHandler
from subkit.utils.logging_config import get_logger

logger = get_logger(__name__)

HEADER = "WEBVTT"
TIME_ARROW = "-->"
TIMESTAMP_MAP_PREFIX = "X-TIMESTAMP-MAP="
BLOCK_NOTE = "NOTE"
BLOCK_REGION = "REGION"
BLOCK_STYLE = "STYLE"

TAG_PATTERN = re.compile(r'(<[^>]*>)')
OPENING_TAG_PATTERN = re.compile(r'^([^\s.]+)((?:\.[^\s.]+)*)\s*(.*)$', re.DOTALL)

# Cue setting name -> StyleAttributes field
CUE_SETTINGS = {
    "align": "webvtt_align",
    "line": "webvtt_line",
    "position": "webvtt_position",
    "size": "webvtt_size",
    "vertical": "webvtt_vertical",
}


def _parse_timestamp(text: str) -> timedelta:
    return parse_duration(text, '.', 3)


def _format_timestamp(duration: timedelta) -> str:
    return format_duration(duration, '.', 3)


def _parse_settings(tokens: List[str]) -> Dict[str, str]:
    settings = {}
    for token in tokens:
        key, separator, value = token.partition(':')
        if separator and key:
            settings[key] = value
    return settings


def _split_blocks(lines: List[str]) -> List[List[str]]:
    blocks, current = [], []
    for line in lines:
        if line.strip():
            current.append(line)
        elif current:
            blocks.append(current)
            current = []
    if current:
        blocks.append(current)
    return blocks


class WebVTTHandler(SubtitleHandler):
    """Reader and writer for WebVTT subtitles."""

    name = "webvtt"

    @classmethod
    def read(cls, stream: BinaryIO, options: Optional[Options] = None) -> Subtitles:
        """
        Parse WebVTT content.

        Args:
            stream: Binary stream with WebVTT content
            options: Unused

        Returns:
            Subtitles with regions and items

        Raises:
            FormatError: If the header is missing, a timestamp is malformed
                or a cue text tag has no name
        """
        lines = list(cls.read_lines(stream))
        if not lines or not lines[0].startswith(HEADER):
            raise FormatError(f"Invalid WebVTT header: {lines[0] if lines else '<empty>'}")

        subtitles = Subtitles()
        blocks = _split_blocks(lines)
        for header_line in blocks[0][1:]:
            cls._parse_header_line(subtitles, header_line)

        # NOTE blocks ahead of every other block describe the document; later ones the next cue
        in_header = True
        pending_comments: List[str] = []
        for block in blocks[1:]:
            first = block[0]
            if first == BLOCK_NOTE or first.startswith(BLOCK_NOTE + " ") or first.startswith(BLOCK_NOTE + "\t"):
                comment = "\n".join([first[len(BLOCK_NOTE):].strip()] + block[1:]).strip()
                if in_header:
                    subtitles.metadata.comments.append(comment)
                else:
                    pending_comments.append(comment)
                continue

            in_header = False
            if first.strip() == BLOCK_STYLE and not any(TIME_ARROW in line for line in block):
                logger.debug("Skipping WebVTT STYLE block")
            elif first.strip() == BLOCK_REGION and not any(TIME_ARROW in line for line in block):
                cls._parse_region(subtitles, block[1:])
            else:
                item = cls._parse_cue(subtitles, block)
                if item is None:
                    continue
                item.comments = pending_comments
                pending_comments = []
                subtitles.items.append(item)

        if pending_comments:
            logger.debug(f"Keeping {len(pending_comments)} trailing NOTE blocks as document comments")
            subtitles.metadata.comments.extend(pending_comments)

        logger.info(f"Parsed {len(subtitles.items)} items and {len(subtitles.regions)} regions from WebVTT")
        return subtitles

    @staticmethod
    def _parse_header_line(subtitles: Subtitles, line: str) -> None:
        if not line.startswith(TIMESTAMP_MAP_PREFIX):
            logger.debug(f"Ignoring WebVTT header line: {line}")
            return

        timestamp_map = WebVTTTimestampMap()
        for part in line[len(TIMESTAMP_MAP_PREFIX):].split(','):
            key, _, value = part.strip().partition(':')
            if key == "LOCAL":
                timestamp_map.local = _parse_timestamp(value)
            elif key == "MPEGTS":
                try:
                    timestamp_map.mpegts = int(value)
                except ValueError:
                    raise FormatError(f"Invalid MPEGTS value in: {line}") from None
        subtitles.metadata.webvtt_timestamp_map = timestamp_map

    @staticmethod
    def _parse_region(subtitles: Subtitles, setting_lines: List[str]) -> None:
        settings = _parse_settings(" ".join(setting_lines).split())
        region_id = settings.get("id")
        if not region_id:
            logger.warning("Skipping WebVTT REGION block without id")
            return

        inline_style = StyleAttributes(
            webvtt_width=settings.get("width", ""),
            webvtt_region_anchor=settings.get("regionanchor", ""),
            webvtt_viewport_anchor=settings.get("viewportanchor", ""),
            webvtt_scroll=settings.get("scroll", ""),
        )
        if "lines" in settings:
            try:
                inline_style.webvtt_lines = int(settings["lines"])
            except ValueError:
                raise FormatError(f"Invalid lines value for region {region_id}: {settings['lines']}") from None
        subtitles.add_region(Region(id=region_id, inline_style=inline_style))

    @classmethod
    def _parse_cue(cls, subtitles: Subtitles, block: List[str]) -> Optional[Item]:
        if TIME_ARROW in block[0]:
            timing_index = 0
        elif len(block) > 1 and TIME_ARROW in block[1]:
            timing_index = 1
        else:
            logger.warning(f"Skipping WebVTT block without timing line: {block[0]}")
            return None

        left, _, right = block[timing_index].partition(TIME_ARROW)
        right_fields = right.split()
        if not right_fields:
            raise FormatError(f"Invalid WebVTT timing line: {block[timing_index]}")

        item = Item(start_at=_parse_timestamp(left.strip()),
                    end_at=_parse_timestamp(right_fields[0]),
                    index=len(subtitles.items) + 1)

        settings = _parse_settings(right_fields[1:])
        if settings:
            item.inline_style = StyleAttributes()
            for key, value in settings.items():
                if key in CUE_SETTINGS:
                    setattr(item.inline_style, CUE_SETTINGS[key], value)
                elif key == "region":
                    item.region = subtitles.regions.get(value)
                    if item.region is None:
                        logger.warning(f"Cue references unknown WebVTT region: {value}")
            item.inline_style.propagate(Dialect.WEBVTT)

        for raw in block[timing_index + 1:]:
            item.lines.append(cls._parse_text(raw))
        return item

    @staticmethod
    def _parse_text(raw: str) -> Line:
        """Split a cue text line into line items at tags."""
        line = Line()
        stack: List[WebVTTTag] = []
        start_at: Optional[timedelta] = None

        for token in TAG_PATTERN.split(raw):
            if not token:
                continue
            if token.startswith('<') and token.endswith('>'):
                inner = token[1:-1].strip()
                if not inner:
                    continue
                if inner[0].isdigit():
                    start_at = _parse_timestamp(inner)
                elif inner.startswith('/'):
                    name = inner[1:].strip()
                    for index in range(len(stack) - 1, -1, -1):
                        if stack[index].name == name:
                            del stack[index]
                            break
                else:
                    match = OPENING_TAG_PATTERN.match(inner)
                    if match is None:
                        raise FormatError(f"Invalid WebVTT tag: {token}")
                    name, classes, annotation = match.group(1), match.group(2), match.group(3).strip()
                    if name == "v":
                        line.voice_name = annotation
                    else:
                        stack.append(WebVTTTag(name=name, annotation=annotation,
                                               classes=[c for c in classes.split('.') if c]))
                continue

            inline_style = None
            if stack:
                names = {tag.name for tag in stack}
                inline_style = StyleAttributes(
                    webvtt_bold="b" in names,
                    webvtt_italics="i" in names,
                    webvtt_underline="u" in names,
                    webvtt_tags=list(stack),
                )
                inline_style.propagate(Dialect.WEBVTT)
            line.items.append(LineItem(text=unescape_html(token), start_at=start_at,
                                       inline_style=inline_style))
        return line

    @classmethod
    def write(cls, subtitles: Subtitles, stream: BinaryIO) -> None:
        """
        Write WebVTT content.

        Args:
            subtitles: Document to write, in its current item order
            stream: Binary output stream

        Raises:
            NoSubtitlesError: If the document has no items
        """
        cls.check_not_empty(subtitles)

        header = [HEADER]
        if subtitles.metadata.webvtt_timestamp_map is not None:
            header.append(TIMESTAMP_MAP_PREFIX + str(subtitles.metadata.webvtt_timestamp_map))
        blocks = ["\n".join(header)]

        for comment in subtitles.metadata.comments:
            blocks.append(f"{BLOCK_NOTE} {comment}")

        for region_id in sorted(subtitles.regions):
            blocks.append(cls._render_region(subtitles.regions[region_id]))

        for number, item in enumerate(subtitles.items, start=1):
            for comment in item.comments:
                blocks.append(f"{BLOCK_NOTE} {comment}")
            blocks.append(cls._render_cue(number, item))

        cls.write_text(stream, "\n\n".join(blocks) + "\n")
        logger.info(f"Wrote {len(subtitles.items)} items as WebVTT")

    @staticmethod
    def _render_region(region: Region) -> str:
        settings = [f"id:{region.id}"]
        style = region.inline_style
        if style is not None:
            if style.webvtt_width:
                settings.append(f"width:{style.webvtt_width}")
            if style.webvtt_lines:
                settings.append(f"lines:{style.webvtt_lines}")
            if style.webvtt_region_anchor:
                settings.append(f"regionanchor:{style.webvtt_region_anchor}")
            if style.webvtt_viewport_anchor:
                settings.append(f"viewportanchor:{style.webvtt_viewport_anchor}")
            if style.webvtt_scroll:
                settings.append(f"scroll:{style.webvtt_scroll}")
        return f"{BLOCK_REGION}\n" + " ".join(settings)

    @classmethod
    def _render_cue(cls, number: int, item: Item) -> str:
        timing = f"{_format_timestamp(item.start_at)} {TIME_ARROW} {_format_timestamp(item.end_at)}"
        settings = []
        style = item.inline_style
        if style is not None:
            for key in ("align", "line", "position"):
                value = getattr(style, CUE_SETTINGS[key])
                if value:
                    settings.append(f"{key}:{value}")
        if item.region is not None:
            settings.append(f"region:{item.region.id}")
        if style is not None:
            for key in ("size", "vertical"):
                value = getattr(style, CUE_SETTINGS[key])
                if value:
                    settings.append(f"{key}:{value}")
        if settings:
            timing += " " + " ".join(settings)

        lines = [str(number), timing]
        for line in item.lines:
            text = "".join(cls._render_line_item(line_item) for line_item in line.items)
            if line.voice_name:
                text = f"<v {line.voice_name}>{text}"
            lines.append(text)
        return "\n".join(lines)

    @staticmethod
    def _render_line_item(line_item: LineItem) -> str:
        text = ""
        if line_item.start_at is not None:
            text += f"<{_format_timestamp(line_item.start_at)}>"
        tags = line_item.inline_style.webvtt_tags if line_item.inline_style is not None else []
        text += "".join(tag.start_tag() for tag in tags)
        text += escape_html(line_item.text)
        text += "".join(tag.end_tag() for tag in reversed(tags))
        return text
