"""
SubStation Alpha (.ssa) and Advanced SubStation Alpha (.ass) reader and writer.

The reader understands the [Script Info], [V4 Styles], [V4+ Styles] and
[Events] sections. Field order inside styles and events always comes from the
section's ``Format:`` line, so both SSA v4 and ASS v4+ layouts are read with
the same code. Inline ``{\\b1}``, ``{\\i1}`` and ``{\\u1}`` overrides become
line item styles; other override codes are dropped.
"""

import re
from datetime import timedelta
from typing import BinaryIO, Callable, Dict, List, Optional, Tuple
from subkit.core.errors import FormatError
from subkit.core.models import Color, Item, Line, LineItem, Metadata, Style, Subtitles
from subkit.core.style_attributes import Dialect, StyleAttributes
from subkit.core.timing_utils import format_duration, parse_duration
from subkit.formats.base import Options, SubtitleHandler
from subkit.utils.logging_config import get_logger

logger = get_logger(__name__)

SECTION_SCRIPT_INFO = "[Script Info]"
SECTION_STYLES_V4 = "[V4 Styles]"
SECTION_STYLES_V4_PLUS = "[V4+ Styles]"
SECTION_EVENTS = "[Events]"

SCRIPT_TYPE_V4 = "v4.00"
SCRIPT_TYPE_V4_PLUS = "v4.00+"
DEFAULT_STYLE_NAME = "Default"

SECTION_PATTERN = re.compile(r'^\[([^\]]+)\]\s*$')
OVERRIDE_PATTERN = re.compile(r'(\{[^}]*\})')
EMPHASIS_PATTERN = re.compile(r'\\([biu])(\d+)')
LINE_BREAK_PATTERN = re.compile(r'\\[Nn]')

STYLE_FORMAT_V4 = ["Name", "Fontname", "Fontsize", "PrimaryColour", "SecondaryColour",
                   "TertiaryColour", "BackColour", "Bold", "Italic", "BorderStyle",
                   "Outline", "Shadow", "Alignment", "MarginL", "MarginR", "MarginV",
                   "AlphaLevel", "Encoding"]
STYLE_FORMAT_V4_PLUS = ["Name", "Fontname", "Fontsize", "PrimaryColour", "SecondaryColour",
                        "OutlineColour", "BackColour", "Bold", "Italic", "Underline",
                        "StrikeOut", "ScaleX", "ScaleY", "Spacing", "Angle", "BorderStyle",
                        "Outline", "Shadow", "Alignment", "MarginL", "MarginR", "MarginV",
                        "Encoding"]
EVENT_FORMAT_V4 = ["Marked", "Start", "End", "Style", "Name", "MarginL", "MarginR",
                   "MarginV", "Effect", "Text"]
EVENT_FORMAT_V4_PLUS = ["Layer", "Start", "End", "Style", "Name", "MarginL", "MarginR",
                        "MarginV", "Effect", "Text"]


def _to_int(value: str) -> int:
    try:
        return int(float(value))
    except ValueError:
        raise FormatError(f"Invalid SSA integer: {value}") from None


def _to_float(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise FormatError(f"Invalid SSA number: {value}") from None


def _to_bool(value: str) -> bool:
    """SSA booleans are -1 (true) and 0 (false)."""
    return _to_int(value) != 0


def _to_color(value: str) -> Color:
    """Older SSA scripts store colours as decimal integers."""
    if value.strip().lower().startswith("&h"):
        return Color.from_ssa_string(value)
    return Color.from_ssa_string(value, base=10)


def _from_bool(value: Optional[bool]) -> str:
    return "-1" if value else "0"


def _from_number(value) -> str:
    if value is None:
        return "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _from_color(value: Optional[Color]) -> str:
    return f"&H{value.ssa_string().upper()}" if value is not None else "&H00FFFFFF"


# Style format field -> (StyleAttributes field, parser, writer)
STYLE_FIELDS: Dict[str, Tuple[str, Callable, Callable]] = {
    "fontname": ("ssa_font_name", str, lambda v: v or "Arial"),
    "fontsize": ("ssa_font_size", _to_float, lambda v: _from_number(v if v is not None else 20)),
    "primarycolour": ("ssa_primary_colour", _to_color, _from_color),
    "secondarycolour": ("ssa_secondary_colour", _to_color, _from_color),
    "outlinecolour": ("ssa_outline_colour", _to_color, _from_color),
    "tertiarycolour": ("ssa_outline_colour", _to_color, _from_color),
    "backcolour": ("ssa_back_colour", _to_color, _from_color),
    "bold": ("ssa_bold", _to_bool, _from_bool),
    "italic": ("ssa_italic", _to_bool, _from_bool),
    "underline": ("ssa_underline", _to_bool, _from_bool),
    "strikeout": ("ssa_strikeout", _to_bool, _from_bool),
    "scalex": ("ssa_scale_x", _to_float, lambda v: _from_number(v if v is not None else 100)),
    "scaley": ("ssa_scale_y", _to_float, lambda v: _from_number(v if v is not None else 100)),
    "spacing": ("ssa_spacing", _to_float, _from_number),
    "angle": ("ssa_angle", _to_float, _from_number),
    "borderstyle": ("ssa_border_style", _to_int, lambda v: _from_number(v if v is not None else 1)),
    "outline": ("ssa_outline", _to_float, _from_number),
    "shadow": ("ssa_shadow", _to_float, _from_number),
    "alignment": ("ssa_alignment", _to_int, lambda v: _from_number(v if v is not None else 2)),
    "marginl": ("ssa_margin_left", _to_int, _from_number),
    "marginr": ("ssa_margin_right", _to_int, _from_number),
    "marginv": ("ssa_margin_vertical", _to_int, _from_number),
    "alphalevel": ("ssa_alpha_level", _to_float, _from_number),
    "encoding": ("ssa_encoding", _to_int, lambda v: _from_number(v if v is not None else 1)),
}

# Event format field -> (StyleAttributes field, parser); zero margins mean "use the style's"
EVENT_FIELDS: Dict[str, Tuple[str, Callable]] = {
    "layer": ("ssa_layer", _to_int),
    "marked": ("ssa_marked", lambda v: _to_bool(v.partition("=")[2] or v)),
    "marginl": ("ssa_margin_left", _to_int),
    "marginr": ("ssa_margin_right", _to_int),
    "marginv": ("ssa_margin_vertical", _to_int),
    "effect": ("ssa_effect", str),
}

# Script Info key -> (Metadata field, parser)
SCRIPT_INFO_FIELDS: Dict[str, Tuple[str, Callable]] = {
    "Collisions": ("ssa_collisions", str),
    "Original Editing": ("ssa_original_editing", str),
    "Original Script": ("ssa_original_script", str),
    "Original Timing": ("ssa_original_timing", str),
    "Original Translation": ("ssa_original_translation", str),
    "PlayDepth": ("ssa_play_depth", _to_int),
    "PlayResX": ("ssa_play_res_x", _to_int),
    "PlayResY": ("ssa_play_res_y", _to_int),
    "ScaledBorderAndShadow": ("ssa_scaled_border_and_shadow", lambda v: v.strip().lower() == "yes"),
    "ScriptType": ("ssa_script_type", str),
    "Script Updated By": ("ssa_script_updated_by", str),
    "Synch Point": ("ssa_synch_point", str),
    "Timer": ("ssa_timer", _to_float),
    "Title": ("title", str),
    "Update Details": ("ssa_update_details", str),
    "WrapStyle": ("ssa_wrap_style", str),
}


def _parse_timestamp(text: str) -> timedelta:
    return parse_duration(text, '.', 3)


def _format_timestamp(duration: timedelta) -> str:
    return format_duration(duration, '.', 2)


def _split_fields(content: str, format_fields: List[str]) -> Dict[str, str]:
    """Split a comma-separated line; the last field keeps any commas it contains."""
    parts = content.split(',', len(format_fields) - 1)
    if len(parts) < len(format_fields):
        raise FormatError(f"Expected {len(format_fields)} fields, got {len(parts)}: {content}")
    return {name: parts[i].strip() if name != "text" else parts[i]
            for i, name in enumerate(format_fields)}


class SSAHandler(SubtitleHandler):
    """Reader and writer for SSA and ASS subtitles."""

    name = "ssa"

    @classmethod
    def read(cls, stream: BinaryIO, options: Optional[Options] = None) -> Subtitles:
        """
        Parse SSA/ASS content.

        Args:
            stream: Binary stream with SSA or ASS content
            options: Unused

        Returns:
            Subtitles with styles, metadata and one item per Dialogue line

        Raises:
            FormatError: If a Style or Dialogue line cannot be parsed
        """
        subtitles = Subtitles()
        section = ""
        format_fields: List[str] = []

        for line in cls.read_lines(stream):
            stripped = line.strip()
            if not stripped:
                continue

            match = SECTION_PATTERN.match(stripped)
            if match:
                section = f"[{match.group(1)}]".lower()
                format_fields = []
                continue

            if section == SECTION_SCRIPT_INFO.lower():
                cls._parse_script_info_line(subtitles.metadata, stripped)
                continue

            key, separator, content = stripped.partition(':')
            if not separator:
                logger.debug(f"Ignoring SSA line: {stripped}")
                continue
            key = key.strip().lower()

            if key == "format":
                format_fields = [f.strip().lower() for f in content.split(',')]
            elif section in (SECTION_STYLES_V4.lower(), SECTION_STYLES_V4_PLUS.lower()) and key == "style":
                fields = _split_fields(content, format_fields or [f.lower() for f in STYLE_FORMAT_V4_PLUS])
                subtitles.add_style(cls._parse_style(fields))
            elif section == SECTION_EVENTS.lower() and key == "dialogue":
                fields = _split_fields(content, format_fields or [f.lower() for f in EVENT_FORMAT_V4_PLUS])
                subtitles.items.append(cls._parse_dialogue(subtitles, fields))
            else:
                logger.debug(f"Ignoring SSA line in {section or 'preamble'}: {stripped}")

        logger.info(f"Parsed {len(subtitles.items)} items and {len(subtitles.styles)} styles from SSA")
        return subtitles

    @staticmethod
    def _parse_script_info_line(metadata: Metadata, line: str) -> None:
        if line.startswith(';') or line.startswith('!:'):
            metadata.comments.append(line.lstrip(';!:').strip())
            return

        key, separator, value = line.partition(':')
        if not separator:
            logger.debug(f"Ignoring Script Info line: {line}")
            return
        known = SCRIPT_INFO_FIELDS.get(key.strip())
        if known is None:
            logger.debug(f"Ignoring unknown Script Info key: {key.strip()}")
            return
        attribute, parser = known
        setattr(metadata, attribute, parser(value.strip()))

    @staticmethod
    def _parse_style(fields: Dict[str, str]) -> Style:
        inline_style = StyleAttributes()
        for name, value in fields.items():
            if name in STYLE_FIELDS and value != "":
                attribute, parser, _ = STYLE_FIELDS[name]
                setattr(inline_style, attribute, parser(value))
        inline_style.propagate(Dialect.SSA)
        return Style(id=fields.get("name", DEFAULT_STYLE_NAME), inline_style=inline_style)

    @classmethod
    def _parse_dialogue(cls, subtitles: Subtitles, fields: Dict[str, str]) -> Item:
        item = Item(start_at=_parse_timestamp(fields.get("start", "")),
                    end_at=_parse_timestamp(fields.get("end", "")),
                    index=len(subtitles.items) + 1)

        style_name = fields.get("style", "").lstrip('*')
        if style_name:
            item.style = subtitles.styles.get(style_name)
            if item.style is None:
                logger.warning(f"Dialogue references unknown style: {style_name}")

        inline_style = StyleAttributes()
        has_inline = False
        for name, (attribute, parser) in EVENT_FIELDS.items():
            value = fields.get(name, "")
            if value == "":
                continue
            parsed = parser(value)
            if name.startswith("margin") and parsed == 0:
                continue
            setattr(inline_style, attribute, parsed)
            has_inline = True
        if has_inline:
            inline_style.propagate(Dialect.SSA)
            item.inline_style = inline_style

        voice_name = fields.get("name", "")
        for raw in LINE_BREAK_PATTERN.split(fields.get("text", "")):
            line = cls._parse_text(raw)
            line.voice_name = voice_name
            item.lines.append(line)
        return item

    @staticmethod
    def _parse_text(raw: str) -> Line:
        """Split dialogue text into line items at override blocks."""
        line = Line()
        emphasis: Dict[str, Optional[bool]] = {"b": None, "i": None, "u": None}

        for token in OVERRIDE_PATTERN.split(raw):
            if not token:
                continue
            if token.startswith('{') and token.endswith('}'):
                for code, value in EMPHASIS_PATTERN.findall(token):
                    emphasis[code] = int(value) != 0
                continue

            inline_style = None
            if any(value is not None for value in emphasis.values()):
                inline_style = StyleAttributes(ssa_bold=emphasis["b"], ssa_italic=emphasis["i"],
                                               ssa_underline=emphasis["u"])
                inline_style.propagate(Dialect.SSA)
            line.items.append(LineItem(text=token, inline_style=inline_style))
        return line

    @classmethod
    def write(cls, subtitles: Subtitles, stream: BinaryIO) -> None:
        """
        Write SSA/ASS content.

        The v4 (SSA) layout is used when the script type says so; everything
        else is written as ASS v4+.

        Args:
            subtitles: Document to write, in its current item order
            stream: Binary output stream

        Raises:
            NoSubtitlesError: If the document has no items
        """
        cls.check_not_empty(subtitles)

        metadata = subtitles.metadata
        v4_plus = metadata.ssa_script_type.strip().lower() != SCRIPT_TYPE_V4
        sections = [
            cls._render_script_info(metadata, v4_plus),
            cls._render_styles(subtitles, v4_plus),
            cls._render_events(subtitles, v4_plus),
        ]
        cls.write_text(stream, "\n\n".join(sections) + "\n")
        logger.info(f"Wrote {len(subtitles.items)} items as {'ASS' if v4_plus else 'SSA'}")

    @staticmethod
    def _render_script_info(metadata: Metadata, v4_plus: bool) -> str:
        lines = [SECTION_SCRIPT_INFO]
        lines.extend(f"; {comment}" for comment in metadata.comments)
        for key, (attribute, _) in SCRIPT_INFO_FIELDS.items():
            value = getattr(metadata, attribute)
            if key == "ScriptType":
                value = value or (SCRIPT_TYPE_V4_PLUS if v4_plus else SCRIPT_TYPE_V4)
            elif key == "ScaledBorderAndShadow":
                value = "yes" if value else ""
            if value is None or value == "":
                continue
            lines.append(f"{key}: {_from_number(value) if not isinstance(value, str) else value}")
        return "\n".join(lines)

    @staticmethod
    def _render_styles(subtitles: Subtitles, v4_plus: bool) -> str:
        format_fields = STYLE_FORMAT_V4_PLUS if v4_plus else STYLE_FORMAT_V4
        lines = [SECTION_STYLES_V4_PLUS if v4_plus else SECTION_STYLES_V4,
                 "Format: " + ", ".join(format_fields)]

        styles = [subtitles.styles[style_id] for style_id in sorted(subtitles.styles)]
        if not styles:
            styles = [Style(id=DEFAULT_STYLE_NAME)]
        for style in styles:
            attributes = style.inline_style or StyleAttributes()
            values = [style.id]
            for name in format_fields[1:]:
                attribute, _, writer = STYLE_FIELDS[name.lower()]
                values.append(writer(getattr(attributes, attribute)))
            lines.append("Style: " + ",".join(values))
        return "\n".join(lines)

    @classmethod
    def _render_events(cls, subtitles: Subtitles, v4_plus: bool) -> str:
        format_fields = EVENT_FORMAT_V4_PLUS if v4_plus else EVENT_FORMAT_V4
        lines = [SECTION_EVENTS, "Format: " + ", ".join(format_fields)]

        default_style = DEFAULT_STYLE_NAME if not subtitles.styles else sorted(subtitles.styles)[0]
        for item in subtitles.items:
            inline = item.inline_style or StyleAttributes()
            values = {
                "Layer": _from_number(inline.ssa_layer),
                "Marked": f"Marked={1 if inline.ssa_marked else 0}",
                "Start": _format_timestamp(item.start_at),
                "End": _format_timestamp(item.end_at),
                "Style": item.style.id if item.style is not None else default_style,
                "Name": item.lines[0].voice_name if item.lines else "",
                "MarginL": f"{inline.ssa_margin_left or 0:04d}",
                "MarginR": f"{inline.ssa_margin_right or 0:04d}",
                "MarginV": f"{inline.ssa_margin_vertical or 0:04d}",
                "Effect": inline.ssa_effect,
                "Text": "\\N".join(cls._render_line(line) for line in item.lines),
            }
            lines.append("Dialogue: " + ",".join(values[name] for name in format_fields))
        return "\n".join(lines)

    @staticmethod
    def _render_line(line: Line) -> str:
        parts = []
        for line_item in line.items:
            style = line_item.inline_style
            opening, closing = "", ""
            if style is not None:
                for enabled, code in ((style.ssa_bold, "b"), (style.ssa_italic, "i"),
                                      (style.ssa_underline, "u")):
                    if enabled:
                        opening += f"\\{code}1"
                        closing += f"\\{code}0"
            if opening:
                parts.append(f"{{{opening}}}{line_item.text}{{{closing}}}")
            else:
                parts.append(line_item.text)
        return "".join(parts)
