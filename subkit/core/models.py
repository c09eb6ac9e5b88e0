"""
Core data structures for the unified subtitle model.

This module provides:
- The Subtitles aggregate with its item list and ID-keyed style/region tables
- Item/Line/LineItem cue structures
- Style, Region, Metadata and Color entities

Styles and regions are owned by the tables of their Subtitles; items, line
items and regions only reference them, so editing a shared Style is visible
from every item pointing at it.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Dict, List, Optional
from subkit.core.errors import FormatError
from subkit.core.style_attributes import StyleAttributes
from subkit.core.timing_utils import format_duration
from subkit.utils.constants import MPEGTS_CLOCK_RATE
from subkit.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Color:
    """An ARGB color with 0-255 channels."""
    alpha: int = 0
    red: int = 0
    green: int = 0
    blue: int = 0

    @classmethod
    def from_ssa_string(cls, text: str, base: int = 16) -> 'Color':
        """
        Build a color from an SSA packed ABGR integer.

        Args:
            text: Value such as "&H00FF00FF&", "00ff00ff" or "16777215"
            base: 16 for hexadecimal values, 10 for decimal ones

        Returns:
            Decoded color

        Raises:
            FormatError: If the value is not a valid integer in that base
        """
        value = text.strip()
        if value[:2].lower() == "&h":
            value = value[2:]
        value = value.rstrip("&")
        try:
            packed = int(value, base)
        except ValueError:
            raise FormatError(f"Parsing color '{text}' with base {base} failed") from None
        return cls(
            alpha=(packed >> 24) & 0xff,
            blue=(packed >> 16) & 0xff,
            green=(packed >> 8) & 0xff,
            red=packed & 0xff,
        )

    @classmethod
    def from_ttml_string(cls, text: str) -> 'Color':
        """Build a color from a "#rrggbb" string."""
        value = text.strip().lstrip("#")
        if len(value) != 6:
            raise FormatError(f"Invalid #rrggbb color: {text}")
        try:
            packed = int(value, 16)
        except ValueError:
            raise FormatError(f"Invalid #rrggbb color: {text}") from None
        return cls(red=(packed >> 16) & 0xff, green=(packed >> 8) & 0xff, blue=packed & 0xff)

    def ssa_string(self) -> str:
        """Express the color as 8 hex digits in AABBGGRR order."""
        return f"{self.alpha << 24 | self.blue << 16 | self.green << 8 | self.red:08x}"

    def ttml_string(self) -> str:
        """Express the color as 6 hex digits in rrggbb order."""
        return f"{self.red << 16 | self.green << 8 | self.blue:06x}"


COLOR_BLACK = Color()
COLOR_BLUE = Color(blue=255)
COLOR_CYAN = Color(blue=255, green=255)
COLOR_GRAY = Color(blue=128, green=128, red=128)
COLOR_GREEN = Color(green=128)
COLOR_LIME = Color(green=255)
COLOR_MAGENTA = Color(blue=255, red=255)
COLOR_MAROON = Color(red=128)
COLOR_NAVY = Color(blue=128)
COLOR_OLIVE = Color(green=128, red=128)
COLOR_PURPLE = Color(blue=128, red=128)
COLOR_RED = Color(red=255)
COLOR_SILVER = Color(blue=192, green=192, red=192)
COLOR_TEAL = Color(blue=128, green=128)
COLOR_YELLOW = Color(green=255, red=255)
COLOR_WHITE = Color(blue=255, green=255, red=255)


_HTML_ESCAPES = (("&", "&amp;"), ("<", "&lt;"), ("\u00a0", "&nbsp;"))


def escape_html(text: str) -> str:
    for raw, escaped in _HTML_ESCAPES:
        text = text.replace(raw, escaped)
    return text


def unescape_html(text: str) -> str:
    for raw, escaped in reversed(_HTML_ESCAPES):
        text = text.replace(escaped, raw)
    return text


@dataclass
class Style:
    """A named style owned by Subtitles.styles."""
    id: str
    inline_style: Optional[StyleAttributes] = None
    style: Optional['Style'] = None  # parent, one level only


@dataclass
class Region:
    """A named on-screen placement owned by Subtitles.regions."""
    id: str
    inline_style: Optional[StyleAttributes] = None
    style: Optional[Style] = None


@dataclass
class LineItem:
    """A run of text sharing one style, optionally karaoke-timed."""
    text: str = ""
    start_at: Optional[timedelta] = None
    style: Optional[Style] = None
    inline_style: Optional[StyleAttributes] = None


@dataclass
class Line:
    """A rendered line made of line items and an optional speaker."""
    items: List[LineItem] = field(default_factory=list)
    voice_name: str = ""

    def __str__(self) -> str:
        # Items carry their own spacing
        return "".join(item.text for item in self.items)

    def copy(self) -> 'Line':
        """Copy the line structure; styles stay shared."""
        return Line(items=[replace(item) for item in self.items], voice_name=self.voice_name)


@dataclass
class Item:
    """One cue: text lines shown between two time boundaries."""
    start_at: timedelta = timedelta(0)
    end_at: timedelta = timedelta(0)
    lines: List[Line] = field(default_factory=list)
    region: Optional[Region] = None
    style: Optional[Style] = None
    inline_style: Optional[StyleAttributes] = None
    comments: List[str] = field(default_factory=list)
    index: int = 0

    def __str__(self) -> str:
        return " - ".join(str(line) for line in self.lines)

    def copy(self) -> 'Item':
        """Shallow copy sharing style and region references."""
        return replace(self, lines=[line.copy() for line in self.lines],
                       comments=list(self.comments))

    def duration(self) -> timedelta:
        """Get the time the item stays on screen."""
        return self.end_at - self.start_at

    @classmethod
    def from_text(cls, start_at: timedelta, end_at: timedelta, *lines: str) -> 'Item':
        """
        Build an unstyled item with one line item per text line.

        Example:
            >>> Item.from_text(timedelta(seconds=1), timedelta(seconds=2), "Hello", "World")
        """
        return cls(start_at=start_at, end_at=end_at,
                   lines=[Line(items=[LineItem(text=text)]) for text in lines])


@dataclass
class WebVTTTimestampMap:
    """Mapping between WebVTT cue times and the MPEG-TS presentation clock."""
    local: timedelta = timedelta(0)
    mpegts: int = 0

    def offset(self) -> timedelta:
        return timedelta(seconds=self.mpegts / MPEGTS_CLOCK_RATE) - self.local

    def __str__(self) -> str:
        return f"LOCAL:{format_duration(self.local, '.', 3)},MPEGTS:{self.mpegts}"


@dataclass
class Metadata:
    """Document-level fields, including the per-dialect header fields."""
    comments: List[str] = field(default_factory=list)
    framerate: int = 0
    language: str = ""
    title: str = ""

    ssa_collisions: str = ""
    ssa_original_editing: str = ""
    ssa_original_script: str = ""
    ssa_original_timing: str = ""
    ssa_original_translation: str = ""
    ssa_play_depth: Optional[int] = None
    ssa_play_res_x: Optional[int] = None
    ssa_play_res_y: Optional[int] = None
    ssa_scaled_border_and_shadow: bool = False
    ssa_script_type: str = ""
    ssa_script_updated_by: str = ""
    ssa_synch_point: str = ""
    ssa_timer: Optional[float] = None
    ssa_update_details: str = ""
    ssa_wrap_style: str = ""

    stl_country_of_origin: str = ""
    stl_creation_date: Optional[datetime] = None
    stl_display_standard_code: str = ""
    stl_editor_contact_details: str = ""
    stl_editor_name: str = ""
    stl_maximum_number_of_displayable_characters_in_any_text_row: Optional[int] = None
    stl_maximum_number_of_displayable_rows: Optional[int] = None
    stl_original_episode_title: str = ""
    stl_publisher: str = ""
    stl_revision_date: Optional[datetime] = None
    stl_revision_number: int = 0
    stl_subtitle_list_reference_code: str = ""
    stl_timecode_start_of_programme: timedelta = timedelta(0)
    stl_translated_episode_title: str = ""
    stl_translated_program_title: str = ""
    stl_translator_contact_details: str = ""
    stl_translator_name: str = ""

    ttml_copyright: str = ""
    webvtt_timestamp_map: Optional[WebVTTTimestampMap] = None


@dataclass
class Subtitles:
    """
    A subtitle document: cues plus the styles and regions they reference.

    Item order is whatever the producer appended; call order() to restore
    chronological order before relying on it.
    """
    items: List[Item] = field(default_factory=list)
    metadata: Metadata = field(default_factory=Metadata)
    regions: Dict[str, Region] = field(default_factory=dict)
    styles: Dict[str, Style] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.items

    def duration(self) -> timedelta:
        """
        Get the end time of the last item.

        Only meaningful when items are in chronological order.

        Returns:
            End of the last item, or zero when there are no items
        """
        if not self.items:
            return timedelta(0)
        return self.items[-1].end_at

    def order(self) -> None:
        """Sort items by start time; items starting together keep their order."""
        if len(self.items) <= 1:
            return
        self.items.sort(key=lambda item: item.start_at)

    def add_style(self, style: Style) -> Style:
        """Register a style under its ID and return it."""
        self.styles[style.id] = style
        return style

    def add_region(self, region: Region) -> Region:
        """Register a region under its ID and return it."""
        self.regions[region.id] = region
        return region
