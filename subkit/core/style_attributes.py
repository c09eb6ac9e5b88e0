"""
Style attribute set shared by every subtitle dialect.

``StyleAttributes`` is one flat record holding the styling vocabulary of every
supported dialect (SRT, SSA/ASS, EBU-STL, Teletext, TTML, WebVTT), each field
prefixed with the dialect it comes from. A reader fills in its own dialect's
fields and then calls that dialect's ``propagate_*`` translator, which fills in
the fields other writers read. Translators only ever write their target
fields, so one record can feed several writers after a single read.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Optional, TYPE_CHECKING
from subkit.utils.constants import (
    TELETEXT_MAX_ROWS,
    VERTICAL_WRITING_MODE_PREFIX,
    WEBVTT_LINE_HEIGHT,
)
from subkit.utils.logging_config import get_logger

if TYPE_CHECKING:
    from subkit.core.models import Color

logger = get_logger(__name__)


class Dialect(Enum):
    """Styling vocabularies known to the propagation engine."""
    SRT = "srt"
    SSA = "ssa"
    STL = "stl"
    TELETEXT = "teletext"
    TTML = "ttml"
    WEBVTT = "webvtt"


class Justification(IntEnum):
    """EBU-STL justification code; UNCHANGED means keep the current alignment."""
    UNCHANGED = 1
    LEFT = 2
    CENTERED = 3
    RIGHT = 4


@dataclass
class STLPosition:
    """EBU-STL vertical placement of a subtitle in rows."""
    vertical_position: int = 0
    max_rows: int = 0
    rows: int = 0


@dataclass
class WebVTTTag:
    """A WebVTT cue text tag such as ``<c.yellow.bg_blue>`` or ``<lang en>``."""
    name: str = ""
    annotation: str = ""
    classes: List[str] = field(default_factory=list)

    def start_tag(self) -> str:
        if not self.name:
            return ""
        text = self.name
        if self.classes:
            text += "." + ".".join(self.classes)
        if self.annotation:
            text += " " + self.annotation
        return f"<{text}>"

    def end_tag(self) -> str:
        if not self.name:
            return ""
        return f"</{self.name}>"


@dataclass
class StyleAttributes:
    """Every style property of every dialect; unset fields stay None/empty."""

    # SRT
    srt_bold: bool = False
    srt_color: Optional[str] = None
    srt_italics: bool = False
    srt_position: int = 0  # numpad layout 1-9, 0 when unset
    srt_underline: bool = False

    # SSA/ASS
    ssa_alignment: Optional[int] = None
    ssa_alpha_level: Optional[float] = None
    ssa_angle: Optional[float] = None  # degrees
    ssa_back_colour: Optional['Color'] = None
    ssa_bold: Optional[bool] = None
    ssa_border_style: Optional[int] = None
    ssa_effect: str = ""
    ssa_encoding: Optional[int] = None
    ssa_font_name: str = ""
    ssa_font_size: Optional[float] = None
    ssa_italic: Optional[bool] = None
    ssa_layer: Optional[int] = None
    ssa_margin_left: Optional[int] = None  # pixels
    ssa_margin_right: Optional[int] = None  # pixels
    ssa_margin_vertical: Optional[int] = None  # pixels
    ssa_marked: Optional[bool] = None
    ssa_outline: Optional[float] = None  # pixels
    ssa_outline_colour: Optional['Color'] = None
    ssa_primary_colour: Optional['Color'] = None
    ssa_scale_x: Optional[float] = None  # %
    ssa_scale_y: Optional[float] = None  # %
    ssa_secondary_colour: Optional['Color'] = None
    ssa_shadow: Optional[float] = None  # pixels
    ssa_spacing: Optional[float] = None  # pixels
    ssa_strikeout: Optional[bool] = None
    ssa_underline: Optional[bool] = None

    # EBU-STL
    stl_boxing: Optional[bool] = None
    stl_italics: Optional[bool] = None
    stl_justification: Optional[Justification] = None
    stl_position: Optional[STLPosition] = None
    stl_underline: Optional[bool] = None

    # Teletext
    teletext_color: Optional['Color'] = None
    teletext_double_height: Optional[bool] = None
    teletext_double_size: Optional[bool] = None
    teletext_double_width: Optional[bool] = None
    teletext_spaces_after: Optional[int] = None
    teletext_spaces_before: Optional[int] = None

    # TTML
    ttml_background_color: Optional[str] = None
    ttml_color: Optional[str] = None
    ttml_direction: Optional[str] = None
    ttml_display: Optional[str] = None
    ttml_display_align: Optional[str] = None
    ttml_extent: Optional[str] = None
    ttml_font_family: Optional[str] = None
    ttml_font_size: Optional[str] = None
    ttml_font_style: Optional[str] = None
    ttml_font_weight: Optional[str] = None
    ttml_line_height: Optional[str] = None
    ttml_opacity: Optional[str] = None
    ttml_origin: Optional[str] = None
    ttml_overflow: Optional[str] = None
    ttml_padding: Optional[str] = None
    ttml_show_background: Optional[str] = None
    ttml_text_align: Optional[str] = None
    ttml_text_decoration: Optional[str] = None
    ttml_text_outline: Optional[str] = None
    ttml_unicode_bidi: Optional[str] = None
    ttml_visibility: Optional[str] = None
    ttml_wrap_option: Optional[str] = None
    ttml_writing_mode: Optional[str] = None
    ttml_z_index: Optional[int] = None

    # WebVTT
    webvtt_align: str = ""
    webvtt_bold: bool = False
    webvtt_italics: bool = False
    webvtt_line: str = ""
    webvtt_lines: int = 0
    webvtt_position: str = ""
    webvtt_region_anchor: str = ""
    webvtt_scroll: str = ""
    webvtt_size: str = ""
    webvtt_styles: List[str] = field(default_factory=list)
    webvtt_tags: List[WebVTTTag] = field(default_factory=list)
    webvtt_underline: bool = False
    webvtt_vertical: str = ""
    webvtt_viewport_anchor: str = ""
    webvtt_width: str = ""

    def propagate(self, dialect: Dialect) -> None:
        """
        Run the translator for a source dialect.

        Args:
            dialect: Dialect whose fields were populated by a reader
        """
        translators = {
            Dialect.SRT: self.propagate_srt_attributes,
            Dialect.SSA: self.propagate_ssa_attributes,
            Dialect.STL: self.propagate_stl_attributes,
            Dialect.TELETEXT: self.propagate_teletext_attributes,
            Dialect.TTML: self.propagate_ttml_attributes,
            Dialect.WEBVTT: self.propagate_webvtt_attributes,
        }
        translators[dialect]()

    def _rebuild_webvtt_tags(self) -> None:
        self.webvtt_tags = []
        if self.webvtt_bold:
            self.webvtt_tags.append(WebVTTTag(name="b"))
        if self.webvtt_italics:
            self.webvtt_tags.append(WebVTTTag(name="i"))
        if self.webvtt_underline:
            self.webvtt_tags.append(WebVTTTag(name="u"))

    def propagate_srt_attributes(self) -> None:
        """Fill WebVTT and TTML fields from SRT fields."""
        if self.srt_color is not None:
            self.ttml_color = self.srt_color

        # Numpad layout: 7-9 top row, 4-6 middle row, 1-3 bottom row
        if 1 <= self.srt_position <= 9:
            row, column = divmod(self.srt_position - 1, 3)
            self.webvtt_position = ("90%", "50%", "10%")[row]
            if column == 0:
                self.webvtt_align = "left"
            elif column == 2:
                self.webvtt_align = "right"

        self.webvtt_bold = self.srt_bold
        self.webvtt_italics = self.srt_italics
        self.webvtt_underline = self.srt_underline
        self._rebuild_webvtt_tags()

    def propagate_ssa_attributes(self) -> None:
        """
        Fill SRT and WebVTT emphasis flags from SSA fields.

        Only bold, italic and underline have a counterpart; the remaining SSA
        fields (fonts, colours, margins, borders) are not translated.
        """
        if self.ssa_bold is None and self.ssa_italic is None and self.ssa_underline is None:
            return
        if self.ssa_bold is not None:
            self.srt_bold = self.webvtt_bold = self.ssa_bold
        if self.ssa_italic is not None:
            self.srt_italics = self.webvtt_italics = self.ssa_italic
        if self.ssa_underline is not None:
            self.srt_underline = self.webvtt_underline = self.ssa_underline
        self._rebuild_webvtt_tags()

    def propagate_stl_attributes(self) -> None:
        """Fill WebVTT alignment and line from STL justification and row."""
        if self.stl_justification == Justification.RIGHT:
            self.webvtt_align = "right"
        elif self.stl_justification == Justification.LEFT:
            self.webvtt_align = "left"

        position = self.stl_position
        if position is not None and position.max_rows > 0:
            vertical_position = position.vertical_position
            # Teletext rows run 1-23 while WebVTT lines start at 0% from the top
            if position.max_rows == TELETEXT_MAX_ROWS and vertical_position > 0:
                vertical_position -= 1
            self.webvtt_line = f"{vertical_position * 100 // position.max_rows}%"

    def propagate_teletext_attributes(self) -> None:
        """Fill the TTML color from the teletext color."""
        if self.teletext_color is not None:
            self.ttml_color = "#" + self.teletext_color.ttml_string()

    def propagate_ttml_attributes(self) -> None:
        """
        Fill WebVTT region and cue settings from TTML layout fields.

        The default TTML writing mode is lrtb; a vertical writing mode swaps
        the roles of the two extent and origin components.
        """
        if self.ttml_text_align is not None:
            self.webvtt_align = self.ttml_text_align

        vertical = (self.ttml_writing_mode is not None
                    and self.ttml_writing_mode.startswith(VERTICAL_WRITING_MODE_PREFIX))

        if self.ttml_extent is not None:
            dimensions = self.ttml_extent.split(" ")
            if len(dimensions) > 1:
                width, height = dimensions[0], dimensions[1]
                self.webvtt_width = width
                height_value = height.replace("%", "").replace("px", "")
                try:
                    self.webvtt_lines = int(height_value) // WEBVTT_LINE_HEIGHT
                except ValueError:
                    logger.debug(f"Cannot derive WebVTT lines from TTML extent height '{height}'")
                self.webvtt_size = width if vertical else height

        if self.ttml_origin is not None:
            self.webvtt_region_anchor = "0%,0%"
            self.webvtt_viewport_anchor = self.ttml_origin.strip().replace(" ", ",")
            self.webvtt_scroll = "up"
            coordinates = self.ttml_origin.split(" ")
            if len(coordinates) > 1:
                if vertical:
                    self.webvtt_line, self.webvtt_position = coordinates[1], coordinates[0]
                else:
                    self.webvtt_line, self.webvtt_position = coordinates[0], coordinates[1]

    def propagate_webvtt_attributes(self) -> None:
        """Fill SRT fields from WebVTT fields (and the TTML color)."""
        if self.ttml_color is not None:
            self.srt_color = self.ttml_color
        self.srt_bold = self.webvtt_bold
        self.srt_italics = self.webvtt_italics
        self.srt_underline = self.webvtt_underline
