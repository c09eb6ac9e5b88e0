"""
Core subtitle modules.

This package contains the fundamental components of the library:
- The unified subtitle data model
- Cross-dialect style attributes and their propagation
- Duration parsing/formatting and the line scanner
- Encoding detection
"""

from .errors import (
    SubtitleError, FormatError, UnsupportedFormatError, NoSubtitlesError, SubtitleIOError,
)
from .models import (
    Color, Item, Line, LineItem, Metadata, Region, Style, Subtitles, WebVTTTimestampMap,
)
from .style_attributes import Dialect, Justification, STLPosition, StyleAttributes, WebVTTTag
from .timing_utils import TimeConverter, parse_duration, format_duration
from .scanner import LineScanner, scan_lines
from .encoding_detection import EncodingDetector

__all__ = [
    'SubtitleError',
    'FormatError',
    'UnsupportedFormatError',
    'NoSubtitlesError',
    'SubtitleIOError',
    'Color',
    'Item',
    'Line',
    'LineItem',
    'Metadata',
    'Region',
    'Style',
    'Subtitles',
    'WebVTTTimestampMap',
    'Dialect',
    'Justification',
    'STLPosition',
    'StyleAttributes',
    'WebVTTTag',
    'TimeConverter',
    'parse_duration',
    'format_duration',
    'LineScanner',
    'scan_lines',
    'EncodingDetector',
]
