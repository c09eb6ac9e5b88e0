"""
subkit - a subtitle interchange library.

Read SRT, SSA/ASS and WebVTT into one data model, translate styling between
dialects, fix timing and write any supported format back out.

Example:
    >>> import subkit
    >>> subtitles = subkit.open_file("movie.ass")
    >>> subkit.TimingAdjuster.add(subtitles, timedelta(seconds=2))
    >>> subkit.write_file(subtitles, "movie.vtt")
"""

from subkit.core.errors import (
    SubtitleError, FormatError, UnsupportedFormatError, NoSubtitlesError, SubtitleIOError,
)
from subkit.core.models import (
    Color, Item, Line, LineItem, Metadata, Region, Style, Subtitles, WebVTTTimestampMap,
)
from subkit.core.style_attributes import Dialect, Justification, STLPosition, StyleAttributes, WebVTTTag
from subkit.core.subtitle_formats import (
    Options, SubtitleFormatFactory, open_file, open_subtitles, write_file,
)
from subkit.formats.base import STLOptions, SubtitleHandler, TeletextOptions
from subkit.processors.fragmenter import Fragmenter
from subkit.processors.optimizer import StyleOptimizer
from subkit.processors.timing_adjuster import TimingAdjuster
from subkit.utils.constants import APP_VERSION as __version__, SubtitleFormat

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
    'Options',
    'STLOptions',
    'TeletextOptions',
    'SubtitleHandler',
    'SubtitleFormat',
    'SubtitleFormatFactory',
    'open_file',
    'open_subtitles',
    'write_file',
    'Fragmenter',
    'StyleOptimizer',
    'TimingAdjuster',
]
