"""
Shared constants and configurations for the subtitle interchange library.

This module contains all the constants used across different modules including:
- Supported file formats and extensions
- Encoding detection priorities
- Style propagation and timing algorithm constants
- Default configuration values
"""

from datetime import timedelta
from enum import Enum
from typing import List, Dict

# ============================================================================
# FILE FORMAT CONSTANTS
# ============================================================================

class SubtitleFormat(Enum):
    """Supported subtitle formats."""
    SRT = "srt"
    SSA = "ssa"
    ASS = "ass"
    STL = "stl"
    TS = "ts"
    TTML = "ttml"
    VTT = "vtt"

    @classmethod
    def from_extension(cls, ext: str) -> 'SubtitleFormat':
        """
        Get format from file extension.

        Args:
            ext: File extension (with or without dot)

        Returns:
            SubtitleFormat enum value

        Raises:
            UnsupportedFormatError: If extension is not supported
        """
        # Imported here since errors are defined in the core package
        from subkit.core.errors import UnsupportedFormatError

        ext = ext.lower().lstrip('.')
        for format_type in cls:
            if format_type.value == ext:
                return format_type
        raise UnsupportedFormatError(f"Unsupported subtitle format: {ext or '<none>'}")


# ============================================================================
# ENCODING DETECTION CONSTANTS
# ============================================================================

# Subtitle file encoding detection order (most likely first)
ENCODING_PRIORITY: List[str] = [
    'utf-8', 'utf-16', 'cp1252', 'latin-1',
    'gb18030', 'big5', 'shift-jis'
]

# Minimum chardet confidence to trust its guess
CHARDET_MIN_CONFIDENCE: float = 0.7

# UTF-8 BOM marker
UTF8_BOM: bytes = b"\xef\xbb\xbf"

# ============================================================================
# TIMING AND PROCESSING CONSTANTS
# ============================================================================

# Text and length of the placeholder item appended by force_duration
DUMMY_ITEM_TEXT: str = "..."
DUMMY_ITEM_DURATION: timedelta = timedelta(milliseconds=1)

# Canonical timestamp layouts (fraction separator, fraction digits)
TIMESTAMP_LAYOUTS: Dict[SubtitleFormat, tuple] = {
    SubtitleFormat.SRT: (',', 3),
    SubtitleFormat.SSA: ('.', 2),
    SubtitleFormat.ASS: ('.', 2),
    SubtitleFormat.VTT: ('.', 3),
}

# ============================================================================
# STYLE PROPAGATION CONSTANTS
# ============================================================================

# Line height assumed when turning a TTML extent height into WebVTT lines
# (5.33vh in practice, integer division by 5)
WEBVTT_LINE_HEIGHT: int = 5

# Rows of a teletext page; STL positions using it are shifted up one row
TELETEXT_MAX_ROWS: int = 23

# TTML writing modes starting with this prefix are vertical (tblr, tbrl)
VERTICAL_WRITING_MODE_PREFIX: str = "tb"

# MPEG-TS clock rate used by WebVTT X-TIMESTAMP-MAP headers
MPEGTS_CLOCK_RATE: int = 90000

# ============================================================================
# DEFAULT CONFIGURATION VALUES
# ============================================================================

# Default backup suffix when overwriting a subtitle file in place
BACKUP_SUFFIX: str = ".bak"

# Default log format
DEFAULT_LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'

# Application metadata
APP_NAME: str = "subkit"
APP_VERSION: str = "1.0.0"
APP_DESCRIPTION: str = """
A subtitle interchange toolkit with support for:
- Reading and writing SRT, SSA/ASS and WebVTT subtitles
- Cross-format style translation (SRT, SSA, STL, Teletext, TTML, WebVTT)
- Timing shifts, linear drift correction and duration forcing
- Fragmenting/unfragmenting cues for segmented delivery
- Style and region cleanup
"""
