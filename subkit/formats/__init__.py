"""
Subtitle format handlers.

Each handler implements the reader/writer contract of SubtitleHandler for one
file format:
- SRT (SubRip)
- SSA/ASS (SubStation Alpha)
- WebVTT
"""

from .base import Options, STLOptions, SubtitleHandler, TeletextOptions
from .srt import SRTHandler
from .ssa import SSAHandler
from .webvtt import WebVTTHandler

__all__ = [
    'Options',
    'STLOptions',
    'TeletextOptions',
    'SubtitleHandler',
    'SRTHandler',
    'SSAHandler',
    'WebVTTHandler',
]
