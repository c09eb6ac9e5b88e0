"""Exceptions raised by the subtitle interchange library."""


class SubtitleError(Exception):
    """Base class for all subkit errors."""


class FormatError(SubtitleError, ValueError):
    """Raised when subtitle content or a timestamp is malformed."""


class UnsupportedFormatError(FormatError):
    """Raised when no reader or writer exists for a file extension."""


class NoSubtitlesError(SubtitleError):
    """Raised when writing a document that has no items."""


class SubtitleIOError(SubtitleError, IOError):
    """Raised when opening, creating or closing a subtitle file fails."""
