"""
Encoding detection utilities for subtitle payloads.

Readers receive raw bytes; this module turns them into text with BOM handling,
library-based detection (charset-normalizer, then chardet) and a manual
fallback over the usual subtitle encodings.
"""

from typing import Optional, Tuple

import chardet
from charset_normalizer import from_bytes

from subkit.utils.constants import CHARDET_MIN_CONFIDENCE, ENCODING_PRIORITY, UTF8_BOM
from subkit.utils.logging_config import get_logger

logger = get_logger(__name__)


class EncodingDetector:
    """Handles encoding detection for subtitle payloads."""

    @staticmethod
    def has_bom(data: bytes) -> bool:
        """
        Check if a payload starts with the UTF-8 BOM.

        Args:
            data: Raw subtitle bytes

        Returns:
            True if the payload has a UTF-8 BOM
        """
        return data.startswith(UTF8_BOM)

    @staticmethod
    def detect_encoding(data: bytes) -> Optional[str]:
        """
        Detect the encoding of a subtitle payload using multiple methods.

        Args:
            data: Raw subtitle bytes

        Returns:
            Detected encoding name or None if detection failed

        Example:
            >>> encoding = EncodingDetector.detect_encoding("Café".encode("cp1252"))
        """
        if EncodingDetector.has_bom(data):
            return 'utf-8-sig'

        # Plain UTF-8 is by far the most common case and detectors can misfire on short input
        try:
            data.decode('utf-8')
            return 'utf-8'
        except UnicodeDecodeError:
            pass

        detected = EncodingDetector._auto_detect_encoding(data)
        if detected:
            logger.debug(f"Auto-detected encoding: {detected}")
            return detected.lower()

        logger.debug("Auto-detection failed, trying manual detection")
        return EncodingDetector._manual_detect_encoding(data)

    @staticmethod
    def _auto_detect_encoding(data: bytes) -> Optional[str]:
        """
        Use charset-normalizer, then chardet.

        Args:
            data: Raw subtitle bytes

        Returns:
            Detected encoding or None
        """
        best = from_bytes(data).best()
        if best is not None and best.encoding:
            return best.encoding

        result = chardet.detect(data)
        if result and result.get("encoding") and result.get("confidence", 0) > CHARDET_MIN_CONFIDENCE:
            return result["encoding"]

        return None

    @staticmethod
    def _manual_detect_encoding(data: bytes) -> Optional[str]:
        """
        Try the priority list of encodings in order.

        Args:
            data: Raw subtitle bytes

        Returns:
            First encoding able to decode the payload, or None
        """
        for encoding in ENCODING_PRIORITY:
            try:
                data.decode(encoding)
                logger.debug(f"Manual detection successful: {encoding}")
                return encoding
            except (UnicodeDecodeError, LookupError):
                continue

        logger.warning("Could not detect encoding")
        return None

    @staticmethod
    def decode(data: bytes) -> Tuple[str, str]:
        """
        Decode a subtitle payload with automatic encoding detection.

        The BOM never reaches the returned text.

        Args:
            data: Raw subtitle bytes

        Returns:
            Tuple of (text, encoding_used)

        Example:
            >>> text, encoding = EncodingDetector.decode(b"\\xef\\xbb\\xbf1\\n")
            >>> print(f"Read payload with {encoding} encoding")
        """
        encoding = EncodingDetector.detect_encoding(data)
        if not encoding:
            logger.warning("Failed to detect encoding, using UTF-8 with error replacement")
            return data.decode('utf-8', errors='replace'), 'utf-8'

        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.warning(f"Decoding with {encoding} failed ({e}), using UTF-8 with error replacement")
            return data.decode('utf-8', errors='replace'), 'utf-8'

        if text.startswith('\ufeff'):
            text = text[1:]
        return text, encoding
