"""
Encoding handling utilities.

Files are inlined only when they decode cleanly; nothing is guessed, so a
file either round-trips exactly or is reported as unreadable.
"""

import logging
from typing import Optional, List, Tuple


# Strict decoders only: a lenient codec such as latin-1 would accept any bytes
DEFAULT_ENCODINGS = [
    'utf-8',
]

# Set up module logger
logger = logging.getLogger(__name__)


class EncodingDetector:
    """Handles text decoding for inlined files."""

    def __init__(self, encodings: Optional[List[str]] = None):
        """
        Initialize the encoding detector.

        Args:
            encodings: List of encodings to try, in order. If None, uses defaults.
        """
        self.encodings = encodings or DEFAULT_ENCODINGS

    def decode_bytes(self, content: bytes, file_path: Optional[str] = None) -> Tuple[Optional[str], Optional[str], Optional[str]]:
        """
        Attempt to decode bytes to string using the configured encodings.

        Args:
            content: Raw bytes to decode.
            file_path: Optional file path for better error messages.

        Returns:
            Tuple of (decoded_text, encoding_used, error_message).
            If successful: (text, encoding, None)
            If failed: (None, None, error_message)
        """
        last_error = None
        for encoding in self.encodings:
            try:
                decoded = content.decode(encoding)
                logger.debug(f"Decoded {file_path} using {encoding}")
                return decoded, encoding, None
            except UnicodeDecodeError as e:
                last_error = e
                continue

        error_msg = f"Unable to decode file as {', '.join(self.encodings)}"
        if last_error is not None:
            error_msg += f" - failed at byte {last_error.start}"

        logger.debug(f"Decoding failed for {file_path}: {error_msg}")
        return None, None, error_msg

