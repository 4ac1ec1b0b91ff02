"""Approximate token counts for generated snapshots."""

import math
import logging
from typing import Any, Optional

import tiktoken

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN = 4


class TokenCounter:
    """Counts tokens with a tiktoken encoding, estimating when it cannot be loaded."""

    def __init__(self, encoding_name: str = "cl100k_base"):
        self.encoding_name = encoding_name
        self.encoder: Optional[Any] = None
        try:
            self.encoder = tiktoken.get_encoding(encoding_name)
        except Exception as e:
            # Encoding data is downloaded on first use
            logger.warning(f"Token encoding '{encoding_name}' unavailable, estimating instead: {e}")

    def count(self, text: str) -> int:
        """Token count of ``text``; ``len(text) / 4`` rounded up without an encoder."""
        if not text:
            return 0
        if self.encoder is not None:
            try:
                return len(self.encoder.encode(text, disallowed_special=()))
            except Exception as e:
                logger.debug(f"Encoding failed, estimating instead: {e}")
        return math.ceil(len(text) / CHARS_PER_TOKEN)
