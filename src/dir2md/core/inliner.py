"""
Content inlining for dir2md.

Second, independent traversal of the root: decides per file whether to inline
it, truncates what is inlined, optionally analyzes it, and keeps the contents
section within the configured total byte budget.
"""

import re
import stat
import logging
from typing import List, Optional, Tuple

from .models import Config, Entry, ByteBudget
from .languages import language_for
from .file_analyzer import FileAnalyzer, format_analysis, split_lines
from ..adapters.local import LocalAdapter
from ..utils.encodings import EncodingDetector
from ..utils.file_filter import is_whitelisted

logger = logging.getLogger(__name__)

TRUNCATION_FACTOR = 0.9

_BACKTICK_RUN = re.compile(r'`+')


def trim_content(content: str, max_lines: Optional[int], max_bytes: Optional[int]) -> str:
    """
    Truncate text to a byte cap, then to a line cap.

    The byte cap is approached by repeatedly cutting the text to 90% of its
    current length until its UTF-8 size fits, so the result may be well under
    the cap. Cuts fall on code point boundaries. If lines are then dropped, a
    single truncation marker line is appended.

    Args:
        content: Text to truncate.
        max_lines: Maximum number of lines, None or 0 for no limit.
        max_bytes: Maximum encoded size, None or 0 for no limit.
    """
    trimmed = content
    if max_bytes:
        while len(trimmed.encode('utf-8')) > max_bytes:
            trimmed = trimmed[:int(len(trimmed) * TRUNCATION_FACTOR)]

    if max_lines:
        lines = split_lines(trimmed)
        if len(lines) > max_lines:
            trimmed = "\n".join(lines[:max_lines]) + f"\n…[truncated to {max_lines} lines]"
    return trimmed


def fence_for(text: str) -> str:
    """Backtick fence longer than any backtick run inside ``text`` (at least three)."""
    longest = max((len(run) for run in _BACKTICK_RUN.findall(text)), default=0)
    return "`" * max(3, longest + 1)


class ContentInliner:
    """Builds the contents section of a snapshot."""

    def __init__(
        self,
        config: Config,
        adapter: LocalAdapter,
        analyzer: Optional[FileAnalyzer] = None,
        detector: Optional[EncodingDetector] = None
    ):
        self.config = config
        self.adapter = adapter
        self.analyzer = analyzer or FileAnalyzer()
        self.detector = detector or EncodingDetector()

    def inline(self, used_bytes: int = 0) -> Tuple[str, ByteBudget]:
        """
        Run the content pass in the walker's natural order.

        Args:
            used_bytes: Bytes of the document already emitted ahead of the
                contents section; they count against max_total_bytes.

        Returns:
            Tuple of (contents_markdown, final_budget). The pass ends early,
            after one stop notice, when the budget would be exceeded.
        """
        budget = ByteBudget(max_bytes=self.config.limit('max_total_bytes'), used_bytes=used_bytes)
        parts: List[str] = []

        for entry in self.adapter.walk():
            if entry.is_dir:
                continue
            chunk, budget, stop = self.process_entry(entry, budget)
            if chunk:
                parts.append(chunk)
            if stop:
                logger.info(f"Stopped inlining at {entry.rel_path} ({budget.used_bytes} bytes emitted)")
                break

        return "".join(parts), budget

    def process_entry(self, entry: Entry, budget: ByteBudget) -> Tuple[str, ByteBudget, bool]:
        """
        Apply the inclusion rules to one file.

        Args:
            entry: A non-directory entry from the walk.
            budget: Budget state before this file.

        Returns:
            Tuple of (emitted_text, budget_after, stop_pass).
        """
        config = self.config
        rel = entry.rel_path

        if config.max_depth is not None and entry.depth > config.max_depth:
            return "", budget, False

        st = self.adapter.stat(rel)
        if st is None or not stat.S_ISREG(st.st_mode):
            logger.debug(f"Not a regular file, skipping {rel}")
            return "", budget, False

        max_file_size = config.limit('max_file_size')
        if max_file_size and st.st_size > max_file_size:
            logger.debug(f"Too large: {rel} ({st.st_size} bytes)")
            placeholder = self._placeholder(
                rel, f"Skipped (file size {st.st_size} bytes exceeds limit of {max_file_size}).")
            return self._append(placeholder, budget, rel)

        if not is_whitelisted(rel, config.ext_whitelist):
            logger.debug(f"Unsupported type: {rel}")
            return self._append(
                self._placeholder(rel, "Skipped (non-text or unsupported extension)."), budget, rel)

        raw = self._read_text(rel)
        if raw is None:
            return self._append(
                self._placeholder(rel, "Skipped (failed to read as UTF-8)."), budget, rel)

        if budget.exceeded:
            notice = f"> Stopped inlining more files (reached max_total_bytes = {budget.max_bytes}).\n"
            return notice, budget.add(len(notice.encode('utf-8'))), True

        trimmed = trim_content(raw, config.limit('max_lines_per_file'), config.limit('max_bytes_per_file'))

        analysis_block = ""
        if config.analyze:
            analysis_block = format_analysis(self.analyzer.analyze(rel, raw))

        fence = fence_for(trimmed)
        section = (
            f"### `{rel}`\n\n"
            + analysis_block
            + f"{fence}{language_for(rel)}\n{trimmed}\n{fence}\n\n"
        )
        return self._append(section, budget, rel)

    def _read_text(self, rel: str) -> Optional[str]:
        try:
            content = self.adapter.read_bytes(rel)
        except OSError as e:
            logger.debug(f"Failed to read {rel}: {e}")
            return None
        text, _, error = self.detector.decode_bytes(content, rel)
        if error:
            logger.debug(f"Failed to decode {rel}: {error}")
        return text

    @staticmethod
    def _placeholder(rel: str, message: str) -> str:
        return f"### `{rel}`\n\n> {message}\n\n"

    @staticmethod
    def _append(chunk: str, budget: ByteBudget, rel: str) -> Tuple[str, ByteBudget, bool]:
        """Emit ``chunk`` if it fits, otherwise a stop notice that ends the pass."""
        size = len(chunk.encode('utf-8'))
        if budget.can_fit(size):
            return chunk, budget.add(size), False

        notice = f"> Stopped before adding `{rel}` (would exceed max_total_bytes = {budget.max_bytes}).\n"
        return notice, budget.add(len(notice.encode('utf-8'))), True
