"""Snapshot generator: assembles the markdown document for one directory."""
import json
import time
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .models import Config
from .inliner import ContentInliner
from ..adapters import LocalAdapter, validate_root
from ..utils.file_filter import PathFilter, load_ignore_patterns
from ..utils.tree_builder import TreeRenderer

logger = logging.getLogger(__name__)

TITLE = "# Repository Snapshot"
TREE_HEADING = "## Directory Tree"
CONTENTS_HEADING = "## File Contents"


class SnapshotGenerator:
    """Main generator: metadata header, directory tree and optional contents."""

    def __init__(self, config: Config):
        """Initialize generator with an immutable configuration."""
        self.config = config

    def generate(self, now: Optional[datetime] = None) -> str:
        """
        Generate the snapshot document.

        Every call performs fresh traversals; nothing is cached between calls.

        Args:
            now: Timestamp for the header, defaults to the current UTC time.

        Returns:
            The complete markdown document.

        Raises:
            InvalidRootError: If the root is missing or not a directory. Raised
                before any other work, so no partial output exists.
        """
        root = validate_root(self.config.root)
        start = time.perf_counter()

        patterns = load_ignore_patterns(root, self.config.exclude_globs)
        adapter = LocalAdapter(root, PathFilter(patterns))

        md = self.render_header(root, patterns, now or datetime.now(timezone.utc))
        md += self.render_tree(adapter)

        if self.config.include_contents:
            md += f"{CONTENTS_HEADING}\n\n"
            contents, budget = ContentInliner(self.config, adapter).inline(len(md.encode('utf-8')))
            md += contents
            logger.info(f"Snapshot body is {budget.used_bytes:,} bytes before the trailer")

        elapsed = time.perf_counter() - start
        md += f"_Generated by dir2md in {elapsed:.2f}s._\n"
        logger.info(f"Snapshot of {root} generated in {elapsed:.2f}s")
        return md

    def effective_options(self, patterns: List[str]) -> Dict[str, Any]:
        """Resolved configuration as shown in the header, with the merged ignore list."""
        config = self.config
        return {
            'include_contents': config.include_contents,
            'analyze': config.analyze,
            'max_depth': config.max_depth,
            'max_file_size': config.max_file_size,
            'max_lines_per_file': config.max_lines_per_file,
            'max_bytes_per_file': config.max_bytes_per_file,
            'max_total_bytes': config.max_total_bytes,
            'ext_whitelist': sorted(config.ext_whitelist),
            'exclude_globs': list(patterns),
        }

    def render_header(self, root: str, patterns: List[str], now: datetime) -> str:
        """Render the metadata header."""
        options = json.dumps(self.effective_options(patterns), indent=2, ensure_ascii=False)
        contents_note = "" if self.config.include_contents else " no"
        analysis_note = " Analysis is enabled." if self.config.analyze else ""
        return "\n".join([
            TITLE,
            "",
            f"- **Root:** `{root}`",
            f"- **Generated:** {now.isoformat()}",
            f"- **Options:** {options}",
            "",
            f"> This file contains a directory tree and{contents_note} inlined file contents.{analysis_note}",
            "",
            "",
        ])

    def render_tree(self, adapter: LocalAdapter) -> str:
        """Render the tree section from one complete structure pass."""
        structure = TreeRenderer.build_structure(adapter.walk())
        renderer = TreeRenderer(adapter.get_name(), self.config.max_depth)
        return f"{TREE_HEADING}\n\n```text\n{renderer.render(structure)}\n```\n\n"


def generate_markdown(config: Optional[Config] = None, **options: Any) -> str:
    """
    Generate a snapshot document.

    Args:
        config: Ready-made configuration; if omitted, ``options`` are passed to
            ``Config.from_options`` (``root`` is required then).

    Returns:
        The complete markdown document.
    """
    if config is None:
        config = Config.from_options(**options)
    return SnapshotGenerator(config).generate()
