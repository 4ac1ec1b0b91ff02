"""
File filtering utilities for dir2md.

This module provides ignore-pattern loading from the local ignore files and
glob matching of relative paths, plus the extension whitelist check used by
the content pass.
"""

import os
import logging
from typing import Iterable, List, Optional, Sequence

from wcmatch import glob

from ..core.languages import extension_key, is_dockerfile, DOCKERFILE
from .path_utils import PathUtils

logger = logging.getLogger(__name__)

# Read in this order; caller-supplied excludes are appended last
IGNORE_FILES = ('.mdgenignore', '.gitignore')

# Extended glob semantics: globstar, dotfiles, extglob and brace expansion
GLOB_FLAGS = glob.GLOBSTAR | glob.DOTGLOB | glob.EXTGLOB | glob.BRACE | glob.NEGATE


def read_ignore_file(file_path: str) -> List[str]:
    """
    Read glob patterns from one ignore file.

    Blank lines and lines starting with ``#`` are skipped. A missing or
    unreadable file yields no patterns.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"No ignore patterns from {file_path}: {e}")
        return []

    patterns = []
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith('#'):
            continue
        patterns.append(stripped)
    return patterns


def load_ignore_patterns(root: str, extra: Optional[Iterable[str]] = None) -> List[str]:
    """
    Load the ordered ignore pattern list for a root directory.

    Args:
        root: Directory holding the optional ignore files.
        extra: Caller-supplied patterns, appended after the file patterns.

    Returns:
        ``.mdgenignore`` patterns, then ``.gitignore`` patterns, then ``extra``.
    """
    patterns: List[str] = []
    for name in IGNORE_FILES:
        patterns.extend(read_ignore_file(os.path.join(root, name)))
    if extra:
        patterns.extend(p for p in extra if p)
    return patterns


class PathFilter:
    """Decides whether a relative path is excluded by the loaded patterns."""

    def __init__(self, patterns: Sequence[str]):
        self.patterns = list(patterns)
        self._match_patterns = self._expand(self.patterns)

    @classmethod
    def for_root(cls, root: str, extra: Optional[Iterable[str]] = None) -> "PathFilter":
        """Create a filter from the ignore files at ``root`` plus ``extra``."""
        return cls(load_ignore_patterns(root, extra))

    @staticmethod
    def _expand(patterns: Sequence[str]) -> List[str]:
        expanded = []
        for pattern in patterns:
            expanded.append(pattern)
            # "dir/**" also matches "dir" itself
            if pattern.endswith('/**') and len(pattern) > 3:
                expanded.append(pattern[:-3])
            # gitignore-style "dir/" names the directory itself
            elif pattern.endswith('/') and pattern.strip('/'):
                expanded.append(pattern.rstrip('/'))
        return expanded

    def is_ignored(self, rel_path: str) -> bool:
        """
        Check if a relative path matches any ignore pattern.

        Args:
            rel_path: Path relative to the root; separators are normalized.

        Returns:
            True if the path should be excluded, False otherwise.
        """
        if not self._match_patterns or not rel_path:
            return False
        posix_path = PathUtils.normalize_path(rel_path)
        return glob.globmatch(posix_path, self._match_patterns, flags=GLOB_FLAGS)


def is_whitelisted(path: str, whitelist: Iterable[str]) -> bool:
    """
    Check whether a file's extension (or literal Dockerfile name) is allowed.

    A Dockerfile is accepted when either ``"Dockerfile"`` or ``".dockerfile"``
    is in the whitelist.
    """
    allowed = set(whitelist)
    if is_dockerfile(path):
        return DOCKERFILE in allowed or '.dockerfile' in allowed
    key = extension_key(path)
    return bool(key) and key in allowed
