"""Path normalization utilities for cross-platform compatibility."""

import os
from typing import List


class PathUtils:
    """Utilities for consistent path handling across platforms."""

    @staticmethod
    def normalize_path(path: str) -> str:
        """
        Normalize path separators to forward slashes.

        Args:
            path: File path with potentially mixed separators

        Returns:
            Path with forward slashes only
        """
        return path.replace(os.sep, '/').replace('\\', '/')

    @staticmethod
    def normalize_and_split(path: str) -> List[str]:
        """
        Normalize path and split into components.

        Args:
            path: File path to split

        Returns:
            List of path components, empty for the root path ""
        """
        normalized = PathUtils.normalize_path(path)
        return normalized.split('/') if normalized else []

    @staticmethod
    def join_relative(parent: str, name: str) -> str:
        """Join a child name onto a relative POSIX path ("" is the root)."""
        return f"{parent}/{name}" if parent else name

    @staticmethod
    def depth(rel_path: str) -> int:
        """Depth of a relative path: root is 0, each segment adds one."""
        return len(PathUtils.normalize_and_split(rel_path))
