"""Local filesystem adapter: depth-first traversal of a directory."""
import os
import stat
import logging
from typing import Iterator, Optional

from ..core.models import Entry
from ..utils.file_filter import PathFilter
from ..utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class LocalAdapter:
    """Walks a local directory, pruning ignored subtrees."""

    def __init__(self, repo_path: str, path_filter: Optional[PathFilter] = None):
        """Initialize local adapter with an already validated root directory."""
        self.repo_path = os.path.abspath(repo_path)
        self.repo_name = os.path.basename(self.repo_path)
        self.path_filter = path_filter or PathFilter([])

    def get_name(self) -> str:
        """Get the root directory name."""
        return self.repo_name

    def stat(self, rel_path: str) -> Optional[os.stat_result]:
        """
        lstat a path relative to the root.

        Symbolic links are reported as themselves, never followed.

        Returns:
            The stat result, or None if the path cannot be statted.
        """
        try:
            return os.lstat(self._abs(rel_path))
        except OSError as e:
            logger.debug(f"Cannot stat {rel_path or '.'}: {e}")
            return None

    def read_bytes(self, rel_path: str) -> bytes:
        """Read a file's raw bytes. Raises OSError on failure."""
        with open(self._abs(rel_path), 'rb') as f:
            return f.read()

    def walk(self) -> Iterator[Entry]:
        """
        Yield entries depth-first, pre-order, starting with the root.

        Each call performs a fresh traversal. Children are visited in the order
        the filesystem lists them; ignored children and their subtrees are never
        visited. Paths that cannot be statted or listed are skipped silently.
        """
        yield from self._walk("")

    def _walk(self, rel_path: str) -> Iterator[Entry]:
        st = self.stat(rel_path)
        if st is None:
            return

        abs_path = self._abs(rel_path)
        if not stat.S_ISDIR(st.st_mode):
            # Files, symlinks and special files are all leaves
            yield Entry(rel_path=rel_path, abs_path=abs_path, is_dir=False)
            return

        try:
            names = os.listdir(abs_path)
        except OSError as e:
            logger.debug(f"Cannot list {rel_path or '.'}: {e}")
            return

        yield Entry(rel_path=rel_path, abs_path=abs_path, is_dir=True, children=list(names))

        for name in names:
            child_rel = PathUtils.join_relative(rel_path, name)
            if self.path_filter.is_ignored(child_rel):
                logger.debug(f"Ignoring {child_rel}")
                continue
            yield from self._walk(child_rel)

    def _abs(self, rel_path: str) -> str:
        if not rel_path:
            return self.repo_path
        return os.path.join(self.repo_path, *PathUtils.normalize_and_split(rel_path))
