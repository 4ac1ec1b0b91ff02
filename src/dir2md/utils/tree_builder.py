"""Directory tree rendering utilities."""

from typing import Dict, Iterable, List, Optional

from ..core.models import Entry


class TreeRenderer:
    """Renders a box-drawing text tree from one complete walk pass."""

    def __init__(self, root_name: str, max_depth: Optional[int] = None):
        self.root_name = root_name
        self.max_depth = max_depth

    @staticmethod
    def build_structure(entries: Iterable[Entry]) -> Dict[str, List[Entry]]:
        """
        Build the directory -> children map from walked entries.

        Every walked directory gets a key (possibly with no children). Entries
        are grouped under their parent's relative path, in walk order.

        Args:
            entries: Entries from a walk, parents before children.

        Returns:
            Mapping of directory relative path to its child entries.
        """
        structure: Dict[str, List[Entry]] = {}
        for entry in entries:
            if entry.is_dir:
                structure.setdefault(entry.rel_path, [])
            parent = entry.parent
            if parent is not None and parent in structure:
                structure[parent].append(entry)
        return structure

    @staticmethod
    def order_children(children: List[Entry]) -> List[Entry]:
        """Directories first, then files, each sorted case-insensitively."""
        def sort_key(entry: Entry):
            return (entry.name.casefold(), entry.name)

        dirs = sorted((c for c in children if c.is_dir), key=sort_key)
        files = sorted((c for c in children if not c.is_dir), key=sort_key)
        return dirs + files

    def render(self, structure: Dict[str, List[Entry]]) -> str:
        """
        Render the tree as text lines joined by newlines.

        The root line carries no prefix. Entries deeper than ``max_depth``
        are omitted and not descended into.
        """
        lines = [self.root_name]
        self._render_children(structure, "", 0, [], lines)
        return "\n".join(lines)

    def _render_children(
        self,
        structure: Dict[str, List[Entry]],
        rel_path: str,
        depth: int,
        last_flags: List[bool],
        lines: List[str]
    ) -> None:
        child_depth = depth + 1
        if self.max_depth is not None and child_depth > self.max_depth:
            return

        ordered = self.order_children(structure.get(rel_path, []))
        for i, child in enumerate(ordered):
            is_last = i == len(ordered) - 1
            flags = last_flags + [is_last]
            lines.append(self.prefix(flags) + child.name)
            if child.is_dir:
                self._render_children(structure, child.rel_path, child_depth, flags, lines)

    @staticmethod
    def prefix(last_flags: List[bool]) -> str:
        """
        Build the line prefix for an entry.

        Args:
            last_flags: For each level from the root's children down to the
                entry itself, whether that node was the last sibling.
        """
        if not last_flags:
            return ""
        parts = ["    " if is_last else "│   " for is_last in last_flags[:-1]]
        parts.append("└── " if last_flags[-1] else "├── ")
        return "".join(parts)
