"""
Core data models for dir2md.

This module contains the fundamental data structures used throughout
the application for configuration, filesystem entries, per-file analysis
results and output budget accounting.
"""

import os
from dataclasses import dataclass, field, asdict
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple, Union, Any

from .languages import DEFAULT_TEXT_EXTS, DOCKERFILE


def _normalize_extensions(extensions: Union[str, Iterable[str]]) -> FrozenSet[str]:
    """Lower-case and dot-prefix whitelist entries, keeping the literal Dockerfile name."""
    if isinstance(extensions, str):
        extensions = extensions.split(',')

    normalized = set()
    for ext in extensions:
        ext = ext.strip()
        if not ext:
            continue
        if ext.lower() == DOCKERFILE.lower():
            normalized.add(DOCKERFILE)
            continue
        ext = ext.lower()
        if not ext.startswith('.'):
            ext = '.' + ext
        normalized.add(ext)
    return frozenset(normalized)


def _normalize_globs(globs: Union[None, str, Iterable[str]]) -> Tuple[str, ...]:
    if not globs:
        return ()
    if isinstance(globs, str):
        globs = globs.split(',')
    return tuple(g.strip() for g in globs if g and g.strip())


@dataclass(frozen=True)
class Config:
    """Configuration for a single snapshot generation."""

    root: str
    include_contents: bool = False
    max_depth: Optional[int] = None  # None = unlimited, root is depth 0
    max_file_size: Optional[int] = 500_000  # Skip files larger than this
    max_lines_per_file: Optional[int] = 1200
    max_bytes_per_file: Optional[int] = 200_000
    max_total_bytes: Optional[int] = 5_000_000  # Whole document, header and tree included
    ext_whitelist: FrozenSet[str] = DEFAULT_TEXT_EXTS
    exclude_globs: Tuple[str, ...] = ()
    analyze: bool = False

    def __post_init__(self):
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        for name in ('max_file_size', 'max_lines_per_file', 'max_bytes_per_file', 'max_total_bytes'):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    @classmethod
    def from_options(
        cls,
        root: str,
        ext_whitelist: Union[None, str, Iterable[str]] = None,
        exclude_globs: Union[None, str, Iterable[str]] = None,
        **options: Any
    ) -> "Config":
        """
        Build a Config from loosely typed user input.

        Args:
            root: Directory to snapshot; resolved to an absolute path.
            ext_whitelist: Extensions as an iterable or a comma-separated string.
            exclude_globs: Extra ignore globs as an iterable or a comma-separated string.
            **options: Remaining Config fields.

        Returns:
            A normalized, immutable Config.
        """
        whitelist = DEFAULT_TEXT_EXTS if ext_whitelist is None else _normalize_extensions(ext_whitelist)
        return cls(
            root=os.path.abspath(root),
            ext_whitelist=whitelist,
            exclude_globs=_normalize_globs(exclude_globs),
            **options
        )

    def limit(self, name: str) -> Optional[int]:
        """Get a size limit, mapping the disabled values (None or 0) to None."""
        value = getattr(self, name)
        return value or None


@dataclass
class Entry:
    """One filesystem node discovered during traversal."""

    rel_path: str  # POSIX separators, "" for the root
    abs_path: str
    is_dir: bool
    children: List[str] = field(default_factory=list)  # Raw, unsorted child names

    @property
    def name(self) -> str:
        return self.rel_path.rsplit('/', 1)[-1] if self.rel_path else os.path.basename(self.abs_path)

    @property
    def depth(self) -> int:
        """Root is depth 0, each path segment adds one."""
        return len(self.rel_path.split('/')) if self.rel_path else 0

    @property
    def parent(self) -> Optional[str]:
        """Relative path of the containing directory, None for the root."""
        if not self.rel_path:
            return None
        return self.rel_path.rsplit('/', 1)[0] if '/' in self.rel_path else ""


@dataclass
class AnalysisResult:
    """Heuristic analysis of a single file."""

    language: str
    line_count: int
    function_count: int
    branch_count: int
    imports: List[str] = field(default_factory=list)
    smells: List[str] = field(default_factory=list)
    has_imports: bool = False
    has_exports: bool = False
    todo_count: int = 0
    header_suggestion: str = ""

    @property
    def cyclomatic(self) -> int:
        """Crude complexity proxy: one plus the number of branch points."""
        return 1 + self.branch_count

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['cyclomatic'] = self.cyclomatic
        return data


@dataclass(frozen=True)
class ByteBudget:
    """
    Tracks bytes emitted into the snapshot document.

    Immutable: each append returns a new budget, so the running total is
    passed explicitly through the content pass instead of being shared state.
    """

    max_bytes: Optional[int] = None  # None = unlimited
    used_bytes: int = 0

    @property
    def exceeded(self) -> bool:
        """Check whether the running total is already over the cap."""
        return self.max_bytes is not None and self.used_bytes > self.max_bytes

    @property
    def available_bytes(self) -> Optional[int]:
        if self.max_bytes is None:
            return None
        return max(0, self.max_bytes - self.used_bytes)

    def can_fit(self, size: int) -> bool:
        """Check if ``size`` more bytes stay within the cap."""
        return self.max_bytes is None or self.used_bytes + size <= self.max_bytes

    def add(self, size: int) -> "ByteBudget":
        """Return a budget with ``size`` more bytes used."""
        return ByteBudget(max_bytes=self.max_bytes, used_bytes=self.used_bytes + size)
