"""Utility modules for dir2md."""

from .file_filter import PathFilter, load_ignore_patterns
from .encodings import EncodingDetector
from .path_utils import PathUtils
from .tree_builder import TreeRenderer

__all__ = ["PathFilter", "load_ignore_patterns", "EncodingDetector", "PathUtils", "TreeRenderer"]
