"""
Language classification tables for dir2md.

Maps file extensions to the language identifiers used both for fenced-block
tags and for choosing analysis heuristics. Read-only module state.
"""

import os
from typing import Dict, FrozenSet

DOCKERFILE = "Dockerfile"

EXT_LANG: Dict[str, str] = {
    ".js": "javascript", ".mjs": "javascript", ".cjs": "javascript",
    ".ts": "typescript", ".tsx": "tsx", ".jsx": "jsx",
    ".json": "json", ".yml": "yaml", ".yaml": "yaml", ".toml": "toml",
    ".md": "markdown", ".txt": "text",
    ".py": "python", ".rb": "ruby", ".php": "php",
    ".java": "java", ".kt": "kotlin", ".swift": "swift",
    ".c": "c", ".h": "c", ".cpp": "cpp", ".cc": "cpp", ".hpp": "cpp",
    ".cs": "csharp", ".go": "go", ".rs": "rust",
    ".sh": "bash", ".bat": "batch", ".ps1": "powershell",
    ".sql": "sql", ".ini": "ini", ".conf": "conf", ".env": "dotenv",
    ".html": "html", ".css": "css", ".scss": "scss",
    ".xml": "xml", ".vue": "vue", ".svelte": "svelte",
    ".lua": "lua", ".pl": "perl", ".r": "r",
    ".gradle": "groovy", ".groovy": "groovy",
    ".makefile": "makefile", ".mk": "makefile", ".cmake": "cmake",
    ".dockerfile": "dockerfile",
    DOCKERFILE: "dockerfile",
}

# Every dot-prefixed extension in the table, plus the literal Dockerfile name
DEFAULT_TEXT_EXTS: FrozenSet[str] = frozenset(
    {ext for ext in EXT_LANG if ext.startswith('.')} | {DOCKERFILE}
)


def is_dockerfile(path: str) -> bool:
    """Check whether the base name of ``path`` is ``Dockerfile`` in any case."""
    return os.path.basename(path).lower() == "dockerfile"


def extension_key(path: str) -> str:
    """
    Get the lookup key for a path: ``"Dockerfile"`` or its lowercase extension.

    Returns an empty string for files without an extension.
    """
    if is_dockerfile(path):
        return DOCKERFILE
    return os.path.splitext(path)[1].lower()


def language_for(path: str) -> str:
    """Get the language identifier for a path, or ``""`` when unknown."""
    return EXT_LANG.get(extension_key(path), "")
