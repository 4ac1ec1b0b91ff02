"""
File analysis module for dir2md.

This module runs lightweight, regex-based checks over a file's text:
- Language classification from the extension table
- Size and structure metrics (LOC, function and branch counts)
- Import extraction from the head of the file
- Smell detection (stray TODOs, debug output, embedded secrets, large files)

These are heuristics, not a parser. Counts and flags are best-effort.
"""

import re
from typing import List, Optional, Pattern

from .languages import language_for
from .models import AnalysisResult

IMPORT_SCAN_LINES = 50
MAX_IMPORTS = 10
LARGE_FILE_LINES = 1200

JS_FAMILY = 'js'
PYTHON_FAMILY = 'python'
GO_FAMILY = 'go'
SHELL_FAMILY = 'shell'

_FAMILIES = {
    'javascript': JS_FAMILY,
    'typescript': JS_FAMILY,
    'tsx': JS_FAMILY,
    'jsx': JS_FAMILY,
    'python': PYTHON_FAMILY,
    'go': GO_FAMILY,
    'bash': SHELL_FAMILY,
}

_IMPORT_PRESENCE = {
    JS_FAMILY: re.compile(
        r'^\s*(?:import\s.+from\s+[\'"].+[\'"];?|import\s+[\'"].+[\'"];?'
        r'|(?:const|let|var)\s+\w+\s*=\s*require\([\'"].+[\'"]\))',
        re.M),
    PYTHON_FAMILY: re.compile(r'^\s*(?:from\s+[\w.]+\s+import\s+.+|import\s+\w+(?:\.\w+)*)', re.M),
    GO_FAMILY: re.compile(r'^\s*import\s*(?:\(|(?:\w+\s+)?")', re.M),
    SHELL_FAMILY: re.compile(r'^\s*(?:source|\.)\s+\S+', re.M),
}

_EXPORT_PRESENCE = {
    JS_FAMILY: re.compile(r'\bexport\s+(?:default\s+)?(?:class|function|const|let|var|async|\{)', re.M),
    # Top-level public def/class
    PYTHON_FAMILY: re.compile(r'^(?:async\s+def|def|class)\s+[A-Za-z]\w*', re.M),
    # Exported (capitalized) functions, including methods
    GO_FAMILY: re.compile(r'\bfunc\s+(?:\([^)]*\)\s*)?[A-Z]\w*\s*\(', re.M),
    SHELL_FAMILY: re.compile(r'^\s*export\s+\w+', re.M),
}

_FUNCTION_DEFS = {
    JS_FAMILY: re.compile(r'\bfunction\b|=>\s*\('),
    PYTHON_FAMILY: re.compile(r'^\s*(?:async\s+)?def\s+\w+\s*\(', re.M),
    GO_FAMILY: re.compile(r'\bfunc\b\s*(?:\([^)]*\)\s*)?\w+\s*\('),
    SHELL_FAMILY: re.compile(r'^\s*(?:function\s+[\w-]+|[\w-]+\s*\(\)\s*\{)', re.M),
}
_GENERIC_FUNCTION_DEFS = re.compile(r'\bfunction\b|\bdef\b|\bproc\b')

_BRANCHES = re.compile(r'\b(?:if|else if|elif|switch|case|for|while|catch|except)\b')
_TODOS = re.compile(r'\b(?:TODO|FIXME|HACK|BUG)\b')
_CONSOLE = re.compile(r'(?:^|\s)console\.', re.M)
_PRINT = re.compile(r'^\s*print\(', re.M)
_SECRET_ASSIGNMENT = re.compile(
    r'(?:(?:AWS|AZURE|GCP|GOOGLE|OPENAI)[\w\-]*_?(?:KEY|SECRET|TOKEN)|secret_key|api[_-]?key|access[_-]?key)'
    r'\s*[:=]\s*[\'"][A-Za-z0-9/+\-_=.:]{12,}[\'"]',
    re.I)
_PRIVATE_KEY = re.compile(r'-----BEGIN (?:RSA|EC|OPENSSH) PRIVATE KEY-----')

_JS_IMPORT_FROM = re.compile(r'import\s+.+?from\s+[\'"](.+?)[\'"]')
_JS_REQUIRE = re.compile(r'require\([\'"](.+?)[\'"]\)')
_PY_IMPORT = re.compile(r'^\s*(?:from\s+([\w.]+)\s+import|import\s+([\w.]+))', re.M)
_GO_IMPORT_BLOCK = re.compile(r'import\s*\(([^)]+)\)')
_GO_IMPORT_SINGLE = re.compile(r'^\s*import\s+(?:\w+\s+)?"(.*?)"', re.M)
_QUOTED = re.compile(r'"(.*?)"')
_SHELL_SOURCE = re.compile(r'^\s*(?:source|\.)\s+[\'"]?([^\s\'";]+)', re.M)

_LINE_BREAK = re.compile(r'\r?\n')


def split_lines(text: str) -> List[str]:
    """
    Split text into physical lines on ``\\n`` or ``\\r\\n``.

    A trailing line break terminates the last line rather than starting an
    empty one, so ``"a\\nb\\n"`` is two lines. Empty text has no lines.
    """
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def language_family(language: str) -> Optional[str]:
    """Map a language identifier to its heuristic family, None when generic."""
    return _FAMILIES.get(language)


def _count(pattern: Pattern, text: str) -> int:
    return sum(1 for _ in pattern.finditer(text))


def _unique(items: List[str], limit: int = MAX_IMPORTS) -> List[str]:
    return list(dict.fromkeys(item for item in items if item))[:limit]


class FileAnalyzer:
    """Heuristic per-file analysis. Stateless; safe to share across runs."""

    def analyze(self, rel_path: str, content: str) -> AnalysisResult:
        """
        Analyze a file's full, untruncated text.

        Args:
            rel_path: Path relative to the snapshot root, used for the language
                lookup and in the suggested header.
            content: The complete decoded file text.

        Returns:
            AnalysisResult with metrics, imports, smells and a header template.
        """
        language = language_for(rel_path)
        family = language_family(language)
        lines = split_lines(content)
        line_count = len(lines)

        import_re = _IMPORT_PRESENCE.get(family)
        export_re = _EXPORT_PRESENCE.get(family)
        function_re = _FUNCTION_DEFS.get(family, _GENERIC_FUNCTION_DEFS)

        branch_count = _count(_BRANCHES, content)
        todo_count = _count(_TODOS, content)

        smells = []
        if todo_count:
            smells.append(f"Has {todo_count} TODO/FIXME/HACK/BUG tags")
        if family == JS_FAMILY and _CONSOLE.search(content):
            smells.append("Uses console.* (consider a logger)")
        if family == PYTHON_FAMILY and _PRINT.search(content):
            smells.append("Uses print() (consider a logger)")
        if self.has_secrets(content):
            smells.append("⚠️ Possible secrets in file")
        if line_count > LARGE_FILE_LINES:
            smells.append(f"Large file ({line_count} LOC)")

        head = "\n".join(lines[:IMPORT_SCAN_LINES])

        return AnalysisResult(
            language=language,
            line_count=line_count,
            function_count=_count(function_re, content),
            branch_count=branch_count,
            imports=self.extract_imports(family, head),
            smells=smells,
            has_imports=bool(import_re and import_re.search(content)),
            has_exports=bool(export_re and export_re.search(content)),
            todo_count=todo_count,
            header_suggestion=self.header_suggestion(family, rel_path),
        )

    @staticmethod
    def has_secrets(content: str) -> bool:
        """Check for credential-looking assignments or PEM private key headers."""
        return bool(_SECRET_ASSIGNMENT.search(content) or _PRIVATE_KEY.search(content))

    @staticmethod
    def extract_imports(family: Optional[str], head: str) -> List[str]:
        """
        Extract imported module names from the head of a file.

        Returns:
            Up to ten unique names in order of appearance.
        """
        if family == JS_FAMILY:
            found = sorted(
                [(m.start(), m.group(1)) for m in _JS_IMPORT_FROM.finditer(head)] +
                [(m.start(), m.group(1)) for m in _JS_REQUIRE.finditer(head)]
            )
            return _unique([name for _, name in found])

        if family == PYTHON_FAMILY:
            return _unique([m.group(1) or m.group(2) for m in _PY_IMPORT.finditer(head)])

        if family == GO_FAMILY:
            block = _GO_IMPORT_BLOCK.search(head)
            if block:
                return _unique(_QUOTED.findall(block.group(1)))
            return _unique(_GO_IMPORT_SINGLE.findall(head))

        if family == SHELL_FAMILY:
            return _unique(_SHELL_SOURCE.findall(head))

        return []

    @staticmethod
    def header_suggestion(family: Optional[str], rel_path: str) -> str:
        """Build a header-comment template in the file's comment syntax."""
        if family == JS_FAMILY:
            return "\n".join([
                "/**",
                f" * File: {rel_path}",
                " * Purpose: …",
                " * Key exports: …",
                " * Notes: …",
                " */",
            ])
        if family == PYTHON_FAMILY:
            return "\n".join([
                '"""',
                f"File: {rel_path}",
                "Purpose: …",
                "Key functions/classes: …",
                "Notes: …",
                '"""',
            ])
        if family == GO_FAMILY:
            return "\n".join([
                f"// File: {rel_path}",
                "// Purpose: …",
                "// Key functions: …",
                "// Notes: …",
            ])
        if family == SHELL_FAMILY:
            return "\n".join([
                f"# File: {rel_path}",
                "# Purpose: …",
                "# Key functions: …",
                "# Notes: …",
            ])
        return f"# File: {rel_path}\n# Purpose: …\n# Notes: …"


def format_analysis(result: AnalysisResult) -> str:
    """Render an analysis result as the markdown block placed above a file's contents."""
    block = "**Analysis**\n\n"
    block += f"- Language: {result.language or 'unknown'}\n"
    block += f"- LOC: {result.line_count}\n"
    block += (f"- Functions: {result.function_count} · Branch points: {result.branch_count}"
              f" · Complexity≈ {result.cyclomatic}\n")
    if result.imports:
        block += f"- Imports: {', '.join(result.imports)}\n"
    block += (f"- Imports present: {'yes' if result.has_imports else 'no'}"
              f" · Exports/API: {'yes' if result.has_exports else 'no'}\n")
    if result.smells:
        block += f"- Flags: {'; '.join(result.smells)}\n"
    if result.todo_count:
        block += f"- TODO/FIXME count: {result.todo_count}\n"
    block += "- Suggested header:\n\n"
    block += f"```{result.language}\n{result.header_suggestion}\n```\n\n"
    return block
