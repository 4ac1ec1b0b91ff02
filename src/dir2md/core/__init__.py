"""Core components for dir2md."""

from .models import Config, Entry, AnalysisResult, ByteBudget
from .file_analyzer import FileAnalyzer
from .tokenizer import TokenCounter

__all__ = [
    "Config",
    "Entry",
    "AnalysisResult",
    "ByteBudget",
    "FileAnalyzer",
    "TokenCounter",
]
