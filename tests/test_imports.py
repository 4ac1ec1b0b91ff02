"""Test that all modules can be imported successfully."""


def test_core_imports():
    """Test core module imports."""
    from dir2md.core import Config, Entry, AnalysisResult, ByteBudget, FileAnalyzer, TokenCounter

    config = Config(root="/tmp")
    assert config.max_file_size == 500_000

    entry = Entry(rel_path="src/main.py", abs_path="/tmp/src/main.py", is_dir=False)
    assert entry.name == "main.py"

    assert hasattr(FileAnalyzer(), 'analyze')
    assert hasattr(TokenCounter, 'count')
    assert ByteBudget().can_fit(10**9)
    assert AnalysisResult(language="", line_count=0, function_count=0, branch_count=0).cyclomatic == 1


def test_utils_imports():
    """Test utils module imports."""
    from dir2md.utils import PathFilter, EncodingDetector, PathUtils, TreeRenderer

    assert hasattr(PathFilter([]), 'is_ignored')
    assert hasattr(EncodingDetector(), 'decode_bytes')
    assert PathUtils.normalize_path("a\\b") == "a/b"
    assert TreeRenderer("root").render({}) == "root"


def test_package_exports():
    """Test top-level package exports."""
    import dir2md

    assert callable(dir2md.generate_markdown)
    assert issubclass(dir2md.InvalidRootError, ValueError)
    assert dir2md.__version__
