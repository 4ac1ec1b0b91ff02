import pytest
import tempfile
import shutil
from pathlib import Path


@pytest.fixture
def temp_workspace():
    """Create a temporary directory for test files."""
    temp_dir = tempfile.mkdtemp()
    yield Path(temp_dir).resolve()
    shutil.rmtree(temp_dir)


@pytest.fixture
def sample_repo(temp_workspace):
    """Create a sample project structure for testing."""
    repo_root = temp_workspace / "sample_repo"
    repo_root.mkdir()

    # Create directory structure
    (repo_root / "src").mkdir()
    (repo_root / "src" / "utils").mkdir()
    (repo_root / "tests").mkdir()
    (repo_root / "Docs").mkdir()
    (repo_root / "node_modules").mkdir()
    (repo_root / "node_modules" / "left-pad").mkdir()

    # Create files
    (repo_root / "README.md").write_text("# Sample Repository\n\nTest repository for dir2md\n")
    (repo_root / "setup.py").write_text("from setuptools import setup\n\nsetup(name='sample')\n")
    (repo_root / "src" / "__init__.py").write_text("")
    (repo_root / "src" / "main.py").write_text("def main():\n    print('Hello, World!')\n")
    (repo_root / "src" / "utils" / "helpers.py").write_text("def helper():\n    return 42\n")
    (repo_root / "tests" / "test_main.py").write_text("def test_main():\n    assert True\n")
    (repo_root / "Docs" / "guide.md").write_text("# Guide\n")
    (repo_root / "node_modules" / "left-pad" / "index.js").write_text("module.exports = 1;\n")
    (repo_root / ".gitignore").write_text("# dependencies\nnode_modules\n\n*.log\n")

    # Create binary file
    (repo_root / "image.png").write_bytes(b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR')

    return repo_root
