import os
import dataclasses

import pytest
from dir2md.core.models import Config, Entry, AnalysisResult, ByteBudget
from dir2md.core.languages import DEFAULT_TEXT_EXTS


class TestConfig:
    def test_default_config(self):
        config = Config(root="/project")
        assert config.include_contents is False
        assert config.analyze is False
        assert config.max_depth is None
        assert config.max_file_size == 500_000
        assert config.max_lines_per_file == 1200
        assert config.max_bytes_per_file == 200_000
        assert config.max_total_bytes == 5_000_000
        assert config.ext_whitelist == DEFAULT_TEXT_EXTS
        assert config.exclude_globs == ()

    def test_config_is_immutable(self):
        config = Config(root="/project")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.max_depth = 3

    def test_negative_limits_rejected(self):
        with pytest.raises(ValueError, match="max_depth"):
            Config(root="/project", max_depth=-1)
        with pytest.raises(ValueError, match="max_total_bytes"):
            Config(root="/project", max_total_bytes=-5)

    def test_from_options_normalizes_input(self, tmp_path):
        config = Config.from_options(
            str(tmp_path),
            ext_whitelist="PY, js,.Md,dockerfile",
            exclude_globs="dist/**, *.lock,",
            include_contents=True,
        )
        assert config.root == os.path.abspath(str(tmp_path))
        assert config.ext_whitelist == frozenset({".py", ".js", ".md", "Dockerfile"})
        assert config.exclude_globs == ("dist/**", "*.lock")
        assert config.include_contents is True

    def test_from_options_defaults_whitelist(self, tmp_path):
        config = Config.from_options(str(tmp_path))
        assert config.ext_whitelist == DEFAULT_TEXT_EXTS

    def test_limit_treats_zero_as_disabled(self):
        config = Config(root="/project", max_lines_per_file=0, max_bytes_per_file=None)
        assert config.limit('max_lines_per_file') is None
        assert config.limit('max_bytes_per_file') is None
        assert config.limit('max_file_size') == 500_000


class TestEntry:
    def test_file_entry(self):
        entry = Entry(rel_path="src/utils/helpers.py", abs_path="/p/src/utils/helpers.py", is_dir=False)
        assert entry.name == "helpers.py"
        assert entry.depth == 3
        assert entry.parent == "src/utils"

    def test_top_level_entry(self):
        entry = Entry(rel_path="README.md", abs_path="/p/README.md", is_dir=False)
        assert entry.depth == 1
        assert entry.parent == ""

    def test_root_entry(self):
        entry = Entry(rel_path="", abs_path="/home/user/project", is_dir=True, children=["b", "a"])
        assert entry.name == "project"
        assert entry.depth == 0
        assert entry.parent is None
        assert entry.children == ["b", "a"]


class TestAnalysisResult:
    def test_cyclomatic_proxy(self):
        result = AnalysisResult(language="python", line_count=10, function_count=1, branch_count=4)
        assert result.cyclomatic == 5

    def test_to_dict_includes_cyclomatic(self):
        result = AnalysisResult(language="go", line_count=3, function_count=1, branch_count=0)
        data = result.to_dict()
        assert data["cyclomatic"] == 1
        assert data["language"] == "go"
        assert data["imports"] == []


class TestByteBudget:
    def test_unlimited_budget(self):
        budget = ByteBudget()
        assert budget.can_fit(10**12)
        assert budget.exceeded is False
        assert budget.available_bytes is None

    def test_add_returns_new_budget(self):
        budget = ByteBudget(max_bytes=100)
        after = budget.add(40)
        assert budget.used_bytes == 0
        assert after.used_bytes == 40
        assert after.available_bytes == 60

    def test_can_fit_boundary(self):
        budget = ByteBudget(max_bytes=100, used_bytes=60)
        assert budget.can_fit(40) is True
        assert budget.can_fit(41) is False

    def test_exceeded(self):
        assert ByteBudget(max_bytes=100, used_bytes=100).exceeded is False
        assert ByteBudget(max_bytes=100, used_bytes=101).exceeded is True
