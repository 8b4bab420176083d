"""Tests for repoman.core.tree - the file tree model.

Tests cover:
- Path normalization and file keys
- Top-level vs foldered files
- Nested folder construction in insertion order
- Risk index annotation
- Validation errors
"""

import pytest

from repoman.core.tree import FileTree, GitFile, file_key, normalize_path
from repoman.exceptions import InvalidAttributeError


class TestFileKey:
    """Tests for the color lookup key."""

    def test_extension_includes_dot(self):
        assert file_key("Program.cs") == ".cs"

    def test_last_extension_wins(self):
        assert file_key("archive.tar.gz") == ".gz"

    def test_extensionless_name_is_whole_name(self):
        assert file_key("CODEOWNERS") == "CODEOWNERS"

    def test_dotfile_is_whole_name(self):
        assert file_key(".gitignore") == ".gitignore"


class TestNormalizePath:
    """Tests for normalize_path."""

    def test_backslashes_become_slashes(self):
        assert normalize_path("src\\core\\a.py") == "src/core/a.py"

    def test_leading_dot_slash_stripped(self):
        assert normalize_path("./src/a.py") == "src/a.py"

    def test_leading_slash_stripped(self):
        assert normalize_path("/README.md") == "README.md"

    @pytest.mark.parametrize("bad", ["", "src//a.py", "src/", None])
    def test_malformed_paths_rejected(self, bad):
        with pytest.raises(InvalidAttributeError):
            normalize_path(bad)


class TestGitFile:
    """Tests for GitFile derived properties."""

    def test_nested_file_properties(self, commit_factory):
        git_file = GitFile("src/core/Program.cs", 100, (commit_factory(), commit_factory("bob")))
        assert git_file.name == "Program.cs"
        assert git_file.folder_path == "src/core"
        assert git_file.key == ".cs"
        assert git_file.commit_count == 2
        assert not git_file.is_top_level

    def test_top_level_file_properties(self):
        git_file = GitFile("README.md", 10)
        assert git_file.folder_path == ""
        assert git_file.is_top_level
        assert git_file.commit_count == 0
        assert git_file.risk_index == 0


class TestFileTree:
    """Tests for FileTree construction and queries."""

    def test_new_tree_is_empty(self):
        tree = FileTree()
        assert tree.is_empty
        assert len(tree) == 0
        assert tree.top_level_files() == []
        assert tree.foldered() == {}

    def test_top_level_and_foldered_partition(self, make_tree):
        tree = make_tree(("README.md", 50), ("src/Program.cs", 100), ("LICENSE", 10))

        assert [f.path for f in tree.top_level_files()] == ["README.md", "LICENSE"]
        assert list(tree.foldered()) == ["src"]
        assert [f.path for f in tree.foldered()["src"].files] == ["src/Program.cs"]

    def test_folders_keep_insertion_order(self, make_tree):
        tree = make_tree(("zeta/a.txt", 1), ("alpha/b.txt", 1), ("mid/c.txt", 1))
        assert list(tree.foldered()) == ["zeta", "alpha", "mid"]

    def test_nested_folders_built_once(self, make_tree):
        tree = make_tree(
            ("src/domain/console/Program.cs", 100),
            ("src/domain/Model.cs", 50),
            ("src/domain/console/App.cs", 20),
        )
        src = tree.foldered()["src"]
        domain = src.folders["domain"]
        console = domain.folders["console"]

        assert src.files == []
        assert not src.is_empty
        assert console.folders == {}
        assert domain.path == "src/domain"
        assert [f.name for f in domain.files] == ["Model.cs"]
        assert [f.name for f in console.files] == ["Program.cs", "App.cs"]
        assert console.path == "src/domain/console"

    def test_all_files_own_first_then_subfolders(self, make_tree):
        tree = make_tree(
            ("src/sub/deep.py", 1),
            ("src/top.py", 1),
        )
        assert [f.path for f in tree.foldered()["src"].all_files()] == ["src/top.py", "src/sub/deep.py"]

    def test_iteration_and_membership(self, make_tree):
        tree = make_tree(("a.py", 1), ("src/b.py", 2))
        assert [f.path for f in tree] == ["a.py", "src/b.py"]
        assert "src/b.py" in tree
        assert "missing.py" not in tree
        assert 42 not in tree
        assert tree.get("./src/b.py").size == 2
        assert tree.get("nope.py") is None

    def test_membership_normalizes_paths(self, make_tree):
        tree = make_tree(("a.py", 1), ("src/b.py", 2))
        assert "./src/b.py" in tree
        assert "src\\b.py" in tree
        assert "/a.py" in tree
        assert "src//b.py" not in tree
        assert "" not in tree

    def test_top_level_files_keep_insertion_order(self, make_tree):
        tree = make_tree(("b.txt", 1), ("src/x.py", 1), ("a.txt", 1))
        assert [f.path for f in tree.top_level_files()] == ["b.txt", "a.txt"]
        assert all(f.is_top_level for f in tree.top_level_files())

    def test_commits_are_stored_as_tuple(self, commit_factory):
        tree = FileTree()
        git_file = tree.add_file("a.py", 1, [commit_factory()])
        assert isinstance(git_file.commits, tuple)
        assert git_file.commit_count == 1

    def test_zero_size_allowed(self):
        tree = FileTree()
        assert tree.add_file("empty.txt", 0).size == 0

    def test_negative_size_rejected(self):
        tree = FileTree()
        with pytest.raises(InvalidAttributeError) as exc_info:
            tree.add_file("a.py", -1)
        assert exc_info.value.attribute == "size"
        assert exc_info.value.path == "a.py"
        assert tree.is_empty

    def test_malformed_path_rejected(self):
        with pytest.raises(InvalidAttributeError):
            FileTree().add_file("src//a.py", 1)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), None])
    def test_non_finite_size_rejected(self, bad):
        tree = FileTree()
        with pytest.raises(InvalidAttributeError) as exc_info:
            tree.add_file("a.py", bad)
        assert exc_info.value.attribute == "size"
        assert tree.is_empty


class TestRiskIndex:
    """Tests for FileTree.set_risk_index."""

    def test_sets_risk_on_file(self, make_tree):
        tree = make_tree(("src/a.py", 10))
        tree.set_risk_index("src/a.py", 12.5)
        assert tree.get("src/a.py").risk_index == 12.5

    def test_unknown_path_raises_key_error(self, make_tree):
        tree = make_tree(("src/a.py", 10))
        with pytest.raises(KeyError):
            tree.set_risk_index("src/b.py", 1)

    def test_negative_risk_rejected(self, make_tree):
        tree = make_tree(("src/a.py", 10))
        with pytest.raises(InvalidAttributeError):
            tree.set_risk_index("src/a.py", -0.5)
        assert tree.get("src/a.py").risk_index == 0

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_risk_rejected(self, make_tree, bad):
        tree = make_tree(("src/a.py", 10))
        with pytest.raises(InvalidAttributeError) as exc_info:
            tree.set_risk_index("src/a.py", bad)
        assert exc_info.value.attribute == "risk_index"
        assert tree.get("src/a.py").risk_index == 0
