"""Tests for gitmessage.git.collector module."""

import shutil
import subprocess

import pytest

from gitmessage.git import (
    ChangeSet,
    CollectionError,
    Enumeration,
    EnumerationStrategy,
    FileEntry,
    GitError,
    collect_changes,
)


class StubStrategy(EnumerationStrategy):
    """Strategy returning a fixed enumeration, or failing."""

    def __init__(self, name, enumeration=None):
        self.name = name
        self.enumeration = enumeration
        self.calls = 0

    def enumerate(self, repo_root):
        self.calls += 1
        if self.enumeration is None:
            raise GitError(f"{self.name} failed")
        return self.enumeration


class TestCollectChanges:
    """Tests for collect_changes with mocked git."""

    def test_staged_and_untracked(self, staged_and_untracked, mock_repo_root, sample_diff):
        """Staged a.ts plus untracked b.ts."""
        change_set = collect_changes(mock_repo_root)

        assert change_set == ChangeSet(
            diff_text=sample_diff,
            modified_files=("a.ts",),
            new_files=("b.ts",),
        )

    def test_index_probe_overrides_status_guess(self, fake_git, mock_repo_root):
        """Index membership decides, whatever the status code says."""
        (mock_repo_root / "a.ts").write_text("a")
        (mock_repo_root / "c.ts").write_text("c")
        (mock_repo_root / "d.ts").write_text("d")
        fake_git.responses.update({
            ("status", "--porcelain=v1", "--untracked-files=all"): "?? a.ts\nA  c.ts\n?? d.ts\n",
            ("ls-files", "--error-unmatch", "--", "a.ts"): "a.ts",
            ("ls-files", "--error-unmatch", "--", "c.ts"): "c.ts",
            ("diff", "--staged", "--name-only"): "c.ts",
            ("diff", "--staged"): "diff --git a/c.ts b/c.ts",
        })

        change_set = collect_changes(mock_repo_root)

        assert change_set.modified_files == ("a.ts", "c.ts")
        assert change_set.new_files == ("d.ts",)

    def test_deleted_path_is_not_new(self, fake_git, mock_repo_root):
        """A path gone from the index and the disk is a modification."""
        fake_git.responses.update({
            ("status", "--porcelain=v1", "--untracked-files=all"): "D  old.ts\n",
            ("diff", "--staged", "--name-only"): "old.ts",
            ("diff", "--staged"): "diff --git a/old.ts b/old.ts\ndeleted file mode 100644",
        })

        change_set = collect_changes(mock_repo_root)

        assert change_set.modified_files == ("old.ts",)
        assert change_set.new_files == ()

    def test_unstaged_diff_when_nothing_staged(self, fake_git, mock_repo_root):
        """Without staged files the unstaged diff is used."""
        fake_git.responses.update({
            ("status", "--porcelain=v1", "--untracked-files=all"): " M a.ts\n",
            ("ls-files", "--error-unmatch", "--", "a.ts"): "a.ts",
            ("diff", "--staged", "--name-only"): "",
            ("diff",): "unstaged diff",
        })

        change_set = collect_changes(mock_repo_root)

        assert change_set.diff_text == "unstaged diff"
        assert ("diff", "--staged") not in fake_git.calls

    def test_no_diff_when_only_new_files(self, fake_git, mock_repo_root):
        """Only untracked files means no diff at all."""
        (mock_repo_root / "b.ts").write_text("b")
        (mock_repo_root / "c.ts").write_text("c")
        fake_git.responses.update({
            ("status", "--porcelain=v1", "--untracked-files=all"): "?? b.ts\n?? c.ts\n",
            ("diff", "--staged", "--name-only"): "",
        })

        change_set = collect_changes(mock_repo_root)

        assert change_set == ChangeSet(diff_text="", modified_files=(), new_files=("b.ts", "c.ts"))
        assert ("diff",) not in fake_git.calls

    def test_clean_tree(self, fake_git, mock_repo_root):
        """A clean tree gives an empty ChangeSet."""
        fake_git.responses.update({
            ("status", "--porcelain=v1", "--untracked-files=all"): "",
            ("diff", "--staged", "--name-only"): "",
        })

        change_set = collect_changes(mock_repo_root)

        assert change_set == ChangeSet()
        assert change_set.is_empty

    def test_falls_back_to_ls_files(self, fake_git, mock_repo_root):
        """When git status fails the two ls-files queries are used as-is."""
        fake_git.responses.update({
            ("ls-files", "--modified"): "a.ts\n",
            ("ls-files", "--others", "--exclude-standard"): "b.ts\n",
            ("diff", "--staged", "--name-only"): "",
            ("diff",): "diff of a",
        })

        change_set = collect_changes(mock_repo_root)

        assert change_set == ChangeSet(diff_text="diff of a", modified_files=("a.ts",), new_files=("b.ts",))
        # Fallback classification is authoritative: no index probes
        assert not [call for call in fake_git.calls if "--error-unmatch" in call]

    def test_enumeration_failure_is_not_fatal(self, fake_git, mock_repo_root):
        """Both enumerations failing still yields staged diff."""
        fake_git.responses.update({
            ("diff", "--staged", "--name-only"): "a.ts",
            ("diff", "--staged"): "staged diff",
        })

        change_set = collect_changes(mock_repo_root)

        assert change_set == ChangeSet(diff_text="staged diff")

    def test_diff_failure_leaves_diff_empty(self, fake_git, mock_repo_root):
        """A failing diff command degrades to an empty diff."""
        fake_git.responses.update({
            ("status", "--porcelain=v1", "--untracked-files=all"): "M  a.ts\n",
            ("ls-files", "--error-unmatch", "--", "a.ts"): "a.ts",
            ("diff", "--staged", "--name-only"): "a.ts",
        })

        change_set = collect_changes(mock_repo_root)

        assert change_set.diff_text == ""
        assert change_set.modified_files == ("a.ts",)

    def test_every_query_failing_raises(self, fake_git, mock_repo_root):
        """Collection fails only when nothing could be read."""
        with pytest.raises(CollectionError):
            collect_changes(mock_repo_root)

    def test_strategies_tried_in_order(self, fake_git, mock_repo_root):
        """The first successful strategy wins."""
        fake_git.responses[("diff", "--staged", "--name-only")] = ""
        failing = StubStrategy("first")
        winning = StubStrategy(
            "second",
            Enumeration(entries=(FileEntry("x.py", is_new=True),), needs_index_probe=False),
        )
        unused = StubStrategy("third", Enumeration())

        change_set = collect_changes(mock_repo_root, strategies=[failing, winning, unused])

        assert change_set.new_files == ("x.py",)
        assert (failing.calls, winning.calls, unused.calls) == (1, 1, 0)

    def test_collect_twice_is_equal(self, staged_and_untracked, mock_repo_root):
        """Collecting an unchanged tree twice gives equal results."""
        assert collect_changes(mock_repo_root) == collect_changes(mock_repo_root)


def _git(repo, *args):
    subprocess.run(
        ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com",
         "-c", "commit.gpgsign=false", *args],
        cwd=repo,
        check=True,
        capture_output=True,
    )


@pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
class TestCollectChangesRealRepo:
    """Tests for collect_changes against a real repository."""

    @pytest.fixture
    def repo(self, temp_dir):
        _git(temp_dir, "init", "-q")
        (temp_dir / "a.ts").write_text("export const a = 1;\n")
        _git(temp_dir, "add", "a.ts")
        _git(temp_dir, "commit", "-q", "-m", "init")
        return temp_dir

    def test_staged_modified_and_untracked(self, repo):
        """Staged a.ts plus untracked b.ts in a real working tree."""
        (repo / "a.ts").write_text("export const a = 2;\n")
        _git(repo, "add", "a.ts")
        (repo / "b.ts").write_text("export const b = 1;\n")

        change_set = collect_changes(repo)

        assert change_set.modified_files == ("a.ts",)
        assert change_set.new_files == ("b.ts",)
        assert "+export const a = 2;" in change_set.diff_text
        assert "b.ts" not in change_set.diff_text

    def test_unstaged_changes(self, repo):
        """Unstaged edits are described when nothing is staged."""
        (repo / "a.ts").write_text("export const a = 3;\n")

        change_set = collect_changes(repo)

        assert change_set.modified_files == ("a.ts",)
        assert "+export const a = 3;" in change_set.diff_text

    def test_ignored_files_are_skipped(self, repo):
        """Files matched by .gitignore are not new files."""
        (repo / ".gitignore").write_text("*.log\n")
        (repo / "debug.log").write_text("noise\n")

        change_set = collect_changes(repo)

        assert change_set.new_files == (".gitignore",)

    def test_clean_tree_is_empty(self, repo):
        """A clean working tree has nothing to describe."""
        assert collect_changes(repo).is_empty

    def test_idempotent(self, repo):
        """Two passes over an unchanged tree are equal."""
        (repo / "a.ts").write_text("export const a = 2;\n")
        (repo / "b.ts").write_text("export const b = 1;\n")

        assert collect_changes(repo) == collect_changes(repo)

    def test_staged_new_file_is_modified(self, repo):
        """A file added to the index is tracked, so it is not listed as new."""
        (repo / "c.ts").write_text("export const c = 1;\n")
        _git(repo, "add", "c.ts")

        change_set = collect_changes(repo)

        assert change_set.modified_files == ("c.ts",)
        assert change_set.new_files == ()
        assert "+export const c = 1;" in change_set.diff_text

    def test_staged_deletion_is_modified(self, repo):
        """A removed file is described by the diff, never as a new file."""
        _git(repo, "rm", "-q", "a.ts")

        change_set = collect_changes(repo)

        assert change_set.modified_files == ("a.ts",)
        assert change_set.new_files == ()
        assert "deleted file mode" in change_set.diff_text

    def test_unstaged_deletion_is_modified(self, repo):
        """A file deleted from disk but still in the index is modified."""
        (repo / "a.ts").unlink()

        change_set = collect_changes(repo)

        assert change_set.modified_files == ("a.ts",)
        assert change_set.new_files == ()

    def test_rename_lists_destination_as_modified(self, repo):
        """git mv reports the new path, which the index already knows."""
        _git(repo, "mv", "a.ts", "renamed.ts")

        change_set = collect_changes(repo)

        assert "renamed.ts" in change_set.modified_files
        assert change_set.new_files == ()
