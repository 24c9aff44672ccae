"""Working tree enumeration utilities.

Contains:
- EnumerationStrategy: Base class for the ways changed paths are listed
- StatusPorcelainStrategy: One-pass listing from git status (primary)
- LsFilesStrategy: Separate tracked/untracked listings (fallback)
- is_tracked: Probe whether a path is present in the index
- _get_staged_files_list: Get list of staged file paths
"""

from abc import ABC, abstractmethod
from pathlib import Path

from gitmessage.git.exceptions import GitError
from gitmessage.git.models import Enumeration, FileEntry
from gitmessage.git.runner import _run_git_command


def _unquote_path(path: str) -> str:
    """Undo git's C-style quoting of paths with unusual characters."""
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    inner = path[1:-1]
    try:
        # Octal escapes are raw UTF-8 bytes
        raw = inner.encode("ascii").decode("unicode_escape").encode("latin-1")
        return raw.decode("utf-8")
    except UnicodeError:
        return inner


def _split_paths(output: str) -> list[str]:
    return [_unquote_path(line) for line in output.split("\n") if line.strip()]


def parse_porcelain_status(status: str) -> list[FileEntry]:
    """Parse ``git status --porcelain=v1`` output into file entries.

    Untracked entries (``??``) are guessed as new, everything else as
    modified. Renames keep the destination path.

    Args:
        status: Git status in porcelain v1 format.

    Returns:
        Entries in the order git reported them.
    """
    entries = []
    seen = set()

    for line in status.split("\n"):
        if not line or line.startswith("##"):
            continue
        if len(line) < 4:
            continue

        code = line[:2]
        filename = line[3:]

        # Handle renames: "R  old -> new"
        if " -> " in filename:
            filename = filename.split(" -> ", 1)[1]

        path = _unquote_path(filename)
        if path in seen:
            continue
        seen.add(path)
        entries.append(FileEntry(path=path, is_new=(code == "??")))

    return entries


class EnumerationStrategy(ABC):
    """A way of listing the changed paths of a working tree."""

    name: str = "base"

    @abstractmethod
    def enumerate(self, repo_root: Path) -> Enumeration:
        """List changed and untracked paths.

        Args:
            repo_root: Root of the working tree.

        Returns:
            The enumeration result.

        Raises:
            GitError: If the strategy could not list anything.
        """
        pass


class StatusPorcelainStrategy(EnumerationStrategy):
    """List every changed tracked path and untracked path in one pass.

    The staged/unstaged status codes are only a first guess; the collector
    confirms each path against the index.
    """

    name = "status-porcelain"

    def enumerate(self, repo_root: Path) -> Enumeration:
        output = _run_git_command(
            ["status", "--porcelain=v1", "--untracked-files=all"],
            cwd=repo_root,
        )
        return Enumeration(
            entries=tuple(parse_porcelain_status(output)),
            needs_index_probe=True,
        )


class LsFilesStrategy(EnumerationStrategy):
    """List modified tracked paths and untracked paths with two queries.

    A failing query contributes no paths. Only when both fail does the
    strategy itself fail.
    """

    name = "ls-files"

    def enumerate(self, repo_root: Path) -> Enumeration:
        failures = []

        try:
            modified = _split_paths(_run_git_command(["ls-files", "--modified"], cwd=repo_root))
        except GitError as e:
            failures.append(str(e))
            modified = []

        try:
            untracked = _split_paths(
                _run_git_command(["ls-files", "--others", "--exclude-standard"], cwd=repo_root)
            )
        except GitError as e:
            failures.append(str(e))
            untracked = []

        if len(failures) == 2:
            raise GitError("Could not list modified or untracked files:\n" + "\n".join(failures))

        entries = [FileEntry(path=p, is_new=False) for p in dict.fromkeys(modified)]
        known = {entry.path for entry in entries}
        entries.extend(
            FileEntry(path=p, is_new=True) for p in dict.fromkeys(untracked) if p not in known
        )
        return Enumeration(entries=tuple(entries), needs_index_probe=False)


def is_tracked(path: str, repo_root: Path) -> bool:
    """Check whether ``path`` is present in the index.

    Args:
        path: Path relative to the repository root.
        repo_root: Root of the working tree.

    Returns:
        True if git knows the path, False otherwise.
    """
    try:
        _run_git_command(["ls-files", "--error-unmatch", "--", path], cwd=repo_root)
        return True
    except GitError:
        return False


def _get_staged_files_list(repo_root: Path) -> list[str]:
    """Get list of staged file paths.

    Returns:
        List of staged file paths.
    """
    output = _run_git_command(["diff", "--staged", "--name-only"], cwd=repo_root)
    return _split_paths(output)
