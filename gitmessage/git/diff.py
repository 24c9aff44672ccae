"""Git diff utilities.

Contains:
- get_staged_diff: Get the diff of changes staged for commit
- get_unstaged_diff: Get the diff of tracked changes not yet staged
"""

from pathlib import Path

from gitmessage.git.runner import _run_git_command


def get_staged_diff(repo_root: Path) -> str:
    """Get the unified diff of the staged changes.

    Args:
        repo_root: Root of the working tree.

    Returns:
        The staged diff string.

    Raises:
        GitError: If git fails.
    """
    return _run_git_command(["diff", "--staged"], cwd=repo_root)


def get_unstaged_diff(repo_root: Path) -> str:
    """Get the unified diff of modified tracked files against the index.

    Args:
        repo_root: Root of the working tree.

    Returns:
        The unstaged diff string.

    Raises:
        GitError: If git fails.
    """
    return _run_git_command(["diff"], cwd=repo_root)
