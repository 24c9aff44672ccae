"""Git command runner and repository utilities.

Contains:
- _run_git_command: Run a git command and return its output
- get_repo_root: Get the root directory of the working tree containing a path
"""

import subprocess
from pathlib import Path
from typing import Optional, Union

from gitmessage.git.exceptions import GitError, NoWorkspaceError


def _run_git_command(args: list[str], cwd: Optional[Union[str, Path]] = None) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run git in. Defaults to the process working directory.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            check=True,
            cwd=cwd,
            encoding="utf-8",
            errors="replace",
        )
        return result.stdout.rstrip()
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise GitError(f"Git command failed: git {' '.join(args)}\n{stderr}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")
    except NotADirectoryError:
        raise GitError(f"Not a directory: {cwd}")


def get_repo_root(path: Optional[Union[str, Path]] = None) -> Path:
    """Get the root directory of the git working tree containing ``path``.

    Args:
        path: Any directory inside the working tree. Defaults to the current directory.

    Returns:
        Path to the repository root.

    Raises:
        NoWorkspaceError: If ``path`` is missing or not inside a git working tree.
    """
    if path is not None and not Path(path).is_dir():
        raise NoWorkspaceError(f"No workspace folder found at {path}.")

    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], cwd=path)
    except GitError:
        raise NoWorkspaceError("Not in a git repository. Please run this command from within a git repo.")

    if not root:
        # Inside .git or a bare repository
        raise NoWorkspaceError("No working tree found. Please run this command from within a git repo.")
    return Path(root)
