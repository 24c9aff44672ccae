"""Git change collection for gitmessage.

This package provides working tree inspection with:
- exceptions: GitError, NoWorkspaceError, CollectionError, NoChangesError
- runner: _run_git_command, get_repo_root
- models: ChangeSet, FileEntry, Enumeration
- status: enumeration strategies, is_tracked, _get_staged_files_list
- diff: get_staged_diff, get_unstaged_diff
- collector: collect_changes, DEFAULT_STRATEGIES
"""

# Exceptions
from gitmessage.git.exceptions import (
    GitError,
    NoWorkspaceError,
    CollectionError,
    NoChangesError,
)

# Runner utilities
from gitmessage.git.runner import (
    _run_git_command,
    get_repo_root,
)

# Data structures
from gitmessage.git.models import (
    ChangeSet,
    Enumeration,
    FileEntry,
)

# Status utilities
from gitmessage.git.status import (
    EnumerationStrategy,
    LsFilesStrategy,
    StatusPorcelainStrategy,
    is_tracked,
    parse_porcelain_status,
    _get_staged_files_list,
)

# Diff utilities
from gitmessage.git.diff import (
    get_staged_diff,
    get_unstaged_diff,
)

# Collector
from gitmessage.git.collector import (
    DEFAULT_STRATEGIES,
    collect_changes,
)


__all__ = [
    # Exceptions
    "GitError",
    "NoWorkspaceError",
    "CollectionError",
    "NoChangesError",
    # Runner
    "_run_git_command",
    "get_repo_root",
    # Models
    "ChangeSet",
    "Enumeration",
    "FileEntry",
    # Status
    "EnumerationStrategy",
    "LsFilesStrategy",
    "StatusPorcelainStrategy",
    "is_tracked",
    "parse_porcelain_status",
    "_get_staged_files_list",
    # Diff
    "get_staged_diff",
    "get_unstaged_diff",
    # Collector
    "DEFAULT_STRATEGIES",
    "collect_changes",
]
