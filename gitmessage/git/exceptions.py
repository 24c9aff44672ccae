"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- NoWorkspaceError: Raised when there is no working tree to inspect
- CollectionError: Raised when every git query of a collection pass failed
- NoChangesError: Raised when nothing is staged, modified or new
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class NoWorkspaceError(GitError):
    """Raised when the given path is not inside a git working tree."""

    pass


class CollectionError(GitError):
    """Raised when change collection failed at every fallback."""

    pass


class NoChangesError(GitError):
    """Raised when there is nothing to describe."""

    pass
