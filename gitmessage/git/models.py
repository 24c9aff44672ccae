"""Data structures produced by a change collection pass."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ChangeSet:
    """Snapshot of what changed in a working tree.

    Attributes:
        diff_text: Unified diff of the staged changes, or of the unstaged
            changes when nothing is staged. Empty when there is no diff.
        modified_files: Tracked paths that changed, in detection order.
        new_files: Untracked paths, in detection order.
    """

    diff_text: str = ""
    modified_files: tuple[str, ...] = ()
    new_files: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        """True when there is neither a diff nor a new file to describe."""
        return not self.diff_text and not self.new_files


@dataclass(frozen=True)
class FileEntry:
    """A path reported by an enumeration strategy."""

    path: str
    is_new: bool


@dataclass(frozen=True)
class Enumeration:
    """Output of one enumeration strategy.

    Attributes:
        entries: Paths in detection order, with the strategy's own classification.
        needs_index_probe: When True the classification is only a guess and each
            path must be checked against the index.
    """

    entries: tuple[FileEntry, ...] = field(default_factory=tuple)
    needs_index_probe: bool = False
