"""Change collection for a git working tree.

Contains:
- collect_changes: Build a ChangeSet from the current state of a working tree
- DEFAULT_STRATEGIES: Enumeration strategies tried in order
"""

import os
from pathlib import Path
from typing import Optional, Sequence

from gitmessage.git.diff import get_staged_diff, get_unstaged_diff
from gitmessage.git.exceptions import CollectionError, GitError
from gitmessage.git.models import ChangeSet, Enumeration
from gitmessage.git.status import (
    EnumerationStrategy,
    LsFilesStrategy,
    StatusPorcelainStrategy,
    _get_staged_files_list,
    is_tracked,
)
from gitmessage.logging import get_logger


DEFAULT_STRATEGIES: tuple[EnumerationStrategy, ...] = (
    StatusPorcelainStrategy(),
    LsFilesStrategy(),
)


def _classify(enumeration: Enumeration, repo_root: Path) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Split an enumeration into modified and new paths.

    When the strategy asks for it, index membership decides and the
    strategy's own guess is ignored. A path missing from both the index and
    the working tree was deleted, so it counts as modified.
    """
    modified = []
    new = []

    for entry in enumeration.entries:
        if enumeration.needs_index_probe:
            is_new = (
                not is_tracked(entry.path, repo_root)
                and os.path.lexists(Path(repo_root) / entry.path)
            )
        else:
            is_new = entry.is_new

        if is_new:
            new.append(entry.path)
        else:
            modified.append(entry.path)

    return tuple(modified), tuple(new)


def collect_changes(
    repo_root: Path,
    strategies: Sequence[EnumerationStrategy] = DEFAULT_STRATEGIES,
    logger=None,
) -> ChangeSet:
    """Collect the diff and the modified/new file lists of a working tree.

    Every step degrades on its own: a failed enumeration leaves the file
    lists empty, a failed staged-files query counts as nothing staged, and a
    failed diff leaves the diff text empty.

    Args:
        repo_root: Root of the working tree.
        strategies: Enumeration strategies, tried in order until one succeeds.
        logger: Structured logger. Defaults to this module's logger.

    Returns:
        The collected ChangeSet.

    Raises:
        CollectionError: If every git query of the pass failed.
    """
    log = logger or get_logger(__name__)
    log = log.bind(repo_root=str(repo_root))
    any_query_succeeded = False

    # Step 1: enumerate changed paths
    enumeration: Optional[Enumeration] = None
    for strategy in strategies:
        try:
            enumeration = strategy.enumerate(repo_root)
        except GitError as e:
            log.warning("enumeration_failed", strategy=strategy.name, error=str(e))
            continue
        log.debug("paths_enumerated", strategy=strategy.name, count=len(enumeration.entries))
        any_query_succeeded = True
        break

    # Step 2: classify paths as modified or new
    if enumeration is None:
        modified_files, new_files = (), ()
    else:
        modified_files, new_files = _classify(enumeration, repo_root)
    log.info("files_classified", modified=len(modified_files), new=len(new_files))

    # Step 3: pick the diff
    try:
        staged_files = _get_staged_files_list(repo_root)
        any_query_succeeded = True
    except GitError as e:
        log.warning("staged_query_failed", error=str(e))
        staged_files = []

    diff_text = ""
    try:
        if staged_files:
            diff_text = get_staged_diff(repo_root)
            log.info("diff_collected", source="staged", chars=len(diff_text))
        elif modified_files:
            diff_text = get_unstaged_diff(repo_root)
            log.info("diff_collected", source="unstaged", chars=len(diff_text))
    except GitError as e:
        log.warning("diff_failed", error=str(e))
        diff_text = ""

    if not any_query_succeeded:
        raise CollectionError("Could not read the working tree: every git command failed.")

    return ChangeSet(
        diff_text=diff_text,
        modified_files=modified_files,
        new_files=new_files,
    )
