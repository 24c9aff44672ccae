"""Prompt assembly for the commit message agent.

Contains:
- truncate_diff: Bound the diff text sent to the agent
- build_header: Instruction header for the kind of change
- build_new_files_section: Listing of untracked files
- build_prompt: Full prompt for a ChangeSet
"""

from gitmessage.config import DEFAULT_MAX_DIFF_CHARS, TRUNCATION_MARKER
from gitmessage.git.models import ChangeSet


HEADER_MODIFIED_AND_NEW = (
    "Generate a concise git commit message for the following changes. "
    "Cover the significant changes to existing files shown in the diff, and mention that "
    "the commit also adds {new_count}. Do not describe the new files individually."
)

HEADER_MODIFIED_ONLY = (
    "Generate a concise git commit message for the following diff. "
    "Make sure the message covers all significant changes."
)

HEADER_NEW_ONLY = (
    "Generate a concise git commit message. "
    "This commit primarily adds {new_count}. "
    "Summarize their overall purpose without describing each file."
)


def _count_new_files(count: int) -> str:
    return f"{count} new file" if count == 1 else f"{count} new files"


def truncate_diff(diff_text: str, max_chars: int = DEFAULT_MAX_DIFF_CHARS) -> str:
    """Cut the diff down to ``max_chars`` characters.

    Args:
        diff_text: The full diff.
        max_chars: Maximum characters kept.

    Returns:
        The diff unchanged if it fits, otherwise its first ``max_chars``
        characters followed by the truncation marker.
    """
    if len(diff_text) > max_chars:
        return diff_text[:max_chars] + TRUNCATION_MARKER
    return diff_text


def build_header(modified_files, new_files) -> str:
    """Build the instruction header for the kind of change.

    Args:
        modified_files: Tracked paths that changed.
        new_files: Untracked paths.

    Returns:
        The instruction text.
    """
    if modified_files and new_files:
        return HEADER_MODIFIED_AND_NEW.format(new_count=_count_new_files(len(new_files)))
    if new_files:
        return HEADER_NEW_ONLY.format(new_count=_count_new_files(len(new_files)))
    return HEADER_MODIFIED_ONLY


def build_new_files_section(new_files) -> str:
    """List the new files, one bullet per path, in the given order."""
    lines = [f"New Files Added ({len(new_files)}):"]
    lines.extend(f"- {path}" for path in new_files)
    return "\n".join(lines)


def build_prompt(change_set: ChangeSet, max_diff_chars: int = DEFAULT_MAX_DIFF_CHARS) -> str:
    """Build the full prompt for a ChangeSet.

    Layout: header, blank line, truncated diff, then the new files section
    after another blank line when there are new files.

    Args:
        change_set: The collected changes.
        max_diff_chars: Maximum diff characters before truncation.

    Returns:
        The prompt string.
    """
    parts = [build_header(change_set.modified_files, change_set.new_files)]

    diff = truncate_diff(change_set.diff_text, max_diff_chars)
    if diff:
        parts.append(diff)

    if change_set.new_files:
        parts.append(build_new_files_section(change_set.new_files))

    return "\n\n".join(parts)
