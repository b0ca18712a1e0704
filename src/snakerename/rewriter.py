"""
Boundary-aware find/replace over a text buffer.

Scanning always runs over an immutable snapshot of the buffer. Edits are
emitted as offsets into that snapshot and applied afterwards, either to a
string (apply_plan) or to a host buffer (see host.apply_plan_to_buffer).
"""

from typing import List, NamedTuple, Tuple

from .case_utils import is_identifier_char
from .utils import debug_print, preview_text


class RewriteEdit(NamedTuple):
    """Replace buffer[start:end] with replacement (offsets into the original buffer)."""

    start: int
    end: int
    replacement: str


RewritePlan = List[RewriteEdit]


def is_word_boundary(text: str, start: int, end: int) -> bool:
    """Check that text[start:end] is not glued to neighbouring identifier characters."""
    is_start_boundary = start == 0 or not is_identifier_char(text[start - 1])
    is_end_boundary = end >= len(text) or not is_identifier_char(text[end])
    return is_start_boundary and is_end_boundary


def plan_rewrite(buffer: str, old_token: str, new_token: str) -> RewritePlan:
    """Find every boundary-delimited occurrence of old_token in buffer.

    Single pass, left to right. After an accepted occurrence the scan resumes
    at its end, so text introduced by the replacement is never rescanned.
    After a rejected occurrence the scan resumes one character later, so a
    valid occurrence overlapping the rejected one is still found.

    Args:
        buffer: Snapshot of the text to scan
        old_token: Literal text to look for
        new_token: Replacement text for every accepted occurrence

    Returns:
        List of RewriteEdit ordered by start offset; empty when nothing matches
    """
    plan: RewritePlan = []
    if not buffer or not old_token:
        return plan

    token_length = len(old_token)
    position = buffer.find(old_token)
    while position != -1:
        end = position + token_length
        if is_word_boundary(buffer, position, end):
            plan.append(RewriteEdit(position, end, new_token))
            debug_print(f"Accepted '{old_token}' at [{position}, {end})")  # pragma: no mutate
            position = buffer.find(old_token, end)
        else:
            debug_print(
                f"Rejected '{old_token}' at [{position}, {end}) inside "
                f"'{preview_text(buffer[max(0, position - 10):end + 10])}'"
            )  # pragma: no mutate
            position = buffer.find(old_token, position + 1)

    debug_print(f"Planned {len(plan)} replacements of '{old_token}' with '{new_token}'")
    return plan


def apply_plan(buffer: str, plan: RewritePlan) -> str:
    """Apply an ordered, non-overlapping plan to a buffer snapshot.

    Raises:
        ValueError: If edits are out of order, overlap, or fall outside the buffer
    """
    if not plan:
        return buffer

    pieces = []
    cursor = 0
    for edit in plan:
        if edit.start < cursor or edit.end < edit.start or edit.end > len(buffer):
            raise ValueError(
                f"Invalid edit [{edit.start}, {edit.end}) for buffer of length "
                f"{len(buffer)} (previous edit ended at {cursor})"
            )
        pieces.append(buffer[cursor : edit.start])
        pieces.append(edit.replacement)
        cursor = edit.end
    pieces.append(buffer[cursor:])
    return "".join(pieces)


def rewrite_all(buffer: str, old_token: str, new_token: str) -> Tuple[str, int]:
    """Replace every boundary-delimited occurrence and return (new_buffer, count)"""
    plan = plan_rewrite(buffer, old_token, new_token)
    return apply_plan(buffer, plan), len(plan)
