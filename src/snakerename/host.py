"""
Integration with a host editing environment.

The host owns the buffer. It is reached only through the TextBuffer protocol,
so any editor front-end (or the in-memory buffer used by the CLI and tests)
can drive the rename.
"""

from contextlib import contextmanager
from typing import ContextManager, Iterator, Optional, Protocol

from .case_utils import is_valid_identifier, to_snake_case
from .rewriter import RewritePlan, plan_rewrite
from .utils import debug_print


class TextBuffer(Protocol):
    def get_text(self) -> str: ...

    def replace(self, start: int, end: int, text: str) -> None: ...

    def transaction(self) -> ContextManager[None]: ...


class InMemoryBuffer:
    """Mutable text buffer that only accepts edits inside a transaction."""

    def __init__(self, text: str = ""):
        self.text = text
        self.transactions_opened = 0
        self._depth = 0

    def get_text(self) -> str:
        return self.text

    def replace(self, start: int, end: int, text: str) -> None:
        if self._depth == 0:
            raise RuntimeError("Buffer edits must happen inside a transaction")
        if not 0 <= start <= end <= len(self.text):
            raise ValueError(f"Range [{start}, {end}) outside buffer of length {len(self.text)}")
        self.text = self.text[:start] + text + self.text[end:]

    @contextmanager
    def transaction(self) -> Iterator[None]:
        self.transactions_opened += 1
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1


def apply_plan_to_buffer(buffer: TextBuffer, plan: RewritePlan) -> int:
    """Apply a plan computed on a snapshot to a live buffer.

    Each edit shifts later offsets by the difference between replacement and
    replaced lengths, so edits are re-based with a running delta instead of
    re-reading the buffer. Must be called inside buffer.transaction().

    Returns:
        Number of edits applied
    """
    delta = 0
    for edit in plan:
        buffer.replace(edit.start + delta, edit.end + delta, edit.replacement)
        delta += len(edit.replacement) - (edit.end - edit.start)
    return len(plan)


def rename_selection(buffer: TextBuffer, selection: Optional[str]) -> int:
    """Rename every free-standing occurrence of selection to its snake_case form.

    An empty or invalid selection, a selection already in snake_case, and a
    buffer without boundary-delimited occurrences are all no-ops.

    Args:
        buffer: Host buffer capability
        selection: The text currently selected in the host

    Returns:
        Number of replacements made (0 when nothing applied)
    """
    if not is_valid_identifier(selection):
        debug_print(f"Selection {selection!r} is not a valid identifier, nothing to do")
        return 0

    new_name = to_snake_case(selection)
    if new_name == selection:
        debug_print(f"'{selection}' is already snake_case, nothing to do")
        return 0

    return rename_in_buffer(buffer, selection, new_name)


def rename_in_buffer(buffer: TextBuffer, old_name: str, new_name: str) -> int:
    """Replace boundary-delimited occurrences of old_name within one transaction"""
    with buffer.transaction():
        debug_print(f"Opened transaction to rename '{old_name}' -> '{new_name}'")
        plan = plan_rewrite(buffer.get_text(), old_name, new_name)
        if not plan:
            debug_print(f"No free-standing occurrences of '{old_name}' found")
            return 0
        return apply_plan_to_buffer(buffer, plan)
