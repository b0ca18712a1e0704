"""
snakerename - Rename identifiers to snake_case throughout a text buffer.

This package provides identifier validation, snake_case conversion, and a
boundary-aware rewriter that only touches free-standing occurrences of a token.
"""

from .case_utils import is_valid_identifier, to_snake_case
from .cli import main
from .host import InMemoryBuffer, TextBuffer, rename_selection
from .rewriter import RewriteEdit, apply_plan, plan_rewrite, rewrite_all
from .utils import debug_print

__version__ = "1.0.0"
__all__ = [
    "main",
    "debug_print",
    "is_valid_identifier",
    "to_snake_case",
    "RewriteEdit",
    "plan_rewrite",
    "apply_plan",
    "rewrite_all",
    "TextBuffer",
    "InMemoryBuffer",
    "rename_selection",
]
