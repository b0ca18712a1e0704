"""Output formatting for rewrite plans."""

from __future__ import annotations

import json
from typing import Dict, List, Tuple

from tabulate import tabulate

from .rewriter import RewritePlan
from .utils import debug_print, preview_text

TABLE_HEADERS = ["Line", "Column", "Start", "End", "Old", "New"]


def offset_to_position(text: str, offset: int) -> Tuple[int, int]:
    """Convert a character offset into a 1-based (line, column) pair.

    Examples:
        offset_to_position("ab\\ncd", 0) -> (1, 1)
        offset_to_position("ab\\ncd", 3) -> (2, 1)
        offset_to_position("ab\\ncd", 4) -> (2, 2)
    """
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def describe_plan(buffer: str, plan: RewritePlan) -> List[Dict]:
    """Turn a plan into a list of dictionaries with positions and texts"""
    rows = []
    for edit in plan:
        line, column = offset_to_position(buffer, edit.start)
        rows.append(
            {
                "line": line,
                "column": column,
                "start": edit.start,
                "end": edit.end,
                "old": buffer[edit.start : edit.end],
                "new": edit.replacement,
            }
        )
    return rows


def format_table_output(buffer: str, plan: RewritePlan) -> str:
    """Format a plan as table using tabulate"""
    if not plan:
        return "No occurrences found."

    table_data = []
    for row in describe_plan(buffer, plan):
        table_data.append(
            [
                row["line"],
                row["column"],
                row["start"],
                row["end"],
                preview_text(row["old"]),
                preview_text(row["new"]),
            ]
        )

    debug_print(f"Rendering {len(table_data)} edits as table")  # pragma: no mutate
    return tabulate(table_data, headers=TABLE_HEADERS, tablefmt="grid")


def format_json_output(buffer: str, plan: RewritePlan) -> str:
    """Format a plan as JSON output"""
    edits = describe_plan(buffer, plan)
    return json.dumps({"replacements": len(edits), "edits": edits}, indent=2)
