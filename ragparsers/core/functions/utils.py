# ragparsers/core/functions/utils.py
"""
Common text utilities for Markdown generation.
"""
import re
from typing import Optional

_NEWLINE_PATTERN = re.compile(r'\r\n|\r|\n')


def escape_table_cell(text: Optional[str]) -> str:
    """
    Make text safe for a single Markdown pipe-table cell.

    Line breaks become <br> and literal pipes are escaped.

    Args:
        text: Cell text

    Returns:
        Single-line cell text
    """
    if not text:
        return ""

    text = _NEWLINE_PATTERN.sub("<br>", text.strip())
    return text.replace("|", "\\|")


__all__ = [
    "escape_table_cell",
]
