"""
Formatting helpers for CLI output.

Example:
    >>> from normalize1nf.utils.formatters import format_table, format_success
    >>> print(format_table(["View", "Kind"], [["orders__tags", "array"]]))
    >>> print(format_success("Configuration written"))
"""

from typing import Any, Dict, List, Optional

import typer
from tabulate import tabulate

from normalize1nf.document.models import CustomViewConfiguration


# =============================================================================
# Table Formatting
# =============================================================================

def format_table(
    headers: List[str],
    data: List[List[Any]],
    tablefmt: str = "simple",
    maxcolwidths: Optional[List[int]] = None,
) -> str:
    """Format data as a table.

    Args:
        headers: Column headers for the table.
        data: Table data as a list of rows (each row is a list of values).
        tablefmt: Table format style (simple, grid, pipe, html, etc.).
        maxcolwidths: Optional list of maximum column widths.

    Returns:
        A formatted table string.
    """
    return tabulate(
        data,
        headers=headers,
        tablefmt=tablefmt,
        maxcolwidths=maxcolwidths,
    )


def format_dict_table(
    data: List[Dict[str, Any]],
    tablefmt: str = "simple",
    keys: Optional[List[str]] = None,
) -> str:
    """Format a list of dictionaries as a table.

    Args:
        data: List of dictionaries to format.
        tablefmt: Table format style.
        keys: Optional list of keys to include (in order). If None, uses
            all keys from the first dictionary.

    Returns:
        A formatted table string, or "No data" for an empty list.
    """
    if not data:
        return "No data"

    if keys is None:
        keys = list(data[0].keys())

    table_data = [[row.get(key, "") for key in keys] for row in data]

    return format_table(keys, table_data, tablefmt=tablefmt)


def format_view_table(views: List[CustomViewConfiguration], tablefmt: str = "simple") -> str:
    """Summarize custom views: name, primary key and referenced tables."""
    rows = []
    for view in views:
        primary_key = view.primary_key.column_names if view.primary_key else []
        referenced = [fk.referenced_table for fk in view.foreign_keys or []]
        rows.append(
            {
                "View": view.name,
                "Primary key": ", ".join(primary_key),
                "References": ", ".join(referenced),
            }
        )
    return format_dict_table(rows, tablefmt=tablefmt)


# =============================================================================
# Status Message Formatting
# =============================================================================

def format_status_message(
    message: str,
    status: str = "info",
    bold: bool = False,
) -> str:
    """Format a status message with appropriate coloring.

    Args:
        message: The message to format.
        status: Status type (success, error, warning, info).
        bold: Whether to make the text bold.
    """
    colors = {
        "success": typer.colors.GREEN,
        "error": typer.colors.RED,
        "warning": typer.colors.YELLOW,
        "info": typer.colors.BLUE,
    }

    fg_color = colors.get(status, typer.colors.WHITE)
    return typer.style(message, fg=fg_color, bold=bold)


def format_success(message: str, symbol: str = "✓") -> str:
    return format_status_message(f"{symbol} {message}", "success")


def format_error(message: str, symbol: str = "✗") -> str:
    return format_status_message(f"{symbol} {message}", "error")


def format_warning(message: str, symbol: str = "⚠") -> str:
    return format_status_message(f"{symbol} {message}", "warning")


def format_info(message: str, symbol: str = "ℹ") -> str:
    return format_status_message(f"{symbol} {message}", "info")
