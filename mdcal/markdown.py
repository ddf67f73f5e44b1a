"""Markdown table formatting helpers."""
from __future__ import annotations

from typing import Sequence


def pad_right(text: str, width: int) -> str:
    """Pad with spaces up to width; longer text is returned unchanged."""
    if len(text) < width:
        return text + " " * (width - len(text))
    return text


def separator_cell(width: int, justify: str) -> str:
    """Separator-row cell for a column of the given width.

    center: ``:-:`` for widths up to 3, else ``:---:``
    right:  ``----:``
    left (and anything unrecognized): ``:----``
    """
    if width <= 0:
        return ""
    mode = (justify or "").lower()
    if mode == "center":
        if width <= 3:
            return ":-:"
        return ":" + "-" * (width - 2) + ":"
    if mode == "right":
        return "-" * (width - 1) + ":"
    return ":" + "-" * (width - 1)


def table_row(cells: Sequence[str], widths: Sequence[int]) -> str:
    """One ``| a | b |`` line with each cell padded to its column width."""
    parts = ["|"]
    for cell, width in zip(cells, widths):
        parts.append(" " + pad_right(cell, width) + " |")
    parts.append("\n")
    return "".join(parts)
