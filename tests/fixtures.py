"""Shared test fixtures and utilities.

Paths and subprocess runs for the ``bin/`` wrapper, temporary config
files, stdout capture, and helpers that pick rendered calendars apart.
"""

from __future__ import annotations

import importlib.util
import io
import subprocess
import tempfile
from contextlib import contextmanager, redirect_stdout
from pathlib import Path
from typing import List, Optional, Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]


# -----------------------------------------------------------------------------
# Paths and processes
# -----------------------------------------------------------------------------


def repo_root() -> Path:
    return REPO_ROOT


def bin_path(name: str) -> Path:
    return REPO_ROOT / "bin" / name


def run(cmd: Sequence[str], cwd: Optional[str] = None, stdin: Optional[str] = None):
    """Run a command with text I/O; returns the CompletedProcess."""
    return subprocess.run(  # noqa: S603
        list(cmd), cwd=cwd, input=stdin, capture_output=True, text=True
    )


def has_pyyaml() -> bool:
    return importlib.util.find_spec("yaml") is not None


# -----------------------------------------------------------------------------
# Config files
# -----------------------------------------------------------------------------


def _config_target(dir: Optional[str], filename: str) -> Path:
    return Path(dir or tempfile.mkdtemp()) / filename


def write_text_file(text: str, dir: Optional[str] = None, filename: str = "config.yaml") -> str:
    """Write raw text (possibly invalid YAML) and return the path."""
    target = _config_target(dir, filename)
    target.write_text(text, encoding="utf-8")
    return str(target)


def write_yaml(data: dict, dir: Optional[str] = None, filename: str = "config.yaml") -> str:
    """Dump ``data`` as a YAML config file and return the path."""
    import yaml

    return write_text_file(yaml.safe_dump(data, sort_keys=False), dir=dir, filename=filename)


# -----------------------------------------------------------------------------
# Output capture
# -----------------------------------------------------------------------------


@contextmanager
def capture_stdout():
    buf = io.StringIO()
    with redirect_stdout(buf):
        yield buf


# -----------------------------------------------------------------------------
# Calendars
# -----------------------------------------------------------------------------


def make_options(**kwargs):
    """CalendarOptions for 2023 unless ``year`` is given."""
    from mdcal.options import CalendarOptions

    kwargs.setdefault("year", 2023)
    return CalendarOptions(**kwargs)


def table_rows(markdown: str) -> List[str]:
    """Lines of a rendered calendar that start with '|'."""
    return [line for line in markdown.splitlines() if line.startswith("|")]


def week_rows(markdown: str) -> List[str]:
    """Table rows after the header and separator rows of one month."""
    return table_rows(markdown)[2:]


def split_cells(row: str) -> List[str]:
    """Stripped cell contents of one '| a | b |' row."""
    return [cell.strip() for cell in row.strip().strip("|").split("|")]
