"""YAML read/write helpers for CLI config files."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

from .cli_errors import ConfigError

__all__ = ["load_config", "dump_config"]

PathLike = Union[str, Path]


def _yaml():
    try:
        import yaml  # type: ignore
    except ImportError as exc:  # pragma: no cover - runtime guard
        raise ConfigError("PyYAML not installed", hint="Run: pip install pyyaml") from exc
    return yaml


def load_config(path: Optional[PathLike]) -> Dict[str, Any]:
    """Mapping stored at ``path``.

    An unset path, a missing file and a file with no content (blank or
    comments only) all give ``{}``. Unparsable YAML and a root that is not
    a mapping raise ConfigError.
    """
    if not path:
        return {}
    source = Path(path).expanduser()
    if not source.is_file():
        return {}
    text = source.read_text(encoding="utf-8")
    if not text.strip():
        return {}

    yaml = _yaml()
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Cannot parse {source}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Top-level YAML in {source} must be a mapping",
            hint="Use key: value pairs such as 'start: sunday'",
        )
    return data


def dump_config(path: PathLike, data: Dict[str, Any]) -> None:
    """Write ``data`` as block-style YAML, keys in insertion order."""
    yaml = _yaml()
    target = Path(path).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh, sort_keys=False, default_flow_style=False, allow_unicode=True)
