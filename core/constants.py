"""Shared constants and config path helpers."""

from __future__ import annotations

import os
from typing import List, Optional

# -----------------------------------------------------------------------------
# Config paths
# -----------------------------------------------------------------------------

CONFIG_FILENAME = "config.yaml"


def config_roots() -> List[str]:
    """Return ordered list of config root directories."""
    roots: List[str] = []
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        roots.append(os.path.expanduser(xdg))
    roots.append(os.path.expanduser("~/.config"))
    return roots


def app_config_path(app_id: str, env_var: Optional[str] = None) -> str:
    """Return the config file path for an app.

    An environment override wins; otherwise the file lives under the first
    config root as ``<root>/<app_id>/config.yaml``.
    """
    if env_var:
        override = os.environ.get(env_var)
        if override:
            return os.path.expanduser(override)
    return os.path.join(config_roots()[0], app_id, CONFIG_FILENAME)
