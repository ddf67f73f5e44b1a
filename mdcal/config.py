"""Layout defaults stored in a YAML config file.

Example ``~/.config/mdcal/config.yaml``::

    start: sunday
    week_numbers: true
    weekends: false
    comments: true
    short_day_names: false
    justify: center

Only layout options live here; dates always come from the command line
or the wizard.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from core.cli_errors import ConfigError
from core.constants import app_config_path
from core.yamlio import dump_config, load_config

from .meta import APP_ID, CONFIG_ENV
from .options import CalendarOptions, Weekday, normalize_justify

LOG = logging.getLogger(__name__)

# config key -> CalendarOptions field
BOOL_KEYS = {
    "week_numbers": "show_calendar_week",
    "weekends": "show_weekends",
    "comments": "show_comments",
    "short_day_names": "use_short_day_names",
}


def resolve_config_path(explicit: Optional[Union[str, Path]] = None) -> Path:
    """--config wins, then $MDCAL_CONFIG, then <config root>/mdcal/config.yaml."""
    if explicit:
        return Path(explicit).expanduser()
    return Path(app_config_path(APP_ID, env_var=CONFIG_ENV))


def load_layout_defaults(path: Optional[Union[str, Path]]) -> Dict[str, Any]:
    """Read the config file into CalendarOptions field overrides.

    A missing file gives no overrides. Unknown keys are ignored with a
    warning; wrongly typed values raise ConfigError.
    """
    LOG.debug("Loading layout defaults from %s", path)
    data = load_config(path)
    overrides: Dict[str, Any] = {}
    for key, value in data.items():
        if key == "start":
            if not isinstance(value, str):
                raise ConfigError(f"'start' in {path} must be a weekday name")
            overrides["first_day_of_week"] = Weekday.parse(value)
        elif key in BOOL_KEYS:
            if not isinstance(value, bool):
                raise ConfigError(
                    f"'{key}' in {path} must be true or false",
                    hint=f"Got {value!r}",
                )
            overrides[BOOL_KEYS[key]] = value
        elif key == "justify":
            justify = normalize_justify(value if isinstance(value, str) else None)
            if justify is None:
                raise ConfigError(
                    f"'justify' in {path} must be left, center or right",
                    hint=f"Got {value!r}",
                )
            overrides["justify"] = justify
        else:
            LOG.warning("Ignoring unknown config key %r in %s", key, path)
    return overrides


def apply_layout_defaults(options: CalendarOptions, overrides: Dict[str, Any]) -> CalendarOptions:
    if not overrides:
        return options
    return options.replace(**overrides)


def layout_to_config(options: CalendarOptions) -> Dict[str, Any]:
    """Inverse of load_layout_defaults."""
    data: Dict[str, Any] = {"start": options.first_day_of_week.name.lower()}
    for key, field_name in BOOL_KEYS.items():
        data[key] = bool(getattr(options, field_name))
    data["justify"] = normalize_justify(options.justify) or "left"
    return data


def write_layout_config(path: Union[str, Path], options: CalendarOptions) -> Path:
    target = Path(path)
    dump_config(target, layout_to_config(options))
    LOG.debug("Wrote layout defaults to %s", target)
    return target
