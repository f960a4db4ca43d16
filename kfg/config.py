"""KFG config loader.

Options live in an optional ``kfg.config`` YAML file in the project
directory, one mapping per section:

    parser:
      strict: true
    output:
      color: false

Every option is a boolean.  A section that is not a mapping is ignored
and its defaults stay in place; unknown sections and keys are ignored
too.  The result is cached after the first load; call _reset_config()
in tests.
"""

import copy
import os
import yaml

from kfg.errors import ConfigError

_config = None

CONFIG_FILENAME = "kfg.config"

DEFAULTS = {
    "parser": {
        "strict": False,
        "sticky_scopes": False,
    },
    "output": {
        "color": True,
    },
}


def _read_config_file(config_path: str) -> dict:
    """Parse the YAML file, turning syntax errors into ConfigError."""
    try:
        with open(config_path) as f:
            user_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        line, column = (mark.line + 1, mark.column) if mark is not None else (0, 0)
        raise ConfigError(f"Invalid {CONFIG_FILENAME}: {getattr(e, 'problem', None) or e}", line, column) from None
    return user_config if isinstance(user_config, dict) else {}


def _apply_sections(user_config: dict) -> dict:
    """Overlay the known options of *user_config* on a fresh copy of DEFAULTS."""
    config = copy.deepcopy(DEFAULTS)
    for section_name, options in config.items():
        section = user_config.get(section_name)
        if not isinstance(section, dict):
            continue
        for key in options:
            if key not in section:
                continue
            val = section[key]
            if not isinstance(val, bool):
                raise ConfigError(f"{section_name}.{key} in {CONFIG_FILENAME} must be true or false, got {val!r}")
            options[key] = val
    return config


def get_config(config_dir: str | None = None) -> dict:
    """Load and return the KFG config, caching after first call."""
    global _config
    if _config is not None:
        return _config

    config_path = os.path.join(config_dir or os.getcwd(), CONFIG_FILENAME)
    user_config = _read_config_file(config_path) if os.path.exists(config_path) else {}
    _config = _apply_sections(user_config)
    return _config


def parser_options(config: dict) -> dict:
    """Keyword arguments for ``parse`` taken from the ``parser`` section."""
    section = config.get("parser")
    if not isinstance(section, dict):
        section = DEFAULTS["parser"]
    return {
        "strict": bool(section.get("strict", False)),
        "sticky_scopes": bool(section.get("sticky_scopes", False)),
    }


def _reset_config():
    """Clear cached config. Call this in tests."""
    global _config
    _config = None
