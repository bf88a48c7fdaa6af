"""Configuration helpers: settings file discovery and flat TOML parsing."""

import os
import pathlib
import re
import sys

from mdflash.models import SrsSettings

DECK_CONFIG_NAME = ".mdflash.toml"

DEFAULTS = {
    "separator": ";;",
    "inverse_separator": ";;;",
    "hard_factor": 1.2,
    "easy_bonus": 1.3,
    "maximum_interval": 36525,
    "lapses_interval_change": 0.5,
    "base_ease": 250,
    "max_link_factor": 0.3,
    "recursive": False,
}

_ENTRY_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_-]*)\s*=\s*(.*)$")
_QUOTED_RE = re.compile(r"""^("([^"]*)"|'([^']*)')\s*(?:#.*)?$""")
_INT_RE = re.compile(r"^-?\d+$")
_FLOAT_RE = re.compile(r"^-?\d+\.\d*$")


def get_config_path() -> pathlib.Path:
    env = os.environ.get("MDFLASH_CONFIG")
    if env:
        return pathlib.Path(env)
    return pathlib.Path.home() / ".config" / "mdflash" / "settings.toml"


def load_settings(deck_dir: pathlib.Path | None = None) -> dict:
    """Defaults, overridden by the user config, overridden by the deck's .mdflash.toml."""
    settings = dict(DEFAULTS)
    sources = [get_config_path()]
    if deck_dir is not None:
        sources.append(pathlib.Path(deck_dir) / DECK_CONFIG_NAME)
    for path in sources:
        if not path.is_file():
            continue
        try:
            values = _parse_toml_simple(path.read_text(encoding="utf-8"))
        except ValueError as e:
            raise ValueError(f"{path}: {e}") from None
        for key in sorted(values.keys() - DEFAULTS.keys()):
            print(f"Warning: unknown setting {key!r} in {path}", file=sys.stderr)
        settings.update(values)
    return settings


def srs_settings(settings: dict) -> SrsSettings:
    return SrsSettings(
        hard_factor=float(settings["hard_factor"]),
        easy_bonus=float(settings["easy_bonus"]),
        maximum_interval=int(settings["maximum_interval"]),
        lapses_interval_change=float(settings["lapses_interval_change"]),
        base_ease=int(settings["base_ease"]),
        max_link_factor=float(settings["max_link_factor"]),
    )


def _coerce_value(raw: str):
    """Turn the right-hand side of a setting into str, bool, int or float."""
    m = _QUOTED_RE.match(raw)
    if m:
        return m.group(2) if m.group(2) is not None else m.group(3)
    value = raw.split("#", 1)[0].strip()
    if value in ("true", "false"):
        return value == "true"
    if _INT_RE.match(value):
        return int(value)
    if _FLOAT_RE.match(value):
        return float(value)
    raise ValueError(f"unsupported value {raw!r}")


def _parse_toml_simple(text: str) -> dict:
    """Parse a flat TOML file of `key = value` lines.

    Values are quoted strings, true/false, integers or floats, each
    optionally followed by a `# comment`. Tables and arrays are not
    supported. Raises ValueError naming the line number of the first
    line that is not a setting.
    """
    result = {}
    for lineno, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        m = _ENTRY_RE.match(line)
        if not m:
            raise ValueError(f"line {lineno}: expected key = value, got {line!r}")
        try:
            result[m.group(1)] = _coerce_value(m.group(2).strip())
        except ValueError as e:
            raise ValueError(f"line {lineno}: {e}") from None
    return result
