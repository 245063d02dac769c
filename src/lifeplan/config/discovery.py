"""Config file discovery and loading.

Walk-up finder locates lifeplan.toml, similar to how git finds .git/.
Supports the LIFEPLAN_CONFIG env var as an explicit override.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from lifeplan.config.models import LifeplanConfig

CONFIG_FILENAME = "lifeplan.toml"
CONFIG_ENV_VAR = "LIFEPLAN_CONFIG"


class ConfigError(ValueError):
    """A config file exists but cannot be parsed."""


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for lifeplan.toml.

    Returns the path to the config file, or None if not found.
    Checks LIFEPLAN_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML, raising :class:`ConfigError` on bad syntax."""
    raw = path.read_text(encoding="utf-8")
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> LifeplanConfig:
    """Load and validate the [calendar] and [limits] sections.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns default LifeplanConfig if no file is found.
    """
    if path is None:
        path = find_config(cwd)

    if path is None:
        return LifeplanConfig()

    data = read_toml(path)
    sections = {key: data[key] for key in ("calendar", "limits") if key in data}
    return LifeplanConfig.model_validate(sections)
