from __future__ import annotations

from pathlib import Path
from typing import Dict

import yaml

DEFAULT_CONFIG: Dict[str, object] = {
    "db_path": "expenses.db",
    "week_start": "sunday",
    "log_level": "WARNING",
}

CONFIG_PATH = Path("expenses.yaml")


def _with_defaults(current: Dict[str, object]) -> Dict[str, object]:
    """Fill keys missing from *current* with their default values."""
    return {**DEFAULT_CONFIG, **current}


def load_config(path: Path | str | None = None) -> Dict[str, object]:
    target = Path(path) if path else CONFIG_PATH
    if not target.exists():
        return dict(DEFAULT_CONFIG)
    with target.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {target} must contain a mapping")
    return _with_defaults(data)


def save_config(config: Dict[str, object], path: Path | str | None = None) -> None:
    target = Path(path) if path else CONFIG_PATH
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as fp:
        yaml.safe_dump(config, fp, sort_keys=False)
