# config_manager.py - JSON config manager for prediction settings

from __future__ import annotations

import json
import logging
import math
import os
from typing import Any, Dict, Optional

from rich.table import Table

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "min_prefix_length": 1,  # shorter prefixes return nothing
    "bigram_weight": 2.0,  # multiplier on bigram counts when ranking
    "max_candidates": 5,
}


class ConfigError(ValueError):
    """Raised for unknown options or values that do not fit an option."""


class Config:
    """
    Runtime-adjustable settings.
    Values are read by the engine on every query, so set() takes effect on
    the next call. With a path, the file is merged over the defaults on load
    and rewritten by save(); without one everything stays in memory.
    """

    def __init__(self, path: Optional[str] = None, **overrides: Any):
        self.path = path
        self.data: Dict[str, Any] = dict(DEFAULTS)
        self._load()
        for k, v in overrides.items():
            self.set(k, v, persist=False)

    def _load(self) -> None:
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                stored = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("config %s unreadable, using defaults: %s", self.path, e)
            return
        for k, v in stored.items():
            if k not in DEFAULTS:
                logger.warning("ignoring unknown config option %r", k)
                continue
            try:
                self.data[k] = self._coerce(k, v)
            except ConfigError as e:
                logger.warning("ignoring config option %r: %s", k, e)

    def save(self) -> None:
        if not self.path:
            return
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key: str) -> Any:
        if key not in self.data:
            raise ConfigError(f"no such option: {key}")
        return self.data[key]

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def _coerce(self, key: str, val: Any) -> Any:
        kind = type(DEFAULTS[key])
        if isinstance(val, bool):
            raise ConfigError(f"{key} expects {kind.__name__}, got {val!r}")
        try:
            if kind is int and isinstance(val, str):
                out = int(val.strip())
            elif kind is int:
                if isinstance(val, float) and not val.is_integer():
                    raise ValueError(val)
                out = int(val)
            else:
                out = kind(val)
        except (TypeError, ValueError):
            raise ConfigError(f"{key} expects {kind.__name__}, got {val!r}") from None
        if not math.isfinite(out):
            raise ConfigError(f"{key} must be a finite number, got {val!r}")
        if out < 0:
            raise ConfigError(f"{key} must be a non-negative number, got {val!r}")
        return out

    def set(self, key: str, val: Any, persist: bool = True) -> None:
        if key not in DEFAULTS:
            raise ConfigError(f"no such option: {key}")
        self.data[key] = self._coerce(key, val)
        logger.debug("config %s = %r", key, self.data[key])
        if persist:
            self.save()

    def reset(self) -> None:
        self.data = dict(DEFAULTS)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.data)

    def show(self) -> Table:
        table = Table(title="config")
        table.add_column("option")
        table.add_column("value", justify="right")
        for k, v in self.data.items():
            table.add_row(k, str(v))
        return table
