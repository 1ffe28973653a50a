# metrics_tracker.py - running timing counters

from __future__ import annotations

import json
import logging
import os
from collections import defaultdict
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class Metrics:
    """Sum/count/last per key. Persisted to JSON only when a path is given."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.m: Dict[str, float] = defaultdict(float)
        self.n: Dict[str, int] = defaultdict(int)
        self.last_value: Dict[str, float] = {}
        self._load()

    def _load(self):
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                d = json.load(f)
            loaded = {k: (float(v["sum"]), int(v["count"])) for k, v in d.items()}
        except (OSError, ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning("metrics %s unreadable, starting empty: %s", self.path, e)
            return
        for k, (total, count) in loaded.items():
            self.m[k] = total
            self.n[k] = count

    def save(self):
        if not self.path:
            return
        d = {k: {"sum": self.m[k], "count": self.n[k]} for k in self.m}
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(d, f, indent=2)

    def record(self, key: str, val: float) -> None:
        self.m[key] += val
        self.n[key] += 1
        self.last_value[key] = val

    def count(self, key: str) -> int:
        return self.n.get(key, 0)

    def avg(self, key: str) -> float:
        if not self.n.get(key):
            return 0.0
        return self.m[key] / self.n[key]

    def last(self, key: str) -> float:
        return self.last_value.get(key, 0.0)

    def reset(self) -> None:
        self.m.clear()
        self.n.clear()
        self.last_value.clear()

    def summary(self) -> Dict[str, Dict[str, float]]:
        return {
            k: {
                "count": self.n[k],
                "total": round(self.m[k], 4),
                "avg": round(self.avg(k), 4),
                "last": round(self.last(k), 4),
            }
            for k in sorted(self.m)
        }
