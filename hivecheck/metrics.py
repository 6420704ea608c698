"""Minimal in-memory metrics collector.

Purpose:
    - Counters for a single verification run (what was checked, what the
      probe saw, which config keys came from the environment).
    - Zero external deps; the run is short-lived so nothing is exported.

Core API (intentionally tiny):
    inc(name, labels=None, value=1)
    snapshot() -> dict (copy for safe reading)
    reset_for_tests()

Metric names (documented for discoverability):
    - checks_total{status}
    - probe_total{result}
    - env_file_loaded_total{found}
    - env_override_total{path}
"""
from __future__ import annotations

from threading import RLock
from time import time
from typing import Any, Dict, Tuple

_COUNTERS: Dict[Tuple[str, Tuple[Tuple[str, str], ...]], float] = {}
_LOCK = RLock()


def _norm_labels(labels: dict[str, Any] | None) -> Tuple[Tuple[str, str], ...]:
    if not labels:
        return tuple()
    return tuple(sorted((str(k), str(v)) for k, v in labels.items()))


def inc(
    name: str,
    labels: dict[str, Any] | None = None,
    value: float = 1.0,
) -> None:
    key = (name, _norm_labels(labels))
    with _LOCK:
        _COUNTERS[key] = _COUNTERS.get(key, 0.0) + value


def snapshot() -> dict[str, Any]:
    with _LOCK:
        counters: dict[str, float] = {}
        for (name, labels), v in _COUNTERS.items():
            label_str = ""
            if labels:
                label_str = "{" + ",".join(f"{k}={v}" for k, v in labels) + "}"
            counters[name + label_str] = v
        return {"ts": time(), "counters": counters}


def reset_for_tests() -> None:
    with _LOCK:
        _COUNTERS.clear()


# ------------------- Helper wrappers -------------------

def inc_check(status: str) -> None:
    """Count one finished model check by status value."""
    inc("checks_total", {"status": status})


def inc_probe(result: str) -> None:
    """Count one tool probe: present | missing | error."""
    inc("probe_total", {"result": result})


__all__ = [
    "inc",
    "snapshot",
    "reset_for_tests",
    "inc_check",
    "inc_probe",
]
