"""Environment file loader.

Reads ``KEY=VALUE`` pairs from a ``.env`` file into an environment mapping
(``os.environ`` by default). Parsing is delegated to python-dotenv, so
comments, ``export`` prefixes and quoted values behave as everywhere else.
Pairs with an empty key or value are ignored.

A missing file is not an error: the caller gets ``found=False`` and the run
continues with whatever environment already exists.
"""
from __future__ import annotations

import io
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, MutableMapping

from dotenv import dotenv_values

from hivecheck import metrics
from hivecheck.errors import validate_error_type

logger = logging.getLogger("hivecheck.envfile")


@dataclass(slots=True)
class EnvLoadResult:
    path: Path
    found: bool
    loaded_keys: List[str] = field(default_factory=list)


def load_env_file(
    path: str | Path = ".env",
    environ: MutableMapping[str, str] | None = None,
    override: bool = True,
) -> EnvLoadResult:
    """Load ``path`` into ``environ``.

    With ``override`` (the default) file values replace values already in
    the environment; otherwise existing keys win.
    """
    env_path = Path(path)
    target = os.environ if environ is None else environ
    if not env_path.is_file():
        logger.warning(
            "env file not found: %s (%s)",
            env_path,
            validate_error_type("env-file-missing"),
        )
        metrics.inc("env_file_loaded_total", {"found": "false"})
        return EnvLoadResult(path=env_path, found=False)

    try:
        # undecodable bytes must not abort the run
        text = env_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("env file unreadable: %s (%s)", env_path, e)
        metrics.inc("env_file_loaded_total", {"found": "false"})
        return EnvLoadResult(path=env_path, found=False)

    # values are taken verbatim: no ${VAR} expansion
    pairs = dotenv_values(stream=io.StringIO(text), interpolate=False)
    loaded: List[str] = []
    for key, value in pairs.items():
        key = key.strip()
        if not key or not value:
            continue
        if not override and key in target:
            continue
        target[key] = value.strip()
        loaded.append(key)
    logger.info("env file loaded: %s (%d keys)", env_path, len(loaded))
    metrics.inc("env_file_loaded_total", {"found": "true"})
    return EnvLoadResult(path=env_path, found=True, loaded_keys=loaded)


__all__ = ["EnvLoadResult", "load_env_file"]
