"""Pytest configuration ensuring project root is importable.

Adds repository root to sys.path explicitly to avoid interpreter/path quirks.
"""
from __future__ import annotations

import io
import logging
import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _isolate_global_state(tmp_path_factory):  # noqa: D401
    """Ensure config/registry/metrics side effects do not leak between tests.

    - Point HIVECHECK_CONFIG_DIR at an empty dir (defaults only)
    - Clear config + registry caches and metrics counters
    - Restore HIVECHECK_CONFIG_DIR to original value
    """
    from hivecheck import metrics
    from hivecheck.config import clear_config_cache
    from hivecheck.registry import clear_registry_cache

    prev = os.environ.get("HIVECHECK_CONFIG_DIR")
    os.environ["HIVECHECK_CONFIG_DIR"] = str(
        tmp_path_factory.mktemp("configs")
    )
    clear_config_cache()
    clear_registry_cache()
    metrics.reset_for_tests()
    try:
        yield
    finally:
        clear_config_cache()
        clear_registry_cache()
        # cli.main() attaches a stderr handler bound to the captured stream
        logger = logging.getLogger("hivecheck")
        for h in list(logger.handlers):
            logger.removeHandler(h)
        logger.setLevel(logging.NOTSET)
        if prev is None:
            os.environ.pop("HIVECHECK_CONFIG_DIR", None)
        else:
            os.environ["HIVECHECK_CONFIG_DIR"] = prev


class FakeProbe:
    """Probe stand-in counting calls instead of spawning ``which``."""

    def __init__(self, present: bool = True, tool: str = "aider",
                 error: str | None = None) -> None:
        self.tool = tool
        self.present = present
        self.error = error
        self.calls = 0

    def probe(self):
        from hivecheck.probe import ProbeResult

        self.calls += 1
        return ProbeResult(tool=self.tool, present=self.present,
                           error=self.error)


@pytest.fixture
def fake_probe():
    return FakeProbe


@pytest.fixture
def demo_registry():
    from hivecheck.registry import ExternalModelEntry, ModelRegistry

    return ModelRegistry(
        builtin_models=("auto",),
        external_models={
            "demo/x": ExternalModelEntry(
                provider="demo",
                credential_name="DEMO_KEY",
                underlying_name="x",
            )
        },
    )


@pytest.fixture
def quiet_reporter():
    """Reporter writing plain text into buffers; ``.text()`` reads stdout."""
    from rich.console import Console

    from hivecheck.report import Reporter

    out = io.StringIO()
    err = io.StringIO()
    rep = Reporter(
        console=Console(file=out, width=200, color_system=None,
                        highlight=False),
        err_console=Console(file=err, width=200, color_system=None,
                            highlight=False),
    )
    rep.text = out.getvalue  # type: ignore[attr-defined]
    rep.err_text = err.getvalue  # type: ignore[attr-defined]
    return rep
