"""Companion CLI presence probe.

Existence check only (``which <tool>``, ``where`` on Windows), bounded by a
short timeout. Any probe failure is reported as "not present" with the error
kept for display; nothing is retried.
"""
from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass

from hivecheck import metrics
from hivecheck.errors import map_exception

logger = logging.getLogger("hivecheck.probe")

DEFAULT_TOOL = "aider"
DEFAULT_TIMEOUT_S = 5.0


@dataclass(slots=True)
class ProbeResult:
    tool: str
    present: bool
    error: str | None = None  # taxonomy code when the probe itself failed
    detail: str | None = None


class ToolProbe:
    def __init__(
        self,
        tool: str = DEFAULT_TOOL,
        timeout_s: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self.tool = tool
        self.timeout_s = timeout_s

    def _command(self) -> list[str]:
        finder = "where" if os.name == "nt" else "which"
        return [finder, self.tool]

    def probe(self) -> ProbeResult:
        try:
            proc = subprocess.run(
                self._command(),
                capture_output=True,
                text=True,
                timeout=self.timeout_s,
                check=False,
            )
        except (subprocess.TimeoutExpired, OSError) as e:
            code = map_exception(e, "probe")
            logger.debug("probe %s failed: %s", self.tool, e)
            metrics.inc_probe("error")
            return ProbeResult(
                tool=self.tool, present=False, error=code, detail=str(e)
            )
        if proc.returncode != 0:
            metrics.inc_probe("missing")
            return ProbeResult(tool=self.tool, present=False)
        metrics.inc_probe("present")
        location = proc.stdout.strip().splitlines()
        return ProbeResult(
            tool=self.tool,
            present=True,
            detail=location[0] if location else None,
        )


__all__ = ["ProbeResult", "ToolProbe", "DEFAULT_TOOL", "DEFAULT_TIMEOUT_S"]
