"""Run orchestrator.

Strictly linear: load env → built-in models → external models → summary.
One check at a time; the pacer spaces out external checks that reached the
probe stage so a full run never bursts against rate-limited providers.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Callable, List, MutableMapping, Optional

from hivecheck import metrics
from hivecheck.checks import (
    Probe,
    check_builtin,
    check_external,
    credential_missing,
)
from hivecheck.config import VerifierConfig, get_config
from hivecheck.envfile import load_env_file
from hivecheck.probe import ToolProbe
from hivecheck.registry import ModelRegistry, load_registry
from hivecheck.report import Reporter
from hivecheck.types import CheckResult, ResultSet

logger = logging.getLogger("hivecheck.runner")


class Pacer:
    """Fixed inter-check delay with an injectable sleep."""

    def __init__(
        self,
        delay_s: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.delay_s = delay_s
        self._sleep = sleep
        self.waits = 0

    def wait(self) -> None:
        self.waits += 1
        if self.delay_s > 0:
            self._sleep(self.delay_s)


def run_checks(
    registry: ModelRegistry,
    environ: MutableMapping[str, str],
    probe: Probe,
    pacer: Pacer,
    min_credential_length: int = 10,
    reporter: Optional[Reporter] = None,
) -> ResultSet:
    results = ResultSet()

    def _record(result: CheckResult) -> None:
        results.add(result)
        if reporter is not None:
            reporter.result(result)

    if reporter is not None:
        reporter.section(
            f"Checking {registry.builtin_provider} models (built-in):"
        )
    for model_id in registry.builtin_models:
        if reporter is not None:
            reporter.checking(model_id)
        _record(check_builtin(model_id, registry))

    if reporter is not None:
        reporter.section(f"Checking {probe.tool} models (external APIs):")
    for model_id, entry in registry.iter_external():
        if reporter is not None:
            reporter.checking(model_id, entry.provider)
        if not environ.get(entry.credential_name):
            # env-only skip: no probe, no pacing
            skipped = credential_missing(model_id, entry)
            metrics.inc_check(skipped.status.value)
            _record(skipped)
            continue
        _record(
            check_external(
                model_id,
                registry,
                environ,
                probe,
                min_credential_length=min_credential_length,
            )
        )
        pacer.wait()

    logger.info(
        "run finished: working=%d failed=%d skipped=%d",
        len(results.working),
        len(results.failed),
        len(results.skipped),
    )
    return results


def run_all(
    config: VerifierConfig | None = None,
    environ: MutableMapping[str, str] | None = None,
    registry: ModelRegistry | None = None,
    probe: Probe | None = None,
    pacer: Pacer | None = None,
    reporter: Reporter | None = None,
    providers: List[str] | None = None,
) -> ResultSet:
    """Load the environment, check every model and print the summary.

    Every collaborator can be injected; anything left as ``None`` is built
    from the ``verifier`` config section.
    """
    cfg = config if config is not None else get_config().verifier
    env = os.environ if environ is None else environ
    rep = reporter or Reporter()

    rep.banner()
    rep.env_loaded(
        load_env_file(cfg.env_file, environ=env, override=cfg.override_env)
    )

    reg = registry
    if reg is None:
        reg = load_registry(cfg.registry_path)
    wanted = providers if providers is not None else cfg.providers
    reg = reg.filter_providers(wanted)
    if wanted:
        logger.info("provider filter: %s", ", ".join(wanted))

    results = run_checks(
        reg,
        env,
        probe or ToolProbe(cfg.tool, cfg.probe_timeout_s),
        pacer or Pacer(cfg.check_delay_s),
        min_credential_length=cfg.min_credential_length,
        reporter=rep,
    )
    rep.summary(results, reg, tool=cfg.tool)
    rep.tips(cfg.env_file, cfg.tool)
    return results


__all__ = ["Pacer", "run_checks", "run_all"]
