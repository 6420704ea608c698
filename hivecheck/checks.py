"""Per-model checks.

Both checks are pure apart from environment reads and (for external models)
one probe call. Problems come back as CheckResult values, never as raised
exceptions.
"""
from __future__ import annotations

from typing import Mapping, Protocol

from hivecheck import metrics
from hivecheck.errors import map_exception
from hivecheck.probe import ProbeResult
from hivecheck.registry import ExternalModelEntry, ModelRegistry
from hivecheck.types import CheckResult, CheckStatus

MIN_CREDENTIAL_LENGTH = 10


class Probe(Protocol):
    tool: str

    def probe(self) -> ProbeResult: ...


def check_builtin(model_id: str, registry: ModelRegistry) -> CheckResult:
    result = CheckResult.working(
        model_id,
        f"{registry.builtin_provider} model {model_id} - built-in "
        "(always available)",
        provider=registry.builtin_provider,
        kind="builtin",
    )
    metrics.inc_check(result.status.value)
    return result


def credential_missing(
    model_id: str, entry: ExternalModelEntry
) -> CheckResult:
    return CheckResult.problem(
        CheckStatus.SKIPPED,
        "credential-missing",
        model_id,
        f"Credential not configured ({entry.credential_name})",
        provider=entry.provider,
        credential_name=entry.credential_name,
    )


def _check_external(
    model_id: str,
    registry: ModelRegistry,
    environ: Mapping[str, str],
    probe: Probe,
    min_credential_length: int,
) -> CheckResult:
    entry = registry.get_external(model_id)
    if entry is None:
        return CheckResult.problem(
            CheckStatus.FAILED,
            "model-not-found",
            model_id,
            f"Model {model_id} not found in configuration",
        )

    credential = environ.get(entry.credential_name)
    if not credential:
        return credential_missing(model_id, entry)

    if len(credential) < min_credential_length:
        return CheckResult.problem(
            CheckStatus.FAILED,
            "credential-invalid",
            model_id,
            f"Credential {entry.credential_name} invalid or too short "
            f"for {entry.provider}",
            provider=entry.provider,
            credential_name=entry.credential_name,
        )

    try:
        found = probe.probe()
    except Exception as e:  # noqa: BLE001
        found = ProbeResult(
            tool=probe.tool,
            present=False,
            error=map_exception(e, "probe"),
            detail=str(e),
        )
    if not found.present:
        return CheckResult.problem(
            CheckStatus.WORKING_WITH_CAVEAT,
            found.error or "tool-missing",
            model_id,
            f"{probe.tool} not installed - credential OK but "
            f"{probe.tool} CLI required",
            provider=entry.provider,
            credential_name=entry.credential_name,
        )

    return CheckResult.working(
        model_id,
        f"{entry.provider} configured ({entry.underlying_name}) - "
        f"credential valid, {probe.tool} available",
        provider=entry.provider,
    )


def check_external(
    model_id: str,
    registry: ModelRegistry,
    environ: Mapping[str, str],
    probe: Probe,
    min_credential_length: int = MIN_CREDENTIAL_LENGTH,
) -> CheckResult:
    """Check one external model: registry entry, credential, then the CLI.

    Order matters: the probe only runs once the credential looks plausible.
    """
    result = _check_external(
        model_id, registry, environ, probe, min_credential_length
    )
    metrics.inc_check(result.status.value)
    return result


__all__ = [
    "MIN_CREDENTIAL_LENGTH",
    "Probe",
    "check_builtin",
    "check_external",
    "credential_missing",
]
