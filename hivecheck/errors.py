"""Central error taxonomy + exception hierarchy.

Every non-clean CheckResult carries one of the reason codes below; display
code relies on them instead of matching message glyphs.
"""
from __future__ import annotations

import subprocess

_ALLOWED_ERROR_TYPES = {
    # environment
    "env-file-missing",
    # model.check
    "model-not-found",
    "credential-missing",
    "credential-invalid",
    "tool-missing",
    "probe-error",
    # config / registry
    "config-invalid",
    "config-out-of-range",
    "registry-invalid",
    # run
    "run-aborted",
}


class VerifierError(Exception):
    """Base verifier exception."""


class ConfigError(VerifierError):
    """Raised on config validation failure or unknown key."""


class RegistryError(VerifierError):
    """Raised when a registry file cannot be parsed or is inconsistent.

    Typical reasons: YAML syntax error, duplicate model id, empty field.
    """


def validate_error_type(code: str) -> str:
    assert (
        code in _ALLOWED_ERROR_TYPES
    ), f"Unknown error_type '{code}' (not in taxonomy)"
    return code


def map_exception(e: Exception, phase: str) -> str:
    name = e.__class__.__name__.lower()
    msg = str(e).lower()
    if phase == "probe":
        if isinstance(e, FileNotFoundError) or "not found" in msg:
            return "tool-missing"
        return "probe-error"
    if phase == "config":
        if isinstance(e, ConfigError) and "out-of-range" in msg:
            return "config-out-of-range"
        return "config-invalid"
    if phase == "registry":
        return "registry-invalid"
    if "timeout" in name or isinstance(e, subprocess.TimeoutExpired):
        return "probe-error"
    return "run-aborted"


__all__ = [
    "VerifierError",
    "ConfigError",
    "RegistryError",
    "validate_error_type",
    "map_exception",
]
