"""hivecheck: model configuration verifier for the HiveLLM Chat Hub.

Public entry points for reuse by other tooling:
    run_all()       full check run (env file, registry, probe, summary)
    run_checks()    the check loop alone, every collaborator injected
    load_registry() the model registry (packaged default or custom YAML)
"""

from .registry import (  # noqa: F401
    ExternalModelEntry,
    ModelRegistry,
    load_registry,
)
from .runner import Pacer, run_all, run_checks  # noqa: F401
from .types import CheckResult, CheckStatus, ResultSet  # noqa: F401

__version__ = "0.1.0"

__all__ = [
    "CheckResult",
    "CheckStatus",
    "ExternalModelEntry",
    "ModelRegistry",
    "Pacer",
    "ResultSet",
    "load_registry",
    "run_all",
    "run_checks",
]
