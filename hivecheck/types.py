"""Check result types."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from hivecheck.errors import validate_error_type


class CheckStatus(str, Enum):
    WORKING = "working"
    WORKING_WITH_CAVEAT = "working_with_caveat"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(slots=True)
class CheckResult:
    model_id: str
    status: CheckStatus
    message: str
    reason: Optional[str] = None  # error taxonomy code; None when clean
    provider: Optional[str] = None
    kind: str = "external"  # builtin | external
    credential_name: Optional[str] = None

    @property
    def is_working(self) -> bool:
        return self.status in (
            CheckStatus.WORKING,
            CheckStatus.WORKING_WITH_CAVEAT,
        )

    @staticmethod
    def working(
        model_id: str,
        message: str,
        provider: str | None = None,
        kind: str = "external",
    ) -> "CheckResult":
        return CheckResult(
            model_id=model_id,
            status=CheckStatus.WORKING,
            message=message,
            provider=provider,
            kind=kind,
        )

    @staticmethod
    def problem(
        status: CheckStatus,
        reason: str,
        model_id: str,
        message: str,
        provider: str | None = None,
        credential_name: str | None = None,
    ) -> "CheckResult":
        return CheckResult(
            model_id=model_id,
            status=status,
            message=message,
            reason=validate_error_type(reason),
            provider=provider,
            credential_name=credential_name,
        )


@dataclass(slots=True)
class ResultSet:
    working: List[CheckResult] = field(default_factory=list)
    failed: List[CheckResult] = field(default_factory=list)
    skipped: List[CheckResult] = field(default_factory=list)

    def add(self, result: CheckResult) -> None:
        if result.is_working:
            self.working.append(result)
        elif result.status is CheckStatus.FAILED:
            self.failed.append(result)
        else:
            self.skipped.append(result)

    @property
    def caveats(self) -> List[CheckResult]:
        return [
            r for r in self.working
            if r.status is CheckStatus.WORKING_WITH_CAVEAT
        ]

    def __len__(self) -> int:
        return len(self.working) + len(self.failed) + len(self.skipped)


__all__ = ["CheckStatus", "CheckResult", "ResultSet"]
