"""Verifier config schema.

Controls where credentials come from, how plausible they must look and how
the companion CLI is probed. Bounds checks beyond types live in the loader.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class VerifierConfig(BaseModel):
    env_file: str = ".env"
    override_env: bool = True
    registry_path: str | None = None
    min_credential_length: int = 10
    tool: str = "aider"
    probe_timeout_s: float = 5.0
    check_delay_s: float = 1.0
    providers: list[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @field_validator("tool")
    @classmethod
    def _tool_not_empty(cls, v: str) -> str:  # noqa: D401
        if not v.strip():
            raise ValueError("tool cannot be empty")
        return v.strip()

    @field_validator("providers", mode="before")
    @classmethod
    def _providers_as_list(cls, v):  # noqa: D401
        # HIVECHECK__VERIFIER__PROVIDERS=openai arrives as a bare string
        if isinstance(v, str):
            return [v] if v.strip() else []
        return v
