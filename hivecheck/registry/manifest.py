"""Model registry schema.

The registry is immutable once built: models are frozen and the run only
reads from it.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BUILTIN_PROVIDER = "cursor-agent"


class ExternalModelEntry(BaseModel):
    provider: str
    credential_name: str
    underlying_name: str

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("provider", "credential_name", "underlying_name")
    @classmethod
    def _not_empty(cls, v: str) -> str:  # noqa: D401
        if not v.strip():
            raise ValueError("field cannot be empty")
        return v.strip()


class ModelRegistry(BaseModel):
    builtin_provider: str = DEFAULT_BUILTIN_PROVIDER
    builtin_models: Tuple[str, ...] = ()
    external_models: Mapping[str, ExternalModelEntry] = Field(
        default_factory=dict, validate_default=True
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("external_models")
    @classmethod
    def _read_only(
        cls, v: Mapping[str, ExternalModelEntry]
    ) -> Mapping[str, ExternalModelEntry]:
        # shared cached instances: callers must not mutate the index
        return MappingProxyType(dict(v))

    @field_validator("builtin_models")
    @classmethod
    def _builtin_unique(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        seen = set()
        for model_id in v:
            if not model_id.strip():
                raise ValueError("built-in model id cannot be empty")
            if model_id in seen:
                raise ValueError(f"duplicate built-in model id: {model_id}")
            seen.add(model_id)
        return v

    def get_external(self, model_id: str) -> ExternalModelEntry | None:
        return self.external_models.get(model_id)

    def iter_external(self) -> Iterator[tuple[str, ExternalModelEntry]]:
        """Yield (model_id, entry) in registry order."""
        yield from self.external_models.items()

    def providers(self) -> list[str]:
        """External provider names in first-seen registry order."""
        out: list[str] = []
        for entry in self.external_models.values():
            if entry.provider not in out:
                out.append(entry.provider)
        return out

    def provider_counts(self) -> Dict[str, int]:
        """Model count per provider; the built-in group counts as one."""
        counts: Dict[str, int] = {}
        if self.builtin_models:
            counts[self.builtin_provider] = len(self.builtin_models)
        for entry in self.external_models.values():
            counts[entry.provider] = counts.get(entry.provider, 0) + 1
        return counts

    def filter_providers(self, providers: list[str]) -> "ModelRegistry":
        """Return a registry narrowed to the given external providers.

        Built-in models are kept; an empty list keeps everything.
        """
        if not providers:
            return self
        wanted = {p.lower() for p in providers}
        return ModelRegistry(
            builtin_provider=self.builtin_provider,
            builtin_models=self.builtin_models,
            external_models={
                mid: entry
                for mid, entry in self.external_models.items()
                if entry.provider.lower() in wanted
            },
        )

    @property
    def total(self) -> int:
        return len(self.builtin_models) + len(self.external_models)
