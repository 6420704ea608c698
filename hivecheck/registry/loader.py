"""Registry loader: reads the model registry YAML."""
from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Dict

import yaml
from yaml import YAMLError

from hivecheck.errors import RegistryError

from .manifest import (
    DEFAULT_BUILTIN_PROVIDER,
    ExternalModelEntry,
    ModelRegistry,
)

DEFAULT_REGISTRY_PATH = Path(__file__).with_name("models.yaml")

_registry_lock = threading.Lock()
_registry_cache: Dict[Path, ModelRegistry] = {}


def _read_yaml(path: Path) -> Dict[str, Any]:
    """Parse a registry file, tolerating accidental tab indentation.

    Tabs are retried as two spaces so a hand-edited file does not take down
    the whole run.
    """
    if not path.exists():
        raise RegistryError(f"Registry file not found: {path}")
    raw_text = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(raw_text) or {}
    except YAMLError as e:
        if "\t" not in raw_text:
            raise RegistryError(f"Invalid registry {path.name}: {e}") from e
        print(f"[WARN] Re-parsing registry tabs->spaces: {path.name}")
        try:
            data = yaml.safe_load(raw_text.replace("\t", "  ")) or {}
        except YAMLError as e2:
            raise RegistryError(
                f"Invalid registry {path.name}: {e2}"
            ) from e2
    if not isinstance(data, dict):
        raise RegistryError(f"Registry {path.name} must be a mapping")
    return data


def build_registry(
    data: Dict[str, Any], source: str = "<memory>"
) -> ModelRegistry:
    """Build a registry from parsed YAML.

    ``external_models`` is a list of entries with an ``id`` key; list order
    is the check order.
    """
    external: Dict[str, ExternalModelEntry] = {}
    for item in data.get("external_models") or []:
        if not isinstance(item, dict) or "id" not in item:
            raise RegistryError(f"Invalid registry {source}: entry without id")
        fields = dict(item)
        model_id = str(fields.pop("id")).strip()
        if not model_id:
            raise RegistryError(f"Invalid registry {source}: empty model id")
        if model_id in external:
            raise RegistryError(f"Duplicate model id in registry: {model_id}")
        try:
            external[model_id] = ExternalModelEntry(**fields)
        except Exception as e:  # noqa: BLE001
            raise RegistryError(
                f"Invalid registry {source} ({model_id}): {e}"
            ) from e
    try:
        return ModelRegistry(
            builtin_provider=data.get(
                "builtin_provider", DEFAULT_BUILTIN_PROVIDER
            ),
            builtin_models=tuple(data.get("builtin_models") or ()),
            external_models=external,
        )
    except Exception as e:  # noqa: BLE001
        raise RegistryError(f"Invalid registry {source}: {e}") from e


def load_registry(path: str | Path | None = None) -> ModelRegistry:
    """Load a registry file (thread-safe cache keyed by resolved path)."""
    reg_path = Path(path) if path else DEFAULT_REGISTRY_PATH
    reg_path = reg_path.resolve()
    with _registry_lock:
        if reg_path in _registry_cache:
            return _registry_cache[reg_path]
        registry = build_registry(_read_yaml(reg_path), source=reg_path.name)
        _registry_cache[reg_path] = registry
        return registry


def clear_registry_cache(path: str | Path | None = None) -> None:
    """Clear cached registries.

    If path provided, clear only that entry; else clear all.
    """
    with _registry_lock:
        if path is None:
            _registry_cache.clear()
        else:
            _registry_cache.pop(Path(path).resolve(), None)
