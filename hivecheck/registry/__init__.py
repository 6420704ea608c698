"""Model registry.

Responsibilities:
- Load the registry YAML (packaged default or a user-supplied file)
- Validate schema and reject duplicate model ids
- Provide lookup by model id and per-provider grouping
"""

from .loader import (  # noqa: F401
    DEFAULT_REGISTRY_PATH,
    clear_registry_cache,
    load_registry,
)
from .manifest import ExternalModelEntry, ModelRegistry  # noqa: F401

__all__ = [
    "DEFAULT_REGISTRY_PATH",
    "ExternalModelEntry",
    "ModelRegistry",
    "clear_registry_cache",
    "load_registry",
]
