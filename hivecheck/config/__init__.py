"""Config subsystem public API.

Provides:
    get_config() -> AggregatedConfig (verifier + logging sections)
    as_dict()    -> dict representation
    ConfigError  -> raised on validation / unknown key
"""

from hivecheck.errors import ConfigError  # noqa: F401

from .loader import (  # noqa: F401
    AggregatedConfig,
    as_dict,
    clear_config_cache,
    get_config,
)
from .schemas.observability import LoggingConfig  # noqa: F401
from .schemas.verifier import VerifierConfig  # noqa: F401

__all__ = [
    "AggregatedConfig",
    "get_config",
    "as_dict",
    "ConfigError",
    "clear_config_cache",
    "LoggingConfig",
    "VerifierConfig",
]
