"""Configuration loading & validation.

Precedence (last wins): base.yaml → overrides.local.yaml → ENV (HIVECHECK__*).

A missing config directory is not an error: every field has a default, so a
bare checkout runs with the built-in settings.
"""
from __future__ import annotations

import os
import pathlib
import threading
from functools import lru_cache
from typing import Any, Dict, Type

import yaml
from pydantic import BaseModel, ConfigDict
from yaml import YAMLError

from hivecheck import metrics
from hivecheck.errors import ConfigError, validate_error_type

from .schemas.observability import LoggingConfig
from .schemas.verifier import VerifierConfig


class AggregatedConfig(BaseModel):
    schema_version: int = 1
    verifier: VerifierConfig = VerifierConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = ConfigDict(extra="forbid")


DEFAULT_CONFIG_DIR = "configs"
ENV_PREFIX = "HIVECHECK__"

SUB_SCHEMA_CLASSES: Dict[str, Type[BaseModel]] = {
    "verifier": VerifierConfig,
    "logging": LoggingConfig,
}


def _load_yaml_if_exists(path: pathlib.Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid config file {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path.name} must contain a mapping")
    return data


def _merge_dict(
    base: Dict[str, Any], override: Dict[str, Any]
) -> Dict[str, Any]:
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            base[k] = _merge_dict(base[k], v)
        else:
            base[k] = v
    return base


def _cast_env_value(value: str) -> Any:
    if value.lower() in {"true", "false"}:
        return value.lower() == "true"
    if "," in value:
        return [part.strip() for part in value.split(",") if part.strip()]
    try:
        return int(value)
    except ValueError:
        try:
            return float(value)
        except ValueError:
            return value


def _apply_env(cfg: Dict[str, Any]) -> None:
    prefix_len = len(ENV_PREFIX)
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        path_parts = env_key[prefix_len:].lower().split("__")
        target = cfg
        for part in path_parts[:-1]:
            if part not in target or not isinstance(target[part], dict):
                target[part] = {}
            target = target[part]
        target[path_parts[-1]] = _cast_env_value(value)
        dotted_path = ".".join(path_parts)
        metrics.inc("env_override_total", {"path": dotted_path})
        print(
            f"[config-env-override] path={dotted_path} value=*** source=env"
        )  # noqa: T201


_lock = threading.Lock()


def _resolve_config_dir() -> pathlib.Path:
    """Resolve config directory each call honoring env var changes."""
    return pathlib.Path(os.getenv("HIVECHECK_CONFIG_DIR", DEFAULT_CONFIG_DIR))


def _normalize_and_validate(raw: Dict[str, Any]) -> None:
    """Apply bounds validation that the schemas leave open.

    Validations (error → raise):
      - verifier.min_credential_length >= 1
      - verifier.probe_timeout_s > 0
      - verifier.check_delay_s >= 0
    """
    errors: list[tuple[str, str, str]] = []  # (path, code, msg)
    section = raw.get("verifier") or {}
    if not isinstance(section, dict):
        return

    min_len = section.get("min_credential_length")
    if isinstance(min_len, (int, float)) and min_len < 1:
        errors.append(
            (
                "verifier.min_credential_length",
                "config-out-of-range",
                ">=1 required",
            )
        )
    timeout = section.get("probe_timeout_s")
    if isinstance(timeout, (int, float)) and timeout <= 0:
        errors.append(
            ("verifier.probe_timeout_s", "config-out-of-range", ">0 required")
        )
    delay = section.get("check_delay_s")
    if isinstance(delay, (int, float)) and delay < 0:
        errors.append(
            ("verifier.check_delay_s", "config-out-of-range", ">=0 required")
        )

    if errors:
        for path, code, _ in errors:
            validate_error_type(code)
            metrics.inc(
                "config_validation_errors_total",
                {"path": path, "code": code},
            )
        details = ", ".join(f"{p}:{c}:{m}" for p, c, m in errors)
        raise ConfigError(f"config validation failed: {details}")


def _validate_sub_schemas(raw: Dict[str, Any]) -> Dict[str, Any]:
    validated: Dict[str, Any] = {}
    for name, cls in SUB_SCHEMA_CLASSES.items():
        if name in raw:
            try:
                validated[name] = cls.model_validate(raw[name])
            except Exception as e:  # noqa: BLE001
                raise ConfigError(
                    f"Validation failed for section '{name}': {e}"
                ) from e
    return validated


@lru_cache(maxsize=1)
def get_config() -> AggregatedConfig:  # noqa: D401
    with _lock:
        cfg_dir = _resolve_config_dir()
        base_cfg = _load_yaml_if_exists(cfg_dir / "base.yaml")
        overrides_cfg = _load_yaml_if_exists(cfg_dir / "overrides.local.yaml")
        merged = _merge_dict(base_cfg, overrides_cfg)
        _apply_env(merged)
        _normalize_and_validate(merged)
        validated_sub = _validate_sub_schemas(merged)
        try:
            agg = AggregatedConfig.model_validate(
                {**merged, **validated_sub}
            )
        except Exception as e:  # noqa: BLE001
            raise ConfigError(str(e)) from e
        return agg


def clear_config_cache() -> None:
    """Clear cached config (primarily for tests)."""
    get_config.cache_clear()


def as_dict() -> Dict[str, Any]:
    return get_config().model_dump()
