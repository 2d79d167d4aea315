import os
import threading
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from fs_err.shared.constants import (
    CONFIG_PATH_ENV,
    CONFIG_SECTION,
    FALSY_VALUES,
    INLINE_CAUSE_ENV,
    LOG_FAILURES_ENV,
    TRUTHY_VALUES,
)
from fs_err.shared.errors import ConfigurationError
from fs_err.shared.logging import get_contextual_logger

logger = get_contextual_logger("fs_err.settings")

_ENV_OVERRIDES = {
    "inline_cause": INLINE_CAUSE_ENV,
    "log_failures": LOG_FAILURES_ENV,
}


@dataclass(frozen=True)
class Settings:
    # Append the original error text to every rendered message.
    inline_cause: bool = False
    # Emit a DEBUG record for every wrapped failure.
    log_failures: bool = True


_lock = threading.Lock()
_settings: Settings | None = None


def _parse_bool(value: object, key: str, source: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUTHY_VALUES:
            return True
        if lowered in FALSY_VALUES:
            return False
    raise ConfigurationError(
        f"Setting '{key}' must be a boolean, got {value!r}", source
    )


def _apply(
    settings: Settings, values: dict[str, Any], source: str
) -> Settings:
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown settings: {', '.join(unknown)}. "
            f"Available settings: {', '.join(sorted(known))}",
            source,
        )
    parsed = {
        key: _parse_bool(value, key, source) for key, value in values.items()
    }
    return replace(settings, **parsed)


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read config file: {e.strerror or e}", str(path)
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML: {e}", str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Config file must contain a mapping", str(path)
        )

    section = data.get(CONFIG_SECTION, data)
    if not isinstance(section, dict):
        raise ConfigurationError(
            f"'{CONFIG_SECTION}' section must be a mapping", str(path)
        )
    return section


def load_settings(path: str | os.PathLike[str] | None = None) -> Settings:
    """Resolve settings from defaults, a YAML file and the environment.

    ``path`` defaults to the file named by ``FS_ERR_CONFIG``; without either,
    only defaults and environment variables apply.
    """
    settings = Settings()

    config_path = path if path is not None else os.getenv(CONFIG_PATH_ENV)
    if config_path:
        file_path = Path(config_path)
        settings = _apply(
            settings, _read_config_file(file_path), str(file_path)
        )
        logger.debug("Loaded fs_err settings from %s", file_path)

    env_values = {
        key: os.environ[env]
        for key, env in _ENV_OVERRIDES.items()
        if env in os.environ
    }
    if env_values:
        settings = _apply(settings, env_values, "environment")

    return settings


def get_settings() -> Settings:
    global _settings  # noqa: PLW0603
    current = _settings
    if current is not None:
        return current
    with _lock:
        if _settings is None:
            _settings = load_settings()
        return _settings


def configure(**overrides: Any) -> Settings:
    global _settings  # noqa: PLW0603
    with _lock:
        base = _settings if _settings is not None else load_settings()
        _settings = _apply(base, overrides, "configure()")
        logger.debug("fs_err settings updated", **overrides)
        return _settings


def reset_settings() -> None:
    global _settings  # noqa: PLW0603
    with _lock:
        _settings = None
