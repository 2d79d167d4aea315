from fs_err.shared.logging import ContextualLogger, get_contextual_logger
from fs_err.shared.settings import (
    Settings,
    configure,
    get_settings,
    load_settings,
    reset_settings,
)

__all__ = [
    "ContextualLogger",
    "Settings",
    "configure",
    "get_contextual_logger",
    "get_settings",
    "load_settings",
    "reset_settings",
]
