from .errors import (
    PolicyConfigError,
    PolicyConfigErrorCode,
    PolicyConfigErrorDetail,
    SettingsLoadError,
)
from .loader import load_settings, settings_from_mapping
from .patterns import compile_option_pattern, lint_settings
from .settings import HookSettings

__all__ = [
    "HookSettings",
    "PolicyConfigError",
    "PolicyConfigErrorCode",
    "PolicyConfigErrorDetail",
    "SettingsLoadError",
    "compile_option_pattern",
    "lint_settings",
    "load_settings",
    "settings_from_mapping",
]
