from __future__ import annotations

import re

from .errors import PolicyConfigError, PolicyConfigErrorCode, build_policy_config_error
from .settings import HookSettings

_PATTERN_OPTIONS: tuple[tuple[str, str, int], ...] = (
    ("branchNameRegex", "branch_name_regex", 0),
    ("excludeByRegex", "exclude_by_regex", 0),
    ("commitMessageRegex", "commit_message_regex", re.MULTILINE),
)


def compile_option_pattern(option: str, pattern: str, flags: int = 0) -> re.Pattern[str]:
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise build_policy_config_error(
            PolicyConfigErrorCode.E_CONFIG_REGEX_INVALID,
            f"{option} is not a valid regular expression: {exc}",
            option=option,
            pattern=pattern,
        ) from exc


def lint_settings(settings: HookSettings) -> tuple[PolicyConfigError, ...]:
    errors: list[PolicyConfigError] = []
    for option, field_name, flags in _PATTERN_OPTIONS:
        pattern = getattr(settings, field_name)
        if not pattern:
            continue
        try:
            compile_option_pattern(option, pattern, flags)
        except PolicyConfigError as exc:
            errors.append(exc)
    return tuple(errors)
