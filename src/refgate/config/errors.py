from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class PolicyConfigErrorCode(StrEnum):
    E_CONFIG_REGEX_INVALID = "E_CONFIG_REGEX_INVALID"


@dataclass(frozen=True, slots=True)
class PolicyConfigErrorDetail:
    code: str
    message: str
    option: str
    pattern: str


class PolicyConfigError(ValueError):
    def __init__(self, detail: PolicyConfigErrorDetail) -> None:
        super().__init__(f"{detail.code}: {detail.message}")
        self.detail = detail


class SettingsLoadError(ValueError):
    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


def build_policy_config_error(
    code: PolicyConfigErrorCode,
    message: str,
    *,
    option: str,
    pattern: str,
) -> PolicyConfigError:
    return PolicyConfigError(
        PolicyConfigErrorDetail(
            code=code.value,
            message=message,
            option=option,
            pattern=pattern,
        )
    )
