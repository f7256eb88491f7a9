from __future__ import annotations

import re

from refgate.config import HookSettings, compile_option_pattern
from refgate.violations import Violation, ViolationKind


def commit_message_pattern(settings: HookSettings) -> re.Pattern[str] | None:
    if not settings.commit_message_regex:
        return None
    return compile_option_pattern("commitMessageRegex", settings.commit_message_regex, re.MULTILINE)


def check_commit_message(message: str, settings: HookSettings) -> tuple[Violation, ...]:
    pattern = commit_message_pattern(settings)
    if pattern is None or pattern.fullmatch(message):
        return ()
    return (
        Violation(
            kind=ViolationKind.COMMIT_REGEX,
            message=f"commit message doesn't match regex: {settings.commit_message_regex}",
        ),
    )
