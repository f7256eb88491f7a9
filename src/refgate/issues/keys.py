from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

_ISSUE_KEY_PATTERN: Final[re.Pattern[str]] = re.compile(r"([A-Z][A-Z0-9]+)-([0-9]+)")
_FULL_ISSUE_KEY_PATTERN: Final[re.Pattern[str]] = re.compile(r"[A-Z][A-Z0-9]+-[0-9]+")


@dataclass(frozen=True, slots=True)
class IssueKey:
    project_key: str
    issue_number: str

    def __post_init__(self) -> None:
        if not _FULL_ISSUE_KEY_PATTERN.fullmatch(f"{self.project_key}-{self.issue_number}"):
            raise ValueError(
                f"invalid issue key: '{self.project_key}-{self.issue_number}'"
            )

    @property
    def fully_qualified(self) -> str:
        return f"{self.project_key}-{self.issue_number}"

    def __str__(self) -> str:
        return self.fully_qualified

    @classmethod
    def parse(cls, text: str) -> IssueKey:
        match = _ISSUE_KEY_PATTERN.fullmatch(text.strip())
        if match is None:
            raise ValueError(f"invalid issue key: '{text}'")
        return cls(project_key=match.group(1), issue_number=match.group(2))


def parse_issue_keys(text: str | None) -> tuple[IssueKey, ...]:
    if not text:
        return ()
    return tuple(
        IssueKey(project_key=match.group(1), issue_number=match.group(2))
        for match in _ISSUE_KEY_PATTERN.finditer(text)
    )
