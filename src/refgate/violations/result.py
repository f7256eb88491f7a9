from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass

from .models import Violation


@dataclass(frozen=True, slots=True)
class ValidationResult:
    violations: tuple[Violation, ...] = ()

    @property
    def accepted(self) -> bool:
        return not self.violations

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(item.message for item in self.violations)

    @classmethod
    def combine(cls, results: Iterable[ValidationResult]) -> ValidationResult:
        merged: list[Violation] = []
        for result in results:
            merged.extend(result.violations)
        return cls(violations=tuple(merged))

    def to_payload(self) -> dict[str, object]:
        return {
            "status": "accepted" if self.accepted else "rejected",
            "violations": [
                item.model_dump(mode="json", include={"changeset_id", "kind", "message"})
                for item in self.violations
            ],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_payload(), ensure_ascii=True, separators=(",", ":"))
