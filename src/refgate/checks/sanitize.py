from __future__ import annotations

import re
from typing import Final

# Characters git drops from user.name when recording an ident (strbuf_addstr_without_crud).
_SPECIAL_CHARACTERS: Final[re.Pattern[str]] = re.compile(r"[<>\n]")
_LEADING_CRUD: Final[re.Pattern[str]] = re.compile(r"\A[\\.,:;\"']+")
_TRAILING_CRUD: Final[re.Pattern[str]] = re.compile(r"[\\.,:;\"']+\Z")


def sanitize_name(name: str | None) -> str | None:
    if name is None:
        return None
    name = _SPECIAL_CHARACTERS.sub("", name)
    name = _LEADING_CRUD.sub("", name)
    return _TRAILING_CRUD.sub("", name)
