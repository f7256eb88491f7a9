from __future__ import annotations

from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import ValidationError

from .errors import SettingsLoadError
from .settings import HookSettings


def _load_structured_dict(path: Path) -> dict[str, object]:
    try:
        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise SettingsLoadError(path.as_posix(), "settings file is missing") from exc
    except yaml.YAMLError as exc:
        raise SettingsLoadError(path.as_posix(), f"invalid JSON/YAML payload: {exc}") from exc

    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise SettingsLoadError(path.as_posix(), "settings must be a mapping")
    return payload


def settings_from_mapping(payload: dict[str, object], *, source: str = "<mapping>") -> HookSettings:
    try:
        return HookSettings.model_validate(payload)
    except ValidationError as exc:
        raise SettingsLoadError(source, f"invalid settings: {exc}") from exc


def load_settings(path: Path | str) -> HookSettings:
    settings_path = Path(path)
    payload = _load_structured_dict(settings_path)
    return settings_from_mapping(payload, source=settings_path.as_posix())
