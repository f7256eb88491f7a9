from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TrackerAnswer:
    value: bool


@dataclass(frozen=True, slots=True)
class AuthFailure:
    auth_url: str
    detail: str = ""


@dataclass(frozen=True, slots=True)
class TransportFailure:
    detail: str
    error_type: str = "TransportFailure"


type TrackerResult = TrackerAnswer | AuthFailure | TransportFailure
type TrackerFailure = AuthFailure | TransportFailure
