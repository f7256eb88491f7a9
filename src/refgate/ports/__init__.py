from .payload import (
    PushDescription,
    PushDescriptionError,
    load_push_description,
    parse_push_description,
)
from .protocols import ChangesetSource, ExemptionOracle, IdentityProvider
from .static import NameListExemptionOracle, StaticChangesetSource, StaticIdentityProvider

__all__ = [
    "ChangesetSource",
    "ExemptionOracle",
    "IdentityProvider",
    "NameListExemptionOracle",
    "PushDescription",
    "PushDescriptionError",
    "StaticChangesetSource",
    "StaticIdentityProvider",
    "load_push_description",
    "parse_push_description",
]
