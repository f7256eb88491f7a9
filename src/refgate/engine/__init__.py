from .orchestrator import PushValidator
from .ordering import ordered_changesets

__all__ = [
    "PushValidator",
    "ordered_changesets",
]
