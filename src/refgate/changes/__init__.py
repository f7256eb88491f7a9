from .models import (
    BRANCH_REF_PREFIX,
    TAG_REF_PREFIX,
    AuthenticatedIdentity,
    Changeset,
    IdentityKind,
    RefChange,
    RefChangeType,
)

__all__ = [
    "AuthenticatedIdentity",
    "BRANCH_REF_PREFIX",
    "Changeset",
    "IdentityKind",
    "RefChange",
    "RefChangeType",
    "TAG_REF_PREFIX",
]
