"""Value objects for the user domain."""

from mangle_identity.domain.user.value_objects.fully_qualified_name import (
    FullyQualifiedName,
)

__all__ = [
    "FullyQualifiedName",
]
