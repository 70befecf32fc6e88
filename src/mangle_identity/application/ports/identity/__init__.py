from mangle_identity.application.ports.identity.auth_context import AuthContext
from mangle_identity.application.ports.identity.default_domain_provider import (
    DefaultDomainProvider,
)

__all__ = [
    "AuthContext",
    "DefaultDomainProvider",
]
