from mangle_identity.infrastructure.adapters.identity.auth_context import (
    AnonymousAuthContext,
    AuthenticatedAuthContext,
)
from mangle_identity.infrastructure.adapters.identity.settings_domain_provider import (
    SettingsDefaultDomainProvider,
)

__all__ = [
    "AnonymousAuthContext",
    "AuthenticatedAuthContext",
    "SettingsDefaultDomainProvider",
]
