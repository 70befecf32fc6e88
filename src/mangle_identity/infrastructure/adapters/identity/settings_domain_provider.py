from mangle_config.settings import Settings
from mangle_identity.application.ports.identity import DefaultDomainProvider


class SettingsDefaultDomainProvider(DefaultDomainProvider):
    """Reads the default domain from application settings."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def default_domain(self) -> str:
        return self._settings.default_domain
