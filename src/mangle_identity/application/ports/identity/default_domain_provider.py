from abc import ABC, abstractmethod


class DefaultDomainProvider(ABC):
    """Supplies the domain assigned to users created without one."""

    @abstractmethod
    def default_domain(self) -> str:
        """Return the configured default domain, e.g. ``mangle.local``."""
