"""Infrastructure adapters for the identity core."""
