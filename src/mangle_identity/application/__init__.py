"""Application layer: use cases of the identity core."""
