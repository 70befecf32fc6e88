"""FastAPI HTTP surface of the identity core."""
