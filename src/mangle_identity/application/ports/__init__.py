"""Ports the identity core needs from its surroundings."""
