"""Route group exports."""

from . import active_properties, branches, estimates, health, maps

__all__ = ["active_properties", "branches", "estimates", "health", "maps"]
