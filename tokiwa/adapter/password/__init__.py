"""Password backend adapter."""

from .client import MockPasswordAuthClient, RealPasswordAuthClient

__all__ = ["RealPasswordAuthClient", "MockPasswordAuthClient"]
