"""API routers for all endpoints."""

from roadguard.routers import accidents, system

__all__ = [
    "accidents",
    "system",
]
