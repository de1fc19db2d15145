"""Utility modules for logging and calendar helpers."""

from roadguard.utils.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
