"""Common utilities for hotel-access."""

from .logger import setup_logger
from .config import load_config

__all__ = ["load_config", "setup_logger"]
