"""Shared utilities for openpronounce."""

from openpronounce.core.utils.formatting import collation_key
from openpronounce.core.utils.logging import configure_logging, get_logger

__all__ = [
    "collation_key",
    "configure_logging",
    "get_logger",
]
