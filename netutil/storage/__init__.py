"""
Logging components.
"""

from netutil.storage.logger import setup_logging

__all__ = [
    "setup_logging",
]
