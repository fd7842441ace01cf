"""
Core functionality components.
"""

from netutil.core.config import AppConfig
from netutil.core.detector import SystemDetector, SystemInfo
from netutil.core.executor import CommandExecutor, CommandResult

__all__ = [
    "AppConfig",
    "SystemDetector",
    "SystemInfo",
    "CommandExecutor",
    "CommandResult",
]
