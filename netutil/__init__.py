"""
NetUtil - Network Interface Manager
"""

from netutil.__version__ import __version__
from netutil.core.config import AppConfig
from netutil.core.executor import CommandExecutor
from netutil.tui.state import App, AppMode

__all__ = [
    "App",
    "AppConfig",
    "AppMode",
    "CommandExecutor",
    "__version__",
]
