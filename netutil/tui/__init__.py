"""
Interactive dashboard: state machine, key handling and rendering.
"""

from netutil.tui.dashboard import Dashboard
from netutil.tui.state import App, AppMode

__all__ = [
    "App",
    "AppMode",
    "Dashboard",
]
