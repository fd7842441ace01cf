"""
System collaborators: interface/DNS provider, privileged executor, clipboard.
"""

from netutil.network.clipboard import ClipboardProvider
from netutil.network.privileged import PrivilegedExecutor
from netutil.network.provider import NetworkProvider

__all__ = [
    "ClipboardProvider",
    "NetworkProvider",
    "PrivilegedExecutor",
]
