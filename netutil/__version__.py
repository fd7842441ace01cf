"""Version information for NetUtil."""

__version__ = "0.3.0"
__version_info__ = (0, 3, 0)

# Release information
__author__ = "NetUtil Team"
__license__ = "MIT"
__description__ = "Terminal dashboard for inspecting and reconfiguring network interfaces and DNS"
