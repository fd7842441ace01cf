"""
Read-only view of the host's interfaces and DNS configuration.
Cross-platform where possible (Linux, macOS); other systems get interfaces
from psutil and an empty DNS configuration.
"""

from __future__ import annotations

import ipaddress
import platform
import socket
from pathlib import Path
from typing import Dict, List, Optional

import psutil
from loguru import logger

from netutil.core.executor import CommandExecutor
from netutil.core.models import (
    DnsConfiguration,
    InterfaceAddress,
    InterfaceType,
    NetworkInterface,
    classify_interface,
)

SYS_CLASS_NET = Path("/sys/class/net")
PROC_IPV6_CONF = Path("/proc/sys/net/ipv6/conf")
RESOLV_CONF = Path("/etc/resolv.conf")

NOT_CONNECTED = "Not connected"


def _strip_scope(address: str) -> str:
    """Drop the ``%zone`` suffix psutil keeps on link-local IPv6 addresses."""
    return address.split("%", 1)[0]


def _valid_ip(text: str) -> Optional[str]:
    try:
        return str(ipaddress.ip_address(_strip_scope(text.strip())))
    except ValueError:
        return None


def _append_unique(items: List[str], value: str) -> None:
    if value and value not in items:
        items.append(value)


def parse_resolv_conf(content: str) -> DnsConfiguration:
    """Parse resolv.conf text. ``search`` replaces an earlier ``domain`` line."""
    nameservers: List[str] = []
    search_domains: List[str] = []

    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith(("#", ";")):
            continue
        parts = line.split()
        keyword, values = parts[0], parts[1:]
        if keyword == "nameserver" and values:
            ip = _valid_ip(values[0])
            if ip:
                _append_unique(nameservers, ip)
        elif keyword in ("search", "domain"):
            search_domains = []
            for domain in values:
                _append_unique(search_domains, domain)

    return DnsConfiguration(nameservers=nameservers, search_domains=search_domains)


def parse_resolvectl_status(output: str) -> DnsConfiguration:
    """Parse ``resolvectl status`` output (global and per-link sections)."""
    nameservers: List[str] = []
    search_domains: List[str] = []

    for line in output.splitlines():
        line = line.strip()
        for prefix in ("DNS Servers:", "Current DNS Server:"):
            if line.startswith(prefix):
                for token in line[len(prefix):].split():
                    ip = _valid_ip(token.split("#", 1)[0])
                    if ip:
                        _append_unique(nameservers, ip)
        if line.startswith("DNS Domain:"):
            for domain in line[len("DNS Domain:"):].split():
                _append_unique(search_domains, domain)

    return DnsConfiguration(nameservers=nameservers, search_domains=search_domains)


def parse_scutil_dns(output: str) -> DnsConfiguration:
    """Parse ``scutil --dns`` output."""
    nameservers: List[str] = []
    search_domains: List[str] = []

    for line in output.splitlines():
        line = line.strip()
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        key = key.strip()
        if key.startswith("nameserver["):
            ip = _valid_ip(value)
            if ip:
                _append_unique(nameservers, ip)
        elif key.startswith("search domain["):
            _append_unique(search_domains, value.strip())

    return DnsConfiguration(nameservers=nameservers, search_domains=search_domains)


def parse_hardware_ports(output: str) -> List[str]:
    """Device names of Wi-Fi ports in ``networksetup -listallhardwareports``."""
    devices: List[str] = []
    is_wifi_port = False

    for line in output.splitlines():
        line = line.strip()
        if line.startswith("Hardware Port:"):
            is_wifi_port = "Wi-Fi" in line or "AirPort" in line
        elif is_wifi_port and line.startswith("Device:"):
            devices.append(line.split(":", 1)[1].strip())
            is_wifi_port = False

    return devices


class NetworkProvider:
    """Fetch interface and DNS snapshots. Never mutates system state."""

    def __init__(self, executor: Optional[CommandExecutor] = None, os_type: Optional[str] = None):
        self.executor = executor or CommandExecutor()
        self.os_type = os_type or platform.system()
        self._macos_wifi_devices: Optional[List[str]] = None

    def fetch_interfaces(self) -> List[NetworkInterface]:
        """
        Enumerate all interfaces on the system.

        Returns:
            Interfaces sorted by name

        Raises:
            RuntimeError: If the OS interface table cannot be read
        """
        try:
            addrs = psutil.net_if_addrs()
            stats = psutil.net_if_stats()
        except (OSError, psutil.Error) as e:
            raise RuntimeError(f"Failed to get network interfaces: {e}") from e

        # Cached per fetch so a refresh sees newly attached adapters
        self._macos_wifi_devices = None

        interfaces = [
            self._build_interface(name, entries, stats.get(name))
            for name, entries in addrs.items()
        ]
        # Interfaces without addresses (down links) only show up in stats
        for name, st in stats.items():
            if name not in addrs:
                interfaces.append(self._build_interface(name, [], st))

        interfaces.sort(key=lambda iface: iface.name)
        logger.debug(f"Fetched {len(interfaces)} interfaces")
        return interfaces

    def _build_interface(self, name: str, entries, st) -> NetworkInterface:
        addresses: List[InterfaceAddress] = []
        mac: Optional[str] = None

        for entry in entries:
            if entry.family == socket.AF_INET:
                addresses.append(InterfaceAddress(
                    ip=entry.address,
                    netmask=entry.netmask,
                    broadcast=entry.broadcast,
                ))
            elif entry.family == socket.AF_INET6:
                addresses.append(InterfaceAddress(
                    ip=_strip_scope(entry.address),
                    netmask=entry.netmask,
                    is_ipv6=True,
                ))
            elif entry.family == psutil.AF_LINK and entry.address:
                mac = entry.address.replace("-", ":").lower()

        interface_type = classify_interface(name)
        ssid = None
        if self._is_wifi(name):
            interface_type = InterfaceType.WIFI
            ssid = self._get_ssid(name)

        return NetworkInterface(
            name=name,
            interface_type=interface_type,
            addresses=addresses,
            mac_address=mac,
            is_up=bool(st.isup) if st else False,
            mtu=st.mtu if st and st.mtu else None,
            ipv6_enabled=self._ipv6_enabled(name),
            ssid=ssid,
        )

    def _ipv6_enabled(self, name: str) -> bool:
        if self.os_type != "Linux":
            return True
        flag = PROC_IPV6_CONF / name / "disable_ipv6"
        try:
            return flag.read_text(errors="replace").strip() != "1"
        except OSError:
            return True

    def _is_wifi(self, name: str) -> bool:
        if self.os_type == "Linux":
            return (SYS_CLASS_NET / name / "wireless").exists()
        if self.os_type == "Darwin":
            if self._macos_wifi_devices is None:
                result = self.executor.run_command(["networksetup", "-listallhardwareports"])
                self._macos_wifi_devices = parse_hardware_ports(result.stdout) if result.success else []
            return name in self._macos_wifi_devices
        return False

    def _get_ssid(self, name: str) -> str:
        if self.os_type == "Linux":
            result = self.executor.run_command(["iwgetid", name, "-r"])
            if result.success and result.stdout.strip():
                return result.stdout.strip()

            result = self.executor.run_command(["iw", "dev", name, "link"])
            for line in result.stdout.splitlines():
                line = line.strip()
                if line.startswith("SSID:"):
                    return line.split(":", 1)[1].strip()
        elif self.os_type == "Darwin":
            result = self.executor.run_command(["networksetup", "-getairportnetwork", name])
            if result.success and ":" in result.stdout:
                return result.stdout.split(":", 1)[1].strip() or NOT_CONNECTED

        return NOT_CONNECTED

    def fetch_dns(self) -> DnsConfiguration:
        """
        Read the system DNS configuration.

        Raises:
            RuntimeError: If the macOS resolver cannot be queried
        """
        if self.os_type == "Darwin":
            result = self.executor.run_command(["scutil", "--dns"])
            if not result.spawned:
                raise RuntimeError(f"Failed to execute scutil: {result.spawn_error}")
            return parse_scutil_dns(result.stdout)

        if self.os_type == "Linux":
            # systemd-resolved first, resolv.conf when it has nothing to say
            result = self.executor.run_command(["resolvectl", "status"])
            if result.success:
                config = parse_resolvectl_status(result.stdout)
                if config.nameservers:
                    return config
            try:
                return parse_resolv_conf(RESOLV_CONF.read_text(errors="replace"))
            except OSError as e:
                logger.warning(f"Could not read {RESOLV_CONF}: {e}")
                return DnsConfiguration()

        return DnsConfiguration()


def summarize_interfaces(interfaces: List[NetworkInterface]) -> Dict[str, int]:
    """Count interfaces per type label."""
    counts: Dict[str, int] = {}
    for iface in interfaces:
        counts[iface.interface_type.label] = counts.get(iface.interface_type.label, 0) + 1
    return counts
