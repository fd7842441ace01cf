"""
Privileged configuration changes, executed through sudo.

Each public method performs one mutation and raises ``RuntimeError`` with the
command's diagnostics when it fails. Multi-step changes are not atomic: a
failure part-way leaves the earlier steps applied.
"""

import ipaddress
import os
import platform
import tempfile
from pathlib import Path
from typing import List, Optional

from loguru import logger

from netutil.core.executor import CommandExecutor, CommandResult

RESOLV_CONF = Path("/etc/resolv.conf")
PROC_IPV6_CONF = Path("/proc/sys/net/ipv6/conf")


def netmask_to_prefix(netmask: str) -> int:
    """
    Convert a dotted IPv4 netmask to a prefix length.

    Raises:
        ValueError: If the mask is not a contiguous IPv4 netmask
    """
    try:
        return ipaddress.IPv4Network(f"0.0.0.0/{netmask.strip()}").prefixlen
    except ValueError as e:
        raise ValueError(f"Invalid netmask: {netmask}") from e


class PrivilegedExecutor:
    """Apply network configuration changes with elevated privileges."""

    def __init__(
        self,
        executor: Optional[CommandExecutor] = None,
        os_type: Optional[str] = None,
        non_interactive: bool = False,
    ):
        self.executor = executor or CommandExecutor()
        self.os_type = os_type or platform.system()
        self.non_interactive = non_interactive

    # -- plumbing ---------------------------------------------------------

    def _sudo(self, command: str, *args: str) -> CommandResult:
        prefix = ["sudo", "-n"] if self.non_interactive else ["sudo"]
        return self.executor.run_command(prefix + [command, *args])

    def _run(self, command: str, *args: str) -> str:
        result = self._sudo(command, *args)
        if not result.success:
            detail = (result.stderr or result.stdout).strip() or f"exit status {result.return_code}"
            raise RuntimeError(f"Command failed: {result.command}: {detail}")
        return result.stdout

    def _try(self, command: str, *args: str) -> bool:
        return self._sudo(command, *args).success

    def _unsupported(self, operation: str) -> RuntimeError:
        return RuntimeError(f"{operation} is not supported on {self.os_type}")

    def _install_resolv_conf(self, content: str) -> None:
        try:
            fd, tmp_path = tempfile.mkstemp(prefix="netutil-resolv-", suffix=".conf")
        except OSError as e:
            raise RuntimeError(f"Failed to create temporary resolv.conf: {e}") from e
        try:
            try:
                with os.fdopen(fd, "w") as f:
                    f.write(content)
            except OSError as e:
                raise RuntimeError(f"Failed to write temporary resolv.conf: {e}") from e
            self._run("cp", tmp_path, str(RESOLV_CONF))
        finally:
            os.unlink(tmp_path)

    def _primary_service(self) -> str:
        """First enabled macOS network service (networksetup needs a service name)."""
        result = self.executor.run_command(["networksetup", "-listallnetworkservices"])
        for line in result.stdout.splitlines()[1:]:
            line = line.strip()
            if line and not line.startswith("*"):
                return line
        raise RuntimeError("No enabled network service found")

    def _require_ipv6_sysctl(self, interface: str) -> str:
        if not (PROC_IPV6_CONF / interface / "disable_ipv6").exists():
            raise RuntimeError(
                "IPv6 is not available on this interface (kernel module may be disabled)"
            )
        return f"net.ipv6.conf.{interface}.disable_ipv6"

    # -- IPv4 -------------------------------------------------------------

    def set_dhcp(self, interface: str) -> None:
        """Switch an interface to DHCP."""
        logger.info(f"Setting {interface} to DHCP")
        if self.os_type == "Darwin":
            self._run("networksetup", "-setdhcp", interface)
        elif self.os_type == "Linux":
            # Flushing may fail on an address-less link; the client still runs
            self._try("ip", "addr", "flush", "dev", interface)
            if not self._try("dhclient", interface):
                self._run("dhcpcd", interface)
        else:
            raise self._unsupported("DHCP configuration")

    def set_static_ip(
        self,
        interface: str,
        ip: str,
        netmask: str,
        gateway: Optional[str] = None,
    ) -> None:
        """Assign a static IPv4 address, optionally with a default gateway."""
        logger.info(f"Setting static IP {ip}/{netmask} on {interface} (gateway: {gateway})")
        if self.os_type == "Darwin":
            if gateway:
                self._run("networksetup", "-setmanual", interface, ip, netmask, gateway)
            else:
                self._run("ifconfig", interface, ip, "netmask", netmask)
        elif self.os_type == "Linux":
            try:
                prefix = netmask_to_prefix(netmask)
            except ValueError as e:
                raise RuntimeError(str(e)) from e
            self._run("ip", "addr", "add", f"{ip}/{prefix}", "dev", interface)
            self._run("ip", "link", "set", interface, "up")
            if gateway:
                self._run("ip", "route", "add", "default", "via", gateway, "dev", interface)
        else:
            raise self._unsupported("Static IP configuration")

    # -- DNS --------------------------------------------------------------

    def set_dns_servers(self, servers: List[str]) -> None:
        """Replace the system nameserver list."""
        logger.info(f"Setting DNS servers: {servers}")
        if self.os_type == "Darwin":
            self._run("networksetup", "-setdnsservers", self._primary_service(), *(servers or ["Empty"]))
        elif self.os_type == "Linux":
            content = "".join(f"nameserver {server}\n" for server in servers)
            self._install_resolv_conf(content)
        else:
            raise self._unsupported("DNS configuration")

    def set_search_domains(self, domains: List[str]) -> None:
        """Replace the search domain list, keeping the current nameservers."""
        logger.info(f"Setting search domains: {domains}")
        if self.os_type == "Darwin":
            self._run("networksetup", "-setsearchdomains", self._primary_service(), *(domains or ["Empty"]))
        elif self.os_type == "Linux":
            try:
                existing = RESOLV_CONF.read_text(errors="replace")
            except OSError:
                existing = ""
            lines = [line for line in existing.splitlines() if line.startswith("nameserver")]
            if domains:
                lines.append("search " + " ".join(domains))
            self._install_resolv_conf("".join(f"{line}\n" for line in lines))
        else:
            raise self._unsupported("Search domain configuration")

    def flush_dns_cache(self) -> None:
        """Flush the resolver cache with whichever service is present."""
        logger.info("Flushing DNS cache")
        if self.os_type == "Darwin":
            self._run("dscacheutil", "-flushcache")
            self._run("killall", "-HUP", "mDNSResponder")
            return
        if self.os_type == "Linux":
            attempts = [
                ("resolvectl", "flush-caches"),
                ("systemd-resolve", "--flush-caches"),
                ("nscd", "-i", "hosts"),
                ("killall", "-HUP", "dnsmasq"),
            ]
            for attempt in attempts:
                if self._try(*attempt):
                    return
            raise RuntimeError("Could not flush DNS cache. No supported DNS caching service found.")
        raise self._unsupported("DNS cache flush")

    # -- link state -------------------------------------------------------

    def set_interface_status(self, interface: str, up: bool) -> None:
        """Bring an interface up or down."""
        state = "up" if up else "down"
        logger.info(f"Setting {interface} {state}")
        if self.os_type == "Darwin":
            self._run("ifconfig", interface, state)
        elif self.os_type == "Linux":
            self._run("ip", "link", "set", interface, state)
        else:
            raise self._unsupported("Interface status change")

    # -- IPv6 -------------------------------------------------------------

    def disable_ipv6(self, interface: str) -> None:
        logger.info(f"Disabling IPv6 on {interface}")
        if self.os_type == "Darwin":
            self._run("networksetup", "-setv6off", interface)
        elif self.os_type == "Linux":
            key = self._require_ipv6_sysctl(interface)
            self._run("sysctl", "-w", f"{key}=1")
        else:
            raise self._unsupported("IPv6 configuration")

    def enable_ipv6(self, interface: str) -> None:
        logger.info(f"Enabling IPv6 on {interface}")
        if self.os_type == "Darwin":
            self._run("networksetup", "-setv6automatic", interface)
        elif self.os_type == "Linux":
            key = self._require_ipv6_sysctl(interface)
            self._run("sysctl", "-w", f"{key}=0")
        else:
            raise self._unsupported("IPv6 configuration")

    def set_static_ipv6(self, interface: str, ip: str, prefix: int) -> None:
        logger.info(f"Setting static IPv6 {ip}/{prefix} on {interface}")
        address = f"{ip}/{prefix}"
        if self.os_type == "Darwin":
            self._run("ifconfig", interface, "inet6", address)
        elif self.os_type == "Linux":
            self._run("ip", "-6", "addr", "add", address, "dev", interface)
        else:
            raise self._unsupported("IPv6 configuration")
