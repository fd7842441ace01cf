"""
Confirm actions: parameter snapshots of one pending mutation.

An action is built when the user asks for a change, shown through its
``message`` and executed at most once. Every value it needs is copied in at
construction, so what executes is exactly what was displayed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from netutil.network.privileged import PrivilegedExecutor


class ConfirmAction(ABC):
    """Base class for every confirmable mutation."""

    @property
    @abstractmethod
    def message(self) -> str:
        """Confirmation text listing every parameter that will be used."""

    @abstractmethod
    def execute(self, executor: PrivilegedExecutor) -> str:
        """
        Apply the change.

        Returns:
            Status text describing the applied change

        Raises:
            RuntimeError: If the underlying command fails
        """


@dataclass(frozen=True)
class SetDhcp(ConfirmAction):
    interface: str

    @property
    def message(self) -> str:
        return (
            f"Set interface '{self.interface}' to use DHCP?\n"
            "This will remove any static IP configuration."
        )

    def execute(self, executor: PrivilegedExecutor) -> str:
        executor.set_dhcp(self.interface)
        return f"DHCP enabled on {self.interface}"


@dataclass(frozen=True)
class SetStaticIp(ConfirmAction):
    interface: str
    ip: str
    netmask: str
    gateway: Optional[str] = None

    @property
    def message(self) -> str:
        return (
            f"Set static IP on '{self.interface}'?\n"
            f"IP: {self.ip}\n"
            f"Netmask: {self.netmask}\n"
            f"Gateway: {self.gateway or 'None'}"
        )

    def execute(self, executor: PrivilegedExecutor) -> str:
        executor.set_static_ip(self.interface, self.ip, self.netmask, self.gateway)
        return f"Static IP set on {self.interface}"


@dataclass(frozen=True)
class SetDns(ConfirmAction):
    servers: Tuple[str, ...]
    domains: Tuple[str, ...]

    @property
    def message(self) -> str:
        return (
            "Update DNS configuration?\n"
            f"Servers: {', '.join(self.servers)}\n"
            f"Search domains: {', '.join(self.domains) if self.domains else 'None'}"
        )

    def execute(self, executor: PrivilegedExecutor) -> str:
        # Two independent steps; a domain failure leaves the servers applied
        executor.set_dns_servers(list(self.servers))
        if self.domains:
            executor.set_search_domains(list(self.domains))
        return "DNS configuration updated"


@dataclass(frozen=True)
class ToggleInterface(ConfirmAction):
    interface: str
    up: bool

    @property
    def message(self) -> str:
        verb = "Enable" if self.up else "Disable"
        return f"{verb} interface '{self.interface}'?"

    def execute(self, executor: PrivilegedExecutor) -> str:
        executor.set_interface_status(self.interface, self.up)
        return f"Interface {self.interface} {'enabled' if self.up else 'disabled'}"


@dataclass(frozen=True)
class DisableIpv6(ConfirmAction):
    interface: str

    @property
    def message(self) -> str:
        return f"Disable IPv6 on '{self.interface}'?"

    def execute(self, executor: PrivilegedExecutor) -> str:
        executor.disable_ipv6(self.interface)
        return f"IPv6 disabled on {self.interface}"


@dataclass(frozen=True)
class EnableIpv6(ConfirmAction):
    interface: str

    @property
    def message(self) -> str:
        return f"Enable IPv6 on '{self.interface}'?"

    def execute(self, executor: PrivilegedExecutor) -> str:
        executor.enable_ipv6(self.interface)
        return f"IPv6 enabled on {self.interface}"


@dataclass(frozen=True)
class SetStaticIpv6(ConfirmAction):
    interface: str
    ip: str
    prefix: int

    @property
    def message(self) -> str:
        return f"Set static IPv6 on '{self.interface}'?\nAddress: {self.ip}/{self.prefix}"

    def execute(self, executor: PrivilegedExecutor) -> str:
        executor.set_static_ipv6(self.interface, self.ip, self.prefix)
        return f"Static IPv6 set on {self.interface}"
