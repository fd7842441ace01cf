"""
Snapshot and row models shared by the provider and the dashboard state.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class InterfaceType(str, Enum):
    """Interface classification, valued by its display label."""

    ETHERNET = "Ethernet"
    WIFI = "WiFi"
    LOOPBACK = "Loopback"
    BRIDGE = "Bridge"
    VIRTUAL = "Virtual"
    TUNNEL = "Tunnel/VPN"
    UNKNOWN = "Unknown"

    @property
    def label(self) -> str:
        return self.value


def classify_interface(name: str) -> InterfaceType:
    """
    Classify an interface from its name.

    Rules are ordered; the first match wins.
    """
    lowered = name.lower()

    if lowered.startswith("lo"):
        return InterfaceType.LOOPBACK
    if lowered.startswith("eth") or (lowered.startswith("en") and "wlan" not in lowered):
        return InterfaceType.ETHERNET
    if "wlan" in lowered or "wifi" in lowered or lowered.startswith("wl"):
        return InterfaceType.WIFI
    if lowered.startswith("br") or lowered.startswith("bridge"):
        return InterfaceType.BRIDGE
    if lowered.startswith(("veth", "docker", "virbr")):
        return InterfaceType.VIRTUAL
    if lowered.startswith(("tun", "tap")) or "vpn" in lowered:
        return InterfaceType.TUNNEL
    return InterfaceType.UNKNOWN


class InterfaceAddress(BaseModel):
    """One address bound to an interface."""

    model_config = ConfigDict(frozen=True)

    ip: str
    netmask: Optional[str] = None
    broadcast: Optional[str] = None
    is_ipv6: bool = False


class NetworkInterface(BaseModel):
    """Snapshot of one interface. Replaced wholesale on refresh."""

    model_config = ConfigDict(frozen=True)

    name: str
    interface_type: InterfaceType = InterfaceType.UNKNOWN
    addresses: List[InterfaceAddress] = Field(default_factory=list)
    mac_address: Optional[str] = None
    is_up: bool = False
    mtu: Optional[int] = None
    ipv6_enabled: bool = True
    ssid: Optional[str] = None

    @property
    def is_loopback(self) -> bool:
        return self.interface_type == InterfaceType.LOOPBACK

    def first_ipv4(self) -> Optional[InterfaceAddress]:
        return next((addr for addr in self.addresses if not addr.is_ipv6), None)

    def first_ipv6(self) -> Optional[InterfaceAddress]:
        return next((addr for addr in self.addresses if addr.is_ipv6), None)


class DnsConfiguration(BaseModel):
    """Nameservers in display order plus search domains."""

    model_config = ConfigDict(frozen=True)

    nameservers: List[str] = Field(default_factory=list)
    search_domains: List[str] = Field(default_factory=list)


class SortColumn(str, Enum):
    """Table columns in their cycling order."""

    INTERFACE = "Interface"
    TYPE = "Type"
    IP_ADDRESS = "IP Address"
    MAC_ADDRESS = "MAC Address"
    SUBNET_MASK = "Subnet Mask"
    DNS_SERVERS = "DNS Servers"
    STATUS = "Status"

    @property
    def label(self) -> str:
        return self.value

    def next(self) -> "SortColumn":
        members = list(SortColumn)
        return members[(members.index(self) + 1) % len(members)]

    def prev(self) -> "SortColumn":
        members = list(SortColumn)
        return members[(members.index(self) - 1) % len(members)]


class InterfaceRow(BaseModel):
    """Display-only projection of one interface plus the DNS snapshot."""

    model_config = ConfigDict(frozen=True)

    name: str
    interface_type: str
    ip_address: str
    mac_address: str
    subnet_mask: str
    dns_servers: str
    status: str

    @classmethod
    def from_interface(cls, iface: NetworkInterface, dns: DnsConfiguration) -> "InterfaceRow":
        first = iface.addresses[0] if iface.addresses else None
        return cls(
            name=iface.name,
            interface_type=iface.interface_type.label,
            ip_address=first.ip if first else "N/A",
            subnet_mask=first.netmask if first and first.netmask else "N/A",
            mac_address=iface.mac_address or "N/A",
            dns_servers=", ".join(dns.nameservers) or "N/A",
            status="UP" if iface.is_up else "DOWN",
        )

    def get_field(self, column: SortColumn) -> str:
        """Look up the cell shown under ``column``."""
        return {
            SortColumn.INTERFACE: self.name,
            SortColumn.TYPE: self.interface_type,
            SortColumn.IP_ADDRESS: self.ip_address,
            SortColumn.MAC_ADDRESS: self.mac_address,
            SortColumn.SUBNET_MASK: self.subnet_mask,
            SortColumn.DNS_SERVERS: self.dns_servers,
            SortColumn.STATUS: self.status,
        }[column]


def build_rows(interfaces: List[NetworkInterface], dns: DnsConfiguration) -> List[InterfaceRow]:
    """One projection per interface, in canonical order."""
    return [InterfaceRow.from_interface(iface, dns) for iface in interfaces]
