"""
Edit sessions for the IPv4, DNS and IPv6 editors.

Sessions are always initialised from a copy of the selected interface (or
the DNS snapshot); nothing here touches the system. The shared
``BufferCursor`` handles navigation and text editing, while each session
keeps its own field count and Tab rules.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

from netutil.core.models import DnsConfiguration, NetworkInterface

DEFAULT_NETMASK = "255.255.255.0"
DEFAULT_IPV6_PREFIX = "64"


class BufferCursor:
    """
    A cursor over an ordered list of text buffers.

    A ``None`` slot is a non-text field (a toggle); typing into it is a no-op.
    """

    def __init__(self, buffers: Optional[Sequence[Optional[str]]] = None):
        self.buffers: List[Optional[str]] = list(buffers or [])
        self.index = 0

    def __len__(self) -> int:
        return len(self.buffers)

    @property
    def current(self) -> Optional[str]:
        if 0 <= self.index < len(self.buffers):
            return self.buffers[self.index]
        return None

    def reset(self, buffers: Sequence[Optional[str]]) -> None:
        self.buffers = list(buffers)
        self.index = 0

    def move(self, delta: int, upper: Optional[int] = None, wrap: bool = False) -> None:
        """
        Move by ``delta``, either wrapping around or clamping to
        ``[0, upper]`` (``upper`` defaults to the last slot). No-op when empty.
        """
        if not self.buffers:
            return
        if wrap:
            self.index = (self.index + delta) % len(self.buffers)
            return
        last = len(self.buffers) - 1 if upper is None else min(upper, len(self.buffers) - 1)
        self.index = max(0, min(self.index + delta, last))

    def type_char(self, ch: str) -> None:
        if self.current is not None:
            self.buffers[self.index] += ch

    def backspace(self) -> None:
        if self.current is not None:
            self.buffers[self.index] = self.buffers[self.index][:-1]

    def append(self, text: str = "") -> None:
        """Add a buffer at the end and select it."""
        self.buffers.append(text)
        self.index = len(self.buffers) - 1

    def remove(self) -> None:
        """Remove the selected buffer, keeping the cursor inside the list."""
        if not self.buffers:
            return
        del self.buffers[self.index]
        if self.index >= len(self.buffers) and self.index > 0:
            self.index -= 1


class IpConfigMode(str, Enum):
    DHCP = "DHCP"
    STATIC = "Static"


class IpEditSession:
    """IPv4 editor: 0=mode toggle, 1=IP, 2=netmask, 3=gateway."""

    FIELD_COUNT = 4

    def __init__(self):
        self.mode = IpConfigMode.DHCP
        self.fields = BufferCursor([None, "", DEFAULT_NETMASK, ""])

    @classmethod
    def from_interface(cls, iface: NetworkInterface) -> "IpEditSession":
        session = cls()
        session.start(iface)
        return session

    def start(self, iface: NetworkInterface) -> None:
        addr = iface.first_ipv4()
        self.mode = IpConfigMode.DHCP
        self.fields.reset([
            None,
            addr.ip if addr else "",
            addr.netmask if addr and addr.netmask else DEFAULT_NETMASK,
            "",
        ])

    @property
    def current_field(self) -> int:
        return self.fields.index

    @current_field.setter
    def current_field(self, value: int) -> None:
        self.fields.index = max(0, min(value, self.FIELD_COUNT - 1))

    @property
    def ip_buffer(self) -> str:
        return self.fields.buffers[1]

    @ip_buffer.setter
    def ip_buffer(self, value: str) -> None:
        self.fields.buffers[1] = value

    @property
    def netmask_buffer(self) -> str:
        return self.fields.buffers[2]

    @netmask_buffer.setter
    def netmask_buffer(self, value: str) -> None:
        self.fields.buffers[2] = value

    @property
    def gateway_buffer(self) -> str:
        return self.fields.buffers[3]

    @gateway_buffer.setter
    def gateway_buffer(self, value: str) -> None:
        self.fields.buffers[3] = value

    @property
    def gateway(self) -> Optional[str]:
        return self.gateway_buffer or None

    def toggle_mode(self) -> None:
        self.mode = IpConfigMode.STATIC if self.mode == IpConfigMode.DHCP else IpConfigMode.DHCP

    def next_field(self) -> None:
        # DHCP only exposes the IP field after the toggle
        if self.current_field == 0:
            self.current_field = 1
        elif self.mode == IpConfigMode.STATIC:
            self.fields.move(1, upper=3)

    def previous_field(self) -> None:
        self.fields.move(-1)

    def type_char(self, ch: str) -> None:
        if self.current_field == 0:
            if ch == " ":
                self.toggle_mode()
            return
        self.fields.type_char(ch)

    def backspace(self) -> None:
        self.fields.backspace()


class DnsSection(int, Enum):
    SERVERS = 0
    DOMAINS = 1


class DnsEditSession:
    """
    DNS editor with a server list and a search domain list.

    ``editing`` is the inline entry editor toggled by Enter; while it is on
    every printable key is text, including the list commands.
    """

    def __init__(self):
        self.servers = BufferCursor()
        self.domains = BufferCursor()
        self.current_field = DnsSection.SERVERS
        self.editing = False

    def start(self, dns: DnsConfiguration) -> None:
        # An empty server list still offers one blank entry to type into
        self.servers.reset(list(dns.nameservers) or [""])
        self.domains.reset(list(dns.search_domains))
        self.current_field = DnsSection.SERVERS
        self.editing = False

    @property
    def dns_servers(self) -> List[str]:
        return self.servers.buffers

    @property
    def search_domains(self) -> List[str]:
        return self.domains.buffers

    @property
    def server_index(self) -> int:
        return self.servers.index

    @property
    def domain_index(self) -> int:
        return self.domains.index

    @property
    def active(self) -> BufferCursor:
        return self.servers if self.current_field == DnsSection.SERVERS else self.domains

    def switch_section(self) -> None:
        self.current_field = (
            DnsSection.DOMAINS if self.current_field == DnsSection.SERVERS else DnsSection.SERVERS
        )
        self.servers.index = 0
        self.domains.index = 0
        self.editing = False

    def move_up(self) -> None:
        self.active.move(-1)

    def move_down(self) -> None:
        self.active.move(1)

    def add_entry(self) -> None:
        self.active.append("")

    def remove_entry(self) -> None:
        self.active.remove()

    def type_char(self, ch: str) -> None:
        self.active.type_char(ch)

    def backspace(self) -> None:
        self.active.backspace()

    def toggle_editing(self) -> None:
        # Nothing to edit in an empty list
        self.editing = not self.editing and len(self.active) > 0

    def server_list(self) -> List[str]:
        """Servers to apply; blank entries are dropped."""
        return [server for server in self.servers.buffers if server]

    def domain_list(self) -> List[str]:
        return list(self.domains.buffers)


class Ipv6EditSession:
    """IPv6 editor: 0=enabled toggle, 1=address, 2=prefix length."""

    FIELD_COUNT = 3

    def __init__(self):
        self.enabled = True
        self.fields = BufferCursor([None, "", DEFAULT_IPV6_PREFIX])

    @classmethod
    def from_interface(cls, iface: NetworkInterface) -> "Ipv6EditSession":
        session = cls()
        session.start(iface)
        return session

    def start(self, iface: NetworkInterface) -> None:
        addr = iface.first_ipv6()
        self.enabled = iface.ipv6_enabled
        self.fields.reset([None, addr.ip if addr else "", DEFAULT_IPV6_PREFIX])

    @property
    def current_field(self) -> int:
        return self.fields.index

    @current_field.setter
    def current_field(self, value: int) -> None:
        self.fields.index = max(0, min(value, self.FIELD_COUNT - 1))

    @property
    def ip_buffer(self) -> str:
        return self.fields.buffers[1]

    @ip_buffer.setter
    def ip_buffer(self, value: str) -> None:
        self.fields.buffers[1] = value

    @property
    def prefix_buffer(self) -> str:
        return self.fields.buffers[2]

    @prefix_buffer.setter
    def prefix_buffer(self, value: str) -> None:
        self.fields.buffers[2] = value

    def parse_prefix(self) -> int:
        """
        Prefix length from the prefix buffer; blank means 64.

        Raises:
            ValueError: If the text is not an integer in 0..128
        """
        text = self.prefix_buffer.strip()
        if not text:
            return int(DEFAULT_IPV6_PREFIX)
        if not text.isdigit() or int(text) > 128:
            raise ValueError(f"Invalid IPv6 prefix: {self.prefix_buffer!r} (expected 0-128)")
        return int(text)

    def toggle_enabled(self) -> None:
        self.enabled = not self.enabled

    def next_field(self) -> None:
        # A disabled stack has no address fields to visit
        if self.enabled:
            self.fields.move(1, wrap=True)

    def previous_field(self) -> None:
        self.fields.move(-1)

    def type_char(self, ch: str) -> None:
        if self.current_field == 0:
            if ch == " ":
                self.toggle_enabled()
            return
        self.fields.type_char(ch)

    def backspace(self) -> None:
        self.fields.backspace()
