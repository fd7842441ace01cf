"""Tests for the IPv4, DNS and IPv6 edit sessions."""
import pytest

from netutil.core.models import DnsConfiguration
from netutil.tui.edit import (
    BufferCursor,
    DnsEditSession,
    DnsSection,
    IpConfigMode,
    IpEditSession,
    Ipv6EditSession,
)


# -- BufferCursor -------------------------------------------------------------

def test_cursor_ignores_typing_into_toggle_slot():
    cursor = BufferCursor([None, "10."])
    cursor.type_char("x")
    cursor.backspace()
    assert cursor.buffers == [None, "10."]


def test_cursor_move_clamps_and_wraps():
    cursor = BufferCursor(["a", "b", "c"])
    cursor.move(-1)
    assert cursor.index == 0
    cursor.move(5)
    assert cursor.index == 2
    cursor.move(1, wrap=True)
    assert cursor.index == 0


def test_cursor_remove_keeps_index_in_bounds():
    cursor = BufferCursor(["a", "b"])
    cursor.index = 1
    cursor.remove()
    assert cursor.buffers == ["a"]
    assert cursor.index == 0
    cursor.remove()
    assert cursor.buffers == []
    assert cursor.index == 0
    cursor.remove()
    assert cursor.current is None


# -- IPv4 ---------------------------------------------------------------------

def test_ip_session_starts_in_dhcp_with_interface_values(sample_interfaces):
    session = IpEditSession.from_interface(sample_interfaces[0])
    assert session.mode == IpConfigMode.DHCP
    assert session.current_field == 0
    assert session.ip_buffer == "192.168.1.10"
    assert session.netmask_buffer == "255.255.255.0"
    assert session.gateway is None


def test_ip_session_defaults_netmask_without_address(sample_interfaces):
    session = IpEditSession.from_interface(sample_interfaces[1])
    assert session.ip_buffer == ""
    assert session.netmask_buffer == "255.255.255.0"


def test_ip_session_space_on_toggle_switches_mode(sample_interfaces):
    session = IpEditSession.from_interface(sample_interfaces[0])
    session.type_char("x")
    assert session.mode == IpConfigMode.DHCP
    session.type_char(" ")
    assert session.mode == IpConfigMode.STATIC
    session.type_char(" ")
    assert session.mode == IpConfigMode.DHCP


def test_ip_session_static_navigation_and_typing(sample_interfaces):
    session = IpEditSession.from_interface(sample_interfaces[1])
    session.type_char(" ")
    session.next_field()
    for ch in "10.1.1.1":
        session.type_char(ch)
    session.next_field()
    session.next_field()
    for ch in "10.1.1.254":
        session.type_char(ch)
    session.next_field()
    assert session.current_field == 3
    session.backspace()
    assert session.ip_buffer == "10.1.1.1"
    assert session.gateway == "10.1.1.25"
    session.previous_field()
    session.previous_field()
    session.previous_field()
    session.previous_field()
    assert session.current_field == 0


def test_ip_session_dhcp_does_not_walk_past_ip_field(sample_interfaces):
    session = IpEditSession.from_interface(sample_interfaces[0])
    session.next_field()
    session.next_field()
    assert session.current_field == 1


# -- DNS ----------------------------------------------------------------------

def dns_session(dns):
    session = DnsEditSession()
    session.start(dns)
    return session


def test_dns_session_copies_snapshot(sample_dns):
    session = dns_session(sample_dns)
    session.type_char("0")
    assert session.dns_servers == ["1.1.1.10", "8.8.8.8"]
    assert sample_dns.nameservers == ["1.1.1.1", "8.8.8.8"]


def test_dns_session_offers_blank_server_when_empty():
    session = dns_session(DnsConfiguration())
    assert session.dns_servers == [""]
    assert session.search_domains == []
    assert session.server_list() == []


def test_dns_session_switch_section_resets_indices(sample_dns):
    session = dns_session(sample_dns)
    session.move_down()
    assert session.server_index == 1
    session.switch_section()
    assert session.current_field == DnsSection.DOMAINS
    assert session.server_index == 0
    assert session.domain_index == 0


def test_dns_session_add_and_remove_entries(sample_dns):
    session = dns_session(sample_dns)
    session.add_entry()
    assert session.server_index == 2
    for ch in "9.9.9.9":
        session.type_char(ch)
    assert session.server_list() == ["1.1.1.1", "8.8.8.8", "9.9.9.9"]

    session.remove_entry()
    assert session.dns_servers == ["1.1.1.1", "8.8.8.8"]
    assert session.server_index == 1


def test_dns_session_remove_until_empty_never_fails(sample_dns):
    session = dns_session(sample_dns)
    session.switch_section()
    session.remove_entry()
    session.remove_entry()
    assert session.search_domains == []
    assert session.domain_index == 0
    session.type_char("x")
    session.backspace()
    session.move_down()
    assert session.search_domains == []


def test_dns_session_editing_needs_an_entry(sample_dns):
    session = dns_session(sample_dns)
    session.toggle_editing()
    assert session.editing is True
    session.toggle_editing()
    assert session.editing is False

    session.switch_section()
    session.remove_entry()
    session.toggle_editing()
    assert session.editing is False


# -- IPv6 ---------------------------------------------------------------------

def test_ipv6_session_reflects_interface(sample_interfaces):
    session = Ipv6EditSession.from_interface(sample_interfaces[0])
    assert session.enabled is True
    assert session.ip_buffer == "fe80::1"
    assert session.prefix_buffer == "64"

    disabled = Ipv6EditSession.from_interface(sample_interfaces[1])
    assert disabled.enabled is False
    assert disabled.ip_buffer == ""


def test_ipv6_session_disabled_stays_on_toggle(sample_interfaces):
    session = Ipv6EditSession.from_interface(sample_interfaces[1])
    session.next_field()
    assert session.current_field == 0
    session.type_char(" ")
    assert session.enabled is True
    session.next_field()
    session.next_field()
    session.next_field()
    assert session.current_field == 0


@pytest.mark.parametrize("text,expected", [("", 64), ("  ", 64), ("48", 48), ("0", 0), ("128", 128)])
def test_ipv6_parse_prefix_valid(sample_interfaces, text, expected):
    session = Ipv6EditSession.from_interface(sample_interfaces[0])
    session.prefix_buffer = text
    assert session.parse_prefix() == expected


@pytest.mark.parametrize("text", ["129", "abc", "-1", "6 4"])
def test_ipv6_parse_prefix_invalid(sample_interfaces, text):
    session = Ipv6EditSession.from_interface(sample_interfaces[0])
    session.prefix_buffer = text
    with pytest.raises(ValueError, match="Invalid IPv6 prefix"):
        session.parse_prefix()
