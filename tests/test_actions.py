"""Tests for confirm actions: messages and the executor calls they make."""
from unittest.mock import MagicMock, call

import pytest

from netutil.tui.actions import (
    DisableIpv6,
    EnableIpv6,
    SetDhcp,
    SetDns,
    SetStaticIp,
    SetStaticIpv6,
    ToggleInterface,
)


@pytest.fixture
def executor():
    return MagicMock()


def test_set_dhcp(executor):
    action = SetDhcp("eth0")
    assert "Set interface 'eth0' to use DHCP?" in action.message
    assert action.execute(executor) == "DHCP enabled on eth0"
    executor.set_dhcp.assert_called_once_with("eth0")


def test_set_static_ip_message_lists_parameters(executor):
    action = SetStaticIp("eth0", "10.0.0.2", "255.255.255.0")
    assert "IP: 10.0.0.2" in action.message
    assert "Netmask: 255.255.255.0" in action.message
    assert "Gateway: None" in action.message
    assert action.execute(executor) == "Static IP set on eth0"
    executor.set_static_ip.assert_called_once_with("eth0", "10.0.0.2", "255.255.255.0", None)


def test_set_dns_skips_domains_when_empty(executor):
    action = SetDns(("1.1.1.1",), ())
    assert "Search domains: None" in action.message
    assert action.execute(executor) == "DNS configuration updated"
    executor.set_dns_servers.assert_called_once_with(["1.1.1.1"])
    executor.set_search_domains.assert_not_called()


def test_set_dns_applies_servers_then_domains(executor):
    action = SetDns(("1.1.1.1", "8.8.8.8"), ("example.com",))
    assert "Servers: 1.1.1.1, 8.8.8.8" in action.message
    action.execute(executor)
    assert executor.method_calls == [
        call.set_dns_servers(["1.1.1.1", "8.8.8.8"]),
        call.set_search_domains(["example.com"]),
    ]


def test_set_dns_domain_failure_propagates_after_servers(executor):
    executor.set_search_domains.side_effect = RuntimeError("Command failed: resolvectl")
    with pytest.raises(RuntimeError):
        SetDns(("1.1.1.1",), ("example.com",)).execute(executor)
    executor.set_dns_servers.assert_called_once()


@pytest.mark.parametrize(
    "up,verb,status",
    [(True, "Enable", "Interface eth1 enabled"), (False, "Disable", "Interface eth1 disabled")],
)
def test_toggle_interface(executor, up, verb, status):
    action = ToggleInterface("eth1", up)
    assert action.message == f"{verb} interface 'eth1'?"
    assert action.execute(executor) == status
    executor.set_interface_status.assert_called_once_with("eth1", up)


def test_ipv6_actions(executor):
    assert DisableIpv6("eth0").execute(executor) == "IPv6 disabled on eth0"
    assert EnableIpv6("eth0").execute(executor) == "IPv6 enabled on eth0"
    action = SetStaticIpv6("eth0", "2001:db8::5", 64)
    assert "Address: 2001:db8::5/64" in action.message
    assert action.execute(executor) == "Static IPv6 set on eth0"
    executor.disable_ipv6.assert_called_once_with("eth0")
    executor.enable_ipv6.assert_called_once_with("eth0")
    executor.set_static_ipv6.assert_called_once_with("eth0", "2001:db8::5", 64)


def test_actions_are_immutable():
    action = SetDhcp("eth0")
    with pytest.raises(AttributeError):
        action.interface = "eth1"
