"""Shared fixtures: sample snapshots and mocked system collaborators."""
from unittest.mock import MagicMock

import pytest

from netutil.core.executor import CommandResult
from netutil.core.models import (
    DnsConfiguration,
    InterfaceAddress,
    InterfaceType,
    NetworkInterface,
)
from netutil.tui.shell import MiniShell
from netutil.tui.state import App


def _make_result(stdout="", stderr="", return_code=0, spawn_error=None, command="cmd"):
    return CommandResult(
        command=command,
        return_code=return_code,
        stdout=stdout,
        stderr=stderr,
        duration=0.01,
        success=return_code == 0 and spawn_error is None,
        spawn_error=spawn_error,
    )


@pytest.fixture
def sample_interfaces():
    return [
        NetworkInterface(
            name="eth0",
            interface_type=InterfaceType.ETHERNET,
            addresses=[
                InterfaceAddress(ip="192.168.1.10", netmask="255.255.255.0", broadcast="192.168.1.255"),
                InterfaceAddress(ip="fe80::1", netmask="ffff:ffff:ffff:ffff::", is_ipv6=True),
            ],
            mac_address="aa:bb:cc:dd:ee:01",
            is_up=True,
            mtu=1500,
        ),
        NetworkInterface(
            name="eth1",
            interface_type=InterfaceType.ETHERNET,
            mac_address="aa:bb:cc:dd:ee:02",
            is_up=False,
            mtu=1500,
            ipv6_enabled=False,
        ),
        NetworkInterface(
            name="lo",
            interface_type=InterfaceType.LOOPBACK,
            addresses=[InterfaceAddress(ip="127.0.0.1", netmask="255.0.0.0")],
            is_up=True,
            mtu=65536,
        ),
        NetworkInterface(
            name="wlan0",
            interface_type=InterfaceType.WIFI,
            addresses=[InterfaceAddress(ip="10.0.0.5", netmask="255.255.0.0")],
            mac_address="aa:bb:cc:dd:ee:03",
            is_up=True,
            mtu=1500,
            ssid="HomeNet",
        ),
    ]


@pytest.fixture
def sample_dns():
    return DnsConfiguration(nameservers=["1.1.1.1", "8.8.8.8"], search_domains=["example.com"])


@pytest.fixture
def provider(sample_interfaces, sample_dns):
    mock = MagicMock()
    mock.fetch_interfaces.return_value = sample_interfaces
    mock.fetch_dns.return_value = sample_dns
    return mock


@pytest.fixture
def privileged():
    return MagicMock()


@pytest.fixture
def clipboard():
    mock = MagicMock()
    mock.set_text.return_value = True
    return mock


@pytest.fixture
def shell_executor():
    mock = MagicMock()
    mock.run_command.return_value = _make_result()
    return mock


@pytest.fixture
def app(provider, privileged, clipboard, shell_executor):
    return App(provider, privileged, clipboard, shell=MiniShell(shell_executor), page_size=20)


@pytest.fixture
def make_result():
    """Factory for CommandResult values returned by mocked executors."""
    return _make_result
