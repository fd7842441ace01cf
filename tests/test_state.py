"""Tests for the dashboard state machine."""
from unittest.mock import MagicMock

import pytest

from netutil.core.models import DnsConfiguration, InterfaceType, NetworkInterface, SortColumn
from netutil.tui.actions import DisableIpv6, EnableIpv6, SetDhcp, SetStaticIpv6, ToggleInterface
from netutil.tui.edit import IpConfigMode
from netutil.tui.state import App, AppMode


def selected_name(state):
    row = state.get_selected_row()
    return row.name if row else None


def _many_interfaces(count):
    return [
        NetworkInterface(name=f"eth{i:02d}", interface_type=InterfaceType.ETHERNET, is_up=True)
        for i in range(count)
    ]


# -- startup and refresh --------------------------------------------------------

def test_startup_builds_rows_sorted_by_name(app):
    assert app.mode == AppMode.NORMAL
    assert [app.table_rows[i].name for i in app.filtered_rows] == ["eth0", "eth1", "lo", "wlan0"]
    assert selected_name(app) == "eth0"


def test_startup_failure_propagates(privileged, clipboard):
    provider = MagicMock()
    provider.fetch_interfaces.side_effect = RuntimeError("Failed to get network interfaces: boom")
    with pytest.raises(RuntimeError):
        App(provider, privileged, clipboard)


def test_refresh_keeps_selection_by_name(app, provider, sample_interfaces, sample_dns):
    app.last_item()
    assert selected_name(app) == "wlan0"
    # wlan0 moves to the front of the canonical list
    provider.fetch_interfaces.return_value = [
        NetworkInterface(name="aaa0", interface_type=InterfaceType.UNKNOWN),
    ] + sample_interfaces
    app.reload()
    assert selected_name(app) == "wlan0"
    assert app.status_message == "Data refreshed"


def test_refresh_failure_keeps_previous_snapshot(app, provider):
    provider.fetch_interfaces.side_effect = RuntimeError("boom")
    app.reload()
    assert len(app.table_rows) == 4
    assert app.status_message == "Refresh failed: boom"


# -- filter and sort ------------------------------------------------------------

def test_search_filters_and_clamps_selection(app):
    app.last_item()
    for ch in "eth":
        app.add_search_char(ch)
    assert len(app.filtered_rows) == 2
    assert app.selected_index == 1
    app.remove_search_char()
    assert app.search_query == "et"
    app.clear_search()
    assert len(app.filtered_rows) == 4


def test_search_with_no_matches(app):
    for ch in "zzz":
        app.add_search_char(ch)
    assert app.filtered_rows == []
    assert app.get_selected_row() is None
    app.next_item()
    app.last_item()
    app.copy_selected_field(SortColumn.INTERFACE)
    app.clipboard.set_text.assert_not_called()


def test_sort_is_reapplied_after_filter_change(app):
    app.set_sort_column(SortColumn.INTERFACE)
    assert app.sort_ascending is False
    app.add_search_char("e")
    names = [app.table_rows[i].name for i in app.filtered_rows]
    assert names == sorted(names, reverse=True)


def test_apply_sort_twice_keeps_order(app):
    app.set_sort_column(SortColumn.TYPE)
    app.apply_sort()
    first = list(app.filtered_rows)
    app.apply_sort()
    assert app.filtered_rows == first


def test_set_sort_column_resets_direction_for_new_column(app):
    app.set_sort_column(SortColumn.INTERFACE)
    assert app.sort_ascending is False
    app.set_sort_column(SortColumn.TYPE)
    assert app.sort_column == SortColumn.TYPE
    assert app.sort_ascending is True


def test_cycle_sort_sets_status(app):
    app.cycle_sort()
    assert app.sort_column == SortColumn.TYPE
    assert app.status_message == "Sorted by Type"
    app.cycle_sort(forward=False)
    app.cycle_sort(forward=False)
    assert app.sort_column == SortColumn.STATUS


# -- navigation -----------------------------------------------------------------

def test_next_and_previous_wrap(app):
    app.previous_item()
    assert selected_name(app) == "wlan0"
    app.next_item()
    assert selected_name(app) == "eth0"


def test_paging_clamps_and_keeps_selection_visible(provider, privileged, clipboard):
    provider.fetch_interfaces.return_value = _many_interfaces(25)
    state = App(provider, privileged, clipboard, page_size=10)

    state.next_page()
    assert state.selected_index == 10
    assert state.scroll_offset <= state.selected_index < state.scroll_offset + state.page_size

    state.next_page()
    state.next_page()
    assert state.selected_index == 24
    assert state.scroll_offset == 15

    state.previous_page()
    assert state.selected_index == 14
    assert state.scroll_offset <= state.selected_index < state.scroll_offset + state.page_size

    state.first_item()
    assert (state.selected_index, state.scroll_offset) == (0, 0)
    state.previous_item()
    assert state.selected_index == 24
    assert state.scroll_offset == 15


# -- confirmation gate ----------------------------------------------------------

def test_mutations_only_happen_after_confirmation(app, privileged):
    app.start_edit_ip()
    assert app.mode == AppMode.EDIT_IP
    app.prepare_ip_config()
    assert app.mode == AppMode.CONFIRM_DIALOG
    assert app.confirm_action == SetDhcp("eth0")
    privileged.set_dhcp.assert_not_called()

    app.execute_confirmed_action()
    privileged.set_dhcp.assert_called_once_with("eth0")
    assert app.mode == AppMode.NORMAL
    assert app.confirm_action is None
    assert app.status_message == "DHCP enabled on eth0"


def test_cancel_discards_action(app, privileged):
    app.toggle_interface()
    assert app.confirm_action == ToggleInterface("eth0", False)
    app.cancel_confirm()
    assert app.mode == AppMode.NORMAL
    assert app.confirm_action is None
    app.execute_confirmed_action()
    privileged.set_interface_status.assert_not_called()


def test_action_failure_sets_error_status(app, privileged):
    privileged.set_interface_status.side_effect = RuntimeError("Command failed: ip link")
    app.toggle_interface()
    app.execute_confirmed_action()
    assert app.status_message == "Error: Command failed: ip link"
    assert app.mode == AppMode.NORMAL
    assert app.confirm_action is None


def test_dns_write_failure_sets_error_status(app, privileged):
    privileged.set_dns_servers.side_effect = RuntimeError("Failed to create temporary resolv.conf: No space left on device")
    app.start_edit_dns()
    app.prepare_dns_config()
    app.execute_confirmed_action()
    assert app.status_message.startswith("Error: Failed to create temporary resolv.conf")
    assert app.mode == AppMode.NORMAL


def test_refresh_failure_after_action_is_reported(app, provider):
    app.toggle_interface()
    provider.fetch_interfaces.side_effect = RuntimeError("boom")
    app.execute_confirmed_action()
    assert app.status_message == "Interface eth0 disabled (refresh failed: boom)"


def test_confirm_dialog_cannot_be_entered_directly(app):
    with pytest.raises(ValueError):
        app.enter_mode(AppMode.CONFIRM_DIALOG)


def test_static_ip_snapshot_is_taken_at_proposal(app, privileged):
    app.start_edit_ip()
    app.ip_edit.toggle_mode()
    app.ip_edit.ip_buffer = "10.0.0.9"
    app.ip_edit.gateway_buffer = "10.0.0.1"
    app.prepare_ip_config()
    app.ip_edit.ip_buffer = "changed"
    app.execute_confirmed_action()
    privileged.set_static_ip.assert_called_once_with("eth0", "10.0.0.9", "255.255.255.0", "10.0.0.1")


def test_dns_proposal_drops_blank_servers(app):
    app.start_edit_dns()
    app.dns_edit.add_entry()
    app.prepare_dns_config()
    assert app.confirm_action.servers == ("1.1.1.1", "8.8.8.8")
    assert app.confirm_action.domains == ("example.com",)


# -- IPv6 -------------------------------------------------------------------------

def test_ipv6_disabled_proposes_disable(app):
    app.start_edit_ipv6()
    app.ipv6_edit.toggle_enabled()
    app.prepare_ipv6_config()
    assert app.confirm_action == DisableIpv6("eth0")


def test_ipv6_with_address_proposes_static(app):
    app.start_edit_ipv6()
    app.ipv6_edit.ip_buffer = "2001:db8::5"
    app.ipv6_edit.prefix_buffer = ""
    app.prepare_ipv6_config()
    assert app.confirm_action == SetStaticIpv6("eth0", "2001:db8::5", 64)


def test_ipv6_without_address_proposes_enable(app):
    app.start_edit_ipv6()
    app.ipv6_edit.ip_buffer = ""
    app.prepare_ipv6_config()
    assert app.confirm_action == EnableIpv6("eth0")


def test_ipv6_invalid_prefix_is_rejected(app):
    app.start_edit_ipv6()
    app.ipv6_edit.prefix_buffer = "200"
    app.prepare_ipv6_config()
    assert app.mode == AppMode.EDIT_IPV6
    assert app.confirm_action is None
    assert app.status_message.startswith("Invalid IPv6 prefix")


# -- other ------------------------------------------------------------------------

def test_copy_selected_field(app, clipboard):
    app.next_item()
    app.copy_selected_field(SortColumn.MAC_ADDRESS)
    clipboard.set_text.assert_called_once_with("aa:bb:cc:dd:ee:02")
    assert app.status_message == "Copied MAC Address to clipboard"

    clipboard.set_text.return_value = False
    app.copy_selected_field(SortColumn.IP_ADDRESS)
    assert app.status_message.startswith("Failed to copy")


def test_flush_dns_cache(app, privileged):
    app.flush_dns_cache()
    assert app.status_message == "DNS cache flushed successfully"
    privileged.flush_dns_cache.side_effect = RuntimeError("no resolver")
    app.flush_dns_cache()
    assert app.status_message == "Failed to flush DNS cache: no resolver"


def test_open_terminal_resets_shell(app):
    app.shell.output = ["old"]
    app.shell.command = "ls"
    app.open_terminal()
    assert app.mode == AppMode.TERMINAL
    assert app.shell.output == []
    assert app.shell.command == ""


def test_edit_ip_starts_from_selected_interface(app):
    app.last_item()
    app.start_edit_ip()
    assert app.ip_edit.mode == IpConfigMode.DHCP
    assert app.ip_edit.ip_buffer == "10.0.0.5"
    assert app.ip_edit.netmask_buffer == "255.255.0.0"


def test_edit_dns_empty_snapshot(provider, privileged, clipboard):
    provider.fetch_dns.return_value = DnsConfiguration()
    state = App(provider, privileged, clipboard)
    state.start_edit_dns()
    assert state.dns_edit.dns_servers == [""]
