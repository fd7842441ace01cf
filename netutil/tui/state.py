"""
Application state for the interface dashboard.

``App`` is the single aggregate the event loop owns: snapshots, row view,
edit sessions, the pending confirm action and the mini-shell. Input handlers
mutate it; the renderer only reads it.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from loguru import logger

from netutil.core.models import (
    DnsConfiguration,
    InterfaceRow,
    NetworkInterface,
    SortColumn,
    build_rows,
)
from netutil.network.clipboard import ClipboardProvider
from netutil.network.privileged import PrivilegedExecutor
from netutil.network.provider import NetworkProvider
from netutil.tui.actions import (
    ConfirmAction,
    DisableIpv6,
    EnableIpv6,
    SetDhcp,
    SetDns,
    SetStaticIp,
    SetStaticIpv6,
    ToggleInterface,
)
from netutil.tui.edit import DnsEditSession, IpConfigMode, IpEditSession, Ipv6EditSession
from netutil.tui.rows import filter_indices, sort_indices
from netutil.tui.shell import MiniShell

DEFAULT_PAGE_SIZE = 20


class AppMode(str, Enum):
    NORMAL = "Normal"
    SEARCH = "Search"
    EDIT_IP = "EditIp"
    EDIT_DNS = "EditDns"
    EDIT_IPV6 = "EditIpv6"
    DETAILS = "Details"
    HELP = "Help"
    CONFIRM_DIALOG = "ConfirmDialog"
    TERMINAL = "Terminal"


class App:
    """Dashboard state machine."""

    def __init__(
        self,
        provider: NetworkProvider,
        privileged: PrivilegedExecutor,
        clipboard: ClipboardProvider,
        shell: Optional[MiniShell] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        """
        Build the state and take the initial snapshot.

        Args:
            provider: Source of interface and DNS snapshots
            privileged: Executor for confirmed changes
            clipboard: Clipboard used by the copy commands
            shell: Mini-shell instance (a default one is created)
            page_size: Table rows per page

        Raises:
            RuntimeError: If the initial snapshot cannot be fetched
        """
        self.provider = provider
        self.privileged = privileged
        self.clipboard = clipboard
        self.shell = shell or MiniShell()

        self.interfaces: List[NetworkInterface] = []
        self.dns_config = DnsConfiguration()
        self.table_rows: List[InterfaceRow] = []
        self.filtered_rows: List[int] = []
        self.selected_index = 0
        self.scroll_offset = 0
        self.page_size = max(1, page_size)

        self.mode = AppMode.NORMAL
        self.search_query = ""
        self.sort_column = SortColumn.INTERFACE
        self.sort_ascending = True
        self.should_quit = False
        self.status_message: Optional[str] = None

        self.ip_edit = IpEditSession()
        self.dns_edit = DnsEditSession()
        self.ipv6_edit = Ipv6EditSession()

        self.confirm_message = ""
        self.confirm_action: Optional[ConfirmAction] = None

        self._load()
        self._recompute()

    # -- data ---------------------------------------------------------------

    def _load(self) -> None:
        interfaces = self.provider.fetch_interfaces()
        dns_config = self.provider.fetch_dns()
        self.interfaces = interfaces
        self.dns_config = dns_config
        self.table_rows = build_rows(interfaces, dns_config)
        logger.info(
            f"Loaded {len(interfaces)} interfaces, {len(dns_config.nameservers)} nameservers"
        )

    def refresh_data(self) -> None:
        """
        Reload every snapshot and reapply the current query and sort.

        The selection follows the previously selected interface by name when
        it is still displayed.

        Raises:
            RuntimeError: If the provider fails; the previous state is kept
        """
        previous = self.get_selected_row()
        self._load()
        self._recompute()

        if previous is not None:
            for position, idx in enumerate(self.filtered_rows):
                if self.table_rows[idx].name == previous.name:
                    self.selected_index = position
                    break
        self.adjust_scroll()

    def reload(self) -> None:
        """User-requested refresh; failures become status text."""
        try:
            self.refresh_data()
        except RuntimeError as e:
            logger.error(f"Refresh failed: {e}")
            self.set_status(f"Refresh failed: {e}")
            return
        self.set_status("Data refreshed")

    # -- filter and sort ----------------------------------------------------

    def apply_filter(self) -> None:
        self.filtered_rows = filter_indices(self.table_rows, self.search_query)
        if self.filtered_rows and self.selected_index >= len(self.filtered_rows):
            self.selected_index = len(self.filtered_rows) - 1

    def apply_sort(self) -> None:
        self.filtered_rows = sort_indices(
            self.table_rows, self.filtered_rows, self.sort_column, self.sort_ascending
        )

    def _recompute(self) -> None:
        self.apply_filter()
        self.apply_sort()
        self.adjust_scroll()

    def set_sort_column(self, column: SortColumn) -> None:
        """Select a column; selecting the active one flips the direction."""
        if self.sort_column == column:
            self.sort_ascending = not self.sort_ascending
        else:
            self.sort_column = column
            self.sort_ascending = True
        self.apply_sort()

    def cycle_sort(self, forward: bool = True) -> None:
        self.sort_column = self.sort_column.next() if forward else self.sort_column.prev()
        self.apply_sort()
        self.set_status(f"Sorted by {self.sort_column.label}")

    def add_search_char(self, ch: str) -> None:
        self.search_query += ch
        self._recompute()

    def remove_search_char(self) -> None:
        self.search_query = self.search_query[:-1]
        self._recompute()

    def clear_search(self) -> None:
        self.search_query = ""
        self._recompute()

    # -- navigation ---------------------------------------------------------

    def adjust_scroll(self) -> None:
        """Smallest offset that keeps the selection on screen."""
        self.scroll_offset = max(0, self.selected_index - self.page_size + 1)

    def next_item(self) -> None:
        if self.filtered_rows:
            self.selected_index = (self.selected_index + 1) % len(self.filtered_rows)
            self.adjust_scroll()

    def previous_item(self) -> None:
        if self.filtered_rows:
            if self.selected_index == 0:
                self.selected_index = len(self.filtered_rows) - 1
            else:
                self.selected_index -= 1
            self.adjust_scroll()

    def next_page(self) -> None:
        if self.filtered_rows:
            self.selected_index = min(
                self.selected_index + self.page_size, len(self.filtered_rows) - 1
            )
            self.adjust_scroll()

    def previous_page(self) -> None:
        self.selected_index = max(0, self.selected_index - self.page_size)
        self.adjust_scroll()

    def first_item(self) -> None:
        self.selected_index = 0
        self.scroll_offset = 0

    def last_item(self) -> None:
        if self.filtered_rows:
            self.selected_index = len(self.filtered_rows) - 1
            self.adjust_scroll()

    def get_selected_row(self) -> Optional[InterfaceRow]:
        if 0 <= self.selected_index < len(self.filtered_rows):
            return self.table_rows[self.filtered_rows[self.selected_index]]
        return None

    def get_selected_interface(self) -> Optional[NetworkInterface]:
        row = self.get_selected_row()
        if row is None:
            return None
        return next((iface for iface in self.interfaces if iface.name == row.name), None)

    # -- status -------------------------------------------------------------

    def set_status(self, message: str) -> None:
        self.status_message = message

    def clear_status(self) -> None:
        self.status_message = None

    # -- simple mode switches -------------------------------------------------

    def enter_mode(self, mode: AppMode) -> None:
        """Switch to a mode that carries no confirm action."""
        if mode == AppMode.CONFIRM_DIALOG:
            raise ValueError("The confirm dialog is entered through propose()")
        self.mode = mode

    def return_to_normal(self) -> None:
        self.enter_mode(AppMode.NORMAL)

    def show_details(self) -> None:
        self.enter_mode(AppMode.DETAILS)

    def quit(self) -> None:
        self.should_quit = True

    # -- clipboard ----------------------------------------------------------

    def copy_selected_field(self, column: SortColumn) -> None:
        row = self.get_selected_row()
        if row is None:
            return
        if self.clipboard.set_text(row.get_field(column)):
            self.set_status(f"Copied {column.label} to clipboard")
        else:
            logger.warning(f"Clipboard copy of {column.label} failed")
            self.set_status(f"Failed to copy: {column.label} (no clipboard tool accepted the text)")

    # -- edit sessions ------------------------------------------------------

    def start_edit_ip(self) -> None:
        iface = self.get_selected_interface()
        if iface is not None:
            self.ip_edit.start(iface)
            self.enter_mode(AppMode.EDIT_IP)

    def start_edit_dns(self) -> None:
        self.dns_edit.start(self.dns_config)
        self.enter_mode(AppMode.EDIT_DNS)

    def start_edit_ipv6(self) -> None:
        iface = self.get_selected_interface()
        if iface is not None:
            self.ipv6_edit.start(iface)
            self.enter_mode(AppMode.EDIT_IPV6)

    # -- confirmation gate --------------------------------------------------

    def propose(self, action: ConfirmAction) -> None:
        """Show ``action`` in the confirm dialog."""
        self.confirm_action = action
        self.confirm_message = action.message
        self.mode = AppMode.CONFIRM_DIALOG
        logger.info(f"Awaiting confirmation: {action}")

    def prepare_dhcp_config(self) -> None:
        iface = self.get_selected_interface()
        if iface is not None:
            self.propose(SetDhcp(iface.name))

    def prepare_static_ip_config(self) -> None:
        iface = self.get_selected_interface()
        if iface is not None:
            self.propose(SetStaticIp(
                iface.name,
                self.ip_edit.ip_buffer,
                self.ip_edit.netmask_buffer,
                self.ip_edit.gateway,
            ))

    def prepare_ip_config(self) -> None:
        if self.ip_edit.mode == IpConfigMode.DHCP:
            self.prepare_dhcp_config()
        else:
            self.prepare_static_ip_config()

    def prepare_dns_config(self) -> None:
        self.propose(SetDns(
            tuple(self.dns_edit.server_list()),
            tuple(self.dns_edit.domain_list()),
        ))

    def prepare_ipv6_config(self) -> None:
        iface = self.get_selected_interface()
        if iface is None:
            return

        if not self.ipv6_edit.enabled:
            self.propose(DisableIpv6(iface.name))
        elif self.ipv6_edit.ip_buffer:
            try:
                prefix = self.ipv6_edit.parse_prefix()
            except ValueError as e:
                self.set_status(str(e))
                return
            self.propose(SetStaticIpv6(iface.name, self.ipv6_edit.ip_buffer, prefix))
        else:
            self.propose(EnableIpv6(iface.name))

    def toggle_interface(self) -> None:
        iface = self.get_selected_interface()
        if iface is not None:
            self.propose(ToggleInterface(iface.name, not iface.is_up))

    def _take_action(self) -> Optional[ConfirmAction]:
        action = self.confirm_action
        self.confirm_action = None
        self.confirm_message = ""
        self.mode = AppMode.NORMAL
        return action

    def execute_confirmed_action(self) -> None:
        """
        Run the pending action once, then refresh.

        The action is discarded whatever the outcome; failures only change
        the status text.
        """
        action = self._take_action()
        if action is None:
            return

        logger.info(f"Executing confirmed action: {action}")
        try:
            status = action.execute(self.privileged)
        except RuntimeError as e:
            logger.error(f"Action failed: {action}: {e}")
            self.set_status(f"Error: {e}")
            return

        self.set_status(status)
        try:
            self.refresh_data()
        except RuntimeError as e:
            logger.error(f"Refresh after {action} failed: {e}")
            self.set_status(f"{status} (refresh failed: {e})")

    def cancel_confirm(self) -> None:
        action = self._take_action()
        if action is not None:
            logger.info(f"Cancelled action: {action}")

    # -- immediate actions ----------------------------------------------------

    def flush_dns_cache(self) -> None:
        try:
            self.privileged.flush_dns_cache()
        except RuntimeError as e:
            logger.error(f"DNS cache flush failed: {e}")
            self.set_status(f"Failed to flush DNS cache: {e}")
            return
        self.set_status("DNS cache flushed successfully")

    # -- mini-shell -----------------------------------------------------------

    def open_terminal(self) -> None:
        self.shell.reset()
        self.enter_mode(AppMode.TERMINAL)
