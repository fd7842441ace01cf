"""
Interactive dashboard: renders the App state with rich and feeds it key events.
"""

from __future__ import annotations

from typing import List, Optional

from loguru import logger
from rich.align import Align
from rich.console import Console, Group, RenderableType
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from netutil.core.models import SortColumn
from netutil.tui.dispatcher import dispatch, keymap_for
from netutil.tui.edit import DnsSection, IpConfigMode
from netutil.tui.keys import KeyReader
from netutil.tui.state import App, AppMode

TITLE = "NetUtil - Network Interface Manager"

HELP_SECTIONS = [
    ("Navigation", [
        ("↑/k", "Move up"),
        ("↓/j", "Move down"),
        ("PgUp/Ctrl+u", "Previous page"),
        ("PgDn/Ctrl+d", "Next page"),
        ("Home/g", "First item"),
        ("End/G", "Last item"),
    ]),
    ("Viewing", [
        ("i", "Show detailed interface info"),
        ("r", "Refresh data"),
        ("s/S", "Cycle sort column (forward/backward)"),
        ("/", "Search/filter"),
        ("Esc", "Clear search"),
    ]),
    ("Configuration (requires sudo)", [
        ("e", "Edit IP (DHCP/Static)"),
        ("d", "Edit DNS servers"),
        ("6", "Edit IPv6 settings"),
        ("t", "Toggle interface up/down"),
    ]),
    ("Clipboard", [
        ("c", "Copy interface name"),
        ("p", "Copy IP address"),
        ("m", "Copy MAC address"),
    ]),
    ("Tools", [
        ("x", "Open terminal (↑↓ scroll, Ctrl+l clear)"),
        ("Ctrl+f", "Flush DNS cache (requires sudo)"),
    ]),
    ("Other", [
        ("?", "Show this help"),
        ("q", "Quit"),
    ]),
]


class Dashboard:
    """
    Full-screen view of an ``App``.
    Reads state once per frame and never mutates it, apart from acknowledging
    the mini-shell's redraw request.
    """

    def __init__(self, app: App, console: Optional[Console] = None, poll_interval: float = 0.1):
        """
        Initialize dashboard.

        Args:
            app: State to render and drive
            console: Rich console instance
            poll_interval: Seconds to wait for input before redrawing
        """
        self.app = app
        self.console = console or Console()
        self.poll_interval = poll_interval

    # -- screens --------------------------------------------------------------

    def render(self) -> RenderableType:
        """Render the screen for the current mode."""
        mode = self.app.mode
        if mode == AppMode.HELP:
            return self.render_help_screen()
        if mode == AppMode.DETAILS:
            return self.render_details_screen()
        if mode == AppMode.EDIT_IP:
            return self._frame("Edit IP Configuration", self.render_edit_ip())
        if mode == AppMode.EDIT_DNS:
            return self._frame("Edit DNS Configuration", self.render_edit_dns())
        if mode == AppMode.EDIT_IPV6:
            return self._frame("Edit IPv6 Configuration", self.render_edit_ipv6())
        if mode == AppMode.CONFIRM_DIALOG:
            return self.render_confirm_dialog()
        if mode == AppMode.TERMINAL:
            return self.render_terminal_screen()
        return self.render_main_screen()

    def _title(self, text: str) -> Panel:
        return Panel(Align.center(Text(text, style="bold cyan")), border_style="cyan")

    def _help_bar(self) -> Text:
        entries = keymap_for(self.app).help
        return Text(" | ".join(f"{keys}:{label}" for keys, label in entries), style="dim", justify="center")

    def _frame(self, title: str, body: RenderableType) -> Layout:
        layout = Layout()
        layout.split_column(
            Layout(self._title(title), name="header", size=3),
            Layout(body, name="body"),
            Layout(self._help_bar(), name="footer", size=2),
        )
        return layout

    def render_main_screen(self) -> Layout:
        layout = Layout()
        layout.split_column(
            Layout(self._title(TITLE), name="header", size=3),
            Layout(self.render_table(), name="table"),
            Layout(self.render_status_bar(), name="status", size=3),
            Layout(self._help_bar(), name="footer", size=2),
        )
        return layout

    def render_table(self) -> Panel:
        """Render the visible page of the interface table."""
        app = self.app
        table = Table(show_header=True, header_style="bold yellow", box=None, expand=True, padding=(0, 1))

        for column in SortColumn:
            if column == app.sort_column:
                indicator = " ▲" if app.sort_ascending else " ▼"
                table.add_column(f"[green]{column.label}{indicator}[/green]", no_wrap=True)
            else:
                table.add_column(column.label, no_wrap=True)

        visible = app.filtered_rows[app.scroll_offset:app.scroll_offset + app.page_size]
        for offset, row_idx in enumerate(visible):
            row = app.table_rows[row_idx]
            selected = offset + app.scroll_offset == app.selected_index
            status_style = "green" if row.status == "UP" else "red"
            table.add_row(
                row.name,
                row.interface_type,
                row.ip_address,
                row.mac_address,
                row.subnet_mask,
                row.dns_servers,
                f"[{status_style}]{row.status}[/{status_style}]",
                style="bold white on grey23" if selected else None,
            )

        total = len(app.filtered_rows)
        if total == 0:
            title = " Network Interfaces (0/0) - No matches "
        else:
            pages = (total + app.page_size - 1) // app.page_size
            title = (
                f" Network Interfaces ({app.selected_index + 1}/{total}) - "
                f"Page {app.scroll_offset // app.page_size + 1}/{pages} - Press 'i' for details "
            )

        return Panel(table, title=title, border_style="blue")

    def render_status_bar(self) -> Panel:
        app = self.app
        if app.mode == AppMode.SEARCH:
            return Panel(Text(f"Search: {app.search_query} (Esc to cancel)", style="yellow"))
        if app.status_message:
            return Panel(Text(app.status_message))
        direction = "▲" if app.sort_ascending else "▼"
        return Panel(Text(
            f"Total: {len(app.table_rows)} | Filtered: {len(app.filtered_rows)} | "
            f"Sort: {app.sort_column.label} {direction}"
        ))

    def render_details_screen(self) -> Layout:
        iface = self.app.get_selected_interface()
        if iface is None:
            body: RenderableType = Align.center(Text("No interface selected", style="dim italic"), vertical="middle")
        else:
            table = Table(show_header=False, box=None, padding=(0, 2))
            table.add_column("Property", style="bold yellow")
            table.add_column("Value", style="white")
            table.add_row("Interface", iface.name)
            table.add_row("Type", iface.interface_type.label)
            if iface.ssid:
                table.add_row("SSID", iface.ssid)
            status_style = "green" if iface.is_up else "red"
            table.add_row("Status", f"[{status_style}]{'UP' if iface.is_up else 'DOWN'}[/{status_style}]")
            table.add_row("MAC Address", iface.mac_address or "N/A")
            table.add_row("MTU", str(iface.mtu) if iface.mtu else "N/A")
            table.add_row("IPv6", "Enabled" if iface.ipv6_enabled else "Disabled")
            table.add_row("", "")
            table.add_row("Addresses", str(len(iface.addresses)) if iface.addresses else "None")
            for number, addr in enumerate(iface.addresses, start=1):
                family = "IPv6" if addr.is_ipv6 else "IPv4"
                table.add_row(f"  {number}. {family}", addr.ip)
                if addr.netmask:
                    table.add_row("     Netmask", addr.netmask)
                if addr.broadcast:
                    table.add_row("     Broadcast", addr.broadcast)
            table.add_row("", "")
            table.add_row("DNS Servers", ", ".join(self.app.dns_config.nameservers) or "N/A")
            table.add_row("Search Domains", ", ".join(self.app.dns_config.search_domains) or "N/A")
            body = Panel(table, border_style="blue", padding=(1, 2))
        return self._frame("Interface Details", body)

    @staticmethod
    def _field(label: str, value: str, active: bool) -> Text:
        line = Text(f"{label}: ", style="yellow")
        line.append(value, style="on grey35" if active else "")
        return line

    def render_edit_ip(self) -> Panel:
        session = self.app.ip_edit
        iface = self.app.get_selected_interface()
        dhcp = session.mode == IpConfigMode.DHCP
        lines: List[Text] = [
            self._field("Interface", iface.name if iface else "N/A", False),
            Text(""),
            self._field(
                "Configuration Mode",
                f"[{'X' if dhcp else ' '}] DHCP  [{' ' if dhcp else 'X'}] Static",
                session.current_field == 0,
            ),
        ]
        if not dhcp:
            lines.extend([
                Text(""),
                self._field("IP Address", session.ip_buffer, session.current_field == 1),
                self._field("Netmask", session.netmask_buffer, session.current_field == 2),
                self._field("Gateway (optional)", session.gateway_buffer or "None", session.current_field == 3),
            ])
        return Panel(Group(*lines), border_style="blue", padding=(1, 2))

    def render_edit_dns(self) -> Layout:
        session = self.app.dns_edit

        def entries(title: str, section: DnsSection, items: List[str], index: int) -> Panel:
            active = session.current_field == section
            lines = []
            for number, item in enumerate(items, start=1):
                selected = active and number - 1 == index
                style = "bold white on grey35" if selected else ""
                cursor = "_" if selected and session.editing else ""
                lines.append(Text(f"  {number}. ") + Text(f"{item}{cursor}", style=style))
            if not lines:
                lines.append(Text("  (none - press 'a' to add)", style="dim"))
            return Panel(Group(*lines), title=title, border_style="green" if active else "blue")

        layout = Layout()
        layout.split_row(
            Layout(entries("DNS Servers", DnsSection.SERVERS, session.dns_servers, session.server_index)),
            Layout(entries("Search Domains", DnsSection.DOMAINS, session.search_domains, session.domain_index)),
        )
        return layout

    def render_edit_ipv6(self) -> Panel:
        session = self.app.ipv6_edit
        iface = self.app.get_selected_interface()
        enabled = session.enabled
        lines: List[Text] = [
            self._field("Interface", iface.name if iface else "N/A", False),
            Text(""),
            self._field(
                "IPv6",
                f"[{'X' if enabled else ' '}] Enabled  [{' ' if enabled else 'X'}] Disabled",
                session.current_field == 0,
            ),
        ]
        if enabled:
            lines.extend([
                Text(""),
                self._field("Static Address (blank for auto)", session.ip_buffer, session.current_field == 1),
                self._field("Prefix Length", session.prefix_buffer, session.current_field == 2),
            ])
        if self.app.status_message:
            lines.extend([Text(""), Text(self.app.status_message, style="red")])
        return Panel(Group(*lines), border_style="blue", padding=(1, 2))

    def render_confirm_dialog(self) -> RenderableType:
        body = Group(
            Align.center(Text(self.app.confirm_message, style="yellow", justify="center")),
            Text(""),
            Align.center(Text("Press Enter to confirm | Press Esc to cancel", style="cyan")),
        )
        panel = Panel(body, title=" Confirm Action ", border_style="yellow", padding=(1, 4), width=70)
        return Align.center(panel, vertical="middle")

    def render_help_screen(self) -> Layout:
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Key", style="cyan", no_wrap=True)
        table.add_column("Action", style="white")
        for section, entries in HELP_SECTIONS:
            table.add_row(f"[bold yellow]{section}:[/bold yellow]", "")
            for keys, action in entries:
                table.add_row(f"  {keys}", action)
            table.add_row("", "")
        table.add_row("[red]Note:[/red]", "Network configuration changes require sudo privileges.")
        table.add_row("", "You'll be prompted for your password when needed.")
        return self._frame("NetUtil - Help & Keyboard Shortcuts", Panel(table, border_style="blue"))

    def render_terminal_screen(self) -> Layout:
        shell = self.app.shell
        if shell.output:
            title = f" Output ({min(shell.scroll + 1, len(shell.output))}/{len(shell.output)}) "
        else:
            title = " Output (empty) "
        output = Panel(
            Text("\n".join(shell.visible_lines())),
            title=title,
            border_style="blue",
        )
        command = Panel(Text(f"> {shell.command}", style="green"), title=" Command ")

        layout = Layout()
        layout.split_column(
            Layout(self._title("Terminal"), size=3),
            Layout(output, name="output"),
            Layout(command, size=3),
            Layout(self._help_bar(), size=2),
        )
        return layout

    # -- loop -----------------------------------------------------------------

    def run(self) -> None:
        """Draw, wait for input, dispatch; until the user quits."""
        logger.info("Dashboard started")
        with KeyReader() as reader:
            with Live(self.render(), console=self.console, screen=True, auto_refresh=False) as live:
                while not self.app.should_quit:
                    if self.app.shell.acknowledge_redraw():
                        self.console.clear()
                    live.update(self.render(), refresh=True)

                    for event in reader.poll(self.poll_interval):
                        dispatch(self.app, event)
                        if self.app.should_quit:
                            break
        logger.info("Dashboard stopped")
