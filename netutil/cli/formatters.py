"""
Rich formatting utilities for CLI output.
"""

from typing import Dict, List

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from netutil.core.detector import MissingTool, SystemInfo
from netutil.core.models import DnsConfiguration, InterfaceRow, SortColumn


def print_system_info(system_info: SystemInfo, console: Console) -> None:
    """Print detected system information."""
    table = Table(title="System Information", show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Operating System", system_info.os_type)
    table.add_row("Platform", system_info.platform)
    table.add_row("Python Version", system_info.python_version)
    table.add_row("Hostname", system_info.hostname)

    console.print()
    console.print(table)
    console.print()


def print_missing_tools(missing: List[MissingTool], console: Console) -> None:
    if not missing:
        return
    console.print("[bold yellow]⚠️  Missing Tools:[/bold yellow]")
    for tool in missing:
        console.print(f"  • {tool.name}: {tool.suggestion}")
    console.print()


def format_interface_table(rows: List[InterfaceRow], console: Console) -> None:
    """Print the interface table with the same columns as the dashboard."""
    table = Table(title="Network Interfaces", show_header=True, header_style="bold yellow")
    for column in SortColumn:
        table.add_column(column.label, no_wrap=column != SortColumn.DNS_SERVERS)

    for row in rows:
        status_color = "green" if row.status == "UP" else "red"
        table.add_row(
            *[row.get_field(column) for column in SortColumn if column != SortColumn.STATUS],
            f"[{status_color}]{row.status}[/{status_color}]",
        )

    console.print(table)


def format_type_summary(counts: Dict[str, int], console: Console) -> None:
    if not counts:
        return
    summary = " | ".join(f"{label}: {count}" for label, count in sorted(counts.items()))
    console.print(f"[dim]{summary}[/dim]")


def format_dns_config(dns: DnsConfiguration, console: Console) -> None:
    """Print nameservers and search domains in a panel."""
    content: List[str] = ["[bold]Nameservers:[/bold]"]
    if dns.nameservers:
        content.extend(f"  {i}. {server}" for i, server in enumerate(dns.nameservers, start=1))
    else:
        content.append("  [dim]none configured[/dim]")

    content.append("\n[bold]Search domains:[/bold]")
    if dns.search_domains:
        content.extend(f"  {i}. {domain}" for i, domain in enumerate(dns.search_domains, start=1))
    else:
        content.append("  [dim]none configured[/dim]")

    console.print(Panel("\n".join(content), title="DNS Configuration", border_style="cyan"))
