"""
Main CLI application using Typer.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from netutil.cli.formatters import (
    format_dns_config,
    format_interface_table,
    format_type_summary,
    print_missing_tools,
    print_system_info,
)
from netutil.core.config import AppConfig
from netutil.core.detector import SystemDetector
from netutil.core.executor import CommandExecutor
from netutil.core.models import build_rows
from netutil.network.clipboard import ClipboardProvider
from netutil.network.privileged import PrivilegedExecutor
from netutil.network.provider import NetworkProvider, summarize_interfaces
from netutil.storage.logger import setup_logging
from netutil.tui.dashboard import Dashboard
from netutil.tui.shell import MiniShell
from netutil.tui.state import App

app = typer.Typer(
    name="netutil",
    help="Network Interface Manager",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def _init_context(
    log_dir: Optional[Path],
    verbose: bool,
    page_size: Optional[int] = None,
    console_logging: bool = False,
):
    """
    Initialize shared objects: config, logger, system info and executor.
    Uses optional config file (~/.netutil.yaml or ./.netutil.yaml) for defaults when CLI does not set values.
    """
    config = AppConfig.from_sources(
        log_dir=log_dir,
        verbose=verbose or None,
        page_size=page_size,
    )

    logger = setup_logging(config.log_dir, config.verbose, console=console_logging)
    detector = SystemDetector()
    system_info = detector.detect_system()
    logger.debug(f"System: {system_info.os_type} ({system_info.platform})")

    missing = detector.check_required_tools(detector.required_tools(system_info.os_type))
    for tool in missing:
        logger.warning(f"Missing tool {tool.name}: {tool.suggestion}")

    executor = CommandExecutor(logger, timeout=config.command_timeout)
    return config, logger, system_info, missing, executor


def _fetch_or_exit(fetch):
    try:
        return fetch()
    except RuntimeError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _print_json(payload) -> None:
    """Print a JSON document without rich markup processing."""
    console.print(json.dumps(payload, indent=2), markup=False, highlight=False, soft_wrap=True)


def _run_interactive(log_dir: Optional[Path], verbose: bool, page_size: Optional[int]) -> None:
    """Start the full-screen dashboard (default `netutil`)."""
    config, logger, system_info, _missing, executor = _init_context(log_dir, verbose, page_size)

    provider = NetworkProvider(executor, os_type=system_info.os_type)
    privileged = PrivilegedExecutor(
        executor,
        os_type=system_info.os_type,
        non_interactive=config.sudo_non_interactive,
    )
    clipboard = ClipboardProvider(executor, os_type=system_info.os_type)
    shell = MiniShell(executor, window=config.terminal_window)

    state = _fetch_or_exit(lambda: App(
        provider,
        privileged,
        clipboard,
        shell=shell,
        page_size=config.page_size,
    ))

    try:
        Dashboard(state, console=console, poll_interval=config.poll_interval_ms / 1000).run()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return
    logger.info("NetUtil exited normally")


@app.callback(invoke_without_command=True)
def _default(
    ctx: typer.Context,
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        help="Directory for log files (default ~/.netutil/logs)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    page_size: Optional[int] = typer.Option(
        None,
        "--page-size",
        min=1,
        help="Table rows per page",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
):
    """
    NetUtil - Network Interface Manager.
    Run with no command for the interactive dashboard, or use a subcommand for plain output.
    """
    if version:
        from netutil import __version__
        console.print(f"netutil {__version__}")
        raise typer.Exit(0)
    if ctx.invoked_subcommand is None:
        _run_interactive(log_dir, verbose, page_size)


@app.command("list")
def list_interfaces(
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        help="Directory for log files",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Print interfaces as JSON",
    ),
):
    """
    Print every network interface once and exit.
    """
    _config, _logger, system_info, missing, executor = _init_context(
        log_dir, verbose, console_logging=not output_json
    )
    provider = NetworkProvider(executor, os_type=system_info.os_type)

    interfaces = _fetch_or_exit(provider.fetch_interfaces)
    dns = _fetch_or_exit(provider.fetch_dns)

    if output_json:
        payload = [iface.model_dump(mode="json") for iface in interfaces]
        _print_json(payload)
        return

    if verbose:
        print_system_info(system_info, console)
        print_missing_tools(missing, console)
    format_interface_table(build_rows(interfaces, dns), console)
    format_type_summary(summarize_interfaces(interfaces), console)


@app.command()
def dns(
    log_dir: Optional[Path] = typer.Option(
        None,
        "--log-dir",
        help="Directory for log files",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Print the DNS configuration as JSON",
    ),
):
    """
    Print the system DNS configuration and exit.
    """
    _config, _logger, system_info, _missing, executor = _init_context(
        log_dir, verbose, console_logging=not output_json
    )
    provider = NetworkProvider(executor, os_type=system_info.os_type)
    config = _fetch_or_exit(provider.fetch_dns)

    if output_json:
        _print_json(config.model_dump(mode="json"))
    else:
        format_dns_config(config, console)
