"""
Mode transition table.

Each mode owns a ``Keymap``: explicit key bindings plus an optional handler
for plain printable characters. ``dispatch`` looks up the current mode's
keymap and runs at most one handler per event.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional, Tuple

from loguru import logger

from netutil.core.models import SortColumn
from netutil.tui import keys as k
from netutil.tui.keys import KeyEvent
from netutil.tui.state import App, AppMode

Handler = Callable[[App, KeyEvent], None]


@dataclass
class Keymap:
    bindings: Dict[KeyEvent, Handler] = field(default_factory=dict)
    text: Optional[Handler] = None
    help: Tuple[Tuple[str, str], ...] = ()

    def resolve(self, event: KeyEvent) -> Optional[Handler]:
        handler = self.bindings.get(event)
        if handler is None and self.text is not None and event.is_char:
            handler = self.text
        return handler


def bind(*entries: Tuple[Iterable[KeyEvent], Handler]) -> Dict[KeyEvent, Handler]:
    table: Dict[KeyEvent, Handler] = {}
    for events, handler in entries:
        for event in events:
            if event in table:
                raise ValueError(f"Duplicate binding for {event}")
            table[event] = handler
    return table


def keys(*names: str, ctrl: bool = False) -> Tuple[KeyEvent, ...]:
    return tuple(KeyEvent(name, ctrl) for name in names)


def _do(method: Callable[[App], None]) -> Handler:
    """Adapt an ``App`` method that ignores the key."""
    return lambda app, event: method(app)


def _quiet(method: Callable[[App], None]) -> Handler:
    """Navigation clears the status line."""
    def handler(app: App, event: KeyEvent) -> None:
        method(app)
        app.clear_status()
    return handler


def _to(mode: AppMode) -> Handler:
    return lambda app, event: app.enter_mode(mode)


def _copy(column: SortColumn) -> Handler:
    return lambda app, event: app.copy_selected_field(column)


# -- Normal -------------------------------------------------------------------

def _clear_search(app: App, event: KeyEvent) -> None:
    app.clear_search()
    app.clear_status()


def _enter_search(app: App, event: KeyEvent) -> None:
    app.enter_mode(AppMode.SEARCH)
    app.clear_status()


NORMAL = Keymap(
    bindings=bind(
        (keys("q", "Q"), _do(App.quit)),
        (keys(k.DOWN, "j"), _quiet(App.next_item)),
        (keys(k.UP, "k"), _quiet(App.previous_item)),
        (keys(k.PAGE_DOWN) + keys("d", ctrl=True), _quiet(App.next_page)),
        (keys(k.PAGE_UP) + keys("u", ctrl=True), _quiet(App.previous_page)),
        (keys(k.HOME, "g"), _quiet(App.first_item)),
        (keys(k.END, "G"), _quiet(App.last_item)),
        (keys("s"), lambda app, event: app.cycle_sort(forward=True)),
        (keys("S"), lambda app, event: app.cycle_sort(forward=False)),
        (keys("/"), _enter_search),
        (keys(k.ESC), _clear_search),
        (keys("r", "R"), _do(App.reload)),
        (keys("?"), _to(AppMode.HELP)),
        (keys("c"), _copy(SortColumn.INTERFACE)),
        (keys("p"), _copy(SortColumn.IP_ADDRESS)),
        (keys("m"), _copy(SortColumn.MAC_ADDRESS)),
        (keys("i", "I"), _do(App.show_details)),
        (keys("e"), _do(App.start_edit_ip)),
        (keys("d"), _do(App.start_edit_dns)),
        (keys("6"), _do(App.start_edit_ipv6)),
        (keys("t"), _do(App.toggle_interface)),
        (keys("x"), _do(App.open_terminal)),
        (keys("f", ctrl=True), _do(App.flush_dns_cache)),
    ),
    help=(
        ("q", "Quit"),
        ("?", "Help"),
        ("/", "Search"),
        ("i", "Details"),
        ("x", "Terminal"),
        ("Ctrl+f", "FlushDNS"),
        ("r", "Refresh"),
        ("e", "IP"),
        ("d", "DNS"),
        ("6", "IPv6"),
    ),
)


# -- Search -------------------------------------------------------------------

SEARCH = Keymap(
    bindings=bind(
        (keys(k.ESC, k.ENTER), _to(AppMode.NORMAL)),
        (keys(k.BACKSPACE), _do(App.remove_search_char)),
    ),
    text=lambda app, event: app.add_search_char(event.key),
    help=(("Type", "Search"), ("Esc", "Cancel"), ("Enter", "Done")),
)


# -- Edit IPv4 ----------------------------------------------------------------

EDIT_IP = Keymap(
    bindings=bind(
        (keys(k.ESC), _to(AppMode.NORMAL)),
        (keys(k.TAB), lambda app, event: app.ip_edit.next_field()),
        (keys(k.BACKTAB), lambda app, event: app.ip_edit.previous_field()),
        (keys(k.ENTER), _do(App.prepare_ip_config)),
        (keys(k.BACKSPACE), lambda app, event: app.ip_edit.backspace()),
    ),
    text=lambda app, event: app.ip_edit.type_char(event.key),
    help=(("Tab", "Next"), ("Shift+Tab", "Prev"), ("Space", "Toggle"), ("Enter", "Apply"), ("Esc", "Cancel")),
)


# -- Edit DNS -----------------------------------------------------------------

def _dns(method_name: str) -> Handler:
    return lambda app, event: getattr(app.dns_edit, method_name)()


EDIT_DNS = Keymap(
    bindings=bind(
        (keys(k.ESC), _to(AppMode.NORMAL)),
        (keys("s", ctrl=True), _do(App.prepare_dns_config)),
        (keys(k.TAB), _dns("switch_section")),
        (keys(k.UP, "k"), _dns("move_up")),
        (keys(k.DOWN, "j"), _dns("move_down")),
        (keys("a"), _dns("add_entry")),
        (keys("x"), _dns("remove_entry")),
        (keys(k.ENTER), _dns("toggle_editing")),
        (keys(k.BACKSPACE), _dns("backspace")),
    ),
    text=lambda app, event: app.dns_edit.type_char(event.key),
    help=(
        ("Tab", "Switch"),
        ("j/k", "Move"),
        ("a", "Add"),
        ("x", "Delete"),
        ("Enter", "Edit entry"),
        ("Ctrl+s", "Save"),
        ("Esc", "Cancel"),
    ),
)

# Inline entry editor: every printable key is text
EDIT_DNS_INLINE = Keymap(
    bindings=bind(
        (keys(k.ENTER, k.ESC), _dns("toggle_editing")),
        (keys("s", ctrl=True), _do(App.prepare_dns_config)),
        (keys(k.BACKSPACE), _dns("backspace")),
    ),
    text=lambda app, event: app.dns_edit.type_char(event.key),
    help=(("Type", "Edit entry"), ("Enter/Esc", "Done"), ("Ctrl+s", "Save")),
)


# -- Edit IPv6 ----------------------------------------------------------------

EDIT_IPV6 = Keymap(
    bindings=bind(
        (keys(k.ESC), _to(AppMode.NORMAL)),
        (keys(k.TAB), lambda app, event: app.ipv6_edit.next_field()),
        (keys(k.BACKTAB), lambda app, event: app.ipv6_edit.previous_field()),
        (keys(k.ENTER), _do(App.prepare_ipv6_config)),
        (keys(k.BACKSPACE), lambda app, event: app.ipv6_edit.backspace()),
    ),
    text=lambda app, event: app.ipv6_edit.type_char(event.key),
    help=(("Tab", "Next"), ("Shift+Tab", "Prev"), ("Space", "Toggle"), ("Enter", "Apply"), ("Esc", "Cancel")),
)


# -- Details, Help, Confirm ---------------------------------------------------

DETAILS = Keymap(
    bindings=bind(
        (keys(k.ESC, "q"), _to(AppMode.NORMAL)),
        (keys("e"), _do(App.start_edit_ip)),
        (keys("d"), _do(App.start_edit_dns)),
        (keys("6"), _do(App.start_edit_ipv6)),
    ),
    help=(("Esc/q", "Back"), ("e", "Edit IP"), ("d", "Edit DNS"), ("6", "Edit IPv6")),
)

HELP = Keymap(
    bindings=bind((keys(k.ESC, "q", "?"), _to(AppMode.NORMAL))),
    help=(("Esc/q/?", "Close"),),
)

CONFIRM = Keymap(
    bindings=bind(
        (keys(k.ENTER), _do(App.execute_confirmed_action)),
        (keys(k.ESC), _do(App.cancel_confirm)),
    ),
    help=(("Enter", "Confirm"), ("Esc", "Cancel")),
)


# -- Terminal -----------------------------------------------------------------

TERMINAL = Keymap(
    bindings=bind(
        (keys(k.ESC), _to(AppMode.NORMAL)),
        (keys(k.ENTER), lambda app, event: app.shell.execute()),
        (keys(k.UP), lambda app, event: app.shell.scroll_up()),
        (keys(k.DOWN), lambda app, event: app.shell.scroll_down()),
        (keys("l", ctrl=True), lambda app, event: app.shell.clear()),
        (keys(k.BACKSPACE), lambda app, event: app.shell.backspace()),
    ),
    text=lambda app, event: app.shell.type_char(event.key),
    help=(("Enter", "Run"), ("Up/Down", "Scroll"), ("Ctrl+l", "Clear"), ("Esc", "Back")),
)


KEYMAPS: Dict[AppMode, Keymap] = {
    AppMode.NORMAL: NORMAL,
    AppMode.SEARCH: SEARCH,
    AppMode.EDIT_IP: EDIT_IP,
    AppMode.EDIT_DNS: EDIT_DNS,
    AppMode.EDIT_IPV6: EDIT_IPV6,
    AppMode.DETAILS: DETAILS,
    AppMode.HELP: HELP,
    AppMode.CONFIRM_DIALOG: CONFIRM,
    AppMode.TERMINAL: TERMINAL,
}


def keymap_for(app: App) -> Keymap:
    if app.mode == AppMode.EDIT_DNS and app.dns_edit.editing:
        return EDIT_DNS_INLINE
    return KEYMAPS[app.mode]


def dispatch(app: App, event: KeyEvent) -> bool:
    """
    Route one key event. Returns False when the current mode ignores it.
    """
    handler = keymap_for(app).resolve(event)
    if handler is None:
        return False
    logger.trace(f"{app.mode.value}: {event}")
    handler(app, event)
    return True
