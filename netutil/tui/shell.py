"""
Mini-shell: a command line plus a scrollable output log.
"""

import subprocess
from typing import List, Optional

from loguru import logger

from netutil.core.executor import CommandExecutor

DEFAULT_WINDOW = 20


class MiniShell:
    """
    Run one command at a time and collect its output.

    Commands are split on whitespace only; there is no quoting. Execution
    blocks until the process exits.
    """

    def __init__(self, executor: Optional[CommandExecutor] = None, window: int = DEFAULT_WINDOW):
        self.executor = executor or CommandExecutor()
        self.window = window
        self.command = ""
        self.output: List[str] = []
        self.scroll = 0
        # Raised by clear(); the render loop acknowledges it before drawing
        self.needs_full_redraw = False

    @property
    def max_scroll(self) -> int:
        return max(0, len(self.output) - self.window)

    def visible_lines(self) -> List[str]:
        return self.output[self.scroll:self.scroll + self.window]

    def reset(self) -> None:
        """Empty command, log and scroll without requesting a redraw."""
        self.command = ""
        self.output = []
        self.scroll = 0

    def type_char(self, ch: str) -> None:
        self.command += ch

    def backspace(self) -> None:
        self.command = self.command[:-1]

    def execute(self) -> None:
        """Run the buffered command and append its output to the log."""
        if not self.command:
            return

        cmd = self.command
        self.output.append(f"$ {cmd}")

        parts = cmd.split()
        if not parts:
            return

        logger.debug(f"Mini-shell running: {parts}")
        result = self.executor.run_command(parts, stdin=subprocess.DEVNULL)

        if not result.spawned:
            self.output.append(f"Failed to execute command: {result.spawn_error}")
        else:
            self.output.extend(result.stdout.splitlines())
            self.output.extend(f"ERROR: {line}" for line in result.stderr.splitlines())
            if not result.success:
                self.output.append(f"Command exited with status: {result.return_code}")

        self.command = ""

        if len(self.output) > self.window:
            self.scroll = self.max_scroll

    def scroll_up(self) -> None:
        if self.scroll > 0:
            self.scroll -= 1

    def scroll_down(self) -> None:
        if self.scroll < self.max_scroll:
            self.scroll += 1

    def clear(self) -> None:
        self.reset()
        self.needs_full_redraw = True

    def acknowledge_redraw(self) -> bool:
        """Return and clear the one-shot redraw flag."""
        pending = self.needs_full_redraw
        self.needs_full_redraw = False
        return pending
