"""
Clipboard access through the platform's copy utilities.
"""

import platform
import shutil
from typing import List, Optional

from netutil.core.executor import CommandExecutor


class ClipboardProvider:
    """Copy text with the first available clipboard tool."""

    def __init__(self, executor: Optional[CommandExecutor] = None, os_type: Optional[str] = None):
        self.executor = executor or CommandExecutor()
        self.os_type = os_type or platform.system()

    def candidates(self) -> List[List[str]]:
        if self.os_type == "Darwin":
            return [["pbcopy"]]
        if self.os_type == "Windows":
            return [["clip"]]
        return [
            ["wl-copy"],
            ["xclip", "-selection", "clipboard"],
            ["xsel", "--clipboard", "--input"],
        ]

    def set_text(self, text: str) -> bool:
        """Return True when some tool accepted the text."""
        if not text:
            return False

        for command in self.candidates():
            if shutil.which(command[0]) is None:
                continue
            result = self.executor.run_command(command, input_text=text, capture=False)
            if result.success:
                return True
        return False
