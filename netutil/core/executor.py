"""
Command execution engine.

Every external process (privileged mutations, mini-shell commands, clipboard
helpers and provider lookups) goes through ``CommandExecutor.run_command`` so
that the whole application shares one blocking-call seam.
"""

import subprocess
import time
from typing import List, Optional

from loguru import logger
from pydantic import BaseModel


class CommandResult(BaseModel):
    """Result of a command execution."""

    command: str
    return_code: int
    stdout: str
    stderr: str
    duration: float
    success: bool
    spawn_error: Optional[str] = None

    @property
    def spawned(self) -> bool:
        """True when the process actually started."""
        return self.spawn_error is None


class CommandExecutor:
    """Execute system commands synchronously."""

    def __init__(self, app_logger=None, timeout: Optional[int] = None):
        self.logger = app_logger or logger
        self.timeout = timeout

    def run_command(
        self,
        command: List[str],
        timeout: Optional[int] = None,
        input_text: Optional[str] = None,
        stdin=None,
        capture: bool = True,
    ) -> CommandResult:
        """
        Execute a system command and wait for it to finish.

        Args:
            command: Command and arguments as a list
            timeout: Timeout in seconds, falls back to the executor default
                (None blocks until the process exits)
            input_text: Optional text written to the process stdin
            stdin: stdin handle for the child when no input_text is given,
                e.g. subprocess.DEVNULL (None inherits the terminal)
            capture: Collect stdout/stderr. When False both go to DEVNULL so
                tools that leave a forked helper behind do not block the call

        Returns:
            CommandResult object
        """
        start_time = time.time()
        cmd_str = " ".join(command)
        effective_timeout = timeout if timeout is not None else self.timeout

        self.logger.info(f"Executing command: {cmd_str}")

        try:
            kwargs = {"text": True, "errors": "replace", "timeout": effective_timeout}
            if input_text is not None:
                kwargs["input"] = input_text
            elif stdin is not None:
                kwargs["stdin"] = stdin
            if capture:
                kwargs["capture_output"] = True
            else:
                kwargs["stdout"] = subprocess.DEVNULL
                kwargs["stderr"] = subprocess.DEVNULL

            result = subprocess.run(command, **kwargs)

            duration = time.time() - start_time

            command_result = CommandResult(
                command=cmd_str,
                return_code=result.returncode,
                stdout=result.stdout or "",
                stderr=result.stderr or "",
                duration=duration,
                success=(result.returncode == 0),
            )

            self.logger.info(
                f"Command completed: {cmd_str} "
                f"(return code: {result.returncode}, duration: {duration:.2f}s)"
            )

            return command_result

        except subprocess.TimeoutExpired:
            duration = time.time() - start_time
            self.logger.error(f"Command timed out after {effective_timeout}s: {cmd_str}")

            return CommandResult(
                command=cmd_str,
                return_code=-1,
                stdout="",
                stderr=f"Command timed out after {effective_timeout} seconds",
                duration=duration,
                success=False,
            )

        except (OSError, ValueError) as e:
            duration = time.time() - start_time
            self.logger.error(f"Command failed to start: {cmd_str} - {e}")

            return CommandResult(
                command=cmd_str,
                return_code=-1,
                stdout="",
                stderr=str(e),
                duration=duration,
                success=False,
                spawn_error=str(e),
            )
