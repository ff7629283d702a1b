"""
Command execution engine.
"""

import subprocess
import time
from typing import List

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


class CommandExecutor:
    """Execute platform commands used to query hardware."""

    def __init__(self, app_logger=logger):
        self.logger = app_logger

    def run_command(
        self,
        command: List[str],
        timeout: int = 30,
    ) -> CommandResult:
        """
        Execute a system command.

        Args:
            command: Command and arguments as a list
            timeout: Timeout in seconds

        Returns:
            CommandResult object
        """
        start_time = time.time()
        cmd_str = " ".join(command)

        self.logger.debug(f"Executing command: {cmd_str}")

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=timeout,
            )

            duration = time.time() - start_time

            self.logger.debug(
                f"Command completed: {cmd_str} "
                f"(return code: {result.returncode}, duration: {duration:.2f}s)"
            )

            return CommandResult(
                command=cmd_str,
                return_code=result.returncode,
                stdout=result.stdout or "",
                stderr=result.stderr or "",
                duration=duration,
                success=(result.returncode == 0),
            )

        except subprocess.TimeoutExpired:
            duration = time.time() - start_time
            self.logger.error(f"Command timed out after {timeout}s: {cmd_str}")

            return CommandResult(
                command=cmd_str,
                return_code=-1,
                stdout="",
                stderr=f"Command timed out after {timeout} seconds",
                duration=duration,
                success=False,
            )

        except OSError as e:
            duration = time.time() - start_time
            self.logger.warning(f"Command failed: {cmd_str} - {e}")

            return CommandResult(
                command=cmd_str,
                return_code=-1,
                stdout="",
                stderr=str(e),
                duration=duration,
                success=False,
            )
