"""
Launches accepted commands.
"""

import os
import subprocess
from typing import List, Optional

from loguru import logger

DEFAULT_SHELL = "/bin/sh"


class ShellExecutor:
    """
    Starts commands in the user's shell without waiting for them.

    The child inherits stdin/stdout/stderr. Output and exit status are never
    captured; wait() only keeps the CLI alive until launched commands end.
    """

    def __init__(self, shell: Optional[str] = None):
        self.shell = shell or os.environ.get("SHELL") or DEFAULT_SHELL
        self._processes: List[subprocess.Popen] = []

    def launch(self, command: str) -> subprocess.Popen:
        """Start command in the background and return immediately."""
        logger.info(f"Launching via {self.shell}: {command}")
        process = subprocess.Popen(command, shell=True, executable=self.shell)
        self._processes.append(process)
        return process

    def wait(self) -> None:
        """Block until every launched command has exited."""
        for process in self._processes:
            returncode = process.wait()
            logger.debug(f"Command pid={process.pid} exited with {returncode}")
        self._processes.clear()
