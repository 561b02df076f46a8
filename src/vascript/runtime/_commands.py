"""Shell command delegation for command statements."""

from __future__ import annotations

import logging
import subprocess
from typing import Protocol


logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    def run(self, command: str) -> None: ...


class ShellCommandRunner:
    """Run command text through the system shell and wait for it.

    The exit status is logged but never reported to the script: once the
    command has been handed to the shell the statement has succeeded.
    """

    def run(self, command: str) -> None:
        logger.debug("running command: %s", command)
        completed = subprocess.run(command, shell=True, check=False)
        if completed.returncode != 0:
            logger.warning(
                "command exited with status %d: %s", completed.returncode, command
            )
