"""
Process runner for the external flashing program (chirpc).

chirpc talks to the radio; this module only launches it, lets it write
straight to the operator's terminal, and turns its exit status into a
verdict.

IMPORTANT: chirpc does not follow POSIX exit-code conventions.
    1  = success
    2  = error
    0  = never emitted
Exit code 1 is the ONLY success value. Do not "fix" this to 0.
"""

import logging
import subprocess
from typing import List, Optional, Sequence

from rich.console import Console

from baofeng_image_flasher.errors import LaunchError, ProcessOutcome, TransferFailureError

logger = logging.getLogger(__name__)

# chirpc's documented success code (see module docstring)
CHIRPC_SUCCESS_CODE = 1


def classify_exit_code(code: int) -> ProcessOutcome:
    """Map a raw chirpc exit status to an outcome. Only 1 is success."""
    if code == CHIRPC_SUCCESS_CODE:
        return ProcessOutcome.SUCCESS
    return ProcessOutcome.FAILURE


class ProcessRunner:
    """
    Runs the flashing program one invocation at a time.

    Standard streams are inherited, so the operator sees chirpc's live
    progress. There is no timeout: once launched, the runner waits for
    the process to exit.

    Example:
        runner = ProcessRunner("/usr/local/bin/chirpc")
        runner.run(["-s", "/dev/ttyUSB0", "-r", "Baofeng_UV-5R",
                    "--download-mmap", "--mmap", "backup.img"])
    """

    def __init__(self, program: str, console: Optional[Console] = None):
        self.program = program
        self.console = console or Console()

    def command_line(self, args: Sequence[str]) -> List[str]:
        return [self.program, *args]

    def run(self, args: Sequence[str]) -> ProcessOutcome:
        """
        Launch the program and wait for it to exit.

        Returns:
            ProcessOutcome.SUCCESS when the process exits with code 1.

        Raises:
            TransferFailureError: Process exited with any other code.
            LaunchError: Process could not be started.
        """
        cmd = self.command_line(args)
        self.console.print(
            f"Executing command: {' '.join(cmd)}", markup=False, highlight=False
        )

        try:
            completed = subprocess.run(cmd, check=False)
        except OSError as exc:
            logger.debug("Failed to launch %s: %s", self.program, exc)
            raise LaunchError(self.program, exc) from exc

        code = completed.returncode
        outcome = classify_exit_code(code)
        logger.debug("%s exited with code %d (%s)", self.program, code, outcome.value)
        if outcome is not ProcessOutcome.SUCCESS:
            raise TransferFailureError(code)
        return outcome
