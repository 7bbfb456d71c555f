"""
Error taxonomy for Baofeng Image Flasher.

Every failure the operator can see is one of these. Core modules raise
them; the CLI reports them and exits non-zero.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Union


class ProcessOutcome(Enum):
    """Verdict for one run of the external flashing program."""
    SUCCESS = "success"
    FAILURE = "failure"
    LAUNCH_ERROR = "launch_error"


class FlasherError(Exception):
    """Base class for all errors reported to the operator."""
    pass


class ConfigError(FlasherError):
    """Configuration file is missing or malformed."""
    pass


class NoDeviceFoundError(FlasherError):
    """Device discovery found no USB serial ports."""

    def __init__(self, message: str = "No USB devices found."):
        super().__init__(message)


class MissingInputFileError(FlasherError):
    """
    Source image for an upload does not exist.

    Attributes:
        path: Resolved path that was looked up
    """

    def __init__(self, path: Union[str, Path], message: Optional[str] = None):
        self.path = Path(path)
        super().__init__(message or f"File {self.path} does not exist.")


class InvalidOutputPathError(FlasherError):
    """
    Download target cannot be written as a file.

    Attributes:
        path: Resolved output path
    """

    def __init__(self, path: Union[str, Path], message: Optional[str] = None):
        self.path = Path(path)
        super().__init__(message or f"Output path {self.path} is a directory, not an image file.")


class PromptUnavailableError(FlasherError):
    """Interactive prompt cannot be rendered in the current terminal."""

    def __init__(
        self,
        message: str = "Interactive prompt couldn't be rendered in the current environment.",
    ):
        super().__init__(message)


class TransferError(FlasherError):
    """Base for errors produced by a single run of the flashing program."""
    outcome = ProcessOutcome.FAILURE


class LaunchError(TransferError):
    """
    The flashing program could not be started at all.

    Attributes:
        program: Executable that was launched
        cause: Underlying OSError
    """
    outcome = ProcessOutcome.LAUNCH_ERROR

    def __init__(self, program: str, cause: OSError):
        self.program = program
        self.cause = cause
        super().__init__(f"Could not launch {program}: {cause}")


class TransferFailureError(TransferError):
    """
    The flashing program ran but did not report success.

    Attributes:
        exit_code: Raw exit status of the process
    """
    outcome = ProcessOutcome.FAILURE

    def __init__(self, exit_code: int):
        self.exit_code = exit_code
        super().__init__(f"Script exited with code {exit_code}")
