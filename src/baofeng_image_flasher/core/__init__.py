"""
Core module for Baofeng Image Flasher.

- chirpc process runner (runner.py)
- Download/upload operations (transfer.py)
- Sequential multi-radio upload (sequence.py)
- Interactive session setup and entry guards (session.py)
"""

from baofeng_image_flasher.errors import (
    ProcessOutcome,
    FlasherError,
    ConfigError,
    NoDeviceFoundError,
    MissingInputFileError,
    InvalidOutputPathError,
    PromptUnavailableError,
    TransferError,
    LaunchError,
    TransferFailureError,
)
from .runner import CHIRPC_SUCCESS_CODE, ProcessRunner, classify_exit_code
from .transfer import TransferDirection, TransferRequest, download, upload
from .sequence import SequenceResult, SequenceState, UploadSequence
from .session import (
    Action,
    SessionPlan,
    gather_session,
    require_input_image,
    require_output_file,
)

__all__ = [
    # Errors
    "ProcessOutcome",
    "FlasherError",
    "ConfigError",
    "NoDeviceFoundError",
    "MissingInputFileError",
    "InvalidOutputPathError",
    "PromptUnavailableError",
    "TransferError",
    "LaunchError",
    "TransferFailureError",
    # Runner
    "CHIRPC_SUCCESS_CODE",
    "ProcessRunner",
    "classify_exit_code",
    # Transfers
    "TransferDirection",
    "TransferRequest",
    "download",
    "upload",
    # Sequence
    "SequenceResult",
    "SequenceState",
    "UploadSequence",
    # Session
    "Action",
    "SessionPlan",
    "gather_session",
    "require_input_image",
    "require_output_file",
]
