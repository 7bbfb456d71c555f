"""
Download and upload operations.

Each builds the chirpc argument list for its direction and hands it to the
process runner. Results and errors pass through untouched.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Union

from baofeng_image_flasher.errors import ProcessOutcome
from .runner import ProcessRunner


class TransferDirection(Enum):
    """Direction of a memory image transfer, with its chirpc flag."""
    DOWNLOAD = "--download-mmap"
    UPLOAD = "--upload-mmap"


@dataclass(frozen=True)
class TransferRequest:
    """One read from or write to a radio."""
    port: str
    model: str
    image_path: Path
    direction: TransferDirection

    def to_args(self) -> List[str]:
        """Build the chirpc argument list."""
        return [
            "-s", self.port,
            "-r", self.model,
            self.direction.value,
            "--mmap", str(self.image_path),
        ]


def run_transfer(runner: ProcessRunner, request: TransferRequest) -> ProcessOutcome:
    return runner.run(request.to_args())


def download(
    runner: ProcessRunner,
    port: str,
    model: str,
    output_path: Union[str, Path],
) -> ProcessOutcome:
    """Read the radio's memory into ``output_path``."""
    request = TransferRequest(port, model, Path(output_path), TransferDirection.DOWNLOAD)
    return run_transfer(runner, request)


def upload(
    runner: ProcessRunner,
    port: str,
    model: str,
    input_path: Union[str, Path],
) -> ProcessOutcome:
    """Write the image at ``input_path`` to the radio."""
    request = TransferRequest(port, model, Path(input_path), TransferDirection.UPLOAD)
    return run_transfer(runner, request)
