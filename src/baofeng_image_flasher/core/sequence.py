"""
Sequential multi-radio upload.

Programming a batch of radios is a human-paced job: the operator plugs in a
radio, confirms, waits for chirpc to finish, swaps radios and repeats. The
loop below serializes that and stops at the first transfer that does not
succeed. Radios already programmed stay programmed.

States::

    AWAITING_CONFIRMATION --continue--> UPLOADING --success--> AWAITING_CONFIRMATION
    AWAITING_CONFIRMATION --quit------> STOPPED
    UPLOADING -----------failure------> ABORTED
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from baofeng_image_flasher.prompts import Choice
from baofeng_image_flasher.errors import TransferError
from .transfer import upload
from .runner import ProcessRunner

logger = logging.getLogger(__name__)

FIRST_RADIO_MESSAGE = "Connect the first radio and press Continue"
NEXT_RADIO_MESSAGE = "Connect the next radio and press Continue"

NEXT_RADIO_CHOICES = (
    Choice("Continue", True),
    Choice("Quit", False),
)


class SequenceState(Enum):
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    UPLOADING = "uploading"
    STOPPED = "stopped"
    ABORTED = "aborted"


@dataclass(frozen=True)
class SequenceResult:
    """
    Final state of a sequence run.

    Attributes:
        state: STOPPED (operator quit) or ABORTED (transfer failed)
        uploads: Number of radios programmed successfully
        error: The transfer error that aborted the run, if any
    """
    state: SequenceState
    uploads: int
    error: Optional[TransferError] = None

    @property
    def ok(self) -> bool:
        return self.state is SequenceState.STOPPED


def next_radio_message(uploads: int) -> str:
    return FIRST_RADIO_MESSAGE if uploads == 0 else NEXT_RADIO_MESSAGE


class UploadSequence:
    """
    Upload one image to an operator-controlled series of radios.

    Port, model and image are fixed for the whole run. The prompter must
    provide ``select(message, choices)`` returning the chosen value.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        port: str,
        model: str,
        image_path: Union[str, Path],
        prompter,
        on_uploaded: Optional[Callable[[int], None]] = None,
    ):
        self.runner = runner
        self.port = port
        self.model = model
        self.image_path = Path(image_path)
        self.prompter = prompter
        self.on_uploaded = on_uploaded

    def run(self) -> SequenceResult:
        uploads = 0
        state = SequenceState.AWAITING_CONFIRMATION

        while True:
            if state is SequenceState.AWAITING_CONFIRMATION:
                proceed = self.prompter.select(next_radio_message(uploads), NEXT_RADIO_CHOICES)
                state = SequenceState.UPLOADING if proceed else SequenceState.STOPPED

            elif state is SequenceState.UPLOADING:
                logger.info("Uploading to radio #%d on %s", uploads + 1, self.port)
                try:
                    upload(self.runner, self.port, self.model, self.image_path)
                except TransferError as exc:
                    logger.debug("Upload #%d failed: %s", uploads + 1, exc)
                    return SequenceResult(SequenceState.ABORTED, uploads, exc)
                uploads += 1
                if self.on_uploaded:
                    self.on_uploaded(uploads)
                state = SequenceState.AWAITING_CONFIRMATION

            else:
                logger.info("Sequence stopped by operator after %d upload(s)", uploads)
                return SequenceResult(state, uploads)
