"""Tests for the sequential multi-radio upload loop."""

import io
import logging

import pytest
from rich.console import Console

from baofeng_image_flasher.core.runner import ProcessRunner
from baofeng_image_flasher.core.sequence import (
    FIRST_RADIO_MESSAGE,
    NEXT_RADIO_MESSAGE,
    SequenceState,
    UploadSequence,
    next_radio_message,
)
from baofeng_image_flasher.errors import LaunchError, TransferFailureError


def _sequence(runner, prompter, **kwargs):
    return UploadSequence(runner, "/dev/ttyUSB0", "Baofeng_UV-5R", "images/radio.img", prompter, **kwargs)


class TestPromptMessages:
    """First radio and later radios get different prompts."""

    def test_first_and_next(self):
        assert next_radio_message(0) == FIRST_RADIO_MESSAGE
        assert next_radio_message(1) == NEXT_RADIO_MESSAGE
        assert next_radio_message(7) == NEXT_RADIO_MESSAGE

    def test_messages_during_run(self, fake_runner, fake_prompter):
        prompter = fake_prompter(selects=[True, True, False])
        _sequence(fake_runner(), prompter).run()
        assert prompter.messages == [FIRST_RADIO_MESSAGE, NEXT_RADIO_MESSAGE, NEXT_RADIO_MESSAGE]


class TestStoppedByOperator:
    """Operator quits after n successful uploads."""

    @pytest.mark.parametrize("n", [0, 1, 2, 5])
    def test_n_continues_then_quit(self, fake_runner, fake_prompter, n):
        runner = fake_runner()
        prompter = fake_prompter(selects=[True] * n + [False])

        result = _sequence(runner, prompter).run()

        assert result.state is SequenceState.STOPPED
        assert result.ok
        assert result.uploads == n
        assert result.error is None
        assert len(runner.calls) == n
        assert all("--upload-mmap" in call for call in runner.calls)

    def test_same_parameters_every_iteration(self, fake_runner, fake_prompter):
        runner = fake_runner()
        _sequence(runner, fake_prompter(selects=[True, True, True, False])).run()
        assert len({tuple(call) for call in runner.calls}) == 1

    def test_on_uploaded_reports_running_count(self, fake_runner, fake_prompter):
        seen = []
        _sequence(
            fake_runner(),
            fake_prompter(selects=[True, True, False]),
            on_uploaded=seen.append,
        ).run()
        assert seen == [1, 2]


class TestAbortedByFailure:
    """The first failing upload ends the run."""

    @pytest.mark.parametrize("k", [1, 2, 4])
    def test_kth_upload_fails(self, fake_runner, fake_prompter, k):
        failure = TransferFailureError(2)
        runner = fake_runner(errors=[None] * (k - 1) + [failure])
        # More continues than needed: the loop must not ask again after the failure
        prompter = fake_prompter(selects=[True] * (k + 3))

        result = _sequence(runner, prompter).run()

        assert result.state is SequenceState.ABORTED
        assert not result.ok
        assert result.uploads == k - 1
        assert result.error is failure
        assert len(runner.calls) == k
        assert len(prompter.messages) == k
        assert len(prompter.selects) == 3

    def test_launch_error_aborts(self, fake_runner, fake_prompter):
        error = LaunchError("/opt/chirp/chirpc", FileNotFoundError("chirpc"))
        runner = fake_runner(errors=[error])
        prompter = fake_prompter(selects=[True, True])

        result = _sequence(runner, prompter).run()

        assert result.state is SequenceState.ABORTED
        assert result.error is error
        assert result.uploads == 0
        assert len(runner.calls) == 1

    def test_exit_code_zero_aborts(self, fake_runner, fake_prompter):
        """Exit code 0 is a failure for chirpc."""
        runner = fake_runner(errors=[TransferFailureError(0)])
        result = _sequence(runner, fake_prompter(selects=[True])).run()
        assert result.state is SequenceState.ABORTED
        assert result.error.exit_code == 0


class TestWithRealRunner:
    """Loop driven through ProcessRunner with subprocess.run patched."""

    def test_exit_codes_drive_the_loop(self, fake_chirpc, fake_prompter):
        chirpc = fake_chirpc(1, 1, 2)
        runner = ProcessRunner("/opt/chirp/chirpc", console=Console(file=io.StringIO()))
        prompter = fake_prompter(selects=[True, True, True, True])

        result = _sequence(runner, prompter).run()

        assert result.state is SequenceState.ABORTED
        assert result.uploads == 2
        assert result.error.exit_code == 2
        assert len(chirpc.calls) == 3

    def test_failure_not_logged_as_error(self, fake_chirpc, fake_prompter, caplog):
        """The caller reports the failure once; the loop only leaves a debug record."""
        fake_chirpc(2)
        runner = ProcessRunner("/opt/chirp/chirpc", console=Console(file=io.StringIO()))

        with caplog.at_level(logging.DEBUG, logger="baofeng_image_flasher"):
            result = _sequence(runner, fake_prompter(selects=[True])).run()

        assert result.state is SequenceState.ABORTED
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]
        assert any("Upload #1 failed" in r.getMessage() for r in caplog.records)
