"""Shared fakes for chirpc, serial ports and operator prompts."""

import json
import subprocess

import pytest
import serial.tools.list_ports

from baofeng_image_flasher.core import runner as runner_module


class FakePrompter:
    """Prompter replaying scripted answers and recording every message."""

    interactive = True

    def __init__(self, selects=(), texts=(), confirms=()):
        self.selects = list(selects)
        self.texts = list(texts)
        self.confirms = list(confirms)
        self.messages = []

    def select(self, message, choices, default=None):
        self.messages.append(message)
        answer = self.selects.pop(0)
        values = [choice.value for choice in choices]
        assert answer in values, f"{answer!r} is not one of {values!r} for {message!r}"
        return answer

    def text(self, message, default=None):
        self.messages.append(message)
        return self.texts.pop(0) if self.texts else default

    def confirm(self, message, default=False):
        self.messages.append(message)
        return self.confirms.pop(0)


class FakeChirpc:
    """Stand-in for subprocess.run that exits with scripted codes."""

    def __init__(self, exit_codes):
        self.exit_codes = list(exit_codes)
        self.calls = []

    def __call__(self, cmd, check=False, **kwargs):
        self.calls.append(list(cmd))
        code = self.exit_codes.pop(0) if self.exit_codes else 1
        return subprocess.CompletedProcess(cmd, code)


class FakeRunner:
    """ProcessRunner stand-in: records argument lists, raises scripted errors."""

    def __init__(self, errors=()):
        self.errors = list(errors)
        self.calls = []

    def run(self, args):
        self.calls.append(list(args))
        error = self.errors.pop(0) if self.errors else None
        if error is not None:
            raise error
        return runner_module.ProcessOutcome.SUCCESS


@pytest.fixture
def fake_chirpc(monkeypatch):
    """Patch subprocess.run for the runner; call with the exit codes to return."""
    def install(*exit_codes):
        fake = FakeChirpc(exit_codes)
        monkeypatch.setattr(runner_module.subprocess, "run", fake)
        return fake
    return install


@pytest.fixture
def serial_ports(monkeypatch):
    """Patch pyserial port enumeration; call with the ports to report."""
    def install(*ports):
        monkeypatch.setattr(serial.tools.list_ports, "comports", lambda: list(ports))
    return install


@pytest.fixture
def images_dir(tmp_path):
    path = tmp_path / "images"
    path.mkdir()
    (path / "radio.img").write_bytes(b"\x00" * 64)
    return path


@pytest.fixture
def config_file(tmp_path, images_dir):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "imagesPath": "images",
        "chirpcPath": "/opt/chirp/chirpc",
    }))
    return path


@pytest.fixture
def fake_runner():
    """Factory for FakeRunner instances."""
    return FakeRunner


@pytest.fixture
def fake_prompter():
    """Factory for FakePrompter instances."""
    return FakePrompter
