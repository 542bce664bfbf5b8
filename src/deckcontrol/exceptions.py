# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Exceptions raised while connecting to a deck."""

from typing import Optional

from .const import DeckError, ExitCode, error_to_str


class DeckControlError(Exception):
    """Base class for failures that end the program before a command is sent.

    Attributes:
        exit_code: Process exit status for this failure
    """

    exit_code: ExitCode = ExitCode.NO_COMMAND
    default_message = "Deck control failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class DriverUnavailableError(DeckControlError):
    exit_code = ExitCode.NO_DRIVER
    default_message = "This application requires the DeckLink drivers installed"


class NoDeviceError(DeckControlError):
    exit_code = ExitCode.NO_DEVICE
    default_message = "Could not detect a DeckLink card"


class DeckControlUnavailableError(DeckControlError):
    exit_code = ExitCode.NO_DECK_CONTROL
    default_message = "Could not obtain the DeckControl interface"


class DeckOpenError(DeckControlError):
    """The serial connection to the deck could not be opened."""

    exit_code = ExitCode.OPEN_FAILED

    def __init__(self, error: DeckError):
        self.error = error
        super().__init__(f"Could not open serial port ({error_to_str(error)})")


class DeckConnectTimeout(DeckControlError):
    """The deck did not report itself connected in time."""

    exit_code = ExitCode.CONNECT_TIMEOUT

    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Timed out waiting for deck to connect ({timeout}s)")


class DeckNotConnectedError(RuntimeError):
    """A deck operation was issued before the deck reported connected."""
