# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Broadcast deck control from the command line.

This package sends single transport commands (play, stop, jog, shuttle,
go to timecode, crash record, ...) to a video deck attached to a capture
device over RS-422 deck control.

Example usage:
    # From the shell
    deckcontrol gototimecode 01:00:10:00

    # Or programmatically
    from deckcontrol import CommandDispatcher, load_driver, open_first_deck, parse_command

    with open_first_deck(load_driver("simulator")) as session:
        result = CommandDispatcher(session).dispatch(parse_command(["play"]))
        session.close()
"""

from .const import (
    DeckCommand,
    DeckControlMode,
    DeckError,
    DeckStatusFlags,
    ExitCode,
    VTRControlState,
    error_to_str,
    state_to_str,
)
from .timecode import Timecode, make_tc_bcd, parse_timecode
from .driver import (
    DeckControl,
    DeckControlStatusCallback,
    Device,
    DeviceIterator,
    load_driver,
    register_driver,
)
from .sync import ConnectionSynchronizer
from .deck import DeckSession, DeckSessionConfig, open_first_deck
from .commands import (
    COMMAND_TABLE,
    CommandDispatcher,
    CommandMapping,
    CommandResult,
    ParsedCommand,
    parse_command,
)
from .exceptions import (
    DeckConnectTimeout,
    DeckControlError,
    DeckControlUnavailableError,
    DeckNotConnectedError,
    DeckOpenError,
    DriverUnavailableError,
    NoDeviceError,
)
from .cli import main, run_command

__all__ = [
    # Constants
    "DeckCommand",
    "DeckControlMode",
    "DeckError",
    "DeckStatusFlags",
    "ExitCode",
    "VTRControlState",
    "error_to_str",
    "state_to_str",
    # Timecode
    "Timecode",
    "make_tc_bcd",
    "parse_timecode",
    # Driver interfaces
    "DeckControl",
    "DeckControlStatusCallback",
    "Device",
    "DeviceIterator",
    "load_driver",
    "register_driver",
    # Session
    "ConnectionSynchronizer",
    "DeckSession",
    "DeckSessionConfig",
    "open_first_deck",
    # Commands
    "COMMAND_TABLE",
    "CommandDispatcher",
    "CommandMapping",
    "CommandResult",
    "ParsedCommand",
    "parse_command",
    # Exceptions
    "DeckConnectTimeout",
    "DeckControlError",
    "DeckControlUnavailableError",
    "DeckNotConnectedError",
    "DeckOpenError",
    "DriverUnavailableError",
    "NoDeviceError",
    # CLI
    "main",
    "run_command",
]
