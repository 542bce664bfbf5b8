# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Constants, enumerations and display strings for deck control."""

from enum import Enum, IntEnum, IntFlag


class DeckCommand(IntEnum):
    """Commands that can be issued from the command line."""

    NO_COMMAND = -1
    GET_CURRENT_STATE = 0
    PLAY = 1
    STOP = 2
    TOGGLE_PLAY_STOP = 3
    EJECT = 4
    GO_TO_TIMECODE = 5
    FAST_FORWARD = 6
    REWIND = 7
    STEP_FORWARD = 8
    STEP_BACK = 9
    JOG = 10
    SHUTTLE = 11
    GET_TIMECODE = 12
    CRASH_RECORD_START = 13
    CRASH_RECORD_STOP = 14


class DeckError(IntEnum):
    """Error codes returned by deck control operations."""

    NO_ERROR = 0
    MODE_ERROR = 1
    MISSED_IN_POINT = 2
    DECK_TIMEOUT = 3
    COMMAND_FAILED = 4
    DEVICE_ALREADY_OPENED = 5
    FAILED_TO_OPEN_DEVICE = 6
    IN_LOCAL_MODE = 7
    END_OF_TAPE = 8
    USER_ABORT = 9
    NO_TAPE_IN_DECK = 10
    NO_VIDEO_FROM_CARD = 11
    NO_COMMUNICATION = 12
    BUFFER_TOO_SMALL = 13
    BAD_CHECKSUM = 14
    UNKNOWN = 15


class DeckControlMode(IntEnum):
    """Operating mode of the deck control connection."""

    NOT_OPENED = 0
    VTR_CONTROL = 1
    EXPORT = 2
    CAPTURE = 3


class VTRControlState(IntEnum):
    """Transport state reported by the deck."""

    NOT_IN_VTR_CONTROL_MODE = 0
    PLAYING = 1
    RECORDING = 2
    STILL = 3
    SHUTTLE_FORWARD = 4
    SHUTTLE_REVERSE = 5
    JOG_FORWARD = 6
    JOG_REVERSE = 7
    STOPPED = 8


class DeckStatusFlags(IntFlag):
    """Status bits delivered with status change events."""

    NONE = 0
    DECK_CONNECTED = 1 << 0
    REMOTE_MODE = 1 << 1
    RECORD_INHIBITED = 1 << 2
    CASSETTE_OUT = 1 << 3


class DeckControlEvent(IntEnum):
    """Asynchronous events raised by export/capture operations."""

    ABORTED = 0
    PREPARE_FOR_EXPORT = 1
    EXPORT_COMPLETE = 2
    PREPARE_FOR_CAPTURE = 3
    CAPTURE_COMPLETE = 4


class CallbackResult(Enum):
    """Value a status callback hands back to the driver."""

    OK = "ok"
    NOT_IMPLEMENTED = "not_implemented"


class ExitCode(IntEnum):
    """Process exit status."""

    SUCCESS = 0
    NO_COMMAND = -1
    NO_DRIVER = -2
    NO_DEVICE = -4
    NO_DECK_CONTROL = -8
    OPEN_FAILED = -16
    CONNECT_TIMEOUT = -32


# Video standard handed to the deck when opening (29.97 fps)
DEFAULT_TIME_SCALE = 30000
DEFAULT_TIME_VALUE = 1001

DEFAULT_DRIVER = "decklink"
DRIVER_ENV_VAR = "DECKCONTROL_DRIVER"

# Upper bound applied to every parsed timecode component
TIMECODE_COMPONENT_MAX = 59

# Used when a command takes an optional argument that was not given
DEFAULT_ARGUMENT = "0"


_ERROR_STRINGS = {
    DeckError.NO_ERROR: "No error",
    DeckError.MODE_ERROR: "Mode error",
    DeckError.MISSED_IN_POINT: "Missed in-point",
    DeckError.DECK_TIMEOUT: "Deck timeout",
    DeckError.COMMAND_FAILED: "Command failed",
    DeckError.DEVICE_ALREADY_OPENED: "Device already opened",
    DeckError.FAILED_TO_OPEN_DEVICE: "Failed to open device",
    DeckError.IN_LOCAL_MODE: "Deck in local mode",
    DeckError.END_OF_TAPE: "End of tape",
    DeckError.USER_ABORT: "User abort",
    DeckError.NO_TAPE_IN_DECK: "No tape in deck",
    DeckError.NO_VIDEO_FROM_CARD: "No video from card",
    DeckError.NO_COMMUNICATION: "No communication with deck",
    DeckError.BUFFER_TOO_SMALL: "Buffer too small",
    DeckError.BAD_CHECKSUM: "Bad checksum",
    DeckError.UNKNOWN: "Unknown error",
}

_STATE_STRINGS = {
    VTRControlState.NOT_IN_VTR_CONTROL_MODE: "Not in VTR control mode",
    VTRControlState.PLAYING: "Playing",
    VTRControlState.RECORDING: "Recording",
    VTRControlState.STILL: "Still",
    VTRControlState.SHUTTLE_FORWARD: "Shuttle forward",
    VTRControlState.SHUTTLE_REVERSE: "Shuttle reverse",
    VTRControlState.JOG_FORWARD: "Jog forward",
    VTRControlState.JOG_REVERSE: "Jog reverse",
    VTRControlState.STOPPED: "Stopped",
}

_MODE_STRINGS = {
    DeckControlMode.NOT_OPENED: "Not opened",
    DeckControlMode.VTR_CONTROL: "VTR control",
    DeckControlMode.EXPORT: "Export",
    DeckControlMode.CAPTURE: "Capture",
}

_EVENT_STRINGS = {
    DeckControlEvent.ABORTED: "Aborted",
    DeckControlEvent.PREPARE_FOR_EXPORT: "Prepare for export",
    DeckControlEvent.EXPORT_COMPLETE: "Export complete",
    DeckControlEvent.PREPARE_FOR_CAPTURE: "Prepare for capture",
    DeckControlEvent.CAPTURE_COMPLETE: "Capture complete",
}


def error_to_str(error: int) -> str:
    """Return display text for a deck error code."""
    try:
        return _ERROR_STRINGS[DeckError(error)]
    except ValueError:
        return f"Unknown error ({error})"


def state_to_str(state: int) -> str:
    """Return display text for a VTR control state."""
    try:
        return _STATE_STRINGS[VTRControlState(state)]
    except ValueError:
        return f"Unknown state ({state})"


def mode_to_str(mode: int) -> str:
    """Return display text for a deck control mode."""
    try:
        return _MODE_STRINGS[DeckControlMode(mode)]
    except ValueError:
        return f"Unknown mode ({mode})"


def event_to_str(event: int) -> str:
    """Return display text for a deck control event."""
    try:
        return _EVENT_STRINGS[DeckControlEvent(event)]
    except ValueError:
        return f"Unknown event ({event})"
