# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Pytest configuration and fixtures for deck control tests."""
from __future__ import annotations

import threading
from unittest.mock import MagicMock

import pytest

from deckcontrol.const import (
    CallbackResult,
    DeckControlMode,
    DeckError,
    DeckStatusFlags,
    VTRControlState,
)
from deckcontrol.deck import DeckSession, DeckSessionConfig
from deckcontrol.driver import DeckControl, DeckControlStatusCallback
from deckcontrol.simulator import (
    DeckSimulatorState,
    DeckTimingConfig,
    SimulatedDeckControl,
    SimulatedDevice,
    SimulatedDeviceIterator,
)
from deckcontrol.timecode import Timecode


# ============================================================================
# Recording Callback
# ============================================================================

class RecordingCallback(DeckControlStatusCallback):
    """Status callback that records everything it is sent."""

    def __init__(self):
        self.status_events: list[tuple[DeckStatusFlags, int]] = []
        self.vtr_states: list[VTRControlState] = []
        self.threads: set[int] = set()
        self.connected = threading.Event()

    def deck_control_status_changed(self, flags, mask) -> CallbackResult:
        self.status_events.append((flags, mask))
        self.threads.add(threading.get_ident())
        if flags & mask & DeckStatusFlags.DECK_CONNECTED:
            self.connected.set()
        return CallbackResult.OK

    def vtr_control_state_changed(self, new_state, error) -> CallbackResult:
        self.vtr_states.append(new_state)
        return CallbackResult.OK


# ============================================================================
# Mock Deck Control
# ============================================================================

def make_mock_deck_control() -> MagicMock:
    """Create a mock deck control that connects as soon as it is opened.

    Transport methods return NO_ERROR unless reconfigured by the test.
    """
    deck_control = MagicMock(spec=DeckControl)
    registered: list = [None]

    def set_callback(callback):
        registered[0] = callback

    def open_deck(time_scale, time_value, auto_serial_port_detection):
        registered[0].deck_control_status_changed(
            DeckStatusFlags.DECK_CONNECTED, DeckStatusFlags.DECK_CONNECTED
        )
        return True, DeckError.NO_ERROR

    deck_control.set_callback.side_effect = set_callback
    deck_control.open.side_effect = open_deck
    deck_control.get_current_state.return_value = (
        DeckControlMode.VTR_CONTROL,
        VTRControlState.STOPPED,
        DeckStatusFlags.DECK_CONNECTED,
    )
    deck_control.get_timecode.return_value = (Timecode(1, 2, 3, 4), DeckError.NO_ERROR)
    for name in (
        "play", "stop", "toggle_play_stop", "eject", "go_to_timecode",
        "fast_forward", "rewind", "step_forward", "step_back", "jog",
        "shuttle", "crash_record_start", "crash_record_stop",
    ):
        getattr(deck_control, name).return_value = DeckError.NO_ERROR
    return deck_control


@pytest.fixture
def mock_deck_control():
    """A MagicMock deck control that connects synchronously on open."""
    return make_mock_deck_control()


# ============================================================================
# Simulator Fixtures
# ============================================================================

@pytest.fixture
def timing_config():
    """Create a fast timing config for tests."""
    return DeckTimingConfig(connect_delay=0.01)


@pytest.fixture
def state(timing_config):
    """Create a simulator state with fast timing."""
    return DeckSimulatorState(timing=timing_config)


@pytest.fixture
def deck_control(state):
    """Create a simulated deck."""
    return SimulatedDeckControl(state)


@pytest.fixture
def device(deck_control):
    """Create a simulated capture device with the deck attached."""
    return SimulatedDevice(deck_control)


@pytest.fixture
def iterator(device):
    """Create a device iterator yielding the simulated device."""
    return SimulatedDeviceIterator([device])


@pytest.fixture
def config():
    """Session config that gives up rather than hanging a test run."""
    return DeckSessionConfig(connect_timeout=5.0)


@pytest.fixture
def session(deck_control, config):
    """Create a connected session on the simulated deck."""
    with DeckSession(deck_control, config=config) as sess:
        sess.connect()
        yield sess


@pytest.fixture
def recording_callback():
    """Create a recording status callback."""
    return RecordingCallback()
