# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Tests for the deck session (deck.py)."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from deckcontrol.const import DeckError, ExitCode, VTRControlState
from deckcontrol.deck import DeckSession, DeckSessionConfig, open_first_deck
from deckcontrol.exceptions import (
    DeckConnectTimeout,
    DeckControlUnavailableError,
    DeckNotConnectedError,
    DeckOpenError,
    DriverUnavailableError,
    NoDeviceError,
)
from deckcontrol.simulator import SimulatedDevice, SimulatedDeviceIterator
from deckcontrol.sync import ConnectionSynchronizer
from deckcontrol.timecode import Timecode


# ============================================================================
# DeckSessionConfig Tests
# ============================================================================

class TestDeckSessionConfig:
    """Tests for DeckSessionConfig dataclass."""

    def test_default_values(self):
        config = DeckSessionConfig()
        assert config.time_scale == 30000
        assert config.time_value == 1001
        assert config.auto_serial_port_detection is True
        assert config.standby_on_disconnect is False
        assert config.connect_timeout is None


# ============================================================================
# DeckSession Tests
# ============================================================================

class TestDeckSession:
    """Tests for DeckSession against the simulated deck."""

    def test_connect(self, deck_control, config):
        with DeckSession(deck_control, config=config) as session:
            session.connect()
            assert session.connected
            assert deck_control.call_names()[:2] == ["set_callback", "open"]

    def test_registers_synchronizer_before_open(self, deck_control, config):
        synchronizer = ConnectionSynchronizer()
        with DeckSession(deck_control, synchronizer, config) as session:
            session.connect()
            assert deck_control.calls[0] == ("set_callback", synchronizer)
            assert synchronizer.connected

    def test_open_uses_config(self, deck_control):
        config = DeckSessionConfig(
            time_scale=25, time_value=1, auto_serial_port_detection=False,
            connect_timeout=5.0,
        )
        with DeckSession(deck_control, config=config) as session:
            session.connect()
        assert ("open", 25, 1, False) in deck_control.calls

    def test_open_returns_driver_result(self, deck_control, state):
        state.open_error = DeckError.FAILED_TO_OPEN_DEVICE
        with DeckSession(deck_control) as session:
            assert session.open() == (False, DeckError.FAILED_TO_OPEN_DEVICE)
            assert not session.connected

    def test_connect_open_failure(self, deck_control, state, config):
        state.open_error = DeckError.FAILED_TO_OPEN_DEVICE
        with DeckSession(deck_control, config=config) as session:
            with pytest.raises(DeckOpenError) as exc_info:
                session.connect()
        assert exc_info.value.exit_code == ExitCode.OPEN_FAILED
        assert exc_info.value.error == DeckError.FAILED_TO_OPEN_DEVICE
        assert str(exc_info.value) == "Could not open serial port (Failed to open device)"

    def test_connect_timeout(self, deck_control, state):
        state.connects = False
        config = DeckSessionConfig(connect_timeout=0.05)
        with DeckSession(deck_control, config=config) as session:
            with pytest.raises(DeckConnectTimeout) as exc_info:
                session.connect()
        assert exc_info.value.exit_code == ExitCode.CONNECT_TIMEOUT
        assert ("close", False) in deck_control.calls
        assert deck_control.call_names()[-2:] == ["set_callback", "release"]

    def test_interrupted_wait_closes_port(self, deck_control, state):
        """A port left open by an escaping exception is closed on release."""
        state.connects = False
        synchronizer = MagicMock(spec=ConnectionSynchronizer)
        synchronizer.wait_connected.side_effect = KeyboardInterrupt
        with pytest.raises(KeyboardInterrupt):
            with DeckSession(deck_control, synchronizer) as session:
                session.connect()
        assert deck_control.call_names() == [
            "set_callback", "open", "close", "set_callback", "release",
        ]

    def test_release_after_close_does_not_close_again(self, session, deck_control):
        session.close()
        session.release()
        assert deck_control.call_names().count("close") == 1

    def test_commands_refused_before_connected(self, deck_control, state):
        state.connects = False
        with DeckSession(deck_control) as session:
            session.open()
            with pytest.raises(DeckNotConnectedError):
                session.play()
        assert "play" not in deck_control.call_names()

    def test_commands_refused_before_open(self, deck_control):
        with DeckSession(deck_control) as session:
            with pytest.raises(DeckNotConnectedError):
                session.get_timecode()

    def test_operations_forwarded(self, session, deck_control, state):
        assert session.play() == DeckError.NO_ERROR
        assert state.vtr_state == VTRControlState.PLAYING
        assert session.jog(-1.0) == DeckError.NO_ERROR
        assert ("jog", -1.0) in deck_control.calls
        assert session.go_to_timecode(Timecode(2, 0, 0, 0).to_bcd()) == DeckError.NO_ERROR
        assert session.get_timecode() == (Timecode(2, 0, 0, 0), DeckError.NO_ERROR)

    def test_deck_errors_returned(self, session, state):
        state.command_errors["stop"] = DeckError.DECK_TIMEOUT
        assert session.stop() == DeckError.DECK_TIMEOUT

    def test_close_uses_configured_standby(self, deck_control):
        config = DeckSessionConfig(standby_on_disconnect=True, connect_timeout=5.0)
        with DeckSession(deck_control, config=config) as session:
            session.connect()
            session.close()
        assert ("close", True) in deck_control.calls

    def test_close_override(self, session, deck_control):
        session.close(False)
        assert ("close", False) in deck_control.calls

    def test_release_unregisters_then_releases(self, deck_control, config):
        with DeckSession(deck_control, config=config) as session:
            session.connect()
            session.close()
        assert deck_control.calls[-2:] == [("set_callback", None), ("release",)]
        assert deck_control.callback is None
        assert deck_control.released

    def test_release_twice(self, deck_control):
        session = DeckSession(deck_control)
        session.release()
        session.release()
        assert deck_control.call_names().count("release") == 1

    def test_released_session_unusable(self, deck_control):
        session = DeckSession(deck_control)
        session.release()
        with pytest.raises(DeckNotConnectedError):
            session.open()

    def test_mock_deck_control(self, mock_deck_control):
        """Works against any DeckControl implementation."""
        with DeckSession(mock_deck_control) as session:
            session.connect()
            assert session.eject() == DeckError.NO_ERROR
        mock_deck_control.open.assert_called_once_with(30000, 1001, True)
        mock_deck_control.eject.assert_called_once_with()
        mock_deck_control.set_callback.assert_called_with(None)
        mock_deck_control.release.assert_called_once_with()


# ============================================================================
# open_first_deck Tests
# ============================================================================

class TestOpenFirstDeck:
    """Tests for open_first_deck()."""

    def test_connects_and_releases(self, iterator, device, deck_control, config):
        with open_first_deck(iterator, config) as session:
            assert session.connected
            assert session.get_current_state()[1] == VTRControlState.STOPPED
        assert deck_control.released
        assert device.released
        assert iterator.released

    def test_no_driver(self):
        with pytest.raises(DriverUnavailableError) as exc_info:
            with open_first_deck(None):
                pass
        assert exc_info.value.exit_code == ExitCode.NO_DRIVER

    def test_no_device(self):
        iterator = SimulatedDeviceIterator([])
        with pytest.raises(NoDeviceError) as exc_info:
            with open_first_deck(iterator):
                pass
        assert exc_info.value.exit_code == ExitCode.NO_DEVICE
        assert iterator.released

    def test_no_deck_control(self):
        device = SimulatedDevice(None)
        iterator = SimulatedDeviceIterator([device])
        with pytest.raises(DeckControlUnavailableError) as exc_info:
            with open_first_deck(iterator):
                pass
        assert exc_info.value.exit_code == ExitCode.NO_DECK_CONTROL
        assert device.released
        assert iterator.released

    def test_uses_first_device(self, deck_control, config):
        first = SimulatedDevice(deck_control)
        second = SimulatedDevice(None)
        with open_first_deck(SimulatedDeviceIterator([first, second]), config):
            pass
        assert first.released
        assert not second.released

    def test_open_failure_releases_everything(self, iterator, device, deck_control, state):
        state.open_error = DeckError.NO_COMMUNICATION
        with pytest.raises(DeckOpenError):
            with open_first_deck(iterator):
                pass
        assert "close" not in deck_control.call_names()
        assert deck_control.released
        assert device.released
        assert iterator.released

    def test_exception_in_block_releases_everything(self, iterator, device, deck_control, config):
        with pytest.raises(RuntimeError):
            with open_first_deck(iterator, config):
                raise RuntimeError("boom")
        assert deck_control.released
        assert device.released
        assert iterator.released
