# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Tests for the driver interfaces and registry (driver.py)."""
from __future__ import annotations

import pytest

from deckcontrol.const import (
    CallbackResult,
    DeckControlEvent,
    DeckError,
    DeckStatusFlags,
    VTRControlState,
)
from deckcontrol.driver import (
    DeckControl,
    DeckControlStatusCallback,
    Device,
    DeviceIterator,
    get_driver_registry,
    load_driver,
)
from deckcontrol.simulator import SimulatedDeviceIterator


# ============================================================================
# Interface Tests
# ============================================================================

class TestStatusCallback:
    """The base callback implements nothing."""

    def test_all_notifications_not_implemented(self):
        callback = DeckControlStatusCallback()
        assert callback.timecode_update(0) == CallbackResult.NOT_IMPLEMENTED
        assert (
            callback.vtr_control_state_changed(VTRControlState.PLAYING, DeckError.NO_ERROR)
            == CallbackResult.NOT_IMPLEMENTED
        )
        assert (
            callback.deck_control_event_received(DeckControlEvent.ABORTED, DeckError.NO_ERROR)
            == CallbackResult.NOT_IMPLEMENTED
        )
        assert (
            callback.deck_control_status_changed(
                DeckStatusFlags.DECK_CONNECTED, DeckStatusFlags.DECK_CONNECTED
            )
            == CallbackResult.NOT_IMPLEMENTED
        )


class TestBaseInterfaces:
    """Driver operations must be supplied by a real driver."""

    @pytest.mark.parametrize(
        "method,args",
        [
            ("set_callback", (None,)),
            ("open", (30000, 1001, True)),
            ("close", (False,)),
            ("get_current_state", ()),
            ("play", ()),
            ("go_to_timecode", (0,)),
            ("jog", (1.0,)),
            ("get_timecode", ()),
            ("crash_record_stop", ()),
        ],
    )
    def test_deck_control_not_implemented(self, method, args):
        with pytest.raises(NotImplementedError):
            getattr(DeckControl(), method)(*args)

    def test_release_is_noop(self):
        DeckControl().release()
        Device().release()
        DeviceIterator().release()

    def test_device_not_implemented(self):
        with pytest.raises(NotImplementedError):
            Device().query_deck_control()
        with pytest.raises(NotImplementedError):
            DeviceIterator().next()


# ============================================================================
# load_driver Tests
# ============================================================================

class TestLoadDriver:
    """Tests for load_driver()."""

    def test_simulator_registered(self):
        iterator = load_driver("simulator")
        assert isinstance(iterator, SimulatedDeviceIterator)
        assert "simulator" in get_driver_registry()

    def test_unknown_name(self):
        assert load_driver("decklink-missing") is None

    def test_import_path(self):
        iterator = load_driver("deckcontrol.simulator:create_simulator")
        assert isinstance(iterator, SimulatedDeviceIterator)

    def test_missing_module(self):
        assert load_driver("deckcontrol_no_such_module:create") is None

    def test_missing_factory(self):
        assert load_driver("deckcontrol.simulator:no_such_factory") is None

    def test_factory_os_error(self, monkeypatch):
        def broken():
            raise OSError("libDeckLinkAPI.so: cannot open shared object file")

        monkeypatch.setitem(get_driver_registry(), "broken", broken)
        assert load_driver("broken") is None

    def test_factory_returning_none(self, monkeypatch):
        monkeypatch.setitem(get_driver_registry(), "absent", lambda: None)
        assert load_driver("absent") is None

    def test_factory_errors_propagate(self, monkeypatch):
        """Only load failures mean "no driver"; bugs are not hidden."""
        def buggy():
            raise ValueError("bad")

        monkeypatch.setitem(get_driver_registry(), "buggy", buggy)
        with pytest.raises(ValueError):
            load_driver("buggy")
