# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Simulated capture devices and deck.

The simulated deck behaves like a deck on the end of a serial cable: open()
returns at once and the "deck connected" status arrives later from a timer
thread. Every call is recorded in SimulatedDeckControl.calls.
"""

import logging
import threading
from typing import Any, Optional

from ..const import (
    DeckControlMode,
    DeckError,
    DeckStatusFlags,
    VTRControlState,
    state_to_str,
)
from ..driver import (
    DeckControl,
    DeckControlStatusCallback,
    Device,
    DeviceIterator,
    register_driver,
)
from ..timecode import Timecode
from .state import DeckSimulatorState

logger = logging.getLogger(__name__)


class SimulatedDeckControl(DeckControl):
    """A deck that responds to transport commands and tracks its state."""

    def __init__(self, state: Optional[DeckSimulatorState] = None):
        self.state = state or DeckSimulatorState()
        self.calls: list[tuple[Any, ...]] = []
        self.released = False
        self._callback: Optional[DeckControlStatusCallback] = None
        self._lock = threading.RLock()
        self._opened = False
        self._connected = False
        self._timer: Optional[threading.Timer] = None

    @property
    def callback(self) -> Optional[DeckControlStatusCallback]:
        with self._lock:
            return self._callback

    @property
    def connected(self) -> bool:
        with self._lock:
            return self._connected

    def call_names(self) -> list[str]:
        """Names of the calls made so far, in order."""
        return [call[0] for call in self.calls]

    def set_callback(self, callback: Optional[DeckControlStatusCallback]) -> None:
        # Taking the lock waits out any status delivery in progress
        with self._lock:
            self.calls.append(("set_callback", callback))
            self._callback = callback

    def open(
        self, time_scale: int, time_value: int, auto_serial_port_detection: bool
    ) -> tuple[bool, DeckError]:
        with self._lock:
            self.calls.append(("open", time_scale, time_value, auto_serial_port_detection))
            if self.state.open_error is not None:
                return False, self.state.open_error
            if self._opened:
                return False, DeckError.DEVICE_ALREADY_OPENED

            self._opened = True
            self.state.mode = DeckControlMode.VTR_CONTROL
            if self.state.connects:
                self._timer = threading.Timer(
                    self.state.timing.connect_delay, self._announce_connected
                )
                self._timer.daemon = True
                self._timer.start()
        return True, DeckError.NO_ERROR

    def _announce_connected(self) -> None:
        """Deliver status events from the timer thread."""
        with self._lock:
            if not self._opened:
                return
            self._connected = True
            if self.state.vtr_state == VTRControlState.NOT_IN_VTR_CONTROL_MODE:
                self.state.vtr_state = VTRControlState.STOPPED
            flags = self.state.status_flags(connected=True)
            logger.debug(f"Simulated deck connected (flags={int(flags):#x})")
            if self._callback is None:
                return
            # Remote mode is reported first, on its own, before the connection
            self._callback.deck_control_status_changed(
                flags & ~DeckStatusFlags.DECK_CONNECTED, DeckStatusFlags.REMOTE_MODE
            )
            self._callback.deck_control_status_changed(
                flags, DeckStatusFlags.DECK_CONNECTED | DeckStatusFlags.REMOTE_MODE
            )

    def close(self, standby_on_disconnect: bool) -> None:
        with self._lock:
            self.calls.append(("close", standby_on_disconnect))
            self._cancel_timer()
            was_connected = self._connected
            self._opened = False
            self._connected = False
            self.state.standby = standby_on_disconnect
            self.state.mode = DeckControlMode.NOT_OPENED
            self.state.vtr_state = VTRControlState.NOT_IN_VTR_CONTROL_MODE
            if was_connected and self._callback is not None:
                self._callback.deck_control_status_changed(
                    self.state.status_flags(connected=False),
                    DeckStatusFlags.DECK_CONNECTED,
                )

    def release(self) -> None:
        with self._lock:
            self.calls.append(("release",))
            self._cancel_timer()
            self.released = True

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _issue(self, name: str, *args: Any, transport: bool = True) -> DeckError:
        """Record a command and check whether the deck can accept it."""
        self.calls.append((name, *args))
        if not self._connected:
            return DeckError.NO_COMMUNICATION
        if name in self.state.command_errors:
            return self.state.command_errors[name]
        if transport and not self.state.remote_mode:
            return DeckError.IN_LOCAL_MODE
        return DeckError.NO_ERROR

    def _set_vtr_state(self, new_state: VTRControlState) -> None:
        if new_state == self.state.vtr_state:
            return
        logger.debug(f"Simulated deck state: {state_to_str(new_state)}")
        self.state.vtr_state = new_state
        if self._callback is not None:
            self._callback.vtr_control_state_changed(new_state, DeckError.NO_ERROR)

    def _transport(self, name: str, new_state: VTRControlState, *args: Any) -> DeckError:
        """Run a tape motion command that needs a cassette."""
        with self._lock:
            error = self._issue(name, *args)
            if error != DeckError.NO_ERROR:
                return error
            if not self.state.tape_loaded:
                return DeckError.NO_TAPE_IN_DECK
            self._set_vtr_state(new_state)
            return DeckError.NO_ERROR

    def get_current_state(
        self,
    ) -> tuple[DeckControlMode, VTRControlState, DeckStatusFlags]:
        with self._lock:
            self.calls.append(("get_current_state",))
            return (
                self.state.mode,
                self.state.vtr_state,
                self.state.status_flags(self._connected),
            )

    def play(self) -> DeckError:
        return self._transport("play", VTRControlState.PLAYING)

    def stop(self) -> DeckError:
        return self._transport("stop", VTRControlState.STOPPED)

    def toggle_play_stop(self) -> DeckError:
        with self._lock:
            if self.state.vtr_state == VTRControlState.PLAYING:
                new_state = VTRControlState.STOPPED
            else:
                new_state = VTRControlState.PLAYING
            return self._transport("toggle_play_stop", new_state)

    def eject(self) -> DeckError:
        with self._lock:
            error = self._issue("eject")
            if error != DeckError.NO_ERROR:
                return error
            if not self.state.tape_loaded:
                return DeckError.NO_TAPE_IN_DECK
            self.state.tape_loaded = False
            self._set_vtr_state(VTRControlState.STOPPED)
            return DeckError.NO_ERROR

    def go_to_timecode(self, timecode: int) -> DeckError:
        with self._lock:
            error = self._transport("go_to_timecode", VTRControlState.STILL, timecode)
            if error == DeckError.NO_ERROR:
                self.state.timecode = Timecode.from_bcd(timecode)
            return error

    def fast_forward(self, view_tape: int) -> DeckError:
        return self._transport("fast_forward", VTRControlState.SHUTTLE_FORWARD, view_tape)

    def rewind(self, view_tape: int) -> DeckError:
        return self._transport("rewind", VTRControlState.SHUTTLE_REVERSE, view_tape)

    def _step(self, name: str, frames: int) -> DeckError:
        with self._lock:
            error = self._transport(name, VTRControlState.STILL)
            if error == DeckError.NO_ERROR:
                frame_rate = self.state.timing.frame_rate
                self.state.timecode = Timecode.from_frames(
                    self.state.timecode.to_frames(frame_rate) + frames, frame_rate
                )
            return error

    def step_forward(self) -> DeckError:
        return self._step("step_forward", 1)

    def step_back(self) -> DeckError:
        return self._step("step_back", -1)

    def jog(self, rate: float) -> DeckError:
        if rate == 0:
            new_state = VTRControlState.STILL
        elif rate > 0:
            new_state = VTRControlState.JOG_FORWARD
        else:
            new_state = VTRControlState.JOG_REVERSE
        return self._transport("jog", new_state, rate)

    def shuttle(self, rate: float) -> DeckError:
        if rate == 0:
            new_state = VTRControlState.STILL
        elif rate > 0:
            new_state = VTRControlState.SHUTTLE_FORWARD
        else:
            new_state = VTRControlState.SHUTTLE_REVERSE
        return self._transport("shuttle", new_state, rate)

    def get_timecode(self) -> tuple[Optional[Timecode], DeckError]:
        with self._lock:
            error = self._issue("get_timecode", transport=False)
            if error != DeckError.NO_ERROR:
                return None, error
            return self.state.timecode, DeckError.NO_ERROR

    def crash_record_start(self) -> DeckError:
        with self._lock:
            if self.state.record_inhibited:
                self._issue("crash_record_start")
                return DeckError.COMMAND_FAILED
            return self._transport("crash_record_start", VTRControlState.RECORDING)

    def crash_record_stop(self) -> DeckError:
        return self._transport("crash_record_stop", VTRControlState.STOPPED)


class SimulatedDevice(Device):
    """A capture device, optionally with deck control."""

    def __init__(
        self,
        deck_control: Optional[SimulatedDeckControl] = None,
        name: str = "Simulated DeckLink",
    ):
        self.name = name
        self.deck_control = deck_control
        self.released = False

    def query_deck_control(self) -> Optional[DeckControl]:
        return self.deck_control

    def release(self) -> None:
        self.released = True


class SimulatedDeviceIterator(DeviceIterator):
    """Yields a fixed list of simulated devices."""

    def __init__(self, devices: Optional[list[SimulatedDevice]] = None):
        self.devices = list(devices or [])
        self._index = 0
        self.released = False

    def next(self) -> Optional[Device]:
        if self._index >= len(self.devices):
            return None
        device = self.devices[self._index]
        self._index += 1
        return device

    def release(self) -> None:
        self.released = True


@register_driver("simulator")
def create_simulator() -> SimulatedDeviceIterator:
    """Driver factory: one device with a simulated deck attached."""
    return SimulatedDeviceIterator([SimulatedDevice(SimulatedDeckControl())])
