# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""State dataclasses for the deck simulator."""

from dataclasses import dataclass, field
from typing import Optional

from ..const import DeckControlMode, DeckError, DeckStatusFlags, VTRControlState
from ..timecode import Timecode


@dataclass
class DeckTimingConfig:
    """Configurable timing for the simulated deck."""

    # Delay between opening the port and the deck reporting connected
    connect_delay: float = 0.5

    # Frames per second used when stepping through timecode
    frame_rate: int = 30


@dataclass
class DeckSimulatorState:
    """Complete state of a simulated deck.

    Tests adjust these fields to shape how the deck behaves, e.g. setting
    command_errors["play"] makes the next play() calls fail.
    """

    timing: DeckTimingConfig = field(default_factory=DeckTimingConfig)

    mode: DeckControlMode = DeckControlMode.NOT_OPENED
    vtr_state: VTRControlState = VTRControlState.NOT_IN_VTR_CONTROL_MODE
    timecode: Timecode = field(default_factory=lambda: Timecode(1, 0, 0, 0))

    # Deck switches
    tape_loaded: bool = True
    remote_mode: bool = True
    record_inhibited: bool = False

    # If False the deck never reports itself connected
    connects: bool = True

    # If set, open() fails with this error
    open_error: Optional[DeckError] = None

    # Errors returned by specific operations, keyed by method name
    command_errors: dict[str, DeckError] = field(default_factory=dict)

    # Standby setting passed to the last close()
    standby: Optional[bool] = None

    def status_flags(self, connected: bool) -> DeckStatusFlags:
        """Build the status flags the deck would report."""
        flags = DeckStatusFlags.NONE
        if connected:
            flags |= DeckStatusFlags.DECK_CONNECTED
        if self.remote_mode:
            flags |= DeckStatusFlags.REMOTE_MODE
        if self.record_inhibited:
            flags |= DeckStatusFlags.RECORD_INHIBITED
        if not self.tape_loaded:
            flags |= DeckStatusFlags.CASSETTE_OUT
        return flags
