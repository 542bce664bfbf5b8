# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Deck simulator submodule.

This module provides a simulated capture device with a deck attached,
registered as the "simulator" driver. Useful for testing without real
hardware.

The simulator can:
- Announce the deck connection asynchronously, from its own thread
- Track transport state, status flags and timecode
- Fail open() or individual commands with a chosen DeckError
- Record every call for later inspection

Example usage:
    # Run a command against the simulator
    deckcontrol --driver simulator play

    # Or use programmatically
    from deckcontrol.simulator import SimulatedDeckControl, DeckSimulatorState
    deck = SimulatedDeckControl(DeckSimulatorState(tape_loaded=False))
"""

from .state import DeckSimulatorState, DeckTimingConfig
from .driver import (
    SimulatedDeckControl,
    SimulatedDevice,
    SimulatedDeviceIterator,
    create_simulator,
)

__all__ = [
    # Driver classes
    "SimulatedDeckControl",
    "SimulatedDevice",
    "SimulatedDeviceIterator",
    "create_simulator",
    # State helpers
    "DeckSimulatorState",
    "DeckTimingConfig",
]
