# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Driver interfaces for capture devices and their deck control.

A driver exposes three layers, mirroring the vendor hardware abstraction:

- DeviceIterator: enumerates the capture devices that are installed
- Device: a single capture device, which may offer deck control
- DeckControl: the serial deck control capability of a device

Deck control reports status changes asynchronously, from a thread owned by
the driver, to a registered DeckControlStatusCallback.

Drivers are looked up by name. Built-in drivers register themselves with
the register_driver() decorator; any other driver can be loaded with a
"module:factory" path. Example:

    @register_driver("mydriver")
    def create_iterator() -> DeviceIterator | None:
        ...
"""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING, Callable, Optional

from .const import (
    CallbackResult,
    DeckControlEvent,
    DeckControlMode,
    DeckError,
    DeckStatusFlags,
    VTRControlState,
)

if TYPE_CHECKING:
    from .timecode import Timecode

logger = logging.getLogger(__name__)


class DeckControlStatusCallback:
    """Sink for asynchronous deck control notifications.

    Every notification is unimplemented by default; subclasses override the
    ones they consume.
    """

    def timecode_update(self, current_timecode: int) -> CallbackResult:
        return CallbackResult.NOT_IMPLEMENTED

    def vtr_control_state_changed(
        self, new_state: VTRControlState, error: DeckError
    ) -> CallbackResult:
        return CallbackResult.NOT_IMPLEMENTED

    def deck_control_event_received(
        self, event: DeckControlEvent, error: DeckError
    ) -> CallbackResult:
        return CallbackResult.NOT_IMPLEMENTED

    def deck_control_status_changed(
        self, flags: DeckStatusFlags, mask: int
    ) -> CallbackResult:
        return CallbackResult.NOT_IMPLEMENTED


class DeckControl:
    """Deck control capability of a capture device."""

    def set_callback(self, callback: Optional[DeckControlStatusCallback]) -> None:
        """Register (or, with None, unregister) the status callback."""
        raise NotImplementedError

    def open(
        self, time_scale: int, time_value: int, auto_serial_port_detection: bool
    ) -> tuple[bool, DeckError]:
        """Open the serial connection to the deck.

        Success means the port is open, not that the deck is ready. The deck
        announces itself through deck_control_status_changed().
        """
        raise NotImplementedError

    def close(self, standby_on_disconnect: bool) -> None:
        raise NotImplementedError

    def get_current_state(
        self,
    ) -> tuple[DeckControlMode, VTRControlState, DeckStatusFlags]:
        raise NotImplementedError

    def play(self) -> DeckError:
        raise NotImplementedError

    def stop(self) -> DeckError:
        raise NotImplementedError

    def toggle_play_stop(self) -> DeckError:
        raise NotImplementedError

    def eject(self) -> DeckError:
        raise NotImplementedError

    def go_to_timecode(self, timecode: int) -> DeckError:
        """Seek to a BCD packed timecode."""
        raise NotImplementedError

    def fast_forward(self, view_tape: int) -> DeckError:
        raise NotImplementedError

    def rewind(self, view_tape: int) -> DeckError:
        raise NotImplementedError

    def step_forward(self) -> DeckError:
        raise NotImplementedError

    def step_back(self) -> DeckError:
        raise NotImplementedError

    def jog(self, rate: float) -> DeckError:
        raise NotImplementedError

    def shuttle(self, rate: float) -> DeckError:
        raise NotImplementedError

    def get_timecode(self) -> tuple[Optional["Timecode"], DeckError]:
        raise NotImplementedError

    def crash_record_start(self) -> DeckError:
        raise NotImplementedError

    def crash_record_stop(self) -> DeckError:
        raise NotImplementedError

    def release(self) -> None:
        """Release the handle. Nothing may be called afterwards."""


class Device:
    """A capture device."""

    def query_deck_control(self) -> Optional[DeckControl]:
        """Return the deck control capability, or None if unsupported."""
        raise NotImplementedError

    def release(self) -> None:
        """Release the handle. Nothing may be called afterwards."""


class DeviceIterator:
    """Enumerates installed capture devices."""

    def next(self) -> Optional[Device]:
        """Return the next device, or None when there are no more."""
        raise NotImplementedError

    def release(self) -> None:
        """Release the handle. Nothing may be called afterwards."""


DriverFactory = Callable[[], Optional[DeviceIterator]]

# Registry of drivers (populated by decorator)
_driver_registry: dict[str, DriverFactory] = {}


def get_driver_registry() -> dict[str, DriverFactory]:
    """Get the global driver registry."""
    return _driver_registry


def register_driver(name: str):
    """Decorator to register a factory returning a DeviceIterator.

    The factory returns None when the driver is installed but unusable.
    """

    def decorator(func: DriverFactory) -> DriverFactory:
        _driver_registry[name] = func
        return func

    return decorator


def load_driver(name: str) -> Optional[DeviceIterator]:
    """Create a device iterator for the named driver.

    Args:
        name: Registered driver name, or "module:factory" import path

    Returns:
        The device iterator, or None if the driver is not available
    """
    # Import here to avoid circular imports; registers the built-in drivers
    from . import simulator  # noqa: F401

    factory = _driver_registry.get(name)
    if factory is None and ":" in name:
        module_name, _, attr = name.partition(":")
        try:
            module = importlib.import_module(module_name)
            factory = getattr(module, attr)
        except (ImportError, AttributeError) as e:
            logger.debug(f"Could not load driver '{name}': {e}")
            return None

    if factory is None:
        logger.debug(f"No driver named '{name}'")
        return None

    try:
        iterator = factory()
    except OSError as e:
        logger.debug(f"Driver '{name}' failed to initialize: {e}")
        return None

    if iterator is not None:
        logger.debug(f"Loaded driver '{name}'")
    return iterator
