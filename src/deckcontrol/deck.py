# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""High-level deck session.

DeckSession owns the connection to one deck: it registers the connection
synchronizer, opens the serial port, waits for the deck to announce itself
and forwards transport commands to the driver.

Example usage:
    from deckcontrol import load_driver, open_first_deck

    with open_first_deck(load_driver("simulator")) as session:
        error = session.play()
        session.close()
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from .const import (
    DEFAULT_TIME_SCALE,
    DEFAULT_TIME_VALUE,
    DeckControlMode,
    DeckError,
    DeckStatusFlags,
    VTRControlState,
    error_to_str,
)
from .driver import DeckControl, DeviceIterator
from .exceptions import (
    DeckConnectTimeout,
    DeckControlUnavailableError,
    DeckNotConnectedError,
    DeckOpenError,
    DriverUnavailableError,
    NoDeviceError,
)
from .sync import ConnectionSynchronizer
from .timecode import Timecode

logger = logging.getLogger(__name__)


@dataclass
class DeckSessionConfig:
    """Settings used when opening and closing a deck."""

    # Video standard as a time scale / time value pair (30000/1001 = 29.97)
    time_scale: int = DEFAULT_TIME_SCALE
    time_value: int = DEFAULT_TIME_VALUE

    # Let the driver find the serial port the deck is attached to
    auto_serial_port_detection: bool = True

    # Put the deck in standby when the session closes
    standby_on_disconnect: bool = False

    # Seconds to wait for the deck to connect (None = wait forever)
    connect_timeout: Optional[float] = None


class DeckSession:
    """Connection to a single deck.

    Transport methods return a DeckError and never raise for deck-side
    failures. They may only be called once the deck is connected.
    """

    def __init__(
        self,
        deck_control: DeckControl,
        synchronizer: Optional[ConnectionSynchronizer] = None,
        config: Optional[DeckSessionConfig] = None,
    ):
        """Initialize the session.

        Args:
            deck_control: Deck control handle; the session takes ownership
            synchronizer: Status callback to register (a new one by default)
            config: Session settings (defaults if not provided)
        """
        self._deck_control: Optional[DeckControl] = deck_control
        self.synchronizer = synchronizer or ConnectionSynchronizer()
        self.config = config or DeckSessionConfig()
        self._opened = False

    @property
    def deck_control(self) -> DeckControl:
        if self._deck_control is None:
            raise DeckNotConnectedError("Deck session has been released")
        return self._deck_control

    @property
    def connected(self) -> bool:
        return self._opened and self.synchronizer.connected

    def open(self) -> tuple[bool, DeckError]:
        """Register the status callback and open the deck's serial port.

        Returns:
            (success, error) as reported by the driver
        """
        deck_control = self.deck_control
        deck_control.set_callback(self.synchronizer)
        logger.debug(
            f"Opening deck control ({self.config.time_scale}/{self.config.time_value}, "
            f"auto detect={self.config.auto_serial_port_detection})"
        )
        success, error = deck_control.open(
            self.config.time_scale,
            self.config.time_value,
            self.config.auto_serial_port_detection,
        )
        self._opened = success
        if not success:
            logger.debug(f"Open failed: {error_to_str(error)}")
        return success, error

    def wait_until_connected(self) -> bool:
        """Block until the deck reports connected or the timeout expires."""
        return self.synchronizer.wait_connected(self.config.connect_timeout)

    def connect(self) -> None:
        """Open the port and wait for the deck.

        Raises:
            DeckOpenError: The driver could not open the port
            DeckConnectTimeout: The deck did not connect within connect_timeout
        """
        success, error = self.open()
        if not success:
            raise DeckOpenError(error)
        if not self.wait_until_connected():
            self.close()
            raise DeckConnectTimeout(self.config.connect_timeout)
        logger.debug("Deck session connected")

    def close(self, standby_on_disconnect: Optional[bool] = None) -> None:
        """Close the serial connection.

        Args:
            standby_on_disconnect: Overrides the configured standby setting
        """
        if standby_on_disconnect is None:
            standby_on_disconnect = self.config.standby_on_disconnect
        logger.debug(f"Closing deck control (standby={standby_on_disconnect})")
        self.deck_control.close(standby_on_disconnect)
        self._opened = False

    def release(self) -> None:
        """Unregister the status callback and release the deck control handle.

        A port still open at this point (an exception escaped between open()
        and close()) is closed first.
        """
        if self._deck_control is None:
            return
        try:
            if self._opened:
                self.close()
        finally:
            deck_control, self._deck_control = self._deck_control, None
            try:
                deck_control.set_callback(None)
            finally:
                deck_control.release()

    def __enter__(self) -> "DeckSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def _ready(self) -> DeckControl:
        if not self.connected:
            raise DeckNotConnectedError("Deck is not connected")
        return self.deck_control

    # Transport operations

    def get_current_state(
        self,
    ) -> tuple[DeckControlMode, VTRControlState, DeckStatusFlags]:
        return self._ready().get_current_state()

    def play(self) -> DeckError:
        return self._ready().play()

    def stop(self) -> DeckError:
        return self._ready().stop()

    def toggle_play_stop(self) -> DeckError:
        return self._ready().toggle_play_stop()

    def eject(self) -> DeckError:
        return self._ready().eject()

    def go_to_timecode(self, timecode: int) -> DeckError:
        """Seek to a BCD packed timecode (see Timecode.to_bcd())."""
        return self._ready().go_to_timecode(timecode)

    def fast_forward(self, view_tape: int) -> DeckError:
        return self._ready().fast_forward(view_tape)

    def rewind(self, view_tape: int) -> DeckError:
        return self._ready().rewind(view_tape)

    def step_forward(self) -> DeckError:
        return self._ready().step_forward()

    def step_back(self) -> DeckError:
        return self._ready().step_back()

    def jog(self, rate: float) -> DeckError:
        return self._ready().jog(rate)

    def shuttle(self, rate: float) -> DeckError:
        return self._ready().shuttle(rate)

    def get_timecode(self) -> tuple[Optional[Timecode], DeckError]:
        return self._ready().get_timecode()

    def crash_record_start(self) -> DeckError:
        return self._ready().crash_record_start()

    def crash_record_stop(self) -> DeckError:
        return self._ready().crash_record_stop()


@contextmanager
def open_first_deck(
    iterator: Optional[DeviceIterator],
    config: Optional[DeckSessionConfig] = None,
) -> Iterator[DeckSession]:
    """Connect to the deck attached to the first capture device.

    Every handle acquired here is released when the block exits, whether it
    exits normally or through an exception.

    Args:
        iterator: Device iterator from load_driver(), None if unavailable
        config: Session settings

    Raises:
        DriverUnavailableError: iterator is None
        NoDeviceError: No capture device was found
        DeckControlUnavailableError: The device has no deck control
        DeckOpenError: The serial port could not be opened
        DeckConnectTimeout: The deck did not connect in time
    """
    if iterator is None:
        raise DriverUnavailableError()

    try:
        device = iterator.next()
        if device is None:
            raise NoDeviceError()

        try:
            deck_control = device.query_deck_control()
            if deck_control is None:
                raise DeckControlUnavailableError()

            with DeckSession(deck_control, config=config) as session:
                session.connect()
                yield session
        finally:
            device.release()
    finally:
        iterator.release()
