# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Connection synchronizer.

Opening the deck control port returns immediately; the deck reports that it
is connected later, from the driver's own thread. ConnectionSynchronizer is
registered as the status callback and turns that notification into a
blocking wait for the main thread.

The synchronizer is single use: once connected it stays connected.
"""

import logging
import threading
from typing import Optional

from .const import CallbackResult, DeckStatusFlags
from .driver import DeckControlStatusCallback

logger = logging.getLogger(__name__)


class ConnectionSynchronizer(DeckControlStatusCallback):
    """Status callback that blocks callers until the deck is connected.

    Only status changes are consumed; timecode updates, VTR state changes
    and deck events are left unimplemented.
    """

    def __init__(self, condition: Optional[threading.Condition] = None):
        """Initialize the synchronizer.

        Args:
            condition: Condition to wait on. A private one is created when
                not given.
        """
        self._condition = condition if condition is not None else threading.Condition()
        self._connected = False

    @property
    def connected(self) -> bool:
        with self._condition:
            return self._connected

    def deck_control_status_changed(
        self, flags: DeckStatusFlags, mask: int
    ) -> CallbackResult:
        connected = DeckStatusFlags.DECK_CONNECTED
        with self._condition:
            logger.debug(f"Deck status changed: flags={int(flags):#x} mask={int(mask):#x}")
            if (mask & connected) and (flags & connected):
                if not self._connected:
                    logger.debug("Deck connected")
                self._connected = True
                self._condition.notify_all()
        return CallbackResult.OK

    def wait_connected(self, timeout: Optional[float] = None) -> bool:
        """Block until the deck reports itself connected.

        Args:
            timeout: Seconds to wait, or None to wait indefinitely

        Returns:
            True once connected, False if the timeout expired first
        """
        with self._condition:
            return self._condition.wait_for(lambda: self._connected, timeout)
