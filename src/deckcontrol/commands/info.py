# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Status commands."""

import logging
from typing import TYPE_CHECKING

from ..const import DeckCommand, mode_to_str, state_to_str
from .base import CommandResult, command

if TYPE_CHECKING:
    from ..deck import DeckSession

logger = logging.getLogger(__name__)


class InfoCommandsMixin:
    """Mixin providing status commands."""

    session: "DeckSession"

    @command(DeckCommand.GET_CURRENT_STATE)
    def get_current_state(self) -> CommandResult:
        """Report the deck's VTR control state.

        The deck does not return an error for a state query, so the result
        is always successful.
        """
        mode, vtr_state, flags = self.session.get_current_state()
        logger.debug(f"Deck mode: {mode_to_str(mode)}, status flags: {int(flags):#x}")
        return CommandResult(
            message=f"VTR control state: {state_to_str(vtr_state)}",
            data={"mode": mode, "vtr_state": vtr_state, "flags": flags},
        )
