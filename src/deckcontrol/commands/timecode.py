# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Timecode commands."""

import logging
from typing import TYPE_CHECKING

from ..const import DeckCommand
from ..timecode import parse_timecode
from .base import CommandResult, command

if TYPE_CHECKING:
    from ..deck import DeckSession

logger = logging.getLogger(__name__)


class TimecodeCommandsMixin:
    """Mixin providing timecode commands."""

    session: "DeckSession"

    @command(DeckCommand.GO_TO_TIMECODE, argument=True)
    def go_to_timecode(self, argument: str) -> CommandResult:
        """Seek to an HH:MM:SS:FF position.

        Components outside 0-59 are replaced with 0, missing trailing
        components are 0.
        """
        timecode = parse_timecode(argument)
        logger.debug(f"Going to timecode {timecode} ({timecode.to_bcd():#010x})")
        error = self.session.go_to_timecode(timecode.to_bcd())
        return CommandResult(error, data={"timecode": timecode})

    @command(DeckCommand.GET_TIMECODE)
    def get_timecode(self) -> CommandResult:
        """Read the deck's current timecode."""
        timecode, error = self.session.get_timecode()
        if timecode is None:
            return CommandResult(error)
        return CommandResult(error, f"TC={timecode}", data={"timecode": timecode})
