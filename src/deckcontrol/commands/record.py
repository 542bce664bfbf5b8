# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Recording commands."""

from typing import TYPE_CHECKING

from ..const import DeckCommand
from .base import CommandResult, command

if TYPE_CHECKING:
    from ..deck import DeckSession


class RecordCommandsMixin:
    """Mixin providing crash record commands."""

    session: "DeckSession"

    @command(DeckCommand.CRASH_RECORD_START)
    def crash_record_start(self) -> CommandResult:
        """Start recording immediately at the current tape position."""
        return CommandResult(self.session.crash_record_start())

    @command(DeckCommand.CRASH_RECORD_STOP)
    def crash_record_stop(self) -> CommandResult:
        return CommandResult(self.session.crash_record_stop())
