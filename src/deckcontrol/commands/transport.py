# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Transport commands."""

from typing import TYPE_CHECKING

from ..const import DeckCommand
from ..parsing import parse_float, parse_int
from .base import CommandResult, command

if TYPE_CHECKING:
    from ..deck import DeckSession


class TransportCommandsMixin:
    """Mixin providing tape transport commands."""

    session: "DeckSession"

    @command(DeckCommand.PLAY)
    def play(self) -> CommandResult:
        return CommandResult(self.session.play())

    @command(DeckCommand.STOP)
    def stop(self) -> CommandResult:
        return CommandResult(self.session.stop())

    @command(DeckCommand.TOGGLE_PLAY_STOP)
    def toggle_play_stop(self) -> CommandResult:
        return CommandResult(self.session.toggle_play_stop())

    @command(DeckCommand.EJECT)
    def eject(self) -> CommandResult:
        return CommandResult(self.session.eject())

    @command(DeckCommand.FAST_FORWARD, argument=True)
    def fast_forward(self, argument: str) -> CommandResult:
        """Fast forward. A non-zero argument asks the deck to show the tape."""
        view_tape = parse_int(argument)
        return CommandResult(
            self.session.fast_forward(view_tape), data={"view_tape": view_tape}
        )

    @command(DeckCommand.REWIND, argument=True)
    def rewind(self, argument: str) -> CommandResult:
        """Rewind. A non-zero argument asks the deck to show the tape."""
        view_tape = parse_int(argument)
        return CommandResult(
            self.session.rewind(view_tape), data={"view_tape": view_tape}
        )

    @command(DeckCommand.STEP_FORWARD)
    def step_forward(self) -> CommandResult:
        return CommandResult(self.session.step_forward())

    @command(DeckCommand.STEP_BACK)
    def step_back(self) -> CommandResult:
        return CommandResult(self.session.step_back())

    @command(DeckCommand.JOG, argument=True)
    def jog(self, argument: str) -> CommandResult:
        """Jog at the given rate (negative rates run in reverse)."""
        rate = parse_float(argument)
        return CommandResult(self.session.jog(rate), data={"rate": rate})

    @command(DeckCommand.SHUTTLE, argument=True)
    def shuttle(self, argument: str) -> CommandResult:
        """Shuttle at the given rate (negative rates run in reverse)."""
        rate = parse_float(argument)
        return CommandResult(self.session.shuttle(rate), data={"rate": rate})
