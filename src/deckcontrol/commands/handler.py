# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Command dispatcher that combines all command mixins."""

import logging
from typing import TYPE_CHECKING, Callable

from ..const import DeckCommand, error_to_str
from .base import CommandResult, ParsedCommand
from .info import InfoCommandsMixin
from .record import RecordCommandsMixin
from .timecode import TimecodeCommandsMixin
from .transport import TransportCommandsMixin

if TYPE_CHECKING:
    from ..deck import DeckSession

logger = logging.getLogger(__name__)


class CommandDispatcher(
    InfoCommandsMixin,
    TransportCommandsMixin,
    TimecodeCommandsMixin,
    RecordCommandsMixin,
):
    """Sends parsed commands to a connected deck session.

    Commands can be invoked:
    - Via dispatch() with a ParsedCommand
    - Directly as methods (e.g., dispatcher.play(), dispatcher.jog("1.5"))
    """

    def __init__(self, session: "DeckSession"):
        """Initialize the dispatcher.

        Args:
            session: A connected deck session
        """
        self.session = session
        self._handlers: dict[DeckCommand, Callable[..., CommandResult]] = {}
        self._takes_argument: dict[DeckCommand, bool] = {}
        self._register_handlers()

    def _register_handlers(self):
        """Register handlers from @command decorated methods."""
        for name in dir(type(self)):
            if name.startswith("_"):
                continue
            func = getattr(type(self), name)
            deck_command = getattr(func, "_deck_command", None)
            if deck_command is None:
                continue
            if deck_command in self._handlers:
                logger.warning(f"Duplicate handler for {deck_command.name}: {name}")
                continue
            self._handlers[deck_command] = getattr(self, name)
            self._takes_argument[deck_command] = func._takes_argument

    def has_handler(self, deck_command: DeckCommand) -> bool:
        return deck_command in self._handlers

    def dispatch(self, parsed: ParsedCommand) -> CommandResult:
        """Send a parsed command to the deck.

        Args:
            parsed: Result of parse_command()

        Returns:
            CommandResult with the deck's error and any command output

        Raises:
            ValueError: parsed does not name a command
        """
        handler = self._handlers.get(parsed.command)
        if handler is None:
            raise ValueError(f"No handler for command {parsed.command.name}")

        logger.debug(f"Dispatching {parsed.command.name} with args {list(parsed.args)}")
        if self._takes_argument[parsed.command]:
            result = handler(parsed.argument)
        else:
            result = handler()

        if not result.success:
            logger.debug(f"{parsed.command.name} failed: {error_to_str(result.error)}")
        return result
