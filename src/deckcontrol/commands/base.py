# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Base infrastructure for command handling.

This module provides the command table, the command line parser and the
decorator used by the command handler mixins.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..const import DEFAULT_ARGUMENT, DeckCommand, DeckError, error_to_str


@dataclass(frozen=True)
class CommandMapping:
    """A command line command.

    Attributes:
        name: Name of the command, as given on the command line
        command: Corresponding DeckCommand
        num_parameters: Number of additional parameters required
    """

    name: str
    command: DeckCommand
    num_parameters: int = 0

    def generate_usage(self) -> str:
        """Generate usage string for this command."""
        params = "".join(
            f" [parameter {i}]" for i in range(1, self.num_parameters + 1)
        )
        return f"{self.name}{params}"


# Scanned in order by parse_command()
COMMAND_TABLE: tuple[CommandMapping, ...] = (
    CommandMapping("getcurrentstate", DeckCommand.GET_CURRENT_STATE),
    CommandMapping("play", DeckCommand.PLAY),
    CommandMapping("stop", DeckCommand.STOP),
    CommandMapping("toggleplaystop", DeckCommand.TOGGLE_PLAY_STOP),
    CommandMapping("eject", DeckCommand.EJECT),
    CommandMapping("gototimecode", DeckCommand.GO_TO_TIMECODE, 1),
    CommandMapping("fastforward", DeckCommand.FAST_FORWARD),
    CommandMapping("rewind", DeckCommand.REWIND),
    CommandMapping("stepforward", DeckCommand.STEP_FORWARD),
    CommandMapping("stepback", DeckCommand.STEP_BACK),
    CommandMapping("jog", DeckCommand.JOG, 1),
    CommandMapping("shuttle", DeckCommand.SHUTTLE, 1),
    CommandMapping("gettimecode", DeckCommand.GET_TIMECODE),
    CommandMapping("crashrecordstart", DeckCommand.CRASH_RECORD_START),
    CommandMapping("crashrecordstop", DeckCommand.CRASH_RECORD_STOP),
)


@dataclass(frozen=True)
class ParsedCommand:
    """A command resolved from the command line."""

    command: DeckCommand = DeckCommand.NO_COMMAND
    args: tuple[str, ...] = ()
    name: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.command is not DeckCommand.NO_COMMAND

    @property
    def argument(self) -> str:
        """First parameter, or "0" if none was given."""
        return self.args[0] if self.args else DEFAULT_ARGUMENT


NO_COMMAND = ParsedCommand()


def find_command(name: str, num_args: int) -> Optional[CommandMapping]:
    """Find the first table entry named name that num_args trailing
    arguments can satisfy."""
    for mapping in COMMAND_TABLE:
        if mapping.name == name and num_args >= mapping.num_parameters:
            return mapping
    return None


def parse_command(args: Sequence[str]) -> ParsedCommand:
    """Resolve a command from command line arguments.

    Prints a confirmation naming the command when one matches. A name that
    matches but lacks required parameters resolves to NO_COMMAND, the same
    as an unknown name.

    Args:
        args: Command name followed by its parameters (program name excluded)

    Returns:
        The parsed command, or NO_COMMAND
    """
    if not args:
        return NO_COMMAND

    mapping = find_command(args[0], len(args) - 1)
    if mapping is None:
        return NO_COMMAND

    print(f"Issued command '{mapping.name}'")
    return ParsedCommand(mapping.command, tuple(args[1:]), mapping.name)


def format_command_list() -> str:
    """Format every command with its parameter placeholders."""
    return "\n".join(f"  {mapping.generate_usage()}" for mapping in COMMAND_TABLE)


def format_usage(prog: str) -> str:
    """Format the usage text shown when no valid command was given."""
    return (
        "Usage:\n"
        f"{prog} <command> [parameter1] [parameter2] ...\n"
        "\n"
        "Commands:\n"
        f"{format_command_list()}"
    )


@dataclass
class CommandResult:
    """Result of sending a command to the deck.

    Attributes:
        error: Error reported by the deck
        message: Output produced by the command, if any
        data: Decoded values, for callers that want more than text
    """

    error: DeckError = DeckError.NO_ERROR
    message: str = ""
    data: Optional[dict] = None

    @property
    def success(self) -> bool:
        return self.error == DeckError.NO_ERROR


def format_outcome(result: CommandResult) -> str:
    """Format the line reporting whether the command was accepted."""
    if result.success:
        return "Command successfully issued"
    else:
        return f"Error sending command ({error_to_str(result.error)})"


def command(deck_command: DeckCommand, argument: bool = False):
    """Decorator to register a method as the handler for a DeckCommand.

    Args:
        deck_command: Command handled by the method
        argument: If True, the method receives the command's first parameter
                  ("0" when none was given)
    """

    def decorator(func: Callable) -> Callable:
        func._deck_command = deck_command
        func._takes_argument = argument
        return func

    return decorator
