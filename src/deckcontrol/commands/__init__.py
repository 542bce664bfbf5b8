# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Command table, parser and dispatcher for deck control.

The dispatcher is split into category-specific mixins for maintainability:
- InfoCommandsMixin: State queries (getcurrentstate)
- TransportCommandsMixin: Tape transport (play, stop, jog, shuttle, ...)
- TimecodeCommandsMixin: Timecode seek and query
- RecordCommandsMixin: Crash record start/stop
"""

from .base import (
    COMMAND_TABLE,
    NO_COMMAND,
    CommandMapping,
    CommandResult,
    ParsedCommand,
    command,
    find_command,
    format_command_list,
    format_outcome,
    format_usage,
    parse_command,
)
from .handler import CommandDispatcher

__all__ = [
    "COMMAND_TABLE",
    "NO_COMMAND",
    "CommandDispatcher",
    "CommandMapping",
    "CommandResult",
    "ParsedCommand",
    "command",
    "find_command",
    "format_command_list",
    "format_outcome",
    "format_usage",
    "parse_command",
]
