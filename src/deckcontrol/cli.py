# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Command line interface for deck control.

Each invocation sends one command to the deck attached to the first
capture device, reports the result and exits.
"""

import argparse
import functools
import logging
import os
import sys
from typing import Callable, Optional, Sequence

from .commands import (
    CommandDispatcher,
    format_command_list,
    format_outcome,
    format_usage,
    parse_command,
)
from .const import (
    DEFAULT_DRIVER,
    DEFAULT_TIME_SCALE,
    DEFAULT_TIME_VALUE,
    DRIVER_ENV_VAR,
    ExitCode,
)
from .deck import DeckSessionConfig, open_first_deck
from .driver import DeviceIterator, load_driver
from .exceptions import DeckControlError

logger = logging.getLogger(__name__)

IteratorFactory = Callable[[], Optional[DeviceIterator]]


def run_command(
    args: Sequence[str],
    create_iterator: IteratorFactory,
    config: Optional[DeckSessionConfig] = None,
    prog: str = "deckcontrol",
) -> int:
    """Parse and send one command.

    The driver is only loaded once the command line is known to be valid.

    Args:
        args: Command name and parameters
        create_iterator: Returns the driver's device iterator, or None if
                         the driver is not available
        config: Session settings
        prog: Program name shown in the usage text

    Returns:
        Process exit status (an ExitCode value)
    """
    parsed = parse_command(args)
    if not parsed.is_valid:
        print(format_usage(prog), file=sys.stderr)
        return ExitCode.NO_COMMAND

    config = config or DeckSessionConfig()
    try:
        with open_first_deck(create_iterator(), config) as session:
            try:
                result = CommandDispatcher(session).dispatch(parsed)
                if result.message:
                    print(result.message)
                print(format_outcome(result))
            finally:
                session.close(config.standby_on_disconnect)
    except DeckControlError as e:
        print(e.message, file=sys.stderr)
        return e.exit_code

    # Deck errors are reported above but do not change the exit status
    return ExitCode.SUCCESS


def _parse_rate(parser: argparse.ArgumentParser, value: str) -> tuple[int, int]:
    """Parse a SCALE/VALUE video standard."""
    parts = value.split("/")
    if len(parts) != 2:
        parser.error("Rate must be in format scale/value (e.g., '30000/1001')")
    try:
        time_scale, time_value = int(parts[0]), int(parts[1])
    except ValueError:
        parser.error("Rate must contain only numbers (e.g., '30000/1001')")
    if time_scale <= 0 or time_value <= 0:
        parser.error("Rate components must be positive")
    return time_scale, time_value


def main(argv: Optional[Sequence[str]] = None):
    """CLI entry point for deck control."""
    parser = argparse.ArgumentParser(
        prog="deckcontrol",
        description="Send a command to a broadcast deck over RS-422 deck control",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"Commands:\n{format_command_list()}",
    )
    parser.add_argument(
        "--driver", "-D",
        default=os.environ.get(DRIVER_ENV_VAR, DEFAULT_DRIVER),
        help=f"Driver name or module:factory path "
             f"(default: ${DRIVER_ENV_VAR} or {DEFAULT_DRIVER})"
    )
    parser.add_argument(
        "--rate", "-r",
        default=f"{DEFAULT_TIME_SCALE}/{DEFAULT_TIME_VALUE}",
        metavar="SCALE/VALUE",
        help=f"Video standard to open the deck with "
             f"(default: {DEFAULT_TIME_SCALE}/{DEFAULT_TIME_VALUE})"
    )
    parser.add_argument(
        "--no-auto-detect",
        action="store_false",
        dest="auto_detect",
        help="Disable automatic serial port detection"
    )
    parser.add_argument(
        "--standby",
        action="store_true",
        help="Put the deck in standby when disconnecting"
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Give up if the deck has not connected after this long "
             "(default: wait forever)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    # Everything from the command name on is passed through untouched, so
    # parameters such as "-1:00:10:00" or "-1e1" are not taken as options
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command to send, followed by its parameters (options go first)"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be positive")

    time_scale, time_value = _parse_rate(parser, args.rate)
    config = DeckSessionConfig(
        time_scale=time_scale,
        time_value=time_value,
        auto_serial_port_detection=args.auto_detect,
        standby_on_disconnect=args.standby,
        connect_timeout=args.timeout,
    )

    try:
        result = run_command(
            args.command,
            functools.partial(load_driver, args.driver),
            config,
            prog=parser.prog,
        )
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)

    sys.exit(int(result))


if __name__ == "__main__":
    main()
