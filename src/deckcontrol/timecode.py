# Copyright (c) 2025 Preston Elder
#
# This software is released under the MIT License.
# https://opensource.org/licenses/MIT

"""Timecode values and their packed BCD representation.

Decks exchange timecode as four binary-coded-decimal digit pairs packed
into a 32-bit value, hours in the most significant byte:

    HH MM SS FF  ->  0xHHMMSSFF  (each nibble one decimal digit)

Components parsed from the command line are each limited to 0-59. The
same bound is applied to frames.
"""

from dataclasses import dataclass
from typing import Iterable

from .const import TIMECODE_COMPONENT_MAX
from .parsing import parse_int


def make_tc_bcd(
    h1: int, h0: int, m1: int, m0: int, s1: int, s0: int, f1: int, f0: int
) -> int:
    """Pack eight decimal digits into a BCD timecode value.

    Example:
        >>> hex(make_tc_bcd(1, 0, 2, 0, 3, 0, 0, 4))
        '0x10203004'
    """
    return (
        (h1 & 0xF) << 28
        | (h0 & 0xF) << 24
        | (m1 & 0xF) << 20
        | (m0 & 0xF) << 16
        | (s1 & 0xF) << 12
        | (s0 & 0xF) << 8
        | (f1 & 0xF) << 4
        | (f0 & 0xF)
    )


def clamp_component(value: int) -> int:
    """Return value if it lies in [0, 59], otherwise 0."""
    if value < 0 or value > TIMECODE_COMPONENT_MAX:
        return 0
    return value


@dataclass(frozen=True)
class Timecode:
    """A deck timecode position."""

    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    frames: int = 0

    @classmethod
    def from_components(cls, components: Iterable[int]) -> "Timecode":
        """Build a timecode from up to four components.

        Each component is clamped with clamp_component(); missing trailing
        components are 0.
        """
        values = [clamp_component(v) for v in list(components)[:4]]
        values.extend([0] * (4 - len(values)))
        return cls(*values)

    @classmethod
    def from_bcd(cls, bcd: int) -> "Timecode":
        """Unpack a BCD timecode value."""

        def pair(shift: int) -> int:
            return ((bcd >> (shift + 4)) & 0xF) * 10 + ((bcd >> shift) & 0xF)

        return cls(pair(24), pair(16), pair(8), pair(0))

    @classmethod
    def from_frames(cls, total_frames: int, frame_rate: int) -> "Timecode":
        """Convert a frame count to a timecode, wrapping at 24 hours."""
        total_frames %= 24 * 3600 * frame_rate
        frames = total_frames % frame_rate
        total_seconds = total_frames // frame_rate
        return cls(
            total_seconds // 3600,
            (total_seconds // 60) % 60,
            total_seconds % 60,
            frames,
        )

    def to_frames(self, frame_rate: int) -> int:
        """Convert to a frame count at the given integer frame rate."""
        seconds = self.hours * 3600 + self.minutes * 60 + self.seconds
        return seconds * frame_rate + self.frames

    def to_bcd(self) -> int:
        """Pack into a BCD timecode value."""
        return make_tc_bcd(
            self.hours // 10, self.hours % 10,
            self.minutes // 10, self.minutes % 10,
            self.seconds // 10, self.seconds % 10,
            self.frames // 10, self.frames % 10,
        )

    def __str__(self) -> str:
        return (
            f"{self.hours:02d}:{self.minutes:02d}:"
            f"{self.seconds:02d}:{self.frames:02d}"
        )


def parse_timecode(value: str) -> Timecode:
    """Parse an HH:MM:SS:FF string.

    Empty fields are skipped, at most four fields are read, and fields not
    present default to 0.

    Example:
        >>> parse_timecode("10:61:30:99")
        Timecode(hours=10, minutes=0, seconds=30, frames=0)
        >>> parse_timecode("10:20")
        Timecode(hours=10, minutes=20, seconds=0, frames=0)
    """
    fields = [f for f in value.split(":") if f]
    return Timecode.from_components(parse_int(f) for f in fields[:4])
