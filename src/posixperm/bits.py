"""Mode/type flags and permission bit masks.

``ModeBit`` is the one table binding each special/type bit to its
single-character abbreviation. Both the Full-form decoder and the canonical
encoder read it, in declaration order.
"""

from __future__ import annotations

import functools
import operator
from enum import IntFlag
from types import MappingProxyType

# ---------------------------------------------------------------------------
# Permission bits
# ---------------------------------------------------------------------------

OWNER = 0o700
GROUP = 0o070
OTHER = 0o007
ALL_ACTORS = OWNER | GROUP | OTHER

READ = 0o444
WRITE = 0o222
EXECUTE = 0o111

PERM_MASK = 0o777
"""The nine read/write/execute bits."""

UINT32_MAX = 0xFFFF_FFFF

ACTOR_MASKS: MappingProxyType[str, int] = MappingProxyType(
    {"a": ALL_ACTORS, "u": OWNER, "g": GROUP, "o": OTHER}
)
"""Symbolic actor letter -> permission nibble(s)."""

RWX_MASKS: MappingProxyType[str, int] = MappingProxyType({"r": READ, "w": WRITE, "x": EXECUTE})
"""Symbolic permission letter -> bit repeated across all three actors."""

# Column order of an ``ls``-style triple, owner first
TRIPLE_COLUMNS: tuple[tuple[str, int], ...] = (
    ("r", 0o400),
    ("w", 0o200),
    ("x", 0o100),
    ("r", 0o040),
    ("w", 0o020),
    ("x", 0o010),
    ("r", 0o004),
    ("w", 0o002),
    ("x", 0o001),
)

# ---------------------------------------------------------------------------
# Mode/type bits
# ---------------------------------------------------------------------------


class ModeBit(IntFlag):
    """Special and type bits of a 32-bit file mode, highest bit first."""

    DIR = 1 << 31
    APPEND = 1 << 30
    EXCLUSIVE = 1 << 29
    TEMPORARY = 1 << 28
    SYMLINK = 1 << 27
    DEVICE = 1 << 26
    NAMED_PIPE = 1 << 25
    SOCKET = 1 << 24
    SETUID = 1 << 23
    SETGID = 1 << 22
    CHAR_DEVICE = 1 << 21
    STICKY = 1 << 20
    IRREGULAR = 1 << 19


ABBREVIATIONS: MappingProxyType[ModeBit, str] = MappingProxyType(
    {
        ModeBit.DIR: "d",
        ModeBit.APPEND: "a",
        ModeBit.EXCLUSIVE: "l",
        ModeBit.TEMPORARY: "T",
        ModeBit.SYMLINK: "L",
        ModeBit.DEVICE: "D",
        ModeBit.NAMED_PIPE: "p",
        ModeBit.SOCKET: "S",
        ModeBit.SETUID: "u",
        ModeBit.SETGID: "g",
        ModeBit.CHAR_DEVICE: "c",
        ModeBit.STICKY: "t",
        ModeBit.IRREGULAR: "?",
    }
)
"""Mode bit -> abbreviation, in canonical output order."""

FLAGS_BY_CHAR: MappingProxyType[str, ModeBit] = MappingProxyType(
    {char: flag for flag, char in ABBREVIATIONS.items()}
)

MODE_MASK: int = int(functools.reduce(operator.or_, ABBREVIATIONS, 0))
"""Every bit that has an abbreviation."""

CANONICAL_MASK: int = MODE_MASK | PERM_MASK
"""Every bit the canonical text form renders."""

MAX_TEXT_LENGTH = len(ABBREVIATIONS) + len(TRIPLE_COLUMNS)
"""Longest possible canonical rendering."""


def mode_flags(value: int) -> ModeBit:
    """Return the ``ModeBit`` flags set in *value*."""
    return ModeBit(value & MODE_MASK)
