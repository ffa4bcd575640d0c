"""The six accepted permission grammars.

Each ``Grammar`` pairs a whole-string pattern with a decoder that turns the
match into a 32-bit value. ``DEFAULT_GRAMMARS`` fixes the order in which
inputs are classified; the first grammar whose pattern matches wins.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .bits import (
    ABBREVIATIONS,
    ACTOR_MASKS,
    EXECUTE,
    FLAGS_BY_CHAR,
    READ,
    RWX_MASKS,
    TRIPLE_COLUMNS,
    UINT32_MAX,
    WRITE,
)
from .exceptions import ParseError

Decoder = Callable[[re.Match[str]], int]

# ---------------------------------------------------------------------------
# Grammar record
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Grammar:
    """A named text notation for permission values.

    Attributes:
        name: Human-readable name, used in log and error messages.
        pattern: Compiled pattern that must match the entire input.
        decoder: Turns a successful match into a 32-bit mode value.
    """

    name: str
    pattern: re.Pattern[str]
    decoder: Decoder

    def match(self, text: str) -> re.Match[str] | None:
        """Return the whole-string match of *text*, or ``None``."""
        return self.pattern.fullmatch(text)

    def decode(self, text: str) -> int:
        """Decode *text*, which must be in this grammar."""
        match = self.match(text)
        if match is None:
            raise ParseError(text, f"not valid {self.name} permission syntax")
        return self.decoder(match)


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_TRIPLE = r"(?:[r-][w-][x-]){3}"
_CLAUSE = r"(?P<actors>a|[ugo]{1,3})(?P<op>[-+=])(?P<perms>[rwx]{1,3})"
_PREFIX_CHARS = "".join(re.escape(char) for char in ABBREVIATIONS.values())

IMPLICIT_OCTAL_RE = re.compile(r"(?P<digits>[1-7][0-7]{2,})", re.ASCII)
EXPLICIT_OCTAL_RE = re.compile(r"0o?(?P<digits>[0-7]{3,})", re.ASCII)
SYMBOLIC_RE = re.compile(r"(?:(?:a|[ugo]{1,3})[-+=][rwx]{1,3}[ \t\n\f\r]?)+", re.ASCII)
SYMBOLIC_CLAUSE_RE = re.compile(_CLAUSE, re.ASCII)
BASIC_SINGLE_RE = re.compile(r"(?P<triple>[r-][w-][x-])", re.ASCII)
BASIC_TRIPLE_RE = re.compile(rf"(?P<triple>{_TRIPLE})", re.ASCII)
FULL_RE = re.compile(rf"(?P<prefix>-|[{_PREFIX_CHARS}]*)(?P<triple>{_TRIPLE})", re.ASCII)
_OCTAL_DIGITS_RE = re.compile(r"[0-7]+", re.ASCII)

# ---------------------------------------------------------------------------
# Decoders
# ---------------------------------------------------------------------------


def _capture(match: re.Match[str], name: str) -> str:
    value = match.groupdict().get(name)
    if value is None:
        raise ParseError(match.string, f"missing {name} capture")
    return value


def _octal(match: re.Match[str]) -> int:
    digits = _capture(match, "digits")
    if _OCTAL_DIGITS_RE.fullmatch(digits) is None:
        raise ParseError(match.string, "invalid octal digits")
    value = int(digits, 8)
    if value > UINT32_MAX:
        raise ParseError(match.string, "octal value overflows 32 bits")
    return value


def _columns(text: str, triple: str, layout: Iterable[tuple[str, int]]) -> int:
    columns = tuple(layout)
    if len(triple) != len(columns):
        raise ParseError(text, "inconsistent permission triple")
    value = 0
    for char, (letter, bit) in zip(triple, columns, strict=True):
        if char == letter:
            value |= bit
        elif char != "-":
            raise ParseError(text, "inconsistent permission triple")
    return value


def apply_symbolic(text: str, value: int = 0) -> int:
    """Apply the symbolic clauses in *text* to *value*, left to right.

    Only the nine permission bits are ever changed.

    Raises:
        ParseError: If *text* is not entirely made of symbolic clauses.
    """
    if SYMBOLIC_RE.fullmatch(text) is None:
        raise ParseError(text, "not a symbolic permission expression")
    for clause in SYMBOLIC_CLAUSE_RE.finditer(text):
        actors = 0
        for char in clause.group("actors"):
            actors |= ACTOR_MASKS[char]
        perms = 0
        for char in clause.group("perms"):
            perms |= RWX_MASKS[char]
        bits = actors & perms
        op = clause.group("op")
        if op == "+":
            value |= bits
        elif op == "-":
            value &= ~bits
        else:
            value = (value & ~actors) | bits
    return value & UINT32_MAX


def _decode_symbolic(match: re.Match[str]) -> int:
    return apply_symbolic(match.string)


def _decode_basic_single(match: re.Match[str]) -> int:
    return _columns(match.string, _capture(match, "triple"), zip("rwx", (READ, WRITE, EXECUTE)))


def _decode_basic_triple(match: re.Match[str]) -> int:
    return _columns(match.string, _capture(match, "triple"), TRIPLE_COLUMNS)


def _decode_full(match: re.Match[str]) -> int:
    value = 0
    for char in _capture(match, "prefix"):
        # "-" marks "no mode bits"
        flag = FLAGS_BY_CHAR.get(char)
        if flag is not None:
            value |= int(flag)
    return value | _columns(match.string, _capture(match, "triple"), TRIPLE_COLUMNS)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

IMPLICIT_OCTAL = Grammar("implicit octal", IMPLICIT_OCTAL_RE, _octal)
EXPLICIT_OCTAL = Grammar("explicit octal", EXPLICIT_OCTAL_RE, _octal)
SYMBOLIC = Grammar("symbolic", SYMBOLIC_RE, _decode_symbolic)
BASIC_SINGLE = Grammar("basic single", BASIC_SINGLE_RE, _decode_basic_single)
BASIC_TRIPLE = Grammar("basic triple", BASIC_TRIPLE_RE, _decode_basic_triple)
FULL = Grammar("full", FULL_RE, _decode_full)

DEFAULT_GRAMMARS: tuple[Grammar, ...] = (
    IMPLICIT_OCTAL,
    EXPLICIT_OCTAL,
    SYMBOLIC,
    BASIC_SINGLE,
    BASIC_TRIPLE,
    FULL,
)


def classify(text: str, grammars: Iterable[Grammar] = DEFAULT_GRAMMARS) -> Grammar | None:
    """Return the first grammar in *grammars* that matches *text*."""
    for grammar in grammars:
        if grammar.match(text) is not None:
            return grammar
    return None
