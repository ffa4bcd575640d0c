"""PermissionCodec — text classification, decoding, and canonical encoding."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .bits import ABBREVIATIONS, TRIPLE_COLUMNS
from .exceptions import ParseError
from .grammars import DEFAULT_GRAMMARS, Grammar, classify

logger = logging.getLogger(__name__)

TextLike = str | bytes | bytearray | memoryview


def encode(value: int) -> str:
    """Render *value* in the canonical Full form.

    Mode bits come first in table order, or a single ``-`` when none are
    set, followed by exactly nine ``rwx`` columns. Never fails.
    """
    prefix = "".join(char for flag, char in ABBREVIATIONS.items() if value & flag)
    columns = "".join(letter if value & bit else "-" for letter, bit in TRIPLE_COLUMNS)
    return (prefix or "-") + columns


def as_text(data: TextLike) -> str:
    """Return *data* as ``str``; bytes must be ASCII."""
    if isinstance(data, str):
        return data
    if isinstance(data, bytes | bytearray | memoryview):
        raw = bytes(data)
        try:
            return raw.decode("ascii")
        except UnicodeDecodeError as exc:
            text = raw.decode("utf-8", "replace")
            raise ParseError(text, "permission text is not ASCII") from exc
    raise TypeError(f"expected str or bytes, got {type(data).__name__}")


@dataclass(frozen=True, slots=True)
class PermissionCodec:
    """Parses any accepted notation and formats the canonical one.

    Attributes:
        grammars: Grammars tried in order; the first full match decodes
            the input. Pass a subset to refuse some notations.
    """

    grammars: tuple[Grammar, ...] = DEFAULT_GRAMMARS

    def classify(self, text: str) -> Grammar | None:
        """Return the grammar that would decode *text*, or ``None``."""
        return classify(text, self.grammars)

    def decode(self, data: TextLike) -> int:
        """Decode *data* to a 32-bit mode value.

        Raises:
            ParseError: If no grammar matches or the matching grammar
                rejects the input.
        """
        text = as_text(data)
        for grammar in self.grammars:
            match = grammar.match(text)
            if match is None:
                continue
            logger.debug("Decoding %r as %s permission", text, grammar.name)
            return grammar.decoder(match)
        logger.debug("No permission grammar matched %r", text)
        raise ParseError(text)

    def encode(self, value: int) -> str:
        """Render *value* canonically; see :func:`encode`."""
        return encode(value)


DEFAULT_CODEC = PermissionCodec()
