"""Permission — a POSIX file mode value that survives text round trips.

A ``Permission`` wraps one unsigned 32-bit integer: nine read/write/execute
bits plus the special/type bits in :class:`~posixperm.bits.ModeBit`. It can be
parsed from any of these notations:

    ``644``          implicit octal
    ``0644``         explicit octal (also ``0o644``, as in YAML 1.2)
    ``a=rwx o-w``    symbolic; clauses may also be written back to back
    ``r-x``          one triple applied to owner, group and other
    ``rwxr-x---``    ``ls``-style owner/group/other triples
    ``drwxr-x---``   full mode string with leading type/special bits

Output is always the full mode string, so ``Permission.parse("644")``
prints as ``-rw-r--r--``.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic_core import core_schema

from .bits import PERM_MASK, UINT32_MAX, ModeBit, mode_flags
from .codec import DEFAULT_CODEC, TextLike, as_text
from .grammars import apply_symbolic

if TYPE_CHECKING:
    from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
    from pydantic.json_schema import JsonSchemaValue

    from .codec import PermissionCodec

# stat file type -> mode bits, checked against S_IFMT(st_mode)
_STAT_TYPES: tuple[tuple[int, int], ...] = (
    (stat.S_IFBLK, ModeBit.DEVICE),
    (stat.S_IFCHR, ModeBit.DEVICE | ModeBit.CHAR_DEVICE),
    (stat.S_IFDIR, ModeBit.DIR),
    (stat.S_IFIFO, ModeBit.NAMED_PIPE),
    (stat.S_IFLNK, ModeBit.SYMLINK),
    (stat.S_IFSOCK, ModeBit.SOCKET),
)

_STAT_SPECIAL: tuple[tuple[int, ModeBit], ...] = (
    (stat.S_ISUID, ModeBit.SETUID),
    (stat.S_ISGID, ModeBit.SETGID),
    (stat.S_ISVTX, ModeBit.STICKY),
)


@dataclass(frozen=True, slots=True)
class Permission:
    """Immutable 32-bit file mode value.

    Attributes:
        value: The raw mode bits, ``0 <= value <= 0xFFFFFFFF``.
    """

    value: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Permission value must be an int, got {type(self.value).__name__}")
        if not 0 <= self.value <= UINT32_MAX:
            raise ValueError(f"Permission value {self.value:#x} is outside the 32-bit range")
        object.__setattr__(self, "value", int(self.value))

    # ------------------------------------------------------------------
    # Parsing and formatting
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: TextLike, codec: PermissionCodec | None = None) -> Permission:
        """Parse *text* in any accepted notation.

        Raises:
            ParseError: If *text* is not in any grammar *codec* knows.
        """
        return cls((codec or DEFAULT_CODEC).decode(text))

    @classmethod
    def unmarshal_text(cls, data: bytes) -> Permission:
        """Text-unmarshal hook: parse ASCII *data*."""
        return cls.parse(data)

    def marshal_text(self) -> bytes:
        """Text-marshal hook: the canonical form as ASCII bytes."""
        return self.to_string().encode("ascii")

    def to_string(self) -> str:
        """Return the canonical full mode string, e.g. ``drwxr-xr-x``."""
        return DEFAULT_CODEC.encode(self.value)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Permission(0o{self.value:o})"

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return self.to_string()
        return format(self.value, format_spec)

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    # ------------------------------------------------------------------
    # Native mode interop
    # ------------------------------------------------------------------

    @classmethod
    def from_file_mode(cls, mode: int) -> Permission:
        """Wrap a 32-bit mode value bit for bit."""
        return cls(int(mode))

    @property
    def file_mode(self) -> int:
        """The raw 32-bit mode value."""
        return self.value

    @classmethod
    def from_stat(cls, st_mode: int) -> Permission:
        """Convert an ``os.stat()``-style ``st_mode``.

        Append, exclusive, temporary and irregular bits have no ``stat``
        equivalent and are never set.
        """
        value = st_mode & PERM_MASK
        file_type = stat.S_IFMT(st_mode)
        for st_type, bits in _STAT_TYPES:
            if file_type == st_type:
                value |= int(bits)
                break
        for st_bit, flag in _STAT_SPECIAL:
            if st_mode & st_bit:
                value |= int(flag)
        return cls(value)

    def to_stat(self) -> int:
        """Convert to an ``os.stat()``-style ``st_mode``.

        Values with no file type flag become regular files (``S_IFREG``).
        Flags with no ``stat`` equivalent are dropped.
        """
        mode = self.value & PERM_MASK
        flags = self.type_bits
        if ModeBit.CHAR_DEVICE in flags:
            mode |= stat.S_IFCHR
        elif ModeBit.DEVICE in flags:
            mode |= stat.S_IFBLK
        elif ModeBit.DIR in flags:
            mode |= stat.S_IFDIR
        elif ModeBit.NAMED_PIPE in flags:
            mode |= stat.S_IFIFO
        elif ModeBit.SYMLINK in flags:
            mode |= stat.S_IFLNK
        elif ModeBit.SOCKET in flags:
            mode |= stat.S_IFSOCK
        else:
            mode |= stat.S_IFREG
        for st_bit, flag in _STAT_SPECIAL:
            if flag in flags:
                mode |= st_bit
        return mode

    # ------------------------------------------------------------------
    # Bit helpers
    # ------------------------------------------------------------------

    @property
    def perm(self) -> Permission:
        """Only the nine read/write/execute bits."""
        return Permission(self.value & PERM_MASK)

    @property
    def type_bits(self) -> ModeBit:
        return mode_flags(self.value)

    @property
    def is_dir(self) -> bool:
        return ModeBit.DIR in self

    def __contains__(self, flag: ModeBit) -> bool:
        return flag != 0 and (self.value & flag) == flag

    def apply(self, expr: str) -> Permission:
        """Apply a symbolic expression such as ``go-w u+x`` to this value.

        Unlike parsing, clauses start from the current bits instead of zero.
        Special and type bits are kept.

        Raises:
            ParseError: If *expr* is not a symbolic expression.
        """
        return Permission(apply_symbolic(as_text(expr), self.value))

    # ------------------------------------------------------------------
    # pydantic integration
    # ------------------------------------------------------------------

    @classmethod
    def _validate(cls, value: Any) -> Permission:
        if isinstance(value, cls):
            return value
        if isinstance(value, str | bytes | bytearray):
            return cls.parse(value)
        raise ValueError(f"expected permission text, got {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.to_string, info_arg=False, when_used="json"
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string", "examples": ["-rw-r--r--", "0644", "a=rx u+w"]}


def from_string(text: TextLike) -> Permission:
    """Parse *text* with the default codec."""
    return Permission.parse(text)


def from_file_mode(mode: int) -> Permission:
    """Wrap a raw 32-bit mode value."""
    return Permission.from_file_mode(mode)
