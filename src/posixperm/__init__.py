"""posixperm: POSIX file permissions that round-trip through text.

Parse ``644``, ``0o644``, ``a=rx u+w``, ``r-x``, ``rwxr-x---`` or
``drwxr-x---`` into one 32-bit mode value; always write it back as the full
mode string.
"""

__version__ = "0.1.0"

from posixperm.bits import ABBREVIATIONS, PERM_MASK, ModeBit
from posixperm.codec import DEFAULT_CODEC, PermissionCodec, encode
from posixperm.exceptions import ParseError, PosixPermError, UnrepresentableError
from posixperm.grammars import (
    BASIC_SINGLE,
    BASIC_TRIPLE,
    DEFAULT_GRAMMARS,
    EXPLICIT_OCTAL,
    FULL,
    IMPLICIT_OCTAL,
    SYMBOLIC,
    Grammar,
    classify,
)
from posixperm.perm import Permission, from_file_mode, from_string

__all__ = [
    "ABBREVIATIONS",
    "BASIC_SINGLE",
    "BASIC_TRIPLE",
    "DEFAULT_CODEC",
    "DEFAULT_GRAMMARS",
    "EXPLICIT_OCTAL",
    "FULL",
    "IMPLICIT_OCTAL",
    "PERM_MASK",
    "SYMBOLIC",
    "Grammar",
    "ModeBit",
    "ParseError",
    "Permission",
    "PermissionCodec",
    "PosixPermError",
    "UnrepresentableError",
    "__version__",
    "classify",
    "encode",
    "from_file_mode",
    "from_string",
]
