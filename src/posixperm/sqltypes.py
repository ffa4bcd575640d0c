"""SQLAlchemy column type storing permissions as canonical text."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

from .bits import CANONICAL_MASK, MAX_TEXT_LENGTH
from .exceptions import UnrepresentableError
from .perm import Permission

if TYPE_CHECKING:
    from sqlalchemy.engine import Dialect


class PermissionType(TypeDecorator[Permission]):
    """Stores a :class:`Permission` as its full mode string.

    Use with SQLModel as ``Field(sa_type=PermissionType())``. Bound values
    may be ``Permission`` instances or text in any accepted notation;
    loaded values are always ``Permission``. Values with bits the full
    mode string cannot show (e.g. ``0o4000`` from octal ``4755``) are
    refused rather than stored without them.
    """

    impl = String(MAX_TEXT_LENGTH)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return None
        if not isinstance(value, Permission):
            value = Permission.parse(value)
        extra = value.value & ~CANONICAL_MASK
        if extra:
            raise UnrepresentableError(f"{value!r} has bits text cannot hold: 0o{extra:o}")
        return value.to_string()

    def process_result_value(self, value: Any, dialect: Dialect) -> Permission | None:
        if value is None:
            return None
        return Permission.parse(value)