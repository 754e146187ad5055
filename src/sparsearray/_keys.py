from __future__ import annotations

import re
from operator import index as op_index
from typing import TYPE_CHECKING, Final, Union

from sparsearray.exceptions import InvalidLength

if TYPE_CHECKING:
    from typing import Any, TypeAlias

Key: TypeAlias = Union[int, str]

# Canonical decimal spelling of an array index: no sign, no leading zeros
_INDEX_RE: Final = re.compile(r"0|[1-9][0-9]*")


class _Absent:
    """Marker for a key that was never written or was deleted as a hole."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<absent>"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        # Unpickle to the module-level singleton
        return "ABSENT"

    def __copy__(self) -> _Absent:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Absent:
        return self


ABSENT: Final = _Absent()


def canonical_key(key: object) -> Key:
    """Map a raw key to the form it is stored under.

    Whole non-negative numbers (``3``, ``"3"``, ``3.0``) are array indices.
    Everything else becomes a label: strings as they are, other objects as
    ``str(key)``, so ``-1`` is stored as ``"-1"`` and ``None`` as ``"None"``.

    Args:
        key: Any object

    Returns:
        A non-negative ``int`` for array indices, a ``str`` for labels
    """
    if isinstance(key, str):
        if _INDEX_RE.fullmatch(key):
            return int(key)
        return key

    if isinstance(key, float):
        # nan and inf are not whole numbers
        if key.is_integer():
            return canonical_key(int(key))
        return str(key)

    try:
        idx = int(op_index(key))  # type: ignore[arg-type]
    except TypeError:
        return str(key)

    # Negative numbers are labels, never indices
    if idx < 0:
        return str(idx)
    return idx


def coerce_length(value: object) -> int:
    """Convert a value assigned to ``length`` to an int.

    Args:
        value: An integer or a whole float

    Returns:
        The length as a non-negative ``int``

    Raises:
        InvalidLength: If value is not a non-negative whole number
    """
    if isinstance(value, float) and value.is_integer():
        length = int(value)
    else:
        try:
            length = int(op_index(value))  # type: ignore[arg-type]
        except TypeError:
            raise InvalidLength(value) from None

    if length < 0:
        raise InvalidLength(value)
    return length


def is_index(key: Key) -> bool:
    """Return True if a canonical key is an array index."""
    return isinstance(key, int)
