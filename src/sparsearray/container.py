from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar

from sparsearray._keys import ABSENT, canonical_key, coerce_length, is_index

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from typing import Any

    from sparsearray._keys import Key, _Absent

T = TypeVar("T")

_logger = logging.getLogger(__name__)


class SparseSequence(Generic[T]):
    """Entry storage and the ``length`` bookkeeping of a sparse array.

    Entries map canonical keys (non-negative ``int`` indices or ``str``
    labels) to values. A deleted index keeps its slot with the ``ABSENT``
    marker stored in it; it still counts toward ``length`` but is never
    enumerated.

    Invariants kept by every mutation:

    - writing index ``k`` makes ``length`` at least ``k + 1``
    - assigning a smaller ``length`` drops every index at or past it
    - deleting an index leaves a hole and keeps ``length``
    - deleting a label removes it and never touches ``length``
    """

    _entries: dict[Key, T | _Absent]
    _length: int

    def __init__(self, initial: Iterable[T] | None = None) -> None:
        """Initialize an empty container or seed it from an iterable.

        Args:
            initial: Values to place at indices 0, 1, 2, etc. (optional)
        """
        self._entries = {}
        self._length = 0

        if initial is not None:
            count = 0
            for i, value in enumerate(initial):
                self._entries[i] = value
                count = i + 1
            self._length = count

    @property
    def length(self) -> int:
        """The array length: one past the highest index ever kept."""
        return self._length

    def read(self, key: object) -> T | _Absent:
        """Return the value stored at key, or ``ABSENT``."""
        return self._entries.get(canonical_key(key), ABSENT)

    def write(self, key: object, value: T | _Absent) -> None:
        """Store value at key, growing ``length`` for indices.

        Writing ``ABSENT`` to an index leaves a hole there; writing it to a
        label removes the label.
        """
        k = canonical_key(key)

        if is_index(k):
            self._entries[k] = value
            if k + 1 > self._length:  # type: ignore[operator]
                self._length = k + 1  # type: ignore[operator]
        elif value is ABSENT:
            self._entries.pop(k, None)
        else:
            self._entries[k] = value

    def delete(self, key: object) -> None:
        """Delete key: indices become holes, labels are removed."""
        k = canonical_key(key)

        if is_index(k):
            # Never-written slots are already holes
            if k in self._entries:
                self._entries[k] = ABSENT
        else:
            self._entries.pop(k, None)

    def set_length(self, new_length: object) -> None:
        """Assign ``length``, truncating indices at or past the new value.

        Args:
            new_length: The new length, an integer or a whole float

        Raises:
            InvalidLength: If new_length is negative or not a whole number
        """
        new_length = coerce_length(new_length)

        if new_length < self._length:
            doomed = [k for k in self._entries if is_index(k) and k >= new_length]  # type: ignore[operator]
            for k in doomed:
                del self._entries[k]
            if doomed:
                _logger.debug("Truncated %d entries from length %d to %d", len(doomed), self._length, new_length)

        self._length = new_length

    def ordered_keys(self) -> list[Key]:
        """Return the enumerable keys: occupied indices ascending, then labels sorted."""
        return [*(k for k, _ in self.occupied()), *(k for k, _ in self.labels())]

    def occupied(self) -> Iterator[tuple[int, T]]:
        """Yield ``(index, value)`` for every occupied index in ascending order."""
        items = [(k, v) for k, v in self._entries.items() if is_index(k) and v is not ABSENT]
        items.sort(key=lambda kv: kv[0])  # type: ignore[arg-type, return-value]
        yield from items  # type: ignore[misc]

    def labels(self) -> Iterator[tuple[str, T]]:
        """Yield ``(label, value)`` for every label in lexicographic order.

        Labels never hold ``ABSENT``: writing it removes the label.
        """
        items = [(k, v) for k, v in self._entries.items() if not is_index(k)]
        items.sort(key=lambda kv: kv[0])  # type: ignore[arg-type, return-value]
        yield from items  # type: ignore[misc]

    def __getstate__(self) -> dict[str, Any]:
        """Return state for pickling."""
        return {"entries": self._entries, "length": self._length}

    def __setstate__(self, state: dict[str, Any]) -> None:
        """Restore state from pickling."""
        self._entries = state["entries"]
        self._length = state["length"]
