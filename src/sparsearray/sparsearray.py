from __future__ import annotations

from operator import index as op_index
from typing import TYPE_CHECKING, Generic, TypeVar

from sparsearray._keys import ABSENT
from sparsearray.hooks import LENGTH_KEY, ContainerHooks, Hooks

if TYPE_CHECKING:
    import sys
    from collections.abc import Callable, Iterable, Iterator
    from typing import Any, SupportsIndex

    from sparsearray._keys import Key, _Absent

    if sys.version_info < (3, 11):
        from typing_extensions import Self
    else:
        from typing import Self

T = TypeVar("T")


class sparsearray(Generic[T]):  # noqa: N801
    """A sparse array with native array length semantics.

    Every access goes through the hooks object built from ``hooks_class``:
    indexing, ``length`` assignment, enumeration and all of the array
    operations below.
    """

    hooks_class: type[Hooks[Any]] = ContainerHooks

    def __init__(self, initial: Iterable[T] | None = None) -> None:
        """Initialize a sparsearray.

        Args:
            initial: Values to place at indices 0, 1, 2, etc. (optional,
                defaults to empty)
        """
        self._hooks = self.hooks_class(initial)

    @property
    def length(self) -> int:
        """Get or set the array length.

        :getter: Returns one past the highest kept index.
        :setter: Truncates or extends the array. Truncation removes all
            values at indices >= new length; extension adds holes.

        Raises:
            InvalidLength: If value is negative or not a whole number
                (when setting)
        """
        return self._hooks.on_read(LENGTH_KEY)  # type: ignore[return-value]

    @length.setter
    def length(self, new_length: SupportsIndex | float) -> None:
        """Set the array length. See getter for full documentation."""
        self._hooks.on_write(LENGTH_KEY, new_length)

    @property
    def ordered_keys(self) -> list[Key]:
        """Occupied indices in ascending order followed by labels in sorted order."""
        return self._hooks.on_enumerate()

    def keys(self) -> list[Key]:
        """Return the enumerable keys. Same as :attr:`ordered_keys`."""
        return self._hooks.on_enumerate()

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get(self, key: object) -> T | _Absent:
        """Return the value at key, or ``ABSENT`` if nothing is stored there."""
        return self._hooks.on_read(key)  # type: ignore[return-value]

    def set(self, key: object, value: T) -> None:
        """Store value at key. Writing ``length`` resizes the array."""
        self._hooks.on_write(key, value)

    def delete(self, key: object) -> None:
        """Delete key. Indices become holes, labels are removed."""
        self._hooks.on_delete(key)

    def __getitem__(self, key: object) -> T | _Absent:
        """Return the value at key, or ``ABSENT``. Same as :meth:`get`."""
        return self._hooks.on_read(key)  # type: ignore[return-value]

    def __setitem__(self, key: object, value: T) -> None:
        """Store value at key. Same as :meth:`set`."""
        self._hooks.on_write(key, value)

    def __delitem__(self, key: object) -> None:
        """Delete key. Same as :meth:`delete`."""
        self._hooks.on_delete(key)

    # ------------------------------------------------------------------
    # Stack and queue operations
    # ------------------------------------------------------------------

    def push(self, *values: T) -> int:
        """Append values to the end.

        Returns:
            The new length
        """
        for value in values:
            self.set(self.length, value)
        return self.length

    def pop(self) -> T | _Absent:
        """Remove and return the last slot.

        Returns:
            The value at ``length - 1`` (``ABSENT`` for a hole or an empty array)
        """
        length = self.length
        if length == 0:
            return ABSENT

        value = self.get(length - 1)
        self.length = length - 1
        return value

    def unshift(self, *values: T) -> int:
        """Insert values at the front, moving existing slots up.

        Returns:
            The new length
        """
        count = len(values)
        if count == 0:
            return self.length

        # Move from the top down so no slot is overwritten before it is read
        for i in range(self.length - 1, -1, -1):
            self.set(i + count, self.get(i))

        for i, value in enumerate(values):
            self.set(i, value)
        return self.length

    def shift(self) -> T | _Absent:
        """Remove and return the first slot, moving the rest down.

        Returns:
            The value at index 0 (``ABSENT`` for a hole or an empty array)
        """
        length = self.length
        if length == 0:
            return ABSENT

        value = self.get(0)
        for i in range(1, length):
            self.set(i - 1, self.get(i))
        self.length = length - 1
        return value

    # ------------------------------------------------------------------
    # Copying operations
    # ------------------------------------------------------------------

    def slice(self, start: SupportsIndex = 0, end: SupportsIndex | None = None) -> sparsearray[T]:
        """Return a new sparsearray over ``[start, end)``.

        Args:
            start: First index (negative counts from the end)
            end: Stop index (default ``length``). Values below 1 count from
                the end, so ``-1`` drops the last slot.

        Returns:
            New sparsearray; holes in the range stay holes
        """
        length = self.length

        start_int = op_index(start)
        start_int = max(0, length + start_int) if start_int < 0 else min(start_int, length)

        if end is None:
            end_int = length
        else:
            end_int = op_index(end)
            end_int = max(0, length + end_int) if end_int < 1 else min(end_int, length)

        result: sparsearray[T] = self.__class__()
        for i in range(start_int, end_int):
            result.set(i - start_int, self.get(i))  # type: ignore[arg-type]
        return result

    def concat(self, *others: Iterable[T]) -> sparsearray[T]:
        """Return a new sparsearray with the values of self followed by those of others."""
        result: sparsearray[T] = self.__class__()
        result.extend(self)
        for other in others:
            result.extend(other)
        return result

    def extend(self, iterable: Iterable[T]) -> None:
        """Push every value of iterable onto the end."""
        # Snapshot first: iterating self while pushing would never end
        for value in list(iterable):
            self.push(value)

    def copy(self) -> sparsearray[T]:
        """Return a shallow copy with the same slots, holes and labels."""
        result: sparsearray[T] = self.__class__()
        for key in self.keys():
            result.set(key, self.get(key))  # type: ignore[arg-type]
        result.length = self.length
        return result

    def __copy__(self) -> sparsearray[T]:
        """Return a shallow copy. Same as :meth:`copy`."""
        return self.copy()

    def clear(self) -> None:
        """Remove every slot and label."""
        for key in self.keys():
            if isinstance(key, str):
                self.delete(key)
        self.length = 0

    def to_list(self) -> list[T]:
        """Return the occupied values in index order as a dense list."""
        return [self.get(k) for k in self.keys() if isinstance(k, int)]  # type: ignore[misc]

    # ------------------------------------------------------------------
    # Callback operations
    # ------------------------------------------------------------------

    def _present(self) -> Iterator[tuple[int, T]]:
        """Yield ``(index, value)`` for the occupied slots below the current length."""
        for i in range(self.length):
            value = self.get(i)
            if value is not ABSENT:
                yield i, value  # type: ignore[misc]

    def map(self, fn: Callable[[T | _Absent], Any]) -> sparsearray[Any]:
        """Return a new sparsearray of ``fn(value)`` for every slot.

        Note:
            Unlike the other callback operations, holes are visited too:
            ``fn`` receives ``ABSENT`` for them.
        """
        result: sparsearray[Any] = self.__class__()
        for i in range(self.length):
            result.set(i, fn(self.get(i)))
        return result

    def filter(self, fn: Callable[[T], object]) -> sparsearray[T]:
        """Return a new dense sparsearray of the values for which ``fn`` is true."""
        result: sparsearray[T] = self.__class__()
        for _, value in self._present():
            if fn(value):
                result.push(value)
        return result

    def for_each(self, fn: Callable[[T], object]) -> None:
        """Call ``fn`` on every occupied value in index order."""
        for _, value in self._present():
            fn(value)

    def find(self, fn: Callable[[T], object]) -> T | _Absent:
        """Return the first value for which ``fn`` is true, or ``ABSENT``."""
        for _, value in self._present():
            if fn(value):
                return value
        return ABSENT

    def find_index(self, fn: Callable[[T], object]) -> int:
        """Return the index of the first value for which ``fn`` is true, or -1."""
        for i, value in self._present():
            if fn(value):
                return i
        return -1

    def every(self, fn: Callable[[T], object]) -> bool:
        """Return True if ``fn`` is true for every occupied value.

        Holes are skipped, so an array of only holes returns True.
        """
        return all(fn(value) for _, value in self._present())

    def some(self, fn: Callable[[T], object]) -> bool:
        """Return True if ``fn`` is true for at least one occupied value."""
        return any(fn(value) for _, value in self._present())

    # ------------------------------------------------------------------
    # Search and reordering
    # ------------------------------------------------------------------

    def includes(self, value: object) -> bool:
        """Return True if any enumerable key holds value."""
        return self.index_of(value) != -1

    def index_of(self, value: object) -> Key:
        """Return the first enumerable key holding value, or -1.

        Indices are scanned before labels, so a label is only returned when
        no index holds the value.
        """
        for key in self.keys():
            found = self.get(key)
            if found is value or found == value:
                return key
        return -1

    def reverse(self) -> Self:
        """Reverse the slots in place. Holes move like values."""
        length = self.length
        for i in range(length // 2):
            j = length - 1 - i
            left, right = self.get(i), self.get(j)
            self.set(i, right)  # type: ignore[arg-type]
            self.set(j, left)  # type: ignore[arg-type]
        return self

    # ------------------------------------------------------------------
    # Python protocols
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        """Return the array length, holes included."""
        return self.length

    def __iter__(self) -> Iterator[T | _Absent]:
        """Return an iterator over the slot values.

        Each step re-reads the current length and slot, so changes made
        while iterating are seen. Holes yield ``ABSENT``.
        """
        i = 0
        while i < self.length:
            yield self.get(i)
            i += 1

    def __contains__(self, value: object) -> bool:
        """Return True if any enumerable key holds value. Same as :meth:`includes`."""
        return self.includes(value)

    def __eq__(self, other: object) -> bool:
        """Return True if self equals other.

        Two sparsearrays are equal when their lengths, enumerable keys and
        values match. Any other iterable is compared slot by slot.
        """
        if self is other:
            return True

        if isinstance(other, sparsearray):
            if self.length != other.length:
                return False
            keys = self.keys()
            if keys != other.keys():
                return False
            return all(self.get(k) == other.get(k) for k in keys)

        if not hasattr(other, "__iter__"):
            return NotImplemented

        if hasattr(other, "__len__"):
            try:
                if self.length != len(other):  # type: ignore[arg-type]
                    return False
            except TypeError:
                pass  # Some iterables don't support len()

        other_iter = iter(other)  # type: ignore[call-overload]
        for value in self:
            try:
                other_value = next(other_iter)
            except StopIteration:
                return False
            if value != other_value:
                return False

        try:
            next(other_iter)
            return False
        except StopIteration:
            return True

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        """Render the slots as ``[ v0, v1, ... ]`` with strings double-quoted."""
        parts = [f'"{value}"' if isinstance(value, str) else str(value) for value in self]
        if not parts:
            return "[ ]"
        return f"[ {', '.join(parts)} ]"

    def __repr__(self) -> str:
        """Return a string representation of the sparsearray.

        Format: *<length>[idx: val, ..., idx: val] {label: val}*

        - Uses ... for runs of holes
        - The label mapping is omitted when there are no labels
        """
        length = self.length
        keys = self.keys()
        indices = [k for k in keys if isinstance(k, int)]
        labels = [k for k in keys if isinstance(k, str)]

        def parts_gen() -> Iterator[str]:
            expected = 0
            for idx in indices:
                if idx > expected:
                    yield "..."
                yield f"{idx}: {self.get(idx)!r}"
                expected = idx + 1
            if expected < length:
                yield "..."

        text = f"<{length}>[{', '.join(parts_gen())}]"
        if labels:
            text += " {" + ", ".join(f"{k!r}: {self.get(k)!r}" for k in labels) + "}"
        return text
