"""The hook protocol every access to a sparsearray is funneled through.

Reads, writes, deletes and key enumeration all reach the container via a
:class:`Hooks` implementation, so the length invariants hold no matter which
path the caller mutates through: indexing, ``length`` assignment, or one of
the array operations.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, Protocol, TypeVar

from sparsearray.container import SparseSequence

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sparsearray._keys import Key, _Absent

T = TypeVar("T")

LENGTH_KEY = "length"

_logger = logging.getLogger(__name__)


class Hooks(Protocol[T]):
    """Interception points for a sparse array.

    Implementations are built with the initial values and own the container
    they guard.
    """

    def __init__(self, initial: Iterable[T] | None = None) -> None: ...

    @property
    def container(self) -> SparseSequence[T]: ...

    def on_read(self, key: object) -> T | _Absent | int: ...

    def on_write(self, key: object, value: object) -> None: ...

    def on_delete(self, key: object) -> None: ...

    def on_enumerate(self) -> list[Key]: ...


class ContainerHooks(Generic[T]):
    """Default hooks: route each access to the matching container rule.

    The ``length`` key is special-cased: reading it returns the length,
    writing it truncates or extends, and deleting it is ignored.
    """

    def __init__(self, initial: Iterable[T] | None = None) -> None:
        self._container: SparseSequence[T] = SparseSequence(initial)

    @property
    def container(self) -> SparseSequence[T]:
        return self._container

    def on_read(self, key: object) -> T | _Absent | int:
        if key == LENGTH_KEY:
            return self._container.length
        return self._container.read(key)

    def on_write(self, key: object, value: object) -> None:
        """Store value at key, or resize when key is ``length``.

        Raises:
            InvalidLength: If a negative or non-whole number is written to ``length``
        """
        if key == LENGTH_KEY:
            self._container.set_length(value)
        else:
            self._container.write(key, value)  # type: ignore[arg-type]

    def on_delete(self, key: object) -> None:
        if key == LENGTH_KEY:
            _logger.debug("Ignoring delete of %r", LENGTH_KEY)
            return
        self._container.delete(key)

    def on_enumerate(self) -> list[Key]:
        return self._container.ordered_keys()
