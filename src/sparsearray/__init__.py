"""A sparse array that keeps ``length`` consistent the way native arrays do.

See README.md for complete documentation and usage examples.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from sparsearray._keys import ABSENT
from sparsearray.container import SparseSequence
from sparsearray.exceptions import InvalidLength
from sparsearray.hooks import ContainerHooks, Hooks
from sparsearray.sparsearray import sparsearray

if TYPE_CHECKING:
    from collections.abc import Iterable

T = TypeVar("T")


def create(initial: Iterable[T] | None = None) -> sparsearray[T]:
    """Return a new sparsearray, empty or seeded with the values of initial."""
    return sparsearray(initial)


__all__ = [
    "ABSENT",
    "ContainerHooks",
    "Hooks",
    "InvalidLength",
    "SparseSequence",
    "create",
    "sparsearray",
]
