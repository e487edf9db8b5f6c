"""Utility functions."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

_T = TypeVar("_T")


def chunk_list(items: Sequence[_T], size: int) -> Iterator[list[_T]]:
    """Split a sequence into consecutive lists of at most ``size`` items.

    Args:
        items: Sequence to split.
        size: Maximum length of each chunk.

    Raises:
        ValueError: ``size`` is less than 1.

    """
    if size < 1:
        raise ValueError(f"chunk size must be >= 1, got {size}")
    for index in range(0, len(items), size):
        yield list(items[index : index + size])
