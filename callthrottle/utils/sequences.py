"""Small list and string helpers."""

from __future__ import annotations

import random
from collections.abc import Sequence
from itertools import groupby
from typing import Any, TypeVar

T = TypeVar("T")


def randomize(items: list[T]) -> list[T]:
    """Shuffle ``items`` in place and return it for convenience."""
    random.shuffle(items)
    return items


def safe_randomize(items: Sequence[T]) -> list[T]:
    """Return a shuffled shallow copy; the items themselves are shared."""
    return randomize(list(items))


def split(text: str, separator: str, limit: int) -> list[str]:
    """Split ``text`` into at most ``limit`` pieces.

    The last piece carries the unsplit remainder, so
    ``split("a:b:c", ":", 2) == ["a", "b:c"]``. A ``limit`` of 1 or less
    returns ``[text]``.
    """
    if not separator:
        raise ValueError("separator must be a non-empty string")
    return text.split(separator, max(limit - 1, 0))


def group(items: Sequence[Any]) -> list[list[Any]]:
    """Group consecutive equal items into runs.

    ``group([1, 1, 2, 1]) == [[1, 1], [2], [1]]``. Inputs shorter than two
    items come back as a single run, so ``group([]) == [[]]``.
    """
    if len(items) < 2:
        return [list(items)]
    return [list(run) for _, run in groupby(items)]
