from __future__ import annotations
from typing import Any, Callable, Iterable, List, TypeVar

from toolz import compose as _compose, pipe as _pipe
from more_itertools import padded as _padded

A = TypeVar("A")

def pipe(x: A, *fns: Callable[[Any], Any]) -> Any:
    # Keep signature but delegate to toolz.pipe
    return _pipe(x, *fns) if fns else x

def compose(*fns: Callable[[Any], Any]) -> Callable[[Any], Any]:
    # toolz.compose composes right-to-left as expected
    return _compose(*fns)

def pad_to(seq: Iterable[A], n: int, fill: Callable[[], A]) -> List[A]:
    """
    Extend `seq` to length `n` with fresh values from `fill()`.
    Longer inputs are returned unchanged.
    """
    items = list(seq)
    if len(items) >= n:
        return items
    marker = object()
    return [fill() if x is marker else x for x in _padded(items, marker, n)]
