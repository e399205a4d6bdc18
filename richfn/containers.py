"""Result containers, one shape per multiplicity kind.

    SINGLE            the bare value
    OPTIONAL          Just(value) | NOTHING
    NON_EMPTY_MULTI   Stream (at least one element)
    GENERAL_MULTI     Stream (any number of elements)
    EMPTY             no container; the direction is never evaluated

OPTIONAL gets its own wrapper instead of ``None`` so that ``None`` remains
an ordinary value a mapping may produce.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Optional results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Just(Generic[T]):
    value: T


@dataclass(frozen=True)
class Nothing:
    def __repr__(self) -> str:
        return "NOTHING"


NOTHING = Nothing()

Maybe = Union[Just[T], Nothing]


# ---------------------------------------------------------------------------
# Multi-valued results
# ---------------------------------------------------------------------------


class Stream(Generic[T]):
    """A lazy, restartable, ordered sequence.

    A stream holds a factory rather than elements: every ``iter()`` call
    asks the factory for a fresh iterator, so iterating twice re-runs the
    producing evaluators and yields the same elements. Streams may be
    infinite; nothing is forced until iteration.
    """

    __slots__ = ("_factory",)

    def __init__(self, factory: Callable[[], Iterator[T]]) -> None:
        self._factory = factory

    @classmethod
    def of(cls, *values: T) -> Stream[T]:
        return cls(lambda: iter(values))

    @classmethod
    def from_iterable(cls, source: Callable[[], Iterable[T]]) -> Stream[T]:
        """Stream over whatever ``source()`` returns, re-called per iteration."""
        return cls(lambda: iter(source()))

    def __iter__(self) -> Iterator[T]:
        return self._factory()

    def take(self, n: int) -> list[T]:
        return list(itertools.islice(self, n))

    def first(self) -> Maybe[T]:
        for value in self:
            return Just(value)
        return NOTHING

    def __repr__(self) -> str:
        head = self.take(4)
        shown = ", ".join(repr(v) for v in head[:3])
        return f"Stream([{shown}{', ...' if len(head) > 3 else ''}])"


def concat_map(stream: Iterable[Any], fn: Callable[[Any], Iterable[T]]) -> Stream[T]:
    """Apply ``fn`` to every element and concatenate the results in order."""
    return Stream(lambda: itertools.chain.from_iterable(fn(x) for x in stream))


def lazy_product(factors: tuple[Iterable[Any], ...]) -> Iterator[tuple[Any, ...]]:
    """Cartesian product, first factor major, that never materializes a factor.

    ``itertools.product`` drains every input up front, which would hang on
    an infinite stream. Each factor is re-iterated from the start for every
    prefix, so the factors must be restartable.
    """
    if not factors:
        yield ()
        return
    head, rest = factors[0], factors[1:]
    for x in head:
        for tail in lazy_product(rest):
            yield (x, *tail)
