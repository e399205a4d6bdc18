"""Client mappings shared by the test modules."""

from __future__ import annotations

import itertools
from typing import Any

import pytest

from richfn import (
    NOTHING,
    Just,
    Multiplicity,
    RichFunction,
    bijection,
    many1,
    optional,
    rich,
    single,
)


def contents(kind: Multiplicity, container: Any, limit: int = 50) -> list[Any]:
    """Flatten any container into a list (at most ``limit`` elements)."""
    match kind:
        case Multiplicity.SINGLE:
            return [container]
        case Multiplicity.OPTIONAL:
            match container:
                case Just(value):
                    return [value]
                case _:
                    return []
        case _:
            return list(itertools.islice(container, limit))


@pytest.fixture
def plus5() -> RichFunction[int, int]:
    return bijection(lambda x: x + 5, lambda y: y - 5)


@pytest.fixture
def bool_not() -> RichFunction[bool, bool]:
    return bijection(lambda b: not b, lambda b: not b)


@pytest.fixture
def is_positive() -> RichFunction[int, bool]:
    """x > 0 forward; every preimage of a truth value backward."""
    return rich(
        single(lambda x: x > 0),
        many1(lambda b: itertools.count(1) if b else itertools.count(0, -1)),
    )


@pytest.fixture
def halve() -> RichFunction[int, int]:
    """Defined on even numbers only; doubling back is total."""
    return rich(
        optional(lambda x: Just(x // 2) if x % 2 == 0 else NOTHING),
        single(lambda y: y * 2),
    )
