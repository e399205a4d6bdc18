"""The multiplicity lattice.

A multiplicity kind records how many results a mapping yields per input:

    SINGLE            exactly one            (total function)
    OPTIONAL          zero or one            (partial function)
    NON_EMPTY_MULTI   one or more
    GENERAL_MULTI     zero or more
    EMPTY             no evaluator at all    (unsupported direction)

The kinds are ordered by how much they promise:

                 SINGLE
                /      \\
         OPTIONAL    NON_EMPTY_MULTI
                \\      /
              GENERAL_MULTI
                    |
                  EMPTY

Composing two mappings yields the meet (greatest lower bound) of their
kinds. Widening moves a mapping down one edge of the diagram without
losing information.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType


class Multiplicity(Enum):
    SINGLE = "single"
    OPTIONAL = "optional"
    NON_EMPTY_MULTI = "non_empty_multi"
    GENERAL_MULTI = "general_multi"
    EMPTY = "empty"

    @classmethod
    def parse(cls, text: str) -> Multiplicity:
        """Look up a kind by value or name, e.g. ``non-empty-multi``."""
        key = text.strip().lower().replace("-", "_")
        for kind in cls:
            if kind.value == key:
                return kind
        raise ValueError(f"Unknown multiplicity kind: {text!r}")

    @property
    def is_multi(self) -> bool:
        return self in (Multiplicity.NON_EMPTY_MULTI, Multiplicity.GENERAL_MULTI)


SINGLE = Multiplicity.SINGLE
OPTIONAL = Multiplicity.OPTIONAL
NON_EMPTY_MULTI = Multiplicity.NON_EMPTY_MULTI
GENERAL_MULTI = Multiplicity.GENERAL_MULTI
EMPTY = Multiplicity.EMPTY


# ---------------------------------------------------------------------------
# Meet table
# ---------------------------------------------------------------------------

# Every pair is spelled out, including the EMPTY row and column, so that no
# entry is left to a default.
_MEET: Mapping[tuple[Multiplicity, Multiplicity], Multiplicity] = MappingProxyType({
    (SINGLE, SINGLE): SINGLE,
    (SINGLE, OPTIONAL): OPTIONAL,
    (SINGLE, NON_EMPTY_MULTI): NON_EMPTY_MULTI,
    (SINGLE, GENERAL_MULTI): GENERAL_MULTI,
    (SINGLE, EMPTY): EMPTY,

    (OPTIONAL, SINGLE): OPTIONAL,
    (OPTIONAL, OPTIONAL): OPTIONAL,
    (OPTIONAL, NON_EMPTY_MULTI): GENERAL_MULTI,
    (OPTIONAL, GENERAL_MULTI): GENERAL_MULTI,
    (OPTIONAL, EMPTY): EMPTY,

    (NON_EMPTY_MULTI, SINGLE): NON_EMPTY_MULTI,
    (NON_EMPTY_MULTI, OPTIONAL): GENERAL_MULTI,
    (NON_EMPTY_MULTI, NON_EMPTY_MULTI): NON_EMPTY_MULTI,
    (NON_EMPTY_MULTI, GENERAL_MULTI): GENERAL_MULTI,
    (NON_EMPTY_MULTI, EMPTY): EMPTY,

    (GENERAL_MULTI, SINGLE): GENERAL_MULTI,
    (GENERAL_MULTI, OPTIONAL): GENERAL_MULTI,
    (GENERAL_MULTI, NON_EMPTY_MULTI): GENERAL_MULTI,
    (GENERAL_MULTI, GENERAL_MULTI): GENERAL_MULTI,
    (GENERAL_MULTI, EMPTY): EMPTY,

    (EMPTY, SINGLE): EMPTY,
    (EMPTY, OPTIONAL): EMPTY,
    (EMPTY, NON_EMPTY_MULTI): EMPTY,
    (EMPTY, GENERAL_MULTI): EMPTY,
    (EMPTY, EMPTY): EMPTY,
})


def meet(a: Multiplicity, b: Multiplicity) -> Multiplicity:
    """Greatest lower bound of two kinds."""
    return _MEET[(a, b)]


def meet_all(kinds: Iterable[Multiplicity]) -> Multiplicity:
    """Fold ``meet`` over ``kinds``; the empty fold is SINGLE."""
    result = SINGLE
    for kind in kinds:
        result = meet(result, kind)
    return result


def leq(a: Multiplicity, b: Multiplicity) -> bool:
    """True when ``a`` sits at or below ``b`` in the order."""
    return meet(a, b) == a


# ---------------------------------------------------------------------------
# Widening edges
# ---------------------------------------------------------------------------

_WIDENS_TO: Mapping[Multiplicity, frozenset[Multiplicity]] = MappingProxyType({
    SINGLE: frozenset(Multiplicity),
    OPTIONAL: frozenset({OPTIONAL, GENERAL_MULTI, EMPTY}),
    NON_EMPTY_MULTI: frozenset({NON_EMPTY_MULTI, GENERAL_MULTI, EMPTY}),
    GENERAL_MULTI: frozenset({GENERAL_MULTI, EMPTY}),
    EMPTY: frozenset({EMPTY}),
})


def can_widen(source: Multiplicity, target: Multiplicity) -> bool:
    """Whether a ``source`` mapping can be reinterpreted at ``target``.

    Dropping the evaluator (widening into EMPTY) is always allowed.
    """
    return target in _WIDENS_TO[source]


def widening_targets(source: Multiplicity) -> tuple[Multiplicity, ...]:
    """Legal widening targets of ``source``, in declaration order."""
    return tuple(k for k in Multiplicity if k in _WIDENS_TO[source])
