"""Lifting several rich functions into one over tuples or tagged unions.

Product lift. Given f₁ : S₁ ⇄ T₁, ..., fₙ : Sₙ ⇄ Tₙ, build

    f₁ × ... × fₙ : (S₁, ..., Sₙ) ⇄ (T₁, ..., Tₙ)

whose kinds are the meets of the component kinds. Each coordinate is
evaluated on its own and the containers are combined by the kind's law:
SINGLE builds one tuple, OPTIONAL builds a tuple only when every
coordinate has a value, the multi kinds take the Cartesian product (first
coordinate major).

Sum lift. Given alternatives tagged a₁, ..., aₙ, build

    f₁ + ... + fₙ : Variant(aᵢ, Sᵢ) ⇄ Variant(bᵢ, Tᵢ)

Forward dispatches on the domain tag and runs only that alternative.
Backward runs every alternative whose codomain tag bᵢ matches and
concatenates their preimages. When several alternatives share a codomain
tag the backward kind is narrowed to at most NON_EMPTY_MULTI, since an
ambiguous preimage can never be proven unique.
"""

from __future__ import annotations

import itertools
import logging
from collections import Counter, defaultdict
from collections.abc import Hashable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .containers import NOTHING, Just, Stream, lazy_product
from .errors import ConstructionError
from .mapping import QualifiedMapping, empty_mapping, map_results, widen
from .multiplicity import EMPTY, NON_EMPTY_MULTI, Multiplicity, meet, meet_all
from .rich import RichFunction

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------


def _product_mapping(
    mappings: Sequence[QualifiedMapping[Any, Any]], kind: Multiplicity
) -> QualifiedMapping[Any, Any]:
    if kind is EMPTY:
        return empty_mapping()
    runs = tuple(m.apply for m in mappings)
    arity = len(runs)

    def evaluate(values: Sequence[Any]) -> Any:
        if len(values) != arity:
            raise ValueError(f"expected a {arity}-tuple, got {len(values)} values")
        match kind:
            case Multiplicity.SINGLE:
                return tuple(run(v) for run, v in zip(runs, values, strict=True))
            case Multiplicity.OPTIONAL:
                parts = []
                for run, v in zip(runs, values, strict=True):
                    match run(v):
                        case Just(value):
                            parts.append(value)
                        case _:
                            return NOTHING
                return Just(tuple(parts))
            case _:
                factors = tuple(run(v) for run, v in zip(runs, values, strict=True))
                return Stream(lambda: lazy_product(factors))

    return QualifiedMapping(kind, evaluate, check=False)


def product_lift(*components: RichFunction[Any, Any]) -> RichFunction[tuple[Any, ...], tuple[Any, ...]]:
    """One rich function over the tuples of the components' domains and codomains.

    Every component is widened to the folded kind before combination, so a
    missing widening edge raises ConstructionError here.
    """
    to_kind = meet_all(c.to_kind for c in components)
    from_kind = meet_all(c.from_kind for c in components)
    logger.debug(
        "product_lift of %d components -> (%s/%s)",
        len(components), to_kind.name, from_kind.name,
    )
    return RichFunction(
        to=_product_mapping([widen(c.to, to_kind) for c in components], to_kind),
        from_=_product_mapping([widen(c.from_, from_kind) for c in components], from_kind),
    )


# ---------------------------------------------------------------------------
# Sum
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Variant(Generic[T]):
    """A value of a tagged union: ``value`` injected under ``tag``."""

    tag: Hashable
    value: T


@dataclass(frozen=True)
class Alt:
    """An alternative of a sum lift.

    ``codomain_tag`` defaults to ``tag``. Alternatives may share a codomain
    tag; domain tags must be unique.
    """

    tag: Hashable
    function: RichFunction[Any, Any]
    codomain_tag: Hashable | None = None

    @property
    def target_tag(self) -> Hashable:
        return self.tag if self.codomain_tag is None else self.codomain_tag


def _as_alts(alternatives: Sequence[RichFunction[Any, Any] | Alt]) -> tuple[Alt, ...]:
    alts = tuple(
        a if isinstance(a, Alt) else Alt(tag=i, function=a)
        for i, a in enumerate(alternatives)
    )
    duplicates = [tag for tag, n in Counter(a.tag for a in alts).items() if n > 1]
    if duplicates:
        raise ConstructionError(f"duplicate sum alternative tags: {duplicates!r}")
    return alts


def _tagged(mapping: QualifiedMapping[Any, Any], tag: Hashable) -> QualifiedMapping[Any, Any]:
    return map_results(mapping, lambda v: Variant(tag, v))


def _lookup(table: dict[Hashable, Any], variant: Variant[Any]) -> Any:
    if not isinstance(variant, Variant):
        raise ValueError(f"expected a Variant, got {type(variant).__name__}")
    try:
        return table[variant.tag]
    except KeyError:
        raise ValueError(f"unknown variant tag {variant.tag!r}") from None


def _sum_forward(alts: tuple[Alt, ...], kind: Multiplicity) -> QualifiedMapping[Any, Any]:
    if kind is EMPTY:
        return empty_mapping()
    by_tag = {
        alt.tag: _tagged(widen(alt.function.to, kind), alt.target_tag).apply
        for alt in alts
    }

    def evaluate(variant: Variant[Any]) -> Any:
        return _lookup(by_tag, variant)(variant.value)

    return QualifiedMapping(kind, evaluate, check=False)


def _sum_backward(alts: tuple[Alt, ...], kind: Multiplicity) -> QualifiedMapping[Any, Any]:
    if kind is EMPTY:
        return empty_mapping()
    by_tag: dict[Hashable, list[Any]] = defaultdict(list)
    for alt in alts:
        by_tag[alt.target_tag].append(_tagged(widen(alt.function.from_, kind), alt.tag).apply)
    candidates_for = dict(by_tag)

    def evaluate(variant: Variant[Any]) -> Any:
        runs = _lookup(candidates_for, variant)
        if kind.is_multi:
            return Stream(
                lambda: itertools.chain.from_iterable(run(variant.value) for run in runs)
            )
        # SINGLE and OPTIONAL backward kinds imply an unshared codomain tag.
        (run,) = runs
        return run(variant.value)

    return QualifiedMapping(kind, evaluate, check=False)


def sum_lift(*alternatives: RichFunction[Any, Any] | Alt) -> RichFunction[Variant[Any], Variant[Any]]:
    """One rich function over tagged unions of the alternatives.

    Plain rich functions are tagged by position; use ``Alt`` for explicit
    tags. Raises ConstructionError on duplicate domain tags or a missing
    widening edge.
    """
    alts = _as_alts(alternatives)
    to_kind = meet_all(a.function.to_kind for a in alts)
    from_kind = meet_all(a.function.from_kind for a in alts)
    shared = [t for t, n in Counter(a.target_tag for a in alts).items() if n > 1]
    if shared:
        from_kind = meet(from_kind, NON_EMPTY_MULTI)
    logger.debug(
        "sum_lift of %d alternatives (shared codomain tags: %r) -> (%s/%s)",
        len(alts), shared, to_kind.name, from_kind.name,
    )
    return RichFunction(to=_sum_forward(alts, to_kind), from_=_sum_backward(alts, from_kind))
