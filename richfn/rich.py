"""Rich functions: a forward and a backward qualified mapping.

A rich function f : S ⇄ T is a pair

    to    : S → K_to(T)
    from_ : T → K_from(S)

Composition runs the forward halves in order and the backward halves in
reverse, so for g ∘ f:

    (g ∘ f).to    = g.to ∘ f.to          kind meet(g.to_kind,   f.to_kind)
    (g ∘ f).from_ = f.from_ ∘ g.from_    kind meet(g.from_kind, f.from_kind)

Kinds only ever move down the lattice. Every widening is resolved when the
composite is built, so an impossible composite fails at ``compose`` and
never during evaluation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .errors import ConstructionError
from .mapping import QualifiedMapping, compose_mappings, identity_mapping, widen
from .multiplicity import SINGLE, Multiplicity
from .result import Err, Ok, Result

logger = logging.getLogger(__name__)

S = TypeVar("S")
T = TypeVar("T")


@dataclass(frozen=True)
class RichFunction(Generic[S, T]):
    to: QualifiedMapping[S, T]
    from_: QualifiedMapping[T, S]

    @property
    def to_kind(self) -> Multiplicity:
        return self.to.kind

    @property
    def from_kind(self) -> Multiplicity:
        return self.from_.kind

    @property
    def kinds(self) -> tuple[Multiplicity, Multiplicity]:
        return (self.to.kind, self.from_.kind)

    def widen(
        self,
        to_kind: Multiplicity | None = None,
        from_kind: Multiplicity | None = None,
    ) -> RichFunction[S, T]:
        """Reinterpret either direction at a lower kind."""
        return RichFunction(
            to=self.to if to_kind is None else widen(self.to, to_kind),
            from_=self.from_ if from_kind is None else widen(self.from_, from_kind),
        )


def apply_to(rf: RichFunction[S, T], value: S) -> Any:
    """Run the forward direction; the result is a ``rf.to_kind`` container."""
    return rf.to.apply(value)


def apply_from(rf: RichFunction[S, T], value: T) -> Any:
    """Run the backward direction; the result is a ``rf.from_kind`` container."""
    return rf.from_.apply(value)


def compose(
    g: RichFunction[Any, T],
    f: RichFunction[S, Any],
    *,
    to_kind: Multiplicity | None = None,
    from_kind: Multiplicity | None = None,
) -> RichFunction[S, T]:
    """The rich function ``g ∘ f``.

    Resulting kinds are the meets of the operands' kinds. Passing
    ``to_kind`` or ``from_kind`` pins a direction to an explicit kind
    instead; both operands must then widen to it along a direct edge.

    Raises ConstructionError when a required widening edge is missing.
    """
    to = compose_mappings(g.to, f.to, to_kind)
    from_ = compose_mappings(f.from_, g.from_, from_kind)
    logger.debug(
        "compose (%s/%s) after (%s/%s) -> (%s/%s)",
        g.to_kind.name, g.from_kind.name,
        f.to_kind.name, f.from_kind.name,
        to.kind.name, from_.kind.name,
    )
    return RichFunction(to=to, from_=from_)


def try_compose(
    g: RichFunction[Any, T],
    f: RichFunction[S, Any],
    *,
    to_kind: Multiplicity | None = None,
    from_kind: Multiplicity | None = None,
) -> Result[RichFunction[S, T], ConstructionError]:
    """Like ``compose`` but returns ``Err`` instead of raising."""
    try:
        return Ok(compose(g, f, to_kind=to_kind, from_kind=from_kind))
    except ConstructionError as e:
        return Err(e)


def compose_all(*functions: RichFunction[Any, Any]) -> RichFunction[Any, Any]:
    """Right-to-left composition: ``compose_all(h, g, f)`` is h ∘ g ∘ f.

    With no arguments this is the identity.
    """
    if not functions:
        return identity()
    result = functions[-1]
    for outer in reversed(functions[:-1]):
        result = compose(outer, result)
    return result


def inverse(rf: RichFunction[S, T]) -> RichFunction[T, S]:
    """Swap the two directions."""
    return RichFunction(to=rf.from_, from_=rf.to)


def identity() -> RichFunction[Any, Any]:
    """The SINGLE/SINGLE identity; a unit for ``compose``."""
    return RichFunction(to=identity_mapping(SINGLE), from_=identity_mapping(SINGLE))
