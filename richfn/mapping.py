"""Qualified mappings: one-directional evaluators tagged with a multiplicity.

A qualified mapping m : S → K(T) pairs a kind K with an evaluator whose
results come in K's container (see ``richfn.containers``). Two mappings
compose by meeting their kinds, widening both operands to the meet, and
running the composition law of the resulting kind:

    SINGLE            g(f(s))
    OPTIONAL          NOTHING if f(s) is NOTHING, else g(f(s).value)
    NON_EMPTY_MULTI   concatenation of g(u) for every u in f(s), in order
    GENERAL_MULTI     same as NON_EMPTY_MULTI, possibly empty
    EMPTY             nothing to run; the result carries no evaluator
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import InitVar, dataclass
from types import MappingProxyType
from typing import Any, Generic, TypeVar

from .check import checked
from .config import get_settings
from .containers import NOTHING, Just, Stream, concat_map
from .errors import ConstructionError, UnsupportedDirectionError
from .multiplicity import (
    EMPTY,
    GENERAL_MULTI,
    NON_EMPTY_MULTI,
    OPTIONAL,
    SINGLE,
    Multiplicity,
    can_widen,
    meet,
)

logger = logging.getLogger(__name__)

S = TypeVar("S")
T = TypeVar("T")

Runner = Callable[[Any], Any]


@dataclass(frozen=True)
class QualifiedMapping(Generic[S, T]):
    """An evaluator S → K(T) together with its kind K.

    EMPTY mappings hold no evaluator; every other kind requires one.
    Evaluators for multi kinds may return any iterable; the evaluator is
    re-invoked each time the resulting stream is iterated.

    ``check`` controls cardinality checking of the evaluator's results;
    ``None`` follows ``RICHFN_CHECK_CARDINALITY``.
    """

    kind: Multiplicity
    evaluator: Callable[[S], Any] | None = None
    check: InitVar[bool | None] = None

    def __post_init__(self, check: bool | None) -> None:
        if self.kind is EMPTY:
            if self.evaluator is not None:
                raise ConstructionError("EMPTY mapping cannot carry an evaluator")
            return
        if self.evaluator is None:
            raise ConstructionError(f"{self.kind.name} mapping requires an evaluator")
        if not callable(self.evaluator):
            raise ConstructionError(
                f"evaluator must be callable, got {type(self.evaluator).__name__}"
            )
        settings = get_settings()
        if check is None:
            check = settings.check_cardinality
        if check:
            object.__setattr__(
                self, "evaluator", checked(self.kind, self.evaluator, settings.check_depth)
            )

    @property
    def is_supported(self) -> bool:
        return self.kind is not EMPTY

    def apply(self, value: S) -> Any:
        """Evaluate at ``value`` and return the kind's container."""
        if self.evaluator is None:
            raise UnsupportedDirectionError(
                "this direction has kind EMPTY and was never given an evaluator"
            )
        if self.kind.is_multi:
            evaluator = self.evaluator
            return Stream.from_iterable(lambda: evaluator(value))
        return self.evaluator(value)


def empty_mapping() -> QualifiedMapping[Any, Any]:
    return QualifiedMapping(EMPTY)


# ---------------------------------------------------------------------------
# Containers as functors
# ---------------------------------------------------------------------------


def map_container(kind: Multiplicity, container: Any, fn: Callable[[Any], Any]) -> Any:
    """Apply ``fn`` to every value inside a container of ``kind``."""
    match kind:
        case Multiplicity.SINGLE:
            return fn(container)
        case Multiplicity.OPTIONAL:
            match container:
                case Just(value):
                    return Just(fn(value))
                case _:
                    return NOTHING
        case Multiplicity.NON_EMPTY_MULTI | Multiplicity.GENERAL_MULTI:
            return Stream(lambda: map(fn, container))
        case Multiplicity.EMPTY:
            raise UnsupportedDirectionError("EMPTY containers hold no values")


def map_results(
    mapping: QualifiedMapping[S, Any], fn: Callable[[Any], T]
) -> QualifiedMapping[S, T]:
    """Post-compose a plain function onto every result of ``mapping``."""
    if mapping.kind is EMPTY:
        return empty_mapping()
    kind = mapping.kind
    run = mapping.apply
    return QualifiedMapping(kind, lambda s: map_container(kind, run(s), fn), check=False)


def identity_mapping(kind: Multiplicity = SINGLE) -> QualifiedMapping[Any, Any]:
    """The identity, reinterpreted at ``kind``."""
    return widen(QualifiedMapping(SINGLE, lambda x: x, check=False), kind)


# ---------------------------------------------------------------------------
# Widening
# ---------------------------------------------------------------------------


def _optional_as_stream(run: Runner) -> Runner:
    def evaluate(s: Any) -> Stream[Any]:
        def values() -> Any:
            match run(s):
                case Just(value):
                    yield value
                case _:
                    return

        return Stream(values)

    return evaluate


def widen(mapping: QualifiedMapping[S, T], target: Multiplicity) -> QualifiedMapping[S, T]:
    """Reinterpret ``mapping`` at the lower kind ``target``.

    Raises ConstructionError when no widening edge leads from the mapping's
    kind to ``target``.
    """
    source = mapping.kind
    if source is target:
        return mapping
    if not can_widen(source, target):
        logger.warning("No widening edge %s -> %s", source.name, target.name)
        raise ConstructionError(
            f"cannot widen a {source.name} mapping to {target.name}",
            source=source,
            target=target,
        )
    if target is EMPTY:
        return empty_mapping()

    run = mapping.apply
    evaluator: Runner
    match source, target:
        case (Multiplicity.SINGLE, Multiplicity.OPTIONAL):
            evaluator = lambda s: Just(run(s))  # noqa: E731
        case (Multiplicity.SINGLE, _):
            evaluator = lambda s: Stream(lambda: iter((run(s),)))  # noqa: E731
        case (Multiplicity.OPTIONAL, _):
            evaluator = _optional_as_stream(run)
        case _:
            # NON_EMPTY_MULTI -> GENERAL_MULTI: the stream already fits.
            evaluator = run
    return QualifiedMapping(target, evaluator, check=False)


# ---------------------------------------------------------------------------
# Composition laws
# ---------------------------------------------------------------------------


def _compose_single(g: Runner, f: Runner) -> Runner:
    return lambda s: g(f(s))


def _compose_optional(g: Runner, f: Runner) -> Runner:
    def run(s: Any) -> Any:
        match f(s):
            case Just(value):
                return g(value)
            case _:
                return NOTHING

    return run


def _compose_multi(g: Runner, f: Runner) -> Runner:
    return lambda s: concat_map(f(s), g)


# Indexed by the resolved kind. EMPTY has no law: nothing is ever run.
COMPOSITION_LAWS: Mapping[Multiplicity, Callable[[Runner, Runner], Runner] | None] = (
    MappingProxyType({
        SINGLE: _compose_single,
        OPTIONAL: _compose_optional,
        NON_EMPTY_MULTI: _compose_multi,
        GENERAL_MULTI: _compose_multi,
        EMPTY: None,
    })
)


def compose_mappings(
    g: QualifiedMapping[Any, T],
    f: QualifiedMapping[S, Any],
    kind: Multiplicity | None = None,
) -> QualifiedMapping[S, T]:
    """The mapping ``g ∘ f``: apply ``f`` first, then ``g``.

    The result kind is ``meet(g.kind, f.kind)`` unless ``kind`` is given,
    in which case both operands must widen to it directly.
    """
    resolved = meet(g.kind, f.kind) if kind is None else kind
    logger.debug("compose %s after %s -> %s", g.kind.name, f.kind.name, resolved.name)
    g_wide = widen(g, resolved)
    f_wide = widen(f, resolved)
    law = COMPOSITION_LAWS[resolved]
    if law is None:
        return empty_mapping()
    return QualifiedMapping(resolved, law(g_wide.apply, f_wide.apply), check=False)
