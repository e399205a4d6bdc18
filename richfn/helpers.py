"""Builder helpers for constructing qualified mappings and rich functions.

These are the primary public API for writing client mappings; they save
spelling out ``QualifiedMapping(Multiplicity.SINGLE, ...)`` by hand.
"""

from collections.abc import Callable, Iterable
from typing import Any

from richfn.containers import Maybe
from richfn.mapping import QualifiedMapping, empty_mapping
from richfn.multiplicity import Multiplicity
from richfn.rich import RichFunction


def single(evaluator: Callable[[Any], Any]) -> QualifiedMapping[Any, Any]:
    return QualifiedMapping(Multiplicity.SINGLE, evaluator)


def optional(evaluator: Callable[[Any], Maybe[Any]]) -> QualifiedMapping[Any, Any]:
    return QualifiedMapping(Multiplicity.OPTIONAL, evaluator)


def many1(evaluator: Callable[[Any], Iterable[Any]]) -> QualifiedMapping[Any, Any]:
    """One or more results per input."""
    return QualifiedMapping(Multiplicity.NON_EMPTY_MULTI, evaluator)


def many(evaluator: Callable[[Any], Iterable[Any]]) -> QualifiedMapping[Any, Any]:
    """Zero or more results per input."""
    return QualifiedMapping(Multiplicity.GENERAL_MULTI, evaluator)


def unsupported() -> QualifiedMapping[Any, Any]:
    return empty_mapping()


def rich(to: QualifiedMapping[Any, Any], from_: QualifiedMapping[Any, Any]) -> RichFunction[Any, Any]:
    return RichFunction(to=to, from_=from_)


def bijection(
    forward: Callable[[Any], Any], backward: Callable[[Any], Any]
) -> RichFunction[Any, Any]:
    """A SINGLE/SINGLE rich function; ``backward`` must invert ``forward``."""
    return RichFunction(to=single(forward), from_=single(backward))


def one_way(forward: QualifiedMapping[Any, Any]) -> RichFunction[Any, Any]:
    """A rich function with no backward direction."""
    return RichFunction(to=forward, from_=empty_mapping())
