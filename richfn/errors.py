"""Errors raised by richfn."""

from __future__ import annotations

from .multiplicity import Multiplicity


class RichFunctionError(Exception):
    """Base class for every richfn error."""


class ConstructionError(RichFunctionError):
    """A mapping could not be built.

    Raised by ``widen``, ``compose``, ``product_lift`` and ``sum_lift`` when a
    required widening edge does not exist, and by constructors given
    malformed arguments. Never raised during evaluation.
    """

    def __init__(
        self,
        message: str,
        *,
        source: Multiplicity | None = None,
        target: Multiplicity | None = None,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.target = target


class UnsupportedDirectionError(RichFunctionError):
    """An EMPTY direction was evaluated."""


class CardinalityError(RichFunctionError):
    """An evaluator returned a container that contradicts its declared kind.

    Only raised when cardinality checking is enabled (see ``richfn.config``).
    """
