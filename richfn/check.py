"""Cardinality checks for evaluator results.

The core trusts that an evaluator tagged SINGLE returns one value, one
tagged NON_EMPTY_MULTI returns at least one, and so on. These checks make
that contract observable: ``check_container`` reports what is wrong with a
container, and ``checked`` wraps an evaluator so that every call is
verified. ``QualifiedMapping`` applies ``checked`` automatically when
``RICHFN_CHECK_CARDINALITY`` is set.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .containers import Just, Nothing, Stream
from .errors import CardinalityError
from .multiplicity import Multiplicity

logger = logging.getLogger(__name__)


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    check: str
    severity: Severity
    kind: Multiplicity
    message: str


def check_container(
    kind: Multiplicity, container: Any, depth: int = 1
) -> tuple[Diagnostic, ...]:
    """Diagnose ``container`` against the shape ``kind`` promises.

    At most ``depth`` elements of a multi-valued container are forced.
    """
    diagnostics: list[Diagnostic] = []

    def error(check: str, message: str) -> None:
        diagnostics.append(Diagnostic(check, Severity.ERROR, kind, message))

    match kind:
        case Multiplicity.SINGLE:
            if isinstance(container, (Just, Nothing, Stream)):
                error(
                    "single_bare_value",
                    f"SINGLE evaluator returned a {type(container).__name__} container",
                )
        case Multiplicity.OPTIONAL:
            if not isinstance(container, (Just, Nothing)):
                error(
                    "optional_maybe",
                    f"OPTIONAL evaluator must return Just or NOTHING, got {type(container).__name__}",
                )
        case Multiplicity.NON_EMPTY_MULTI | Multiplicity.GENERAL_MULTI:
            if isinstance(container, (Just, Nothing)) or not isinstance(container, Iterable):
                error(
                    "multi_iterable",
                    f"{kind.name} evaluator must return an iterable, got {type(container).__name__}",
                )
            elif kind is Multiplicity.NON_EMPTY_MULTI:
                # A one-shot iterator would be consumed by the check itself.
                if iter(container) is container:
                    diagnostics.append(
                        Diagnostic(
                            "multi_restartable",
                            Severity.WARNING,
                            kind,
                            "evaluator returned a one-shot iterator; skipping non-empty check",
                        )
                    )
                elif not list(itertools.islice(container, max(depth, 1))):
                    error("non_empty", "NON_EMPTY_MULTI evaluator returned no elements")
        case Multiplicity.EMPTY:
            error("empty_evaluated", "EMPTY direction has no evaluator to check")

    return tuple(diagnostics)


def checked(
    kind: Multiplicity, evaluator: Callable[[Any], Any], depth: int = 1
) -> Callable[[Any], Any]:
    """Wrap ``evaluator`` so that every result is verified against ``kind``."""

    def run(value: Any) -> Any:
        result = evaluator(value)
        for diag in check_container(kind, result, depth):
            if diag.severity is Severity.ERROR:
                raise CardinalityError(f"[{diag.check}] {diag.message} (input {value!r})")
            logger.warning("[%s] %s (input %r)", diag.check, diag.message, value)
        return result

    run.__wrapped__ = evaluator  # type: ignore[attr-defined]
    return run
