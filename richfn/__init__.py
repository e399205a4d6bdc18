"""richfn: functions that know how many results they return, in both directions."""

from .multiplicity import (
    Multiplicity,
    can_widen,
    leq,
    meet,
    meet_all,
    widening_targets,
)
from .containers import NOTHING, Just, Maybe, Nothing, Stream
from .errors import (
    CardinalityError,
    ConstructionError,
    RichFunctionError,
    UnsupportedDirectionError,
)
from .mapping import (
    COMPOSITION_LAWS,
    QualifiedMapping,
    compose_mappings,
    empty_mapping,
    identity_mapping,
    map_container,
    map_results,
    widen,
)
from .rich import (
    RichFunction,
    apply_from,
    apply_to,
    compose,
    compose_all,
    identity,
    inverse,
    try_compose,
)
from .lift import Alt, Variant, product_lift, sum_lift
from .helpers import bijection, many, many1, one_way, optional, rich, single, unsupported
from .result import Ok, Err, Result

__all__ = [
    # Lattice
    "Multiplicity", "can_widen", "leq", "meet", "meet_all", "widening_targets",
    # Containers
    "NOTHING", "Just", "Maybe", "Nothing", "Stream",
    # Errors
    "CardinalityError", "ConstructionError", "RichFunctionError",
    "UnsupportedDirectionError",
    # Qualified mappings
    "COMPOSITION_LAWS", "QualifiedMapping", "compose_mappings", "empty_mapping",
    "identity_mapping", "map_container", "map_results", "widen",
    # Rich functions
    "RichFunction", "apply_from", "apply_to", "compose", "compose_all",
    "identity", "inverse", "try_compose",
    # Lifting
    "Alt", "Variant", "product_lift", "sum_lift",
    # Helpers
    "bijection", "many", "many1", "one_way", "optional", "rich", "single",
    "unsupported",
    # Result
    "Ok", "Err", "Result",
]
