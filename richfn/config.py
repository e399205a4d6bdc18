"""Runtime settings read from the environment.

    RICHFN_CHECK_CARDINALITY   wrap evaluators with cardinality checks (off)
    RICHFN_CHECK_DEPTH         stream elements a check may force (1)

A ``.env`` file in the working directory is honoured.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import cache

from dotenv import load_dotenv

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class Settings:
    check_cardinality: bool = False
    check_depth: int = 1

    @classmethod
    def from_env(cls) -> Settings:
        load_dotenv()
        raw_depth = os.environ.get("RICHFN_CHECK_DEPTH", "1")
        try:
            depth = int(raw_depth)
        except ValueError:
            raise ValueError(
                f"RICHFN_CHECK_DEPTH must be an integer, got {raw_depth!r}"
            ) from None
        if depth < 1:
            raise ValueError(f"RICHFN_CHECK_DEPTH must be at least 1, got {depth}")
        return cls(
            check_cardinality=os.environ.get("RICHFN_CHECK_CARDINALITY", "").strip().lower()
            in _TRUTHY,
            check_depth=depth,
        )


@cache
def get_settings() -> Settings:
    return Settings.from_env()
