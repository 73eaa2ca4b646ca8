from __future__ import annotations
import os
from dataclasses import dataclass


# Nesting ceiling for evaluate(); each level costs a few Python frames, so the
# default stays well under the interpreter's own recursion limit.
DEFAULT_MAX_DEPTH = 200


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class PlotscriptConfig:
    max_depth: int = DEFAULT_MAX_DEPTH


def get_config() -> PlotscriptConfig:
    return PlotscriptConfig(
        max_depth=int_from_env('PLOTSCRIPT_MAX_DEPTH', DEFAULT_MAX_DEPTH),
    )
