"""
Pagecraft Kernel -- Section Reorder

Pure function: (items, source_index, target_index) -> new list.
Remove-then-insert, not swap: the item leaves `source_index` and is inserted
at `target_index` of the already-shortened list.

Input-device adapters (drag events, keyboard moves) translate their own
payloads into two indices and call reorder(); nothing here knows about them.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any, TypeVar

T = TypeVar("T")


def reorder(items: Sequence[T], source_index: Any, target_index: Any) -> list[T]:
    """
    Move one element. Never mutates `items`; always returns a new list.
    Invalid indices (non-integers, NaN, out of bounds) return an unchanged copy.
    """
    result = list(items)
    src = _as_index(source_index)
    dst = _as_index(target_index)
    if src is None or dst is None:
        return result
    if not 0 <= src < len(result):
        return result
    # Target is an index into the shortened list, so len-1 is the last slot
    if not 0 <= dst <= len(result) - 1:
        return result

    moved = result.pop(src)
    result.insert(dst, moved)
    return result


def _as_index(value: Any) -> int | None:
    """Accept ints and integral floats/strings; reject NaN, bools, fractions."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value) or not value.is_integer():
            return None
        return int(value)
    if isinstance(value, str):
        try:
            return _as_index(float(value.strip()))
        except ValueError:
            return None
    return None
