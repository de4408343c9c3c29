"""Recursive mapping merge used to lay user overrides over preset configs."""

from collections.abc import Mapping
from typing import Any


def deep_merge(base: Mapping[str, Any] | None, overlay: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Merge `base` and `overlay` into a new dict.

    Where both sides hold a mapping under the same key the two are merged
    recursively. Any other conflict is won by `base`, so pass the side that
    should take precedence first. Keys only in `overlay` are kept as is.
    Neither input is mutated; values that are not merged are shared.
    """
    if overlay is None:
        return dict(base or {})
    output = dict(overlay)
    for key, value in (base or {}).items():
        other = overlay.get(key)
        if isinstance(value, Mapping) and isinstance(other, Mapping):
            output[key] = deep_merge(value, other)
        else:
            output[key] = value
    return output
