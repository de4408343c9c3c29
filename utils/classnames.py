"""
Class-name combining for utility-first CSS.

`cn` flattens its inputs the way clsx does (strings, nested sequences and
`{class: condition}` mappings) and then drops utility classes that a later
class of the same group overrides, so `cn("p-2", "p-4")` yields `"p-4"`.
"""

import re
from collections.abc import Mapping
from typing import Any

_SIDES = ("t", "r", "b", "l", "x", "y")
_SIZES = r"(xs|sm|base|lg|\d?xl)"

# Order matters: the first matching group wins.
_GROUPS: list[tuple[str, re.Pattern[str]]] = [
    ("display", re.compile(r"^(block|inline-block|inline|flex|inline-flex|grid|inline-grid|table|contents|hidden)$")),
    ("position", re.compile(r"^(static|fixed|absolute|relative|sticky)$")),
    *[(f"p{side}", re.compile(rf"^p{side}-.+$")) for side in _SIDES],
    ("p", re.compile(r"^p-.+$")),
    *[(f"m{side}", re.compile(rf"^m{side}-.+$")) for side in _SIDES],
    ("m", re.compile(r"^m-.+$")),
    ("min-w", re.compile(r"^min-w-.+$")),
    ("max-w", re.compile(r"^max-w-.+$")),
    ("min-h", re.compile(r"^min-h-.+$")),
    ("max-h", re.compile(r"^max-h-.+$")),
    ("w", re.compile(r"^w-.+$")),
    ("h", re.compile(r"^h-.+$")),
    ("font-size", re.compile(rf"^text-{_SIZES}$")),
    ("text-align", re.compile(r"^text-(left|center|right|justify|start|end)$")),
    ("text-color", re.compile(r"^text-.+$")),
    ("font-weight", re.compile(r"^font-(thin|extralight|light|normal|medium|semibold|bold|extrabold|black)$")),
    ("font-family", re.compile(r"^font-.+$")),
    ("bg-size", re.compile(r"^bg-(auto|cover|contain)$")),
    ("bg-repeat", re.compile(r"^bg-(no-repeat|repeat|repeat-x|repeat-y|repeat-round|repeat-space)$")),
    ("bg-color", re.compile(r"^bg-.+$")),
    *[(f"border-w-{side}", re.compile(rf"^border-{side}(-\d+)?$")) for side in _SIDES],
    ("border-w", re.compile(r"^border(-\d+)?$")),
    ("border-color", re.compile(r"^border-.+$")),
    ("rounded", re.compile(r"^rounded(-.+)?$")),
    ("gap-x", re.compile(r"^gap-x-.+$")),
    ("gap-y", re.compile(r"^gap-y-.+$")),
    ("gap", re.compile(r"^gap-.+$")),
    ("flex-direction", re.compile(r"^flex-(row|col)(-reverse)?$")),
    ("justify-content", re.compile(r"^justify-(start|end|center|between|around|evenly|normal|stretch)$")),
    ("align-items", re.compile(r"^items-.+$")),
    ("opacity", re.compile(r"^opacity-.+$")),
    ("z-index", re.compile(r"^z-.+$")),
    ("shadow", re.compile(r"^shadow(-.+)?$")),
]

# A class in the key group also overrides earlier classes in these groups.
_CONFLICTS: dict[str, tuple[str, ...]] = {
    "p": tuple(f"p{side}" for side in _SIDES),
    "px": ("pr", "pl"),
    "py": ("pt", "pb"),
    "m": tuple(f"m{side}" for side in _SIDES),
    "mx": ("mr", "ml"),
    "my": ("mt", "mb"),
    "gap": ("gap-x", "gap-y"),
    "border-w": tuple(f"border-w-{side}" for side in _SIDES),
    "border-w-x": ("border-w-r", "border-w-l"),
    "border-w-y": ("border-w-t", "border-w-b"),
}


def cn(*inputs: Any) -> str:
    """Combine class names and resolve conflicting utility classes."""
    return merge_classes(" ".join(_collect(inputs)))


def merge_classes(class_list: str) -> str:
    kept: list[str] = []
    taken: set[str] = set()
    for cls in reversed(class_list.split()):
        modifiers, important, group = _classify(cls)
        if group is None:
            kept.append(cls)
            continue
        key = f"{modifiers}{important}{group}"
        if key in taken:
            continue
        taken.add(key)
        for conflict in _CONFLICTS.get(group, ()):
            taken.add(f"{modifiers}{important}{conflict}")
        kept.append(cls)
    return " ".join(reversed(kept))


def _collect(value: Any) -> list[str]:
    if not value or isinstance(value, bool):
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, Mapping):
        return [str(k) for k, enabled in value.items() if enabled]
    if isinstance(value, (list, tuple, set)):
        out: list[str] = []
        for item in value:
            out.extend(_collect(item))
        return out
    if isinstance(value, (int, float)):
        return [str(value)]
    return []


def _classify(cls: str) -> tuple[str, str, str | None]:
    *variants, base = cls.split(":")
    important = ""
    if base.startswith("!"):
        important, base = "!", base[1:]
    # negative values share the group of their positive form
    if base.startswith("-"):
        base = base[1:]
    modifiers = ":".join(sorted(variants)) + ":" if variants else ""
    for name, pattern in _GROUPS:
        if pattern.match(base):
            return modifiers, important, name
    return modifiers, important, None
