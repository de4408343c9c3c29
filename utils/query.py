"""
URL query-string codec with bracket nesting, plus the navigation helpers
that rewrite a query by setting or removing parameters.

Grammar: `key=value` pairs joined by `&`. `a[b]=1` nests into a mapping,
`a[]=1&a[]=2` builds a sequence. Decoding is best-effort and never raises.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any, Union
from urllib.parse import quote, unquote_plus

QueryValue = Union[str, list[str], "QueryMapping"]
QueryMapping = dict[str, QueryValue]

MAX_DEPTH = 5
PARAMETER_LIMIT = 1000

_KEY_PATTERN = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")
_SEGMENT_PATTERN = re.compile(r"\[([^\[\]]*)\]")


def decode(raw: Any) -> QueryMapping:
    """Parse a query string (leading `?` optional) into a nested mapping."""
    if not isinstance(raw, str):
        return {}
    text = raw[1:] if raw.startswith("?") else raw
    result: QueryMapping = {}
    for part in text.split("&")[:PARAMETER_LIMIT]:
        if not part:
            continue
        raw_key, _, raw_value = part.partition("=")
        if not raw_key:
            continue
        _assign(result, _split_key(raw_key), _unescape(raw_value))
    return result


def encode(mapping: Mapping[str, Any] | None, skip_nulls: bool = False) -> str:
    """Serialize a mapping back into a query string (no leading `?`)."""
    pairs: list[str] = []
    for key, value in (mapping or {}).items():
        _flatten(_escape(str(key)), value, pairs, skip_nulls)
    return "&".join(pairs)


def set_param(current_query: str, key: str, value: str | None) -> str:
    """
    Return `current_query` with `key` set to `value`, as `?...`.
    A None value drops the key since nulls are skipped on encode.
    """
    params = decode(current_query)
    params[key] = value
    return "?" + encode(params, skip_nulls=True)


def remove_params(current_query: str, keys_to_remove: Iterable[str]) -> str:
    """
    Return `current_query` without `keys_to_remove`, as `?...`.
    Any other top-level key left holding None is scrubbed as well. Only a
    real None counts; "" and "null" are kept as ordinary values.
    """
    if isinstance(keys_to_remove, str):
        keys_to_remove = [keys_to_remove]
    params: dict[str, Any] = decode(current_query)
    for key in keys_to_remove:
        params.pop(key, None)
    for key in [k for k, v in params.items() if v is None]:
        del params[key]
    return "?" + encode(params)


def _unescape(text: str) -> str:
    return unquote_plus(text, errors="replace")


def _escape(text: str) -> str:
    return quote(text, safe="-_.~")


def _split_key(raw_key: str) -> list[str]:
    """
    Split raw `a[b][c]` into ["a", "b", "c"]; unparseable keys stay whole.
    Only literal brackets nest; escaped ones (%5B, %5D) belong to the key text.
    """
    match = _KEY_PATTERN.match(raw_key)
    if not match:
        return [_unescape(raw_key)]
    segments = [_unescape(s) for s in _SEGMENT_PATTERN.findall(match.group(2))]
    # `[]` only means "append" in final position
    if "" in segments[:-1]:
        return [_unescape(raw_key)]
    if len(segments) > MAX_DEPTH:
        overflow = "".join(f"[{s}]" for s in segments[MAX_DEPTH:])
        segments = segments[:MAX_DEPTH] + [overflow]
    return [_unescape(match.group(1))] + segments


def _assign(node: dict[str, Any], path: list[str], value: str) -> None:
    head, rest = path[0], path[1:]
    if not rest:
        node[head] = value
        return
    if rest == [""]:
        current = node.get(head)
        if isinstance(current, list):
            current.append(value)
        else:
            node[head] = [value]
        return
    child = node.get(head)
    if not isinstance(child, dict):
        child = {}
        node[head] = child
    _assign(child, rest, value)


def _flatten(prefix: str, value: Any, pairs: list[str], skip_nulls: bool) -> None:
    if value is None:
        if not skip_nulls:
            pairs.append(f"{prefix}=")
        return
    if isinstance(value, Mapping):
        for key, child in value.items():
            _flatten(f"{prefix}[{_escape(str(key))}]", child, pairs, skip_nulls)
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            if item is None and skip_nulls:
                continue
            pairs.append(f"{prefix}[]={_escape(_stringify(item))}")
        return
    pairs.append(f"{prefix}={_escape(_stringify(value))}")


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
