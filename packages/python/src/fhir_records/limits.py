"""Resource limits applied to untrusted FHIR JSON before decoding."""

from __future__ import annotations

import json
from typing import Any, Optional

from fhir_records.errors import LimitExceededError, MalformedJSONError


DEFAULT_DECODE_LIMITS = {
    "max_document_size": 10 * 1024 * 1024,  # 10 MB
    "max_depth": 100,
}

_MAX_RECURSION_DEPTH = 500  # Safety cap for _measure_depth


def resolve_limits(limits: Optional[dict[str, int]] = None) -> dict[str, int]:
    """Merge *limits* over the defaults, rejecting unknown keys."""
    unknown = set(limits or {}) - set(DEFAULT_DECODE_LIMITS)
    if unknown:
        raise ValueError(f"Unknown limit(s): {sorted(unknown)}")
    resolved = {**DEFAULT_DECODE_LIMITS, **(limits or {})}
    for key, value in resolved.items():
        if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
            raise ValueError(f"Limit {key} must be a positive integer, got: {value!r}")
    return resolved


def enforce_decode_limits(
    document: str | bytes | dict | Any,
    limits: Optional[dict[str, int]] = None,
) -> dict[str, Any]:
    """Check *document* against size and depth limits and return it parsed.

    Sizes are UTF-8 byte counts.  Text and bytes are size-checked before
    parsing; an already parsed ``dict`` is measured by its compact JSON
    serialisation.

    Raises:
        MalformedJSONError: If the text is not JSON (``NaN`` and
            ``Infinity`` included), or the top level value is not an
            object.
        LimitExceededError: If the document is too large or too deep,
            including nesting too deep for the JSON parser itself.
        TypeError: If *document* is of an unsupported type.
    """
    if document is None:
        raise TypeError("Document must not be None")
    resolved = resolve_limits(limits)
    max_size = resolved["max_document_size"]
    if isinstance(document, (bytes, bytearray)):
        _check_size(len(document), max_size)
        try:
            document = bytes(document).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedJSONError(f"Document is not valid UTF-8: {exc}") from exc
    elif isinstance(document, str):
        _check_size(len(document.encode("utf-8", "surrogatepass")), max_size)
    if isinstance(document, str):
        parsed = _parse(document)
    elif isinstance(document, dict):
        try:
            content = json.dumps(
                document, separators=(",", ":"), ensure_ascii=False, allow_nan=False,
            )
        except RecursionError as exc:
            raise LimitExceededError("Document nesting is too deep to serialise") from exc
        except TypeError as exc:
            raise TypeError(f"Document is not JSON-serializable: {exc}") from exc
        except ValueError as exc:
            raise MalformedJSONError(f"Document is not valid JSON: {exc}") from exc
        _check_size(len(content.encode("utf-8", "surrogatepass")), max_size)
        parsed = document
    else:
        raise TypeError(
            f"Document must be a str, bytes, or dict, got: {type(document).__name__}"
        )
    if not isinstance(parsed, dict):
        raise MalformedJSONError(
            f"A FHIR resource must be a JSON object, got: {type(parsed).__name__}"
        )
    depth = _measure_depth(parsed)
    if depth > resolved["max_depth"]:
        raise LimitExceededError(
            f"Document depth {depth} exceeds limit {resolved['max_depth']}"
        )
    return parsed


def _check_size(size: int, limit: int) -> None:
    if size > limit:
        raise LimitExceededError(f"Document size {size} exceeds limit {limit}")


def _reject_constant(name: str) -> Any:
    raise MalformedJSONError(f"Document is not valid JSON: {name} is not a JSON value")


def _parse(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise MalformedJSONError(f"Document is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise LimitExceededError("Document nesting is too deep to parse") from exc


def _measure_depth(obj: Any, current: int = 0) -> int:
    if current > _MAX_RECURSION_DEPTH:
        return current  # Safety cap to prevent stack overflow
    if obj is None or not isinstance(obj, (dict, list)):
        return current
    max_depth = current
    items = obj if isinstance(obj, list) else obj.values()
    for item in items:
        max_depth = max(max_depth, _measure_depth(item, current + 1))
    return max_depth
