"""
FHIR choice types (``value[x]``, ``onset[x]``, ...) as tagged unions.

A choice group is one logical field whose JSON key carries the type of
the value as a suffix: ``onsetDateTime``, ``onsetAge``, ``onsetPeriod``.
The model holds the whole group in a single :class:`ChoiceValue`, so a
resource with two populated branches cannot be constructed.  On the wire
such input is rejected by :func:`decode_choice` with a
:class:`~fhir_records.errors.ChoiceConflictError`; it is never resolved
by picking one branch.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from fhir_records.errors import ChoiceConflictError, TypeMismatchError
from fhir_records.primitives import is_primitive


@dataclass(frozen=True)
class ChoiceValue:
    """One populated branch of a choice group.

    Attributes:
        kind:  Type suffix as it appears in the JSON key, e.g.
               ``"DateTime"``, ``"Quantity"``.  A lower-case FHIR type
               name (``"dateTime"``) is accepted and normalised.
        value: The decoded value: a primitive JSON value or a model
               instance.  ``None`` only when the primitive branch carries
               nothing but a ``_name`` extension.
    """

    kind: str
    value: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, str) or not self.kind:
            raise TypeError(f"ChoiceValue.kind must be a non-empty string, got: {self.kind!r}")
        if self.kind[0].islower():
            object.__setattr__(self, "kind", self.kind[0].upper() + self.kind[1:])

    def key(self, field_prefix: str) -> str:
        """JSON key of this branch under *field_prefix*."""
        return field_prefix + self.kind


def choice_keys(
    field_prefix: str,
    allowed: Mapping[str, Any],
    raw: Mapping[str, Any],
) -> dict[str, list[str]]:
    """Populated branches of a choice group in *raw*.

    Returns a mapping ``suffix → keys present`` (the value key and, for
    primitive branches, its ``_`` extension key).
    """
    found: dict[str, list[str]] = {}
    for suffix, ref in allowed.items():
        key = field_prefix + suffix
        keys = [k for k in (key, "_" + key) if k in raw and (k == key or is_primitive(ref))]
        if keys:
            found[suffix] = keys
    return found


def decode_choice(
    field_prefix: str,
    allowed: Mapping[str, Any],
    raw: Mapping[str, Any],
    *,
    decode: Callable[[Any, Any, str], Any],
    path: Optional[str] = None,
) -> Optional[ChoiceValue]:
    """Decode the choice group *field_prefix* out of JSON object *raw*.

    Args:
        field_prefix: Base name of the group (``"onset"``).
        allowed:      ``suffix → type`` for every permitted branch.
        raw:          The enclosing JSON object.
        decode:       ``decode(type, json_value, key)`` for one branch
                      value; ``json_value`` is ``None`` when only the
                      ``_`` extension key is present.
        path:         Location of the enclosing element, for errors.

    Returns:
        ``None`` when no branch is present, otherwise the single
        :class:`ChoiceValue`.

    Raises:
        ChoiceConflictError: If more than one branch is populated.
    """
    found = choice_keys(field_prefix, allowed, raw)
    if not found:
        return None
    if len(found) > 1:
        keys = [k for ks in found.values() for k in ks if not k.startswith("_")]
        keys = keys or [k for ks in found.values() for k in ks]
        raise ChoiceConflictError(field_prefix, keys, path=path)
    suffix, _keys = next(iter(found.items()))
    key = field_prefix + suffix
    return ChoiceValue(suffix, decode(allowed[suffix], raw.get(key), key))


def encode_choice(
    field_prefix: str,
    allowed: Mapping[str, Any],
    variant: Optional[ChoiceValue],
    *,
    encode: Callable[[Any, Any, str], Any],
    path: Optional[str] = None,
) -> dict[str, Any]:
    """Encode *variant* as the single key it occupies.

    Returns an empty dict for an absent group, otherwise
    ``{field_prefix + kind: encoded}`` (nothing when the branch value is
    ``None``; its ``_`` key is written by the caller).

    Raises:
        TypeMismatchError: If *variant* is not a :class:`ChoiceValue` or
            its kind is not an allowed branch.
    """
    if variant is None:
        return {}
    if not isinstance(variant, ChoiceValue):
        raise TypeMismatchError(f"ChoiceValue for '{field_prefix}[x]'", variant, path=path)
    if variant.kind not in allowed:
        raise TypeMismatchError(
            f"one of {sorted(field_prefix + s for s in allowed)}",
            variant.kind,
            path=path,
            detail=f"'{field_prefix + variant.kind}' is not a permitted branch",
        )
    key = variant.key(field_prefix)
    if variant.value is None:
        return {}
    return {key: encode(allowed[variant.kind], variant.value, key)}
