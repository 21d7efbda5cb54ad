"""
FHIR R4 primitive types.

Each primitive declares the JSON shape it travels as and, where the FHIR
specification publishes one, its lexical regex.  :func:`check_primitive`
is applied to every primitive value on decode and on encode; a value of
the wrong JSON type or outside the lexical space is a
:class:`~fhir_records.errors.TypeMismatchError`.

The model stores primitives as their JSON values (``str``, ``int``,
``float``, ``bool``).  A ``decimal`` keeps its value but not its lexical
form: ``1.50`` reads back as ``1.5`` and is written as ``1.5``.
:class:`FhirDateTime` is the typed view of the ``date`` / ``dateTime`` /
``instant`` family, keeping FHIR's partial precision (``"2016"``,
``"2016-01"``) intact.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from fhir_records.errors import TypeMismatchError


# ── Lexical patterns (FHIR R4 §2.24.0.1) ──────────────────────────

_YEAR = r"([0-9]([0-9]([0-9][1-9]|[1-9]0)|[1-9]00)|[1-9]000)"
_MONTH = r"(0[1-9]|1[0-2])"
_DAY = r"(0[1-9]|[1-2][0-9]|3[0-1])"
_TIME = r"([01][0-9]|2[0-3]):[0-5][0-9]:([0-5][0-9]|60)(\.[0-9]+)?"
_OFFSET = r"(Z|(\+|-)((0[0-9]|1[0-3]):[0-5][0-9]|14:00))"

_PATTERNS: dict[str, str] = {
    "code": r"[^\s]+(\s[^\s]+)*",
    "id": r"[A-Za-z0-9\-\.]{1,64}",
    "oid": r"urn:oid:[0-2](\.(0|[1-9][0-9]*))+",
    "uuid": r"urn:uuid:[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    "date": rf"{_YEAR}(-{_MONTH}(-{_DAY})?)?",
    "dateTime": rf"{_YEAR}(-{_MONTH}(-{_DAY}(T{_TIME}{_OFFSET})?)?)?",
    "instant": rf"{_YEAR}-{_MONTH}-{_DAY}T{_TIME}{_OFFSET}",
    "time": _TIME,
}

INT32_MAX = 2_147_483_647
"""Upper bound of the 32-bit FHIR integer family."""


@dataclass(frozen=True)
class PrimitiveType:
    """JSON representation rules for one FHIR primitive."""

    name: str
    json_type: str  # "boolean" | "integer" | "number" | "string"
    pattern: Optional[re.Pattern] = None
    minimum: Optional[int] = None
    maximum: Optional[int] = None


def _string(name: str) -> PrimitiveType:
    pattern = _PATTERNS.get(name)
    return PrimitiveType(name, "string", re.compile(pattern) if pattern else None)


PRIMITIVE_TYPES: dict[str, PrimitiveType] = {
    "boolean": PrimitiveType("boolean", "boolean"),
    "integer": PrimitiveType("integer", "integer", minimum=-INT32_MAX - 1, maximum=INT32_MAX),
    "positiveInt": PrimitiveType("positiveInt", "integer", minimum=1, maximum=INT32_MAX),
    "unsignedInt": PrimitiveType("unsignedInt", "integer", minimum=0, maximum=INT32_MAX),
    "decimal": PrimitiveType("decimal", "number"),
    **{
        name: _string(name)
        for name in (
            "string", "markdown", "code", "id", "uri", "url", "canonical",
            "oid", "uuid", "base64Binary", "date", "dateTime", "instant",
            "time", "xhtml",
        )
    },
}
"""All R4 primitive types, keyed by their FHIR name."""


def is_primitive(type_name: Any) -> bool:
    return isinstance(type_name, str) and type_name in PRIMITIVE_TYPES


def check_primitive(type_name: str, value: Any, *, path: Optional[str] = None) -> Any:
    """Return *value* unchanged if it is a valid *type_name*, else raise.

    Raises:
        TypeMismatchError: On a JSON type or lexical mismatch.
        KeyError: If *type_name* is not a FHIR primitive.
    """
    ptype = PRIMITIVE_TYPES[type_name]
    kind = ptype.json_type

    if kind == "boolean":
        if not isinstance(value, bool):
            raise TypeMismatchError(type_name, value, path=path)
        return value

    if kind == "integer":
        # bool is an int subclass; FHIR keeps them apart.
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeMismatchError(type_name, value, path=path)
        if ptype.minimum is not None and value < ptype.minimum:
            raise TypeMismatchError(
                type_name, value, path=path, detail=f"must be >= {ptype.minimum}",
            )
        if ptype.maximum is not None and value > ptype.maximum:
            raise TypeMismatchError(
                type_name, value, path=path, detail=f"must be <= {ptype.maximum}",
            )
        return value

    if kind == "number":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeMismatchError(type_name, value, path=path)
        if isinstance(value, float) and not math.isfinite(value):
            raise TypeMismatchError(type_name, value, path=path, detail="not finite")
        return value

    if not isinstance(value, str):
        raise TypeMismatchError(type_name, value, path=path)
    if ptype.pattern is not None and not ptype.pattern.fullmatch(value):
        raise TypeMismatchError(
            type_name, value, path=path, detail=f"not a valid FHIR {type_name}",
        )
    return value


# ── Partial date/time values ──────────────────────────────────────

_PARTIAL_RE = re.compile(
    r"(?P<year>\d{4})(-(?P<month>\d{2})(-(?P<day>\d{2})"
    r"(?P<time>T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2}))?)?)?"
)

PRECISIONS = ("year", "month", "day", "second")


@dataclass(frozen=True)
class FhirDateTime:
    """A FHIR date/dateTime/instant value with its stated precision.

    FHIR allows partial values (``"2016"``, ``"2016-01"``), which a
    ``datetime`` cannot express on its own.  ``value`` holds the first
    instant of the stated period (UTC for values without a time part) and
    ``precision`` is one of ``year``, ``month``, ``day``, ``second``.
    """

    value: datetime
    precision: str

    def __post_init__(self) -> None:
        if self.precision not in PRECISIONS:
            raise ValueError(f"Unknown precision: {self.precision!r}")
        if self.value.tzinfo is None:
            object.__setattr__(self, "value", self.value.replace(tzinfo=timezone.utc))

    @classmethod
    def parse(cls, text: str) -> "FhirDateTime":
        """Parse a FHIR date, dateTime or instant string.

        Raises:
            ValueError: If *text* is not a valid (possibly partial) value.
        """
        if not isinstance(text, str):
            raise TypeError(f"Expected a string, got: {type(text).__name__}")
        text = text.strip()
        m = _PARTIAL_RE.fullmatch(text)
        if m is None:
            raise ValueError(f"FhirDateTime: unable to parse {text!r}")
        try:
            if m.group("time"):
                value = datetime.fromisoformat(text.replace("Z", "+00:00"))
                return cls(value, "second")
            year = int(m.group("year"))
            if m.group("day"):
                return cls(datetime(year, int(m.group("month")), int(m.group("day"))), "day")
            if m.group("month"):
                return cls(datetime(year, int(m.group("month")), 1), "month")
            return cls(datetime(year, 1, 1), "year")
        except ValueError as exc:
            raise ValueError(f"FhirDateTime: unable to parse {text!r}: {exc}") from exc

    def isoformat(self) -> str:
        """Format at the stored precision, ``Z`` for UTC."""
        v = self.value
        if self.precision == "year":
            return f"{v.year:04d}"
        if self.precision == "month":
            return f"{v.year:04d}-{v.month:02d}"
        if self.precision == "day":
            return f"{v.year:04d}-{v.month:02d}-{v.day:02d}"
        if v.microsecond == 0:
            spec = "seconds"
        elif v.microsecond % 1000 == 0:
            spec = "milliseconds"
        else:
            spec = "microseconds"
        text = v.isoformat(timespec=spec)
        if text.endswith("+00:00"):
            text = text[:-6] + "Z"
        return text

    def __str__(self) -> str:
        return self.isoformat()
