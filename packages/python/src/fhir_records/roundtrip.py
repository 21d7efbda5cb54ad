"""
Round-trip verification: decode a document, re-encode it, compare.

Key order is not significant in FHIR JSON, so the comparison is
structural.  Empty arrays under modelled fields are never re-emitted; by
default they are stripped from the original before comparing.  Unknown
content is kept verbatim by the codec, so empty arrays inside it are
compared as they are.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Optional

from fhir_records.choice import ChoiceValue
from fhir_records.limits import enforce_decode_limits
from fhir_records.processor import FhirCodec
from fhir_records.report import DecodeReport
from fhir_records.schema import fields_of


@dataclass
class RoundTripResult:
    """Outcome of :func:`compare_round_trip`.

    Attributes:
        equal:       The re-encoded JSON matches the original.
        differences: One ``"<path>: <what differs>"`` line per mismatch.
        stable:      Decoding the re-encoded JSON gives an equal object.
        report:      Report of the first decode.
        encoded:     The re-encoded JSON object.
    """

    equal: bool
    differences: list[str] = field(default_factory=list)
    stable: bool = True
    report: Optional[DecodeReport] = None
    encoded: Optional[dict[str, Any]] = None


def compare_round_trip(
    document: str | bytes | dict[str, Any],
    codec: Optional[FhirCodec] = None,
    *,
    ignore_empty_arrays: bool = True,
) -> RoundTripResult:
    """Decode *document*, encode the result and diff it against the input.

    Decode errors propagate; the function only reports on documents the
    codec accepts.
    """
    codec = codec or FhirCodec()
    original = enforce_decode_limits(document, codec.limits)

    resource, report = codec.decode(original)
    encoded = codec.encode(resource)
    again, _ = codec.decode(encoded)

    expected = _strip_empty_arrays(original, resource) if ignore_empty_arrays else original
    differences: list[str] = []
    _diff(expected, encoded, resource.resource_type, differences)
    return RoundTripResult(
        equal=not differences,
        differences=differences,
        stable=again == resource,
        report=report,
        encoded=encoded,
    )


def _strip_empty_arrays(raw: Any, model: Any) -> Any:
    """Copy of *raw* without the empty arrays the encoder drops.

    *model* is the object *raw* decoded to; it tells modelled keys from
    captured ones.  Captured keys are copied untouched.
    """
    if not isinstance(raw, dict) or not dataclasses.is_dataclass(model):
        return raw
    modelled = _modelled_values(model)
    out: dict[str, Any] = {}
    for key, value in raw.items():
        if key not in modelled or key in model.unknown_fields:
            out[key] = value
        elif isinstance(value, list):
            if not value:
                continue
            children = modelled[key]
            if not isinstance(children, list) or len(children) != len(value):
                children = [None] * len(value)
            out[key] = [_strip_empty_arrays(v, c) for v, c in zip(value, children)]
        else:
            out[key] = _strip_empty_arrays(value, modelled[key])
    return out


def _modelled_values(model: Any) -> dict[str, Any]:
    # JSON key -> decoded value, including the `_name` companions.
    values: dict[str, Any] = {}
    for spec in fields_of(type(model)):
        value = getattr(model, spec.name)
        if spec.is_choice:
            if isinstance(value, ChoiceValue):
                key = value.key(spec.json_name)
                values[key] = value.value
                values["_" + key] = model.primitive_extensions.get(key)
            continue
        values[spec.json_name] = value
        if spec.is_primitive:
            values["_" + spec.json_name] = model.primitive_extensions.get(spec.json_name)
    return values


def _diff(a: Any, b: Any, path: str, out: list[str]) -> None:
    if isinstance(a, dict) and isinstance(b, dict):
        for key in sorted(set(a) | set(b)):
            if key not in b:
                out.append(f"{path}.{key}: missing after round trip")
            elif key not in a:
                out.append(f"{path}.{key}: added by round trip")
            else:
                _diff(a[key], b[key], f"{path}.{key}", out)
    elif isinstance(a, list) and isinstance(b, list):
        if len(a) != len(b):
            out.append(f"{path}: length {len(a)} became {len(b)}")
        for i, (x, y) in enumerate(zip(a, b)):
            _diff(x, y, f"{path}[{i}]", out)
    elif type(a) is not type(b) or a != b:
        out.append(f"{path}: {a!r} became {b!r}")
