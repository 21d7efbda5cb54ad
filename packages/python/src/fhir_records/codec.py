"""
Generic field-by-field decoder and encoder for FHIR model classes.

There is exactly one decode routine and one encode routine; every
datatype, backbone element and resource goes through them, driven by
the :class:`~fhir_records.schema.FieldSpec` declarations of its class.

Decoding applies, per field:

- cardinality (missing required → :class:`MissingRequiredFieldError`,
  non-array for a repeating field → :class:`TypeMismatchError`),
- primitive shape and lexical checks,
- value-set bindings (warning, or :class:`InvalidCodeError` when strict),
- the choice codec for ``[x]`` groups,
- ``_name`` primitive extensions, aligned positionally for arrays,
- the extension bag for every undeclared key.

Encoding is the exact inverse and injects ``resourceType`` from the
class, so no resource carries its own serialiser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from fhir_records.choice import ChoiceValue, decode_choice, encode_choice
from fhir_records.elements import Base, PrimitiveExtension
from fhir_records.errors import (
    FhirRecordsError,
    InvalidCodeError,
    LimitExceededError,
    MissingRequiredFieldError,
    TypeMismatchError,
)
from fhir_records.extensions import capture, reemit
from fhir_records.limits import DEFAULT_DECODE_LIMITS
from fhir_records.primitives import check_primitive, is_primitive
from fhir_records.report import (
    EMPTY_ARRAY,
    UNKNOWN_CODE,
    UNMODELED_FIELD,
    DecodeIssue,
    DecodeReport,
)
from fhir_records.resource import Resource
from fhir_records.schema import FieldSpec, fields_of, type_name
from fhir_records.valuesets import ValueSet


_MISSING = object()

# Keys a resource object may carry besides its declared fields.
_RESOURCE_KEYS = frozenset({"resourceType"})


@dataclass
class DecodeContext:
    """Per-call decoding state.

    Attributes:
        registry:         Object with a ``peek(raw, path=...)`` method that
                          returns the resource class for a JSON object.
        report:           Collects warnings and isolated errors.
        strict:           Raise on codes outside their value set.
        max_depth:        Maximum element nesting depth.
        report_unmodeled: Emit a warning for each captured unknown key.
    """

    registry: Any
    report: DecodeReport = field(default_factory=DecodeReport)
    strict: bool = False
    max_depth: int = DEFAULT_DECODE_LIMITS["max_depth"]
    report_unmodeled: bool = True
    depth: int = 0


# ═══════════════════════════════════════════════════════════════════
# DECODING
# ═══════════════════════════════════════════════════════════════════


def decode_resource(
    raw: Any,
    ctx: DecodeContext,
    path: Optional[str] = None,
    *,
    expected: Optional[type] = None,
) -> Resource:
    """Decode a JSON object holding a resource.

    With no *expected* class (or an abstract one) the concrete class is
    chosen by ``ctx.registry`` from ``resourceType``.  With a concrete
    *expected* class, ``resourceType`` must name it.
    """
    if not isinstance(raw, dict):
        raise TypeMismatchError("resource object", raw, path=path)
    if expected is None or expected.is_abstract():
        cls = ctx.registry.peek(raw, path=path)
    else:
        rt = raw.get("resourceType")
        if rt is None:
            raise MissingRequiredFieldError("resourceType", path=path or expected.resource_type)
        if rt != expected.resource_type:
            raise TypeMismatchError(
                f"resourceType '{expected.resource_type}'", rt, path=path,
            )
        cls = expected
    if ctx.report.resource_type is None:
        ctx.report.resource_type = cls.resource_type
    return decode_element(cls, raw, ctx, path or cls.resource_type)


def decode_element(cls: type, raw: Any, ctx: DecodeContext, path: str) -> Any:
    """Decode JSON object *raw* into an instance of model class *cls*."""
    if not isinstance(raw, dict):
        raise TypeMismatchError(f"{type_name(cls)} object", raw, path=path)
    ctx.depth += 1
    try:
        if ctx.depth > ctx.max_depth:
            raise LimitExceededError(
                f"Element nesting exceeds limit {ctx.max_depth}", path=path,
            )
        return _decode_fields(cls, raw, ctx, path)
    finally:
        ctx.depth -= 1


def decode_value(
    ref: Any,
    value: Any,
    ctx: DecodeContext,
    path: str,
    binding: Optional[ValueSet] = None,
) -> Any:
    """Decode one (non-null) JSON value of resolved type *ref*."""
    if isinstance(ref, str):
        check_primitive(ref, value, path=path)
        if binding is not None:
            _check_binding(binding, value, ctx, path)
        return value
    if issubclass(ref, Resource):
        return decode_resource(value, ctx, path, expected=ref)
    return decode_element(ref, value, ctx, path)


def _decode_fields(cls: type, raw: dict[str, Any], ctx: DecodeContext, path: str) -> Any:
    kwargs: dict[str, Any] = {}
    prim_ext: dict[str, Any] = {}
    isolated: dict[str, Any] = {}
    known: set[str] = set(_RESOURCE_KEYS) if issubclass(cls, Resource) else set()

    for spec in fields_of(cls):
        known.update(spec.json_keys())
        if spec.is_choice:
            kwargs[spec.name] = _decode_choice_field(spec, raw, ctx, path, prim_ext)
            if spec.required and kwargs[spec.name] is None:
                raise MissingRequiredFieldError(spec.json_name + "[x]", path=path)
        elif spec.isolate:
            try:
                kwargs[spec.name] = _decode_field(spec, raw, ctx, path, prim_ext)
            except FhirRecordsError as exc:
                if not exc.recoverable:
                    raise
                ctx.report.errors.append(DecodeIssue(f"{path}.{spec.json_name}", exc))
                if spec.json_name in raw:
                    isolated[spec.json_name] = raw[spec.json_name]
                kwargs["decode_error"] = exc
        else:
            kwargs[spec.name] = _decode_field(spec, raw, ctx, path, prim_ext)

    bag = capture(raw, known)
    if ctx.report_unmodeled:
        for key in bag:
            ctx.report.warn(
                f"{path}.{key}", UNMODELED_FIELD,
                f"'{key}' is not a field of {type_name(cls)}; kept verbatim",
            )
    bag.update(capture(isolated, ()))
    if bag:
        kwargs["unknown_fields"] = bag
    if prim_ext:
        kwargs["primitive_extensions"] = prim_ext
    return cls(**kwargs)


def _decode_field(
    spec: FieldSpec,
    raw: dict[str, Any],
    ctx: DecodeContext,
    path: str,
    prim_ext: dict[str, Any],
) -> Any:
    key = spec.json_name
    fpath = f"{path}.{key}"
    value = raw.get(key, _MISSING)
    ext_raw = raw.get("_" + key, _MISSING) if spec.is_primitive else _MISSING
    present = value is not _MISSING

    if present and value is None:
        raise TypeMismatchError(_expected(spec), None, path=fpath)

    if not spec.many:
        result = decode_value(spec.type, value, ctx, fpath, spec.binding) if present else None
        if ext_raw is not _MISSING:
            prim_ext[key] = decode_element(PrimitiveExtension, ext_raw, ctx, f"{path}._{key}")
        elif spec.required and not present:
            raise MissingRequiredFieldError(key, path=path)
        return result

    items: list[Any] = []
    if present:
        if not isinstance(value, list):
            raise TypeMismatchError(_expected(spec), value, path=fpath)
        if not value:
            ctx.report.warn(fpath, EMPTY_ARRAY, f"'{key}' is an empty array; it will be omitted")
        for i, item in enumerate(value):
            if item is None and spec.is_primitive:
                items.append(None)
            else:
                items.append(decode_value(spec.type, item, ctx, f"{fpath}[{i}]", spec.binding))

    if ext_raw is not _MISSING:
        exts = _decode_extension_array(ext_raw, len(items) if present else None, ctx, f"{path}._{key}")
        if not present:
            items = [None] * len(exts)
        prim_ext[key] = exts
    else:
        exts = [None] * len(items)
    for i, (item, ext) in enumerate(zip(items, exts)):
        if item is None and ext is None:
            raise TypeMismatchError(
                type_name(spec.type), None, path=f"{fpath}[{i}]",
                detail="null is only allowed where '_" + key + "' has an entry",
            )

    if spec.required and not items:
        raise MissingRequiredFieldError(key, path=path)
    return items


def _decode_extension_array(
    ext_raw: Any,
    expected_len: Optional[int],
    ctx: DecodeContext,
    path: str,
) -> list[Optional[PrimitiveExtension]]:
    if not isinstance(ext_raw, list):
        raise TypeMismatchError("array of Element", ext_raw, path=path)
    if expected_len is not None and len(ext_raw) != expected_len:
        raise TypeMismatchError(
            f"array of {expected_len} entries", ext_raw, path=path,
            detail="must align with the values array",
        )
    return [
        None if e is None else decode_element(PrimitiveExtension, e, ctx, f"{path}[{i}]")
        for i, e in enumerate(ext_raw)
    ]


def _decode_choice_field(
    spec: FieldSpec,
    raw: dict[str, Any],
    ctx: DecodeContext,
    path: str,
    prim_ext: dict[str, Any],
) -> Optional[ChoiceValue]:

    def decode(ref: Any, value: Any, key: str) -> Any:
        ext_key = "_" + key
        if is_primitive(ref) and ext_key in raw:
            prim_ext[key] = decode_element(PrimitiveExtension, raw[ext_key], ctx, f"{path}.{ext_key}")
        if value is None:
            if key in raw:
                raise TypeMismatchError(type_name(ref), None, path=f"{path}.{key}")
            return None
        return decode_value(ref, value, ctx, f"{path}.{key}")

    return decode_choice(spec.json_name, spec.choices, raw, decode=decode, path=path)


def _check_binding(binding: ValueSet, code: str, ctx: DecodeContext, path: str) -> None:
    if code in binding:
        return
    if ctx.strict:
        raise InvalidCodeError(code, binding.name, path=path)
    ctx.report.warn(
        path, UNKNOWN_CODE,
        f"code '{code}' is not in value set '{binding.name}'; kept as-is",
        code,
    )


def _expected(spec: FieldSpec) -> str:
    name = type_name(spec.type)
    return f"array of {name}" if spec.many else name


# ═══════════════════════════════════════════════════════════════════
# ENCODING
# ═══════════════════════════════════════════════════════════════════


def encode_resource(resource: Any) -> dict[str, Any]:
    """Encode a resource instance to a FHIR JSON object."""
    if not isinstance(resource, Resource):
        raise TypeMismatchError("Resource instance", resource)
    return encode_element(resource)


def encode_element(obj: Any, path: Optional[str] = None) -> dict[str, Any]:
    """Encode model instance *obj* to a JSON object.

    Raises:
        MissingRequiredFieldError: A required field is unset.
        TypeMismatchError: A field holds a value of the wrong type.
    """
    if not isinstance(obj, Base):
        raise TypeMismatchError("FHIR model instance", obj, path=path)
    cls = type(obj)
    out: dict[str, Any] = {}
    if isinstance(obj, Resource):
        if cls.is_abstract():
            raise TypeError(f"Cannot encode abstract {cls.resource_type}")
        out["resourceType"] = cls.resource_type
        path = path or cls.resource_type
    else:
        path = path or type_name(cls)
    prim_ext = obj.primitive_extensions

    for spec in fields_of(cls):
        value = getattr(obj, spec.name)
        key = spec.json_name
        if spec.is_choice:
            _encode_choice_field(spec, value, prim_ext, out, path)
            continue
        ext = prim_ext.get(key) if spec.is_primitive else None
        if spec.many:
            _encode_array(spec, value, ext, out, path)
        else:
            if value is not None:
                out[key] = encode_value(spec.type, value, f"{path}.{key}")
            if ext is not None:
                out["_" + key] = encode_element(ext, f"{path}._{key}")
        if spec.required and key not in out and "_" + key not in out:
            raise MissingRequiredFieldError(key, path=path)

    return reemit(out, obj.unknown_fields)


def encode_value(ref: Any, value: Any, path: str) -> Any:
    if isinstance(ref, str):
        return check_primitive(ref, value, path=path)
    if not isinstance(value, ref):
        raise TypeMismatchError(type_name(ref), value, path=path)
    return encode_element(value, path)


def _encode_array(
    spec: FieldSpec,
    value: Any,
    ext: Any,
    out: dict[str, Any],
    path: str,
) -> None:
    key = spec.json_name
    fpath = f"{path}.{key}"
    if value is None:
        value = []
    if not isinstance(value, (list, tuple)):
        raise TypeMismatchError(_expected(spec), value, path=fpath)
    if ext is not None:
        if not isinstance(ext, (list, tuple)) or (value and len(ext) != len(value)):
            raise TypeMismatchError(
                f"array of {len(value)} entries", ext, path=f"{path}._{key}",
                detail="must align with the values array",
            )
    exts = list(ext) if ext is not None else [None] * len(value)
    items = list(value) if value else [None] * len(exts)

    encoded: list[Any] = []
    for i, (item, item_ext) in enumerate(zip(items, exts)):
        if item is None:
            if item_ext is None or not spec.is_primitive:
                raise TypeMismatchError(type_name(spec.type), None, path=f"{fpath}[{i}]")
            encoded.append(None)
        else:
            encoded.append(encode_value(spec.type, item, f"{fpath}[{i}]"))
    if any(item is not None for item in items):
        out[key] = encoded
    if ext is not None and any(e is not None for e in exts):
        out["_" + key] = [
            None if e is None else encode_element(e, f"{path}._{key}[{i}]")
            for i, e in enumerate(exts)
        ]
    if spec.required and key not in out and "_" + key not in out:
        raise MissingRequiredFieldError(key, path=path)


def _encode_choice_field(
    spec: FieldSpec,
    variant: Any,
    prim_ext: dict[str, Any],
    out: dict[str, Any],
    path: str,
) -> None:

    def encode(ref: Any, value: Any, key: str) -> Any:
        return encode_value(ref, value, f"{path}.{key}")

    encoded = encode_choice(spec.json_name, spec.choices, variant, encode=encode, path=path)
    out.update(encoded)
    if variant is not None:
        key = variant.key(spec.json_name)
        ext = prim_ext.get(key)
        if ext is not None and is_primitive(spec.choices[variant.kind]):
            out["_" + key] = encode_element(ext, f"{path}._{key}")
            return
    if spec.required and not encoded:
        raise MissingRequiredFieldError(spec.json_name + "[x]", path=path)
