"""
Field declarations for FHIR model dataclasses.

Model classes are frozen dataclasses whose wire fields are declared with
:func:`fhir_field` or :func:`choice_field`.  The declaration is stored in
the dataclass field metadata and turned into a :class:`FieldSpec` the
first time the generic codec touches the class.

Type references may be:

- a FHIR primitive name (``"dateTime"``, ``"code"``),
- a model class, or
- the FHIR name of a model class (``"Extension"``, ``"Resource"``),
  resolved lazily so that mutually recursive types can refer to each
  other before both exist.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

from fhir_records.primitives import is_primitive
from fhir_records.valuesets import ValueSet


_METADATA_KEY = "fhir"

# FHIR type name → model class, filled by @datatype
_DATATYPES: dict[str, type] = {}


def datatype(cls: type) -> type:
    """Class decorator: make *cls* resolvable by its FHIR type name."""
    _DATATYPES[cls.__name__] = cls
    return cls


def resolve_type(ref: Any) -> Any:
    """Resolve a type reference to a primitive name or a model class.

    Raises:
        KeyError: If *ref* names neither a primitive nor a known class.
    """
    if isinstance(ref, type):
        return ref
    if is_primitive(ref):
        return ref
    try:
        return _DATATYPES[ref]
    except KeyError:
        raise KeyError(f"Unknown FHIR type reference: {ref!r}") from None


def type_name(ref: Any) -> str:
    """FHIR type name of a resolved reference (choice suffixes use it)."""
    if isinstance(ref, str):
        return ref
    return getattr(ref, "fhir_type", None) or ref.__name__


def suffix_for(ref: Any) -> str:
    name = type_name(ref)
    return name[0].upper() + name[1:]


def to_json_name(attr: str) -> str:
    """``managing_organization`` → ``managingOrganization``; ``class_`` → ``class``."""
    parts = attr.rstrip("_").split("_")
    return parts[0] + "".join(p[:1].upper() + p[1:] for p in parts[1:])


@dataclass(frozen=True)
class _Declaration:
    type: Any = None
    many: bool = False
    required: bool = False
    binding: Optional[ValueSet] = None
    json_name: Optional[str] = None
    choices: Optional[tuple] = None
    isolate: bool = False


def fhir_field(
    type_: Any,
    *,
    many: bool = False,
    required: bool = False,
    binding: Optional[ValueSet] = None,
    json_name: Optional[str] = None,
    isolate: bool = False,
) -> Any:
    """Declare a wire field.

    Args:
        type_:     Type reference (see module docstring).
        many:      Repeating element (``0..*`` / ``1..*``).  Defaults to
                   an empty list; an empty list is never emitted.
        required:  Minimum cardinality 1.
        binding:   Closed value set for ``code`` elements.
        json_name: Override of the camelCase JSON name.
        isolate:   Decode failures of this (resource-typed) field are
                   recorded on the owner instead of propagated.
    """
    decl = _Declaration(
        type=type_, many=many, required=required, binding=binding,
        json_name=json_name, isolate=isolate,
    )
    metadata = {_METADATA_KEY: decl}
    if many:
        return dataclasses.field(default_factory=list, metadata=metadata)
    return dataclasses.field(default=None, metadata=metadata)


def choice_field(
    *types: Any,
    required: bool = False,
    json_name: Optional[str] = None,
) -> Any:
    """Declare a ``name[x]`` choice group holding one :class:`ChoiceValue`."""
    if not types:
        raise ValueError("A choice field needs at least one allowed type")
    decl = _Declaration(choices=tuple(types), required=required, json_name=json_name)
    return dataclasses.field(default=None, metadata={_METADATA_KEY: decl})


@dataclass(frozen=True)
class FieldSpec:
    """Resolved description of one wire field of a model class."""

    name: str
    json_name: str
    type: Any = None
    many: bool = False
    required: bool = False
    binding: Optional[ValueSet] = None
    choices: Optional[dict[str, Any]] = None  # suffix → resolved type
    isolate: bool = False

    @property
    def is_choice(self) -> bool:
        return self.choices is not None

    @property
    def is_primitive(self) -> bool:
        return not self.is_choice and is_primitive(self.type)

    def json_keys(self) -> set[str]:
        """Every key this field may occupy in a JSON object."""
        if self.is_choice:
            keys = set()
            for suffix, ref in self.choices.items():
                keys.add(self.json_name + suffix)
                if is_primitive(ref):
                    keys.add("_" + self.json_name + suffix)
            return keys
        if self.is_primitive:
            return {self.json_name, "_" + self.json_name}
        return {self.json_name}


@lru_cache(maxsize=None)
def fields_of(cls: type) -> tuple[FieldSpec, ...]:
    """Wire fields of model class *cls*, in declaration order."""
    if not dataclasses.is_dataclass(cls):
        raise TypeError(f"{cls.__name__} is not a FHIR model class")
    specs: list[FieldSpec] = []
    for f in dataclasses.fields(cls):
        decl: Optional[_Declaration] = f.metadata.get(_METADATA_KEY)
        if decl is None:
            continue
        json_name = decl.json_name or to_json_name(f.name)
        if decl.choices is not None:
            choices: dict[str, Any] = {}
            for ref in decl.choices:
                resolved = resolve_type(ref)
                suffix = suffix_for(resolved)
                if suffix in choices:
                    raise TypeError(
                        f"{cls.__name__}.{f.name}: duplicate choice suffix '{suffix}'"
                    )
                choices[suffix] = resolved
            specs.append(FieldSpec(
                name=f.name, json_name=json_name, required=decl.required,
                choices=choices,
            ))
        else:
            if decl.isolate and "decode_error" not in {g.name for g in dataclasses.fields(cls)}:
                raise TypeError(
                    f"{cls.__name__}.{f.name}: isolated fields need a 'decode_error' attribute"
                )
            specs.append(FieldSpec(
                name=f.name, json_name=json_name, type=resolve_type(decl.type),
                many=decl.many, required=decl.required, binding=decl.binding,
                isolate=decl.isolate,
            ))
    return tuple(specs)


def field_spec(cls: type, name: str) -> FieldSpec:
    """Look up one wire field by Python attribute or JSON name."""
    for spec in fields_of(cls):
        if name in (spec.name, spec.json_name):
            return spec
    raise KeyError(f"{cls.__name__} has no FHIR field {name!r}")
