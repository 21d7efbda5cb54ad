"""
Resource envelope: the identity spine of every top-level FHIR resource.

Concrete resources subclass :class:`DomainResource` (or, for the few
infrastructure resources such as ``Bundle``, :class:`Resource`) and set
the ``resource_type`` class variable.  That name is the JSON
``resourceType`` discriminator; it is written by the generic encoder, so
resource classes never override serialisation themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from fhir_records.datatypes import Meta, Narrative
from fhir_records.elements import Base, Extension
from fhir_records.schema import datatype, fhir_field


ABSTRACT_RESOURCE_TYPES = frozenset({"Resource", "DomainResource"})


@datatype
@dataclass(frozen=True)
class Resource(Base):
    resource_type: ClassVar[str] = "Resource"

    id: Optional[str] = fhir_field("id")
    meta: Optional[Meta] = fhir_field(Meta)
    implicit_rules: Optional[str] = fhir_field("uri")
    language: Optional[str] = fhir_field("code")

    @classmethod
    def is_abstract(cls) -> bool:
        return cls.resource_type in ABSTRACT_RESOURCE_TYPES

    @property
    def relative_url(self) -> Optional[str]:
        """``Type/id``, or None for a resource without an id."""
        if self.id is None:
            return None
        return f"{self.resource_type}/{self.id}"


@datatype
@dataclass(frozen=True)
class DomainResource(Resource):
    resource_type: ClassVar[str] = "DomainResource"

    text: Optional[Narrative] = fhir_field(Narrative)
    contained: list[Resource] = fhir_field("Resource", many=True)
    extension: list[Extension] = fhir_field(Extension, many=True)
    modifier_extension: list[Extension] = fhir_field(Extension, many=True)

    def has_modifier_extensions(self) -> bool:
        return bool(self.modifier_extension)

    def modifier_extension_urls(self) -> list[str]:
        return [e.url for e in self.modifier_extension]

    def extensions_with_url(self, url: str) -> list[Extension]:
        return [e for e in self.extension if e.url == url]

    def find_contained(self, reference: str) -> Optional[Resource]:
        """Resolve a local ``"#id"`` reference against ``contained``.

        Returns None when *reference* is not local or nothing matches.
        """
        if not reference or not reference.startswith("#"):
            return None
        target = reference[1:]
        for resource in self.contained:
            if resource.id == target:
                return resource
        return None
