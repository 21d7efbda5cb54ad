"""
Bundle: a container for a collection of resources.

Each ``entry.resource`` is decoded through the registry like any other
polymorphic slot, but a failure there is confined to its entry.  The
entry keeps the offending JSON verbatim (so the Bundle still re-encodes
losslessly), exposes the error as :attr:`BundleEntry.decode_error` and
:attr:`BundleEntry.outcome`, and the sibling entries decode normally.
Malformed JSON and limit violations still abort the whole call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterator, Optional

from fhir_records.datatypes import Identifier
from fhir_records.elements import BackboneElement
from fhir_records.errors import FhirRecordsError
from fhir_records.resource import Resource
from fhir_records.schema import datatype, fhir_field
from fhir_records.valuesets import BUNDLE_TYPE, HTTP_VERB, SEARCH_ENTRY_MODE


@datatype
@dataclass(frozen=True)
class BundleLink(BackboneElement):
    relation: Optional[str] = fhir_field("string", required=True)
    url: Optional[str] = fhir_field("uri", required=True)


@datatype
@dataclass(frozen=True)
class BundleEntrySearch(BackboneElement):
    mode: Optional[str] = fhir_field("code", binding=SEARCH_ENTRY_MODE)
    score: Optional[float] = fhir_field("decimal")


@datatype
@dataclass(frozen=True)
class BundleEntryRequest(BackboneElement):
    method: Optional[str] = fhir_field("code", required=True, binding=HTTP_VERB)
    url: Optional[str] = fhir_field("uri", required=True)
    if_none_match: Optional[str] = fhir_field("string")
    if_modified_since: Optional[str] = fhir_field("instant")
    if_match: Optional[str] = fhir_field("string")
    if_none_exist: Optional[str] = fhir_field("string")


@datatype
@dataclass(frozen=True)
class BundleEntryResponse(BackboneElement):
    status: Optional[str] = fhir_field("string", required=True)
    location: Optional[str] = fhir_field("uri")
    etag: Optional[str] = fhir_field("string")
    last_modified: Optional[str] = fhir_field("instant")
    outcome: Optional[Resource] = fhir_field("Resource")


@datatype
@dataclass(frozen=True)
class BundleEntry(BackboneElement):
    link: list[BundleLink] = fhir_field(BundleLink, many=True)
    full_url: Optional[str] = fhir_field("uri")
    resource: Optional[Resource] = fhir_field("Resource", isolate=True)
    search: Optional[BundleEntrySearch] = fhir_field(BundleEntrySearch)
    request: Optional[BundleEntryRequest] = fhir_field(BundleEntryRequest)
    response: Optional[BundleEntryResponse] = fhir_field(BundleEntryResponse)

    # Set when ``resource`` failed to decode; its JSON is then kept in
    # ``unknown_fields["resource"]``.
    decode_error: Optional[FhirRecordsError] = field(
        default=None, compare=False, repr=False,
    )

    @property
    def failed(self) -> bool:
        return self.decode_error is not None

    @property
    def outcome(self):
        """OperationOutcome describing :attr:`decode_error`, or None."""
        if self.decode_error is None:
            return None
        return self.decode_error.to_operation_outcome()

    @property
    def raw_resource(self) -> Optional[dict]:
        """The undecoded JSON of a failed resource."""
        return self.unknown_fields.get("resource")


@datatype
@dataclass(frozen=True)
class Bundle(Resource):
    resource_type: ClassVar[str] = "Bundle"

    identifier: Optional[Identifier] = fhir_field(Identifier)
    type: Optional[str] = fhir_field("code", required=True, binding=BUNDLE_TYPE)
    timestamp: Optional[str] = fhir_field("instant")
    total: Optional[int] = fhir_field("unsignedInt")
    link: list[BundleLink] = fhir_field(BundleLink, many=True)
    entry: list[BundleEntry] = fhir_field(BundleEntry, many=True)

    def resources(self, resource_type: Optional[str] = None) -> list[Resource]:
        """Successfully decoded entry resources, optionally of one type."""
        return [
            e.resource for e in self.entry
            if e.resource is not None
            and (resource_type is None or e.resource.resource_type == resource_type)
        ]

    def failed_entries(self) -> list[BundleEntry]:
        return [e for e in self.entry if e.failed]

    def __iter__(self) -> Iterator[BundleEntry]:
        return iter(self.entry)

    def resolve(self, full_url: str) -> Optional[Resource]:
        """Entry resource whose ``fullUrl`` is *full_url*."""
        for e in self.entry:
            if e.full_url == full_url:
                return e.resource
        return None
