"""
fhir-records: typed, round-trip-safe FHIR R4 JSON resources.

Decodes FHIR R4 JSON into immutable dataclasses (choice types as tagged
unions, unknown content kept in extension bags, primitive ``_name``
extensions preserved) and encodes them back without loss.
"""

__version__ = "0.3.0"

from fhir_records.choice import ChoiceValue
from fhir_records.codec import DecodeContext, decode_element, encode_element
from fhir_records.elements import (
    BackboneElement,
    Element,
    Extension,
    PrimitiveExtension,
)
from fhir_records.datatypes import (
    Address,
    Age,
    Annotation,
    Attachment,
    CodeableConcept,
    Coding,
    ContactDetail,
    ContactPoint,
    Count,
    Distance,
    Dosage,
    DosageDoseAndRate,
    Duration,
    HumanName,
    Identifier,
    Meta,
    Money,
    Narrative,
    Period,
    Quantity,
    Range,
    Ratio,
    Reference,
    Signature,
    SimpleQuantity,
    Timing,
    TimingRepeat,
)
from fhir_records.errors import (
    ChoiceConflictError,
    ErrorKind,
    FhirRecordsError,
    InvalidCodeError,
    LimitExceededError,
    MalformedJSONError,
    MissingRequiredFieldError,
    TypeMismatchError,
    UnknownResourceTypeError,
)
from fhir_records.limits import DEFAULT_DECODE_LIMITS
from fhir_records.primitives import FhirDateTime, PRIMITIVE_TYPES
from fhir_records.processor import FhirCodec, decode, dumps, encode, loads
from fhir_records.registry import ResourceRegistry, default_registry
from fhir_records.report import DecodeIssue, DecodeReport, DecodeWarning
from fhir_records.resource import DomainResource, Resource
from fhir_records.resources import (
    BUILTIN_RESOURCES,
    AllergyIntolerance,
    Basic,
    Bundle,
    BundleEntry,
    CarePlan,
    CareTeam,
    Claim,
    Condition,
    Device,
    DiagnosticReport,
    DocumentReference,
    Encounter,
    ExplanationOfBenefit,
    Goal,
    ImagingStudy,
    Immunization,
    Location,
    Medication,
    MedicationAdministration,
    MedicationRequest,
    Observation,
    OperationOutcome,
    Organization,
    Patient,
    Practitioner,
    PractitionerRole,
    Procedure,
    Provenance,
    SupplyDelivery,
)
from fhir_records.roundtrip import RoundTripResult, compare_round_trip
from fhir_records.schema import choice_field, datatype, fhir_field, fields_of

__all__ = [
    # Codec
    "FhirCodec",
    "decode",
    "loads",
    "encode",
    "dumps",
    "DecodeContext",
    "decode_element",
    "encode_element",
    "DEFAULT_DECODE_LIMITS",
    # Registry
    "ResourceRegistry",
    "default_registry",
    "BUILTIN_RESOURCES",
    # Reports
    "DecodeReport",
    "DecodeWarning",
    "DecodeIssue",
    "RoundTripResult",
    "compare_round_trip",
    # Errors
    "ErrorKind",
    "FhirRecordsError",
    "ChoiceConflictError",
    "UnknownResourceTypeError",
    "MissingRequiredFieldError",
    "TypeMismatchError",
    "MalformedJSONError",
    "InvalidCodeError",
    "LimitExceededError",
    # Model building blocks
    "ChoiceValue",
    "FhirDateTime",
    "PRIMITIVE_TYPES",
    "datatype",
    "fhir_field",
    "choice_field",
    "fields_of",
    "Element",
    "BackboneElement",
    "Extension",
    "PrimitiveExtension",
    "Resource",
    "DomainResource",
    # Datatypes
    "Address",
    "Age",
    "Annotation",
    "Attachment",
    "CodeableConcept",
    "Coding",
    "ContactDetail",
    "ContactPoint",
    "Count",
    "Distance",
    "Dosage",
    "DosageDoseAndRate",
    "Duration",
    "HumanName",
    "Identifier",
    "Meta",
    "Money",
    "Narrative",
    "Period",
    "Quantity",
    "Range",
    "Ratio",
    "Reference",
    "Signature",
    "SimpleQuantity",
    "Timing",
    "TimingRepeat",
    # Resources
    "AllergyIntolerance",
    "Basic",
    "Bundle",
    "BundleEntry",
    "CarePlan",
    "CareTeam",
    "Claim",
    "Condition",
    "Device",
    "DiagnosticReport",
    "DocumentReference",
    "Encounter",
    "ExplanationOfBenefit",
    "Goal",
    "ImagingStudy",
    "Immunization",
    "Location",
    "Medication",
    "MedicationAdministration",
    "MedicationRequest",
    "Observation",
    "OperationOutcome",
    "Organization",
    "Patient",
    "Practitioner",
    "PractitionerRole",
    "Procedure",
    "Provenance",
    "SupplyDelivery",
]
