"""
Built-in FHIR R4 resource definitions.

Importing this package registers nothing; :data:`BUILTIN_RESOURCES` is
the list :func:`fhir_records.registry.default_registry` draws from.
"""

from fhir_records.resources.allergy_intolerance import (
    AllergyIntolerance,
    AllergyIntoleranceReaction,
)
from fhir_records.resources.basic import Basic
from fhir_records.resources.bundle import (
    Bundle,
    BundleEntry,
    BundleEntryRequest,
    BundleEntryResponse,
    BundleEntrySearch,
    BundleLink,
)
from fhir_records.resources.care_plan import CarePlan, CarePlanActivity, CarePlanActivityDetail
from fhir_records.resources.care_team import CareTeam, CareTeamParticipant
from fhir_records.resources.claim import Claim, ClaimItem
from fhir_records.resources.condition import Condition
from fhir_records.resources.device import Device, DeviceDeviceName, DeviceUdiCarrier
from fhir_records.resources.diagnostic_report import DiagnosticReport
from fhir_records.resources.document_reference import (
    DocumentReference,
    DocumentReferenceContent,
    DocumentReferenceContext,
)
from fhir_records.resources.encounter import Encounter
from fhir_records.resources.explanation_of_benefit import (
    ExplanationOfBenefit,
    ExplanationOfBenefitAdjudication,
    ExplanationOfBenefitItem,
    ExplanationOfBenefitTotal,
)
from fhir_records.resources.goal import Goal, GoalTarget
from fhir_records.resources.imaging_study import (
    ImagingStudy,
    ImagingStudySeries,
    ImagingStudySeriesInstance,
)
from fhir_records.resources.immunization import Immunization
from fhir_records.resources.location import Location, LocationPosition
from fhir_records.resources.medication import Medication, MedicationBatch, MedicationIngredient
from fhir_records.resources.medication_administration import (
    MedicationAdministration,
    MedicationAdministrationDosage,
)
from fhir_records.resources.medication_request import MedicationRequest
from fhir_records.resources.observation import Observation, ObservationComponent
from fhir_records.resources.operation_outcome import OperationOutcome, OperationOutcomeIssue
from fhir_records.resources.organization import Organization
from fhir_records.resources.patient import (
    Patient,
    PatientCommunication,
    PatientContact,
    PatientLink,
)
from fhir_records.resources.practitioner import Practitioner
from fhir_records.resources.practitioner_role import PractitionerRole
from fhir_records.resources.procedure import Procedure
from fhir_records.resources.provenance import Provenance, ProvenanceAgent, ProvenanceEntity
from fhir_records.resources.supply_delivery import SupplyDelivery, SupplyDeliverySuppliedItem

BUILTIN_RESOURCES: tuple[type, ...] = (
    AllergyIntolerance,
    Basic,
    Bundle,
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

__all__ = [
    "BUILTIN_RESOURCES",
    "AllergyIntolerance",
    "AllergyIntoleranceReaction",
    "Basic",
    "Bundle",
    "BundleEntry",
    "BundleEntryRequest",
    "BundleEntryResponse",
    "BundleEntrySearch",
    "BundleLink",
    "CarePlan",
    "CarePlanActivity",
    "CarePlanActivityDetail",
    "CareTeam",
    "CareTeamParticipant",
    "Claim",
    "ClaimItem",
    "Condition",
    "Device",
    "DeviceDeviceName",
    "DeviceUdiCarrier",
    "DiagnosticReport",
    "DocumentReference",
    "DocumentReferenceContent",
    "DocumentReferenceContext",
    "Encounter",
    "ExplanationOfBenefit",
    "ExplanationOfBenefitAdjudication",
    "ExplanationOfBenefitItem",
    "ExplanationOfBenefitTotal",
    "Goal",
    "GoalTarget",
    "ImagingStudy",
    "ImagingStudySeries",
    "ImagingStudySeriesInstance",
    "Immunization",
    "Location",
    "LocationPosition",
    "Medication",
    "MedicationAdministration",
    "MedicationAdministrationDosage",
    "MedicationBatch",
    "MedicationIngredient",
    "MedicationRequest",
    "Observation",
    "ObservationComponent",
    "OperationOutcome",
    "OperationOutcomeIssue",
    "Organization",
    "Patient",
    "PatientCommunication",
    "PatientContact",
    "PatientLink",
    "Practitioner",
    "PractitionerRole",
    "Procedure",
    "Provenance",
    "ProvenanceAgent",
    "ProvenanceEntity",
    "SupplyDelivery",
    "SupplyDeliverySuppliedItem",
]
