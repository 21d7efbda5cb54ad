"""
Closed FHIR R4 value sets bound to ``code`` elements.

Only *required* bindings on plain ``code`` elements live here; codes
inside ``CodeableConcept`` are extensible by nature and are not checked.
A code outside its value set is kept verbatim and reported as a warning
unless the codec runs in strict mode.
"""

from __future__ import annotations

from dataclasses import dataclass

FHIR_R4_BASE = "http://hl7.org/fhir/ValueSet/"

FHIR_VERSION = "4.0.1"
"""FHIR release whose value sets and field sets this package mirrors."""


@dataclass(frozen=True)
class ValueSet:
    """A named, closed set of codes."""

    name: str
    codes: frozenset[str]

    @property
    def url(self) -> str:
        return FHIR_R4_BASE + self.name

    def __contains__(self, code: object) -> bool:
        return code in self.codes

    def __iter__(self):
        return iter(sorted(self.codes))


def _vs(name: str, *codes: str) -> ValueSet:
    return ValueSet(name, frozenset(codes))


# ── Datatypes ─────────────────────────────────────────────────────

ADMINISTRATIVE_GENDER = _vs("administrative-gender", "male", "female", "other", "unknown")

NAME_USE = _vs(
    "name-use", "usual", "official", "temp", "nickname", "anonymous", "old", "maiden",
)

ADDRESS_USE = _vs("address-use", "home", "work", "temp", "old", "billing")

ADDRESS_TYPE = _vs("address-type", "postal", "physical", "both")

CONTACT_POINT_SYSTEM = _vs(
    "contact-point-system", "phone", "fax", "email", "pager", "url", "sms", "other",
)

CONTACT_POINT_USE = _vs("contact-point-use", "home", "work", "temp", "old", "mobile")

IDENTIFIER_USE = _vs("identifier-use", "usual", "official", "temp", "secondary", "old")

QUANTITY_COMPARATOR = _vs("quantity-comparator", "<", "<=", ">=", ">")

NARRATIVE_STATUS = _vs("narrative-status", "generated", "extensions", "additional", "empty")

DAYS_OF_WEEK = _vs("days-of-week", "mon", "tue", "wed", "thu", "fri", "sat", "sun")

UNITS_OF_TIME = _vs("units-of-time", "s", "min", "h", "d", "wk", "mo", "a")

# ── Patient ───────────────────────────────────────────────────────

LINK_TYPE = _vs("link-type", "replaced-by", "replaces", "refer", "seealso")

# ── Clinical ──────────────────────────────────────────────────────

OBSERVATION_STATUS = _vs(
    "observation-status",
    "registered", "preliminary", "final", "amended", "corrected",
    "cancelled", "entered-in-error", "unknown",
)

DIAGNOSTIC_REPORT_STATUS = _vs(
    "diagnostic-report-status",
    "registered", "partial", "preliminary", "final", "amended",
    "corrected", "appended", "cancelled", "entered-in-error", "unknown",
)

ENCOUNTER_STATUS = _vs(
    "encounter-status",
    "planned", "arrived", "triaged", "in-progress", "onleave",
    "finished", "cancelled", "entered-in-error", "unknown",
)

ENCOUNTER_LOCATION_STATUS = _vs(
    "encounter-location-status", "planned", "active", "reserved", "completed",
)

EVENT_STATUS = _vs(
    "event-status",
    "preparation", "in-progress", "not-done", "on-hold", "stopped",
    "completed", "entered-in-error", "unknown",
)

IMMUNIZATION_STATUS = _vs(
    "immunization-status", "completed", "entered-in-error", "not-done",
)

ALLERGY_INTOLERANCE_TYPE = _vs("allergy-intolerance-type", "allergy", "intolerance")

ALLERGY_INTOLERANCE_CATEGORY = _vs(
    "allergy-intolerance-category", "food", "medication", "environment", "biologic",
)

ALLERGY_INTOLERANCE_CRITICALITY = _vs(
    "allergy-intolerance-criticality", "low", "high", "unable-to-assess",
)

REACTION_EVENT_SEVERITY = _vs("reaction-event-severity", "mild", "moderate", "severe")

# ── Requests ──────────────────────────────────────────────────────

MEDICATION_REQUEST_STATUS = _vs(
    "medicationrequest-status",
    "active", "on-hold", "cancelled", "completed", "entered-in-error",
    "stopped", "draft", "unknown",
)

MEDICATION_REQUEST_INTENT = _vs(
    "medicationrequest-intent",
    "proposal", "plan", "order", "original-order", "reflex-order",
    "filler-order", "instance-order", "option",
)

REQUEST_PRIORITY = _vs("request-priority", "routine", "urgent", "asap", "stat")

REQUEST_STATUS = _vs(
    "request-status",
    "draft", "active", "on-hold", "revoked", "completed", "entered-in-error", "unknown",
)

CARE_PLAN_INTENT = _vs("care-plan-intent", "proposal", "plan", "order", "option")

CARE_PLAN_ACTIVITY_STATUS = _vs(
    "care-plan-activity-status",
    "not-started", "scheduled", "in-progress", "on-hold", "completed",
    "cancelled", "stopped", "unknown", "entered-in-error",
)

SUPPLY_DELIVERY_STATUS = _vs(
    "supplydelivery-status", "in-progress", "completed", "abandoned", "entered-in-error",
)

# ── Medications ───────────────────────────────────────────────────

MEDICATION_STATUS = _vs("medication-status", "active", "inactive", "entered-in-error")

MEDICATION_ADMIN_STATUS = _vs(
    "medication-admin-status",
    "in-progress", "not-done", "on-hold", "completed", "entered-in-error",
    "stopped", "unknown",
)

# ── Care coordination ─────────────────────────────────────────────

CARE_TEAM_STATUS = _vs(
    "care-team-status", "proposed", "active", "suspended", "inactive", "entered-in-error",
)

GOAL_LIFECYCLE_STATUS = _vs(
    "goal-status",
    "proposed", "planned", "accepted", "active", "on-hold", "completed",
    "cancelled", "entered-in-error", "rejected",
)

# ── Documents & imaging ───────────────────────────────────────────

DOCUMENT_REFERENCE_STATUS = _vs(
    "document-reference-status", "current", "superseded", "entered-in-error",
)

COMPOSITION_STATUS = _vs(
    "composition-status", "preliminary", "final", "amended", "entered-in-error",
)

DOCUMENT_RELATIONSHIP_TYPE = _vs(
    "document-relationship-type", "replaces", "transforms", "signs", "appends",
)

IMAGING_STUDY_STATUS = _vs(
    "imagingstudy-status", "registered", "available", "cancelled", "entered-in-error", "unknown",
)

PROVENANCE_ENTITY_ROLE = _vs(
    "provenance-entity-role", "derivation", "revision", "quotation", "source", "removal",
)

# ── Administration ────────────────────────────────────────────────

LOCATION_STATUS = _vs("location-status", "active", "suspended", "inactive")

LOCATION_MODE = _vs("location-mode", "instance", "kind")

DEVICE_STATUS = _vs("device-status", "active", "inactive", "entered-in-error", "unknown")

UDI_ENTRY_TYPE = _vs(
    "udi-entry-type", "barcode", "rfid", "manual", "card", "self-reported", "unknown",
)

DEVICE_NAME_TYPE = _vs(
    "device-nametype",
    "udi-label-name", "user-friendly-name", "patient-reported-name",
    "manufacturer-name", "model-name", "other",
)

# ── Financial ─────────────────────────────────────────────────────

FM_STATUS = _vs("fm-status", "active", "cancelled", "draft", "entered-in-error")

CLAIM_USE = _vs("claim-use", "claim", "preauthorization", "predetermination")

REMITTANCE_OUTCOME = _vs("remittance-outcome", "queued", "complete", "error", "partial")

EXPLANATION_OF_BENEFIT_STATUS = _vs(
    "explanationofbenefit-status", "active", "cancelled", "draft", "entered-in-error",
)

NOTE_TYPE = _vs("note-type", "display", "print", "printoper")

# ── Infrastructure ────────────────────────────────────────────────

BUNDLE_TYPE = _vs(
    "bundle-type",
    "document", "message", "transaction", "transaction-response", "batch",
    "batch-response", "history", "searchset", "collection",
)

HTTP_VERB = _vs("http-verb", "GET", "HEAD", "POST", "PUT", "DELETE", "PATCH")

SEARCH_ENTRY_MODE = _vs("search-entry-mode", "match", "include", "outcome")

ISSUE_SEVERITY = _vs("issue-severity", "fatal", "error", "warning", "information")

ISSUE_TYPE = _vs(
    "issue-type",
    "invalid", "structure", "required", "value", "invariant", "security",
    "login", "unknown", "expired", "forbidden", "suppressed", "processing",
    "not-supported", "duplicate", "multiple-matches", "not-found", "deleted",
    "too-long", "code-invalid", "extension", "too-costly", "business-rule",
    "conflict", "transient", "lock-error", "no-store", "exception",
    "timeout", "incomplete", "throttled", "informational",
)
