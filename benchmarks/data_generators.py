"""
Synthetic FHIR R4 data for the codec benchmarks.

Produces Synthea-shaped patient Bundles (Patient plus Encounters,
Observations, Conditions and MedicationRequests) from a fixed seed, so
runs are comparable across machines.
"""

from __future__ import annotations

import random
import uuid
from typing import Any

_RNG = random.Random(42)  # fixed seed for reproducibility

LOINC = "http://loinc.org"
SNOMED = "http://snomed.info/sct"
UCUM = "http://unitsofmeasure.org"

VITALS = [
    ("8867-4", "Heart rate", "/min", 50, 110),
    ("9279-1", "Respiratory rate", "/min", 10, 24),
    ("8310-5", "Body temperature", "Cel", 35.5, 39.5),
    ("29463-7", "Body weight", "kg", 3, 140),
    ("8302-2", "Body height", "cm", 45, 200),
]

CONDITIONS = [
    ("44054006", "Diabetes mellitus type 2"),
    ("38341003", "Hypertensive disorder"),
    ("195662009", "Acute viral pharyngitis"),
    ("10509002", "Acute bronchitis"),
]

GIVEN = ["Alice", "Bob", "Chidi", "Dana", "Eun-ji", "Farid", "Grace", "Hiro"]
FAMILY = ["Nguyen", "Okafor", "Schmidt", "Garcia", "Kowalski", "Tanaka"]


def _urn() -> str:
    return f"urn:uuid:{uuid.UUID(int=_RNG.getrandbits(128), version=4)}"


def _date_time(year: int = 2020) -> str:
    month = _RNG.randint(1, 12)
    day = _RNG.randint(1, 28)
    return f"{year}-{month:02d}-{day:02d}T{_RNG.randint(0, 23):02d}:{_RNG.randint(0, 59):02d}:00Z"


# ── Resources ─────────────────────────────────────────────────────


def make_patient(pid: str) -> dict[str, Any]:
    return {
        "resourceType": "Patient",
        "id": pid,
        "extension": [{
            "url": "http://hl7.org/fhir/us/core/StructureDefinition/us-core-birthsex",
            "valueCode": _RNG.choice(["F", "M"]),
        }],
        "identifier": [{"system": "https://github.com/synthetichealth/synthea", "value": pid}],
        "name": [{
            "use": "official",
            "family": _RNG.choice(FAMILY),
            "given": [_RNG.choice(GIVEN)],
        }],
        "gender": _RNG.choice(["male", "female"]),
        "birthDate": f"{_RNG.randint(1930, 2015)}-{_RNG.randint(1, 12):02d}-{_RNG.randint(1, 28):02d}",
        "address": [{"line": [f"{_RNG.randint(1, 999)} Main St"], "city": "Springfield", "country": "US"}],
        "multipleBirthBoolean": False,
    }


def make_encounter(patient_ref: str) -> dict[str, Any]:
    start = _date_time()
    return {
        "resourceType": "Encounter",
        "id": _urn()[9:],
        "status": "finished",
        "class": {"system": "http://terminology.hl7.org/CodeSystem/v3-ActCode", "code": "AMB"},
        "type": [{"coding": [{"system": SNOMED, "code": "185349003", "display": "Encounter for check up"}]}],
        "subject": {"reference": patient_ref},
        "period": {"start": start, "end": start},
    }


def make_observation(patient_ref: str, encounter_ref: str) -> dict[str, Any]:
    code, display, unit, lo, hi = _RNG.choice(VITALS)
    return {
        "resourceType": "Observation",
        "id": _urn()[9:],
        "status": "final",
        "category": [{"coding": [{
            "system": "http://terminology.hl7.org/CodeSystem/observation-category",
            "code": "vital-signs",
        }]}],
        "code": {"coding": [{"system": LOINC, "code": code, "display": display}], "text": display},
        "subject": {"reference": patient_ref},
        "encounter": {"reference": encounter_ref},
        "effectiveDateTime": _date_time(),
        "valueQuantity": {"value": round(_RNG.uniform(lo, hi), 1), "unit": unit, "system": UCUM, "code": unit},
    }


def make_condition(patient_ref: str) -> dict[str, Any]:
    code, display = _RNG.choice(CONDITIONS)
    return {
        "resourceType": "Condition",
        "id": _urn()[9:],
        "clinicalStatus": {"coding": [{
            "system": "http://terminology.hl7.org/CodeSystem/condition-clinical", "code": "active",
        }]},
        "code": {"coding": [{"system": SNOMED, "code": code, "display": display}]},
        "subject": {"reference": patient_ref},
        "onsetDateTime": _date_time(2015),
    }


def make_medication_request(patient_ref: str) -> dict[str, Any]:
    return {
        "resourceType": "MedicationRequest",
        "id": _urn()[9:],
        "status": "active",
        "intent": "order",
        "medicationCodeableConcept": {"coding": [{
            "system": "http://www.nlm.nih.gov/research/umls/rxnorm", "code": "860975",
        }]},
        "subject": {"reference": patient_ref},
        "authoredOn": _date_time(),
        "dosageInstruction": [{"sequence": 1, "timing": {"repeat": {"frequency": 1, "period": 1, "periodUnit": "d"}}}],
    }


# ── Bundles ───────────────────────────────────────────────────────


def make_patient_bundle(n_entries: int, *, unknown_rate: float = 0.0) -> dict[str, Any]:
    """A transaction-style collection Bundle with about *n_entries* entries.

    With *unknown_rate* > 0 that fraction of entries carries a resource
    type the default registry does not know, exercising entry isolation.
    """
    pid = _urn()[9:]
    patient_url = f"urn:uuid:{pid}"
    entries = [{"fullUrl": patient_url, "resource": make_patient(pid)}]
    encounter_url = patient_url
    while len(entries) < n_entries:
        roll = _RNG.random()
        if roll < unknown_rate:
            resource = {"resourceType": "ResearchSubject", "id": _urn()[9:], "status": "on-study"}
        elif roll < 0.15:
            resource = make_encounter(patient_url)
            encounter_url = f"urn:uuid:{resource['id']}"
        elif roll < 0.75:
            resource = make_observation(patient_url, encounter_url)
        elif roll < 0.9:
            resource = make_condition(patient_url)
        else:
            resource = make_medication_request(patient_url)
        entries.append({"fullUrl": f"urn:uuid:{resource['id']}", "resource": resource})
    return {"resourceType": "Bundle", "type": "collection", "entry": entries}
