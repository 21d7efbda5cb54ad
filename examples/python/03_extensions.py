"""
Example 03: Extensions
======================

Reads US Core extensions, the ``_birthDate`` primitive extension, and a
repeating primitive with a null hole, then builds an extension in code.
"""

from fhir_records import ChoiceValue, Extension, FhirCodec, Patient

RACE = "http://hl7.org/fhir/us/core/StructureDefinition/us-core-race"
BIRTH_TIME = "http://hl7.org/fhir/StructureDefinition/patient-birthTime"
ABSENT = "http://hl7.org/fhir/StructureDefinition/data-absent-reason"

codec = FhirCodec()

patient, _ = codec.decode({
    "resourceType": "Patient",
    "extension": [{
        "url": RACE,
        "extension": [
            {"url": "ombCategory", "valueCoding": {"system": "urn:oid:2.16.840.1.113883.6.238", "code": "2028-9"}},
            {"url": "text", "valueString": "Asian"},
        ],
    }],
    "name": [{
        "given": ["Mei", None],
        "_given": [None, {"extension": [{"url": ABSENT, "valueCode": "masked"}]}],
    }],
    "birthDate": "1980-05-02",
    "_birthDate": {"extension": [{"url": BIRTH_TIME, "valueDateTime": "1980-05-02T06:10:00+08:00"}]},
})

# ── 1. Complex extension ─────────────────────────────────────────

print("=== 1. Complex Extension ===\n")

race = patient.extensions_with_url(RACE)[0]
for sub in race.extension:
    print(f"  {sub.url}: {sub.value.kind} {sub.value.value}")

# ── 2. Primitive extensions ──────────────────────────────────────

print("\n=== 2. Primitive Extensions ===\n")

birth_ext = patient.primitive_extension("birthDate")
print(f"  birthDate = {patient.birth_date}, birth time = {birth_ext.extension[0].value.value}")

name = patient.name[0]
for value, ext in zip(name.given, name.primitive_extension("given")):
    reason = ext.extension[0].value.value if ext else None
    print(f"  given: {value!r:10} absent-reason: {reason}")

# ── 3. Building an extension ─────────────────────────────────────

print("\n=== 3. Construct and Encode ===\n")

p = Patient(
    id="new",
    extension=[Extension(url="http://example.org/fhir/loyalty-tier", value=ChoiceValue("code", "gold"))],
)
print(codec.dumps(p, indent=2))
