"""
Example 01: Decode and Encode
=============================

Decodes a FHIR R4 Patient, reads typed fields, and encodes it back to
JSON that matches the input.

Use case: an EHR integration that must pass records through unchanged.
"""

import json

from fhir_records import FhirCodec, compare_round_trip

codec = FhirCodec()

patient_json = """
{
  "resourceType": "Patient",
  "id": "example",
  "active": true,
  "name": [
    {"use": "official", "family": "Chalmers", "given": ["Peter", "James"]},
    {"use": "usual", "given": ["Jim"]}
  ],
  "gender": "male",
  "birthDate": "1974-12-25",
  "deceasedBoolean": false,
  "managingOrganization": {"reference": "Organization/1"}
}
"""

# ── 1. Decode ────────────────────────────────────────────────────

print("=== 1. Decode ===\n")

patient, report = codec.decode(patient_json)
print(f"  type:            {type(patient).__name__}")
print(f"  official name:   {patient.official_name().family}, {' '.join(patient.official_name().given)}")
print(f"  birth date:      {patient.birth_date}")
print(f"  deceased[x]:     {patient.deceased.kind} = {patient.deceased.value}")
print(f"  organization:    {patient.managing_organization.target_type()}")
print(f"  warnings:        {len(report.warnings)}")

# ── 2. Encode ────────────────────────────────────────────────────

print("\n=== 2. Encode ===\n")

print(codec.dumps(patient, indent=2))

# ── 3. Round trip ────────────────────────────────────────────────

print("\n=== 3. Round Trip ===\n")

result = compare_round_trip(patient_json, codec)
print(f"  lossless: {result.equal}")
print(f"  stable:   {result.stable}")
assert result.encoded == json.loads(patient_json)

# ── 4. Unknown content is preserved ──────────────────────────────

print("\n=== 4. Unknown Content ===\n")

doc = json.loads(patient_json)
doc["futureElement"] = {"introducedIn": "R6"}
patient, report = codec.decode(doc)
for w in report.warnings:
    print(f"  [{w.code}] {w.path}: {w.message}")
print(f"  kept: {patient.unknown_fields}")
print(f"  re-emitted: {'futureElement' in codec.encode(patient)}")
