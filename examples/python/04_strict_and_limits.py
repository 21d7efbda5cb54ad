"""
Example 04: Strict Codes and Resource Limits
============================================

Shows the lenient and strict handling of codes outside a required value
set, and the size/depth limits applied to untrusted input.

Use case: API gateway accepting FHIR documents from external partners.
"""

from fhir_records import FhirCodec
from fhir_records.errors import FhirRecordsError
from fhir_records.limits import DEFAULT_DECODE_LIMITS

doc = {"resourceType": "Patient", "gender": "M"}

# ── 1. Lenient (default) ─────────────────────────────────────────

print("=== 1. Lenient Codec ===\n")

patient, report = FhirCodec().decode(doc)
print(f"  gender kept as: {patient.gender!r}")
for w in report.warnings:
    print(f"  [{w.code}] {w.path}: {w.message}")

# ── 2. Strict ────────────────────────────────────────────────────

print("\n=== 2. Strict Codec ===\n")

try:
    FhirCodec(strict=True).decode(doc)
except FhirRecordsError as e:
    print(f"  {e.kind.value}: {e}")
    print(f"  as OperationOutcome issue: {e.to_issue()}")

# ── 3. Limits ────────────────────────────────────────────────────

print("\n=== 3. Resource Limits ===\n")

for key, value in DEFAULT_DECODE_LIMITS.items():
    unit = "bytes" if "size" in key else "levels"
    print(f"  default {key}: {value:,} {unit}")

edge = FhirCodec(limits={"max_document_size": 64 * 1024, "max_depth": 12})

nested = {"url": "http://example.org/leaf", "valueString": "x"}
for _ in range(20):
    nested = {"url": "http://example.org/node", "extension": [nested]}

for label, payload in [
    ("small patient", doc),
    ("oversized", {"resourceType": "Patient", "id": "a", "text": {"status": "generated", "div": "x" * 70_000}}),
    ("deeply nested", {"resourceType": "Patient", "extension": [nested]}),
    ("not JSON", '{"resourceType": '),
]:
    try:
        edge.decode(payload)
        print(f"  {label:<14} accepted")
    except FhirRecordsError as e:
        print(f"  {label:<14} rejected: {e.kind.value} ({'recoverable' if e.recoverable else 'fatal'})")
