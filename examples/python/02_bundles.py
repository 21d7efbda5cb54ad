"""
Example 02: Bundles and Entry Isolation
=======================================

Decodes a Bundle whose entries mix known resources with a resource type
the registry does not know.  The bad entry fails on its own; the rest
of the Bundle decodes and the whole Bundle still re-encodes losslessly.

Use case: bulk import where one odd record must not stop the batch.
"""

from fhir_records import FhirCodec, default_registry

bundle_json = {
    "resourceType": "Bundle",
    "type": "collection",
    "entry": [
        {
            "fullUrl": "urn:uuid:61ebe359-bfdc-4613-8bf2-c5e300945f0a",
            "resource": {"resourceType": "Patient", "id": "p1", "gender": "female"},
        },
        {
            "resource": {
                "resourceType": "Observation",
                "status": "final",
                "code": {"coding": [{"system": "http://loinc.org", "code": "8867-4"}]},
                "subject": {"reference": "urn:uuid:61ebe359-bfdc-4613-8bf2-c5e300945f0a"},
                "valueQuantity": {"value": 72, "unit": "beats/minute"},
            },
        },
        {"resource": {"resourceType": "ResearchSubject", "status": "on-study"}},
    ],
}

# ── 1. Default registry ──────────────────────────────────────────

print("=== 1. Decode with the Default Registry ===\n")

codec = FhirCodec()
bundle, report = codec.decode(bundle_json)
for i, entry in enumerate(bundle):
    if entry.failed:
        issue = entry.outcome.issue[0]
        print(f"  entry[{i}]: FAILED ({issue.details.text}) {issue.diagnostics}")
    else:
        print(f"  entry[{i}]: {entry.resource.resource_type}")

print(f"\n  report.ok: {report.ok}")
for issue in report.errors:
    print(f"  error at {issue.path}: {issue.kind.value}")

# ── 2. Resolving references inside the Bundle ────────────────────

print("\n=== 2. Resolve a Reference ===\n")

obs = bundle.resources("Observation")[0]
subject = bundle.resolve(obs.subject.reference)
print(f"  Observation.subject -> {subject.resource_type}/{subject.id}")

# ── 3. Lossless re-encode ────────────────────────────────────────

print("\n=== 3. Re-encode ===\n")

print(f"  identical to input: {codec.encode(bundle) == bundle_json}")

# ── 4. A restricted registry ─────────────────────────────────────

print("\n=== 4. Restricted Registry ===\n")

registry = default_registry()
registry.unregister("Observation")
bundle, report = FhirCodec(registry).decode(bundle_json)
print(f"  registered types: {len(registry)}")
print(f"  failed entries:   {len(bundle.failed_entries())}")
print(report.to_operation_outcome().issue[0].diagnostics)
