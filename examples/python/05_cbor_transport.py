"""
Example 05: CBOR Transport
==========================

Serialises an Observation to CBOR with terminology system URIs
compressed to small integers, and compares payload sizes.

Requires: pip install fhir-records[cbor]
"""

from fhir_records import FhirCodec
from fhir_records.cbor import from_cbor, payload_stats, to_cbor

codec = FhirCodec()

obs, _ = codec.decode({
    "resourceType": "Observation",
    "status": "final",
    "category": [{"coding": [{
        "system": "http://terminology.hl7.org/CodeSystem/observation-category",
        "code": "vital-signs",
    }]}],
    "code": {"coding": [{"system": "http://loinc.org", "code": "8310-5", "display": "Body temperature"}]},
    "subject": {"reference": "Patient/p1"},
    "effectiveDateTime": "2021-06-01T08:00:00Z",
    "valueQuantity": {"value": 37.2, "unit": "Cel", "system": "http://unitsofmeasure.org", "code": "Cel"},
})

data = to_cbor(obs)
print(f"CBOR bytes: {len(data)}")
print(f"Restored equal: {from_cbor(data, codec) == obs}")

stats = payload_stats(obs)
print(f"JSON: {stats.json_bytes} B, CBOR: {stats.cbor_bytes} B ({stats.cbor_ratio:.0%})")
print(f"gzip JSON: {stats.gzip_json_bytes} B, gzip CBOR: {stats.gzip_cbor_bytes} B")
