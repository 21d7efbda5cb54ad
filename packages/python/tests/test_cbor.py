"""Tests for CBOR transport of FHIR resources."""

import pytest

cbor2 = pytest.importorskip("cbor2", reason="cbor2 required for CBOR tests")

from fhir_records import FhirCodec, decode, encode
from fhir_records.cbor import (
    DEFAULT_SYSTEM_REGISTRY,
    PayloadStats,
    from_cbor,
    payload_stats,
    to_cbor,
)
from fhir_records.errors import UnknownResourceTypeError


OBSERVATION = {
    "resourceType": "Observation",
    "id": "bp",
    "status": "final",
    "category": [{
        "coding": [{
            "system": "http://terminology.hl7.org/CodeSystem/observation-category",
            "code": "vital-signs",
        }],
    }],
    "code": {"coding": [{"system": "http://loinc.org", "code": "8867-4", "display": "Heart rate"}]},
    "subject": {"reference": "Patient/p1"},
    "effectiveDateTime": "2021-04-01T10:00:00Z",
    "valueQuantity": {"value": 72, "unit": "beats/minute", "system": "http://unitsofmeasure.org", "code": "/min"},
}


# ═══════════════════════════════════════════════════════════════════
# Round-trip
# ═══════════════════════════════════════════════════════════════════


class TestRoundTrip:
    def test_resource_round_trip(self):
        obs, _ = decode(OBSERVATION)
        restored = from_cbor(to_cbor(obs))
        assert restored == obs
        assert encode(restored) == OBSERVATION

    def test_dict_input(self):
        restored = from_cbor(to_cbor(OBSERVATION))
        assert encode(restored) == OBSERVATION

    def test_systems_compressed_on_wire(self):
        raw = cbor2.loads(to_cbor(OBSERVATION))
        assert raw["code"]["coding"][0]["system"] == DEFAULT_SYSTEM_REGISTRY["http://loinc.org"]
        assert raw["valueQuantity"]["system"] == 6

    def test_unknown_system_kept(self):
        doc = {**OBSERVATION, "code": {"coding": [{"system": "http://example.org/codes", "code": "a"}]}}
        raw = cbor2.loads(to_cbor(doc))
        assert raw["code"]["coding"][0]["system"] == "http://example.org/codes"
        assert encode(from_cbor(to_cbor(doc))) == doc

    def test_custom_registry(self):
        reg = {"http://example.org/codes": 1}
        doc = {**OBSERVATION, "code": {"coding": [{"system": "http://example.org/codes", "code": "a"}]}}
        data = to_cbor(doc, system_registry=reg)
        assert cbor2.loads(data)["code"]["coding"][0]["system"] == 1
        assert encode(from_cbor(data, system_registry=reg)) == doc

    def test_non_system_keys_untouched(self):
        doc = {"resourceType": "Patient", "id": "1", "extension": [{"url": "http://loinc.org", "valueInteger": 1}]}
        raw = cbor2.loads(to_cbor(doc))
        assert raw["extension"][0]["url"] == "http://loinc.org"
        assert raw["extension"][0]["valueInteger"] == 1

    def test_decode_goes_through_codec(self):
        data = cbor2.dumps({"resourceType": "Foo"})
        with pytest.raises(UnknownResourceTypeError):
            from_cbor(data)

    def test_custom_codec(self):
        data = to_cbor({"resourceType": "Patient", "gender": "martian"})
        with pytest.raises(ValueError):
            from_cbor(data, codec=FhirCodec(strict=True))


# ═══════════════════════════════════════════════════════════════════
# Payload statistics
# ═══════════════════════════════════════════════════════════════════


class TestPayloadStats:
    def test_stats(self):
        stats = payload_stats(OBSERVATION)
        assert isinstance(stats, PayloadStats)
        assert stats.cbor_bytes < stats.json_bytes
        assert 0 < stats.cbor_ratio < 1
        assert stats.gzip_cbor_ratio > 0

    def test_resource_input(self):
        obs, _ = decode(OBSERVATION)
        assert payload_stats(obs).json_bytes == payload_stats(OBSERVATION).json_bytes

    def test_zero_json_ratio(self):
        stats = PayloadStats(json_bytes=0, cbor_bytes=0, gzip_json_bytes=0, gzip_cbor_bytes=0)
        assert stats.cbor_ratio == 0.0
        assert stats.gzip_cbor_ratio == 0.0
