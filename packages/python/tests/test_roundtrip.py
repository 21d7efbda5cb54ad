"""Tests for decode → encode round-trip verification."""

import json

import pytest

from fhir_records import FhirCodec, RoundTripResult, compare_round_trip
from fhir_records.errors import MalformedJSONError, UnknownResourceTypeError
from fhir_records.roundtrip import _diff


PATIENT = {
    "resourceType": "Patient",
    "id": "example",
    "meta": {"versionId": "1", "lastUpdated": "2020-01-01T00:00:00Z"},
    "text": {"status": "generated", "div": "<div xmlns=\"http://www.w3.org/1999/xhtml\">Peter</div>"},
    "identifier": [{"use": "usual", "system": "urn:oid:1.2.36.146.595.217.0.1", "value": "12345"}],
    "active": True,
    "name": [
        {"use": "official", "family": "Chalmers", "given": ["Peter", "James"]},
        {"use": "usual", "given": ["Jim"]},
    ],
    "telecom": [{"system": "phone", "value": "(03) 5555 6473", "use": "work", "rank": 1}],
    "gender": "male",
    "birthDate": "1974-12-25",
    "_birthDate": {
        "extension": [{
            "url": "http://hl7.org/fhir/StructureDefinition/patient-birthTime",
            "valueDateTime": "1974-12-25T14:35:45-05:00",
        }],
    },
    "deceasedBoolean": False,
    "address": [{"use": "home", "line": ["534 Erewhon St"], "city": "PleasantVille", "postalCode": "3999"}],
    "contact": [{
        "relationship": [{"coding": [{"system": "http://terminology.hl7.org/CodeSystem/v2-0131", "code": "N"}]}],
        "name": {"family": "du Marché", "given": ["Bénédicte"]},
        "gender": "female",
    }],
    "managingOrganization": {"reference": "Organization/1"},
}


class TestCompareRoundTrip:
    def test_lossless(self):
        result = compare_round_trip(PATIENT)
        assert isinstance(result, RoundTripResult)
        assert result.equal, result.differences
        assert result.stable
        assert result.report.warnings == []
        assert result.encoded == PATIENT

    def test_accepts_text_and_bytes(self):
        text = json.dumps(PATIENT)
        assert compare_round_trip(text).equal
        assert compare_round_trip(text.encode("utf-8")).equal

    def test_unknown_fields_survive(self):
        doc = {**PATIENT, "futureElement": {"nested": [1, 2, {"x": None}]}}
        result = compare_round_trip(doc)
        assert result.equal
        assert result.report.codes() == ["unmodeled-field"]

    def test_empty_arrays_ignored_by_default(self):
        result = compare_round_trip({**PATIENT, "photo": []})
        assert result.equal

    def test_empty_arrays_reported_when_asked(self):
        result = compare_round_trip({**PATIENT, "photo": []}, ignore_empty_arrays=False)
        assert not result.equal
        assert result.differences == ["Patient.photo: missing after round trip"]

    def test_empty_array_under_unknown_key_kept(self):
        result = compare_round_trip({"resourceType": "Patient", "zzUnknown": []})
        assert result.equal, result.differences
        assert result.encoded == {"resourceType": "Patient", "zzUnknown": []}

    def test_empty_array_inside_unknown_content_kept(self):
        doc = {**PATIENT, "futureElement": {"codes": [], "nested": [{"more": []}]}}
        result = compare_round_trip(doc)
        assert result.equal, result.differences

    def test_nested_empty_arrays_under_modelled_fields_ignored(self):
        doc = {
            "resourceType": "Patient",
            "name": [{"family": "Chalmers", "given": [], "zzNote": []}],
            "contact": [{"relationship": [], "telecom": [], "gender": "female"}],
        }
        result = compare_round_trip(doc)
        assert result.equal, result.differences
        assert result.encoded["name"] == [{"family": "Chalmers", "zzNote": []}]

    def test_empty_arrays_in_bundle_entries(self):
        doc = {
            "resourceType": "Bundle",
            "type": "collection",
            "entry": [
                {"resource": {"resourceType": "Patient", "photo": [], "zz": []}},
                {"resource": {"resourceType": "Foo", "items": []}},
            ],
        }
        result = compare_round_trip(doc)
        assert result.equal, result.differences

    def test_nan_text_rejected(self):
        with pytest.raises(MalformedJSONError):
            compare_round_trip('{"resourceType": "Patient", "zz": NaN}')

    def test_custom_codec(self):
        result = compare_round_trip({**PATIENT, "gender": "martian"}, FhirCodec(report_unmodeled=False))
        assert result.equal
        assert result.report.codes() == ["unknown-code"]

    def test_decode_errors_propagate(self):
        with pytest.raises(UnknownResourceTypeError):
            compare_round_trip({"resourceType": "Foo"})

    def test_bundle_with_failed_entry(self):
        doc = {
            "resourceType": "Bundle",
            "type": "searchset",
            "total": 2,
            "entry": [
                {"fullUrl": "http://example.org/Patient/example", "resource": PATIENT, "search": {"mode": "match"}},
                {"resource": {"resourceType": "Foo", "a": 1}, "search": {"mode": "include"}},
            ],
        }
        result = compare_round_trip(doc)
        assert result.equal
        assert result.stable
        assert len(result.report.errors) == 1


class TestDiff:
    def _diff(self, a, b):
        out = []
        _diff(a, b, "X", out)
        return out

    def test_equal(self):
        assert self._diff({"a": [1, {"b": 2}]}, {"a": [1, {"b": 2}]}) == []

    def test_missing_and_added(self):
        assert self._diff({"a": 1}, {"b": 1}) == [
            "X.a: missing after round trip",
            "X.b: added by round trip",
        ]

    def test_length(self):
        assert self._diff({"a": [1, 2]}, {"a": [1]}) == ["X.a: length 2 became 1"]

    def test_value_change(self):
        assert self._diff({"a": [1, 2]}, {"a": [1, 3]}) == ["X.a[1]: 2 became 3"]

    def test_int_float_distinct(self):
        assert self._diff({"a": 1}, {"a": 1.0}) == ["X.a: 1 became 1.0"]

    def test_bool_not_int(self):
        assert self._diff({"a": True}, {"a": 1}) == ["X.a: True became 1"]
