"""Tests for Bundle decoding with per-entry error isolation."""

import pytest

from fhir_records import FhirCodec, decode, encode
from fhir_records.errors import (
    ChoiceConflictError,
    ErrorKind,
    LimitExceededError,
    MissingRequiredFieldError,
    UnknownResourceTypeError,
)
from fhir_records.resources import Bundle, Observation, OperationOutcome, Patient


# ── Test helpers ──────────────────────────────────────────────────


def _bundle(entries, *, bundle_type="collection"):
    return {"resourceType": "Bundle", "type": bundle_type, "entry": entries}


def _entry(resource, *, full_url=None):
    e = {"resource": resource}
    if full_url is not None:
        e["fullUrl"] = full_url
    return e


PATIENT = {"resourceType": "Patient", "id": "p1", "gender": "female"}
OBSERVATION = {
    "resourceType": "Observation",
    "id": "o1",
    "status": "final",
    "code": {"text": "heart rate"},
    "subject": {"reference": "Patient/p1"},
}


class TestBundleDecoding:
    def test_entries_decoded_polymorphically(self):
        doc = _bundle([_entry(PATIENT), _entry(OBSERVATION)])
        b, report = decode(doc)
        assert isinstance(b, Bundle)
        assert [type(r) for r in b.resources()] == [Patient, Observation]
        assert report.ok
        assert encode(b) == doc

    def test_resources_filtered_by_type(self):
        b, _ = decode(_bundle([_entry(PATIENT), _entry(OBSERVATION)]))
        assert [r.id for r in b.resources("Observation")] == ["o1"]

    def test_resolve_full_url(self):
        doc = _bundle([_entry(PATIENT, full_url="urn:uuid:0f1c3d2e-1111-4a4a-9b9b-123456789abc")])
        b, _ = decode(doc)
        assert b.resolve("urn:uuid:0f1c3d2e-1111-4a4a-9b9b-123456789abc").id == "p1"
        assert b.resolve("urn:uuid:missing") is None

    def test_bundle_type_required(self):
        with pytest.raises(MissingRequiredFieldError, match="'type'"):
            decode({"resourceType": "Bundle"})


class TestEntryIsolation:
    def setup_method(self):
        self.foo = {"resourceType": "Foo", "bar": 1}
        self.doc = _bundle([_entry(PATIENT), _entry(OBSERVATION), _entry(self.foo)])

    def test_unknown_entry_isolated(self):
        b, report = decode(self.doc)
        assert len(b.entry) == 3
        assert isinstance(b.entry[0].resource, Patient)
        assert isinstance(b.entry[1].resource, Observation)
        failed = b.entry[2]
        assert failed.resource is None
        assert isinstance(failed.decode_error, UnknownResourceTypeError)
        assert failed.decode_error.resource_type == "Foo"
        assert b.failed_entries() == [failed]

    def test_report_lists_failure(self):
        _, report = decode(self.doc)
        assert not report.ok
        assert len(report.errors) == 1
        issue = report.errors[0]
        assert issue.path == "Bundle.entry[2].resource"
        assert issue.kind is ErrorKind.UNKNOWN_RESOURCE_TYPE

    def test_failed_entry_keeps_raw_json(self):
        b, _ = decode(self.doc)
        assert b.entry[2].raw_resource == self.foo
        assert encode(b) == self.doc

    def test_outcome_rendered(self):
        b, _ = decode(self.doc)
        outcome = b.entry[2].outcome
        assert isinstance(outcome, OperationOutcome)
        issue = outcome.issue[0]
        assert issue.severity == "error"
        assert issue.code == "not-supported"
        assert issue.details.text == "UnknownResourceType"
        assert "Foo" in issue.diagnostics
        assert b.entry[0].outcome is None

    def test_structural_error_isolated(self):
        bad = {"resourceType": "Patient", "deceasedBoolean": True, "deceasedDateTime": "2020"}
        b, report = decode(_bundle([_entry(bad), _entry(OBSERVATION)]))
        assert isinstance(b.entry[0].decode_error, ChoiceConflictError)
        assert isinstance(b.entry[1].resource, Observation)
        assert report.errors[0].error.path == "Bundle.entry[0].resource"

    def test_strict_code_error_isolated(self):
        bad = {**PATIENT, "gender": "martian"}
        b, report = FhirCodec(strict=True).decode(_bundle([_entry(bad), _entry(PATIENT)]))
        assert b.entry[0].failed
        assert not b.entry[1].failed
        assert report.errors[0].kind is ErrorKind.INVALID_CODE

    def test_contained_errors_propagate_to_container(self):
        patient = {**PATIENT, "contained": [{"resourceType": "Foo"}]}
        b, report = decode(_bundle([_entry(patient)]))
        err = b.entry[0].decode_error
        assert isinstance(err, UnknownResourceTypeError)
        assert err.path == "Bundle.entry[0].resource.contained[0]"

    def test_limit_errors_are_fatal(self):
        codec = FhirCodec(limits={"max_document_size": 50})
        with pytest.raises(LimitExceededError):
            codec.decode(self.doc)

    def test_failed_entry_equality_ignores_error_object(self):
        a, _ = decode(self.doc)
        b, _ = decode(self.doc)
        assert a == b


class TestTransactionShapes:
    def test_request_and_response(self):
        doc = _bundle(
            [{
                "fullUrl": "urn:uuid:61ebe359-bfdc-4613-8bf2-c5e300945f0a",
                "resource": PATIENT,
                "request": {"method": "POST", "url": "Patient", "ifNoneExist": "identifier=123"},
                "response": {
                    "status": "201 Created",
                    "outcome": {
                        "resourceType": "OperationOutcome",
                        "issue": [{"severity": "information", "code": "informational"}],
                    },
                },
            }],
            bundle_type="transaction-response",
        )
        b, report = decode(doc)
        entry = b.entry[0]
        assert entry.request.method == "POST"
        assert entry.request.if_none_exist == "identifier=123"
        assert isinstance(entry.response.outcome, OperationOutcome)
        assert report.warnings == []
        assert encode(b) == doc

    def test_unknown_http_verb_warns(self):
        doc = _bundle([{"request": {"method": "BREW", "url": "Coffee"}}], bundle_type="batch")
        _, report = decode(doc)
        assert report.codes() == ["unknown-code"]
        assert report.warnings[0].path == "Bundle.entry[0].request.method"
