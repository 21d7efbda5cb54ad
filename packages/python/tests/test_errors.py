"""Tests for error kinds, OperationOutcome rendering and decode reports."""

import pytest

from fhir_records import decode, encode
from fhir_records.errors import (
    ChoiceConflictError,
    ErrorKind,
    FhirRecordsError,
    InvalidCodeError,
    LimitExceededError,
    MalformedJSONError,
    MissingRequiredFieldError,
    TypeMismatchError,
    UnknownResourceTypeError,
)
from fhir_records.report import DecodeReport, UNKNOWN_CODE, UNMODELED_FIELD
from fhir_records.resources import OperationOutcome


class TestErrorHierarchy:
    @pytest.mark.parametrize("exc", [
        ChoiceConflictError("value", ["valueString", "valueBoolean"]),
        UnknownResourceTypeError("Foo"),
        MissingRequiredFieldError("status"),
        TypeMismatchError("boolean", "yes"),
        MalformedJSONError("bad"),
        InvalidCodeError("x", "administrative-gender"),
        LimitExceededError("too big"),
    ])
    def test_all_are_value_errors(self, exc):
        assert isinstance(exc, FhirRecordsError)
        assert isinstance(exc, ValueError)
        assert isinstance(exc.kind, ErrorKind)

    def test_type_mismatch_is_also_type_error(self):
        assert isinstance(TypeMismatchError("boolean", 1), TypeError)

    def test_message_prefixed_with_path(self):
        exc = MissingRequiredFieldError("status", path="Observation")
        assert str(exc) == "Observation: required field 'status' is missing"
        assert exc.message == "required field 'status' is missing"

    def test_choice_conflict_keys_sorted(self):
        exc = ChoiceConflictError("value", ["valueString", "valueBoolean"])
        assert exc.keys == ["valueBoolean", "valueString"]
        assert "value[x]" in str(exc)

    def test_long_strings_shortened(self):
        exc = TypeMismatchError("boolean", "y" * 100)
        assert "..." in str(exc)

    @pytest.mark.parametrize("exc,recoverable", [
        (UnknownResourceTypeError("Foo"), True),
        (InvalidCodeError("x", "vs"), True),
        (MalformedJSONError("bad"), False),
        (LimitExceededError("big"), False),
    ])
    def test_recoverable(self, exc, recoverable):
        assert exc.recoverable is recoverable


class TestOperationOutcome:
    def test_to_issue(self):
        exc = TypeMismatchError("boolean", "yes", path="Patient.active")
        issue = exc.to_issue()
        assert issue == {
            "severity": "error",
            "code": "value",
            "details": {"text": "TypeMismatch"},
            "diagnostics": "expected boolean, got string 'yes'",
            "expression": ["Patient.active"],
        }

    def test_to_issue_without_path(self):
        assert "expression" not in MalformedJSONError("bad").to_issue()

    def test_to_operation_outcome_encodes(self):
        outcome = InvalidCodeError("martian", "administrative-gender", path="Patient.gender").to_operation_outcome()
        assert isinstance(outcome, OperationOutcome)
        assert outcome.has_errors()
        out = encode(outcome)
        assert out["resourceType"] == "OperationOutcome"
        assert out["issue"][0]["code"] == "code-invalid"
        assert out["issue"][0]["expression"] == ["Patient.gender"]

    def test_outcome_decodes_cleanly(self):
        outcome = UnknownResourceTypeError("Foo").to_operation_outcome()
        again, report = decode(encode(outcome))
        assert again == outcome
        assert report.warnings == []


class TestDecodeReport:
    def test_empty_report_ok(self):
        report = DecodeReport()
        assert report.ok
        outcome = report.to_operation_outcome()
        assert not outcome.has_errors()
        assert outcome.issue[0].severity == "information"

    def test_warnings_with(self):
        _, report = decode({"resourceType": "Patient", "gender": "martian", "nickname": "Ace"})
        assert [w.path for w in report.warnings_with(UNKNOWN_CODE)] == ["Patient.gender"]
        assert [w.path for w in report.warnings_with(UNMODELED_FIELD)] == ["Patient.nickname"]

    def test_report_as_operation_outcome(self):
        doc = {
            "resourceType": "Bundle",
            "type": "collection",
            "entry": [{"resource": {"resourceType": "Foo"}}],
        }
        _, report = decode(doc)
        outcome = report.to_operation_outcome()
        assert outcome.has_errors()
        assert outcome.issue[0].expression == ["Bundle.entry[0].resource"]
