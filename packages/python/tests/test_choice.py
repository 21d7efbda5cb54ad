"""Tests for choice ([x]) groups: tagged-union decode and encode."""

import pytest

from fhir_records import FhirCodec
from fhir_records.choice import ChoiceValue, choice_keys, decode_choice, encode_choice
from fhir_records.datatypes import CodeableConcept, Period, Quantity
from fhir_records.errors import (
    ChoiceConflictError,
    ErrorKind,
    MissingRequiredFieldError,
    TypeMismatchError,
)
from fhir_records.resources import Observation, Patient


ALLOWED = {"Boolean": "boolean", "DateTime": "dateTime"}


def _passthrough(ref, value, key):
    return value


class TestChoiceValue:
    def test_lowercase_kind_normalised(self):
        assert ChoiceValue("dateTime", "2020").kind == "DateTime"

    def test_key(self):
        assert ChoiceValue("Quantity", None).key("value") == "valueQuantity"

    def test_empty_kind_rejected(self):
        with pytest.raises(TypeError, match="non-empty string"):
            ChoiceValue("", 1)


class TestDecodeChoice:
    def test_absent(self):
        assert decode_choice("deceased", ALLOWED, {}, decode=_passthrough) is None

    def test_single_branch(self):
        raw = {"deceasedBoolean": True}
        v = decode_choice("deceased", ALLOWED, raw, decode=_passthrough)
        assert v == ChoiceValue("Boolean", True)

    def test_conflict_names_every_key(self):
        raw = {"deceasedBoolean": True, "deceasedDateTime": "2020-01-01"}
        with pytest.raises(ChoiceConflictError) as exc:
            decode_choice("deceased", ALLOWED, raw, decode=_passthrough, path="Patient")
        assert exc.value.kind is ErrorKind.CHOICE_CONFLICT
        assert exc.value.keys == ["deceasedBoolean", "deceasedDateTime"]
        assert exc.value.path == "Patient"

    def test_extension_only_branch_counts(self):
        raw = {"_deceasedDateTime": {"extension": []}}
        found = choice_keys("deceased", ALLOWED, raw)
        assert found == {"DateTime": ["_deceasedDateTime"]}

    def test_unrelated_keys_ignored(self):
        raw = {"deceasedString": "x", "deceased": True}
        assert decode_choice("deceased", ALLOWED, raw, decode=_passthrough) is None


class TestEncodeChoice:
    def test_none_emits_nothing(self):
        assert encode_choice("deceased", ALLOWED, None, encode=_passthrough) == {}

    def test_single_key(self):
        out = encode_choice("deceased", ALLOWED, ChoiceValue("DateTime", "2020"), encode=_passthrough)
        assert out == {"deceasedDateTime": "2020"}

    def test_disallowed_kind(self):
        with pytest.raises(TypeMismatchError, match="not a permitted branch"):
            encode_choice("deceased", ALLOWED, ChoiceValue("String", "x"), encode=_passthrough)

    def test_not_a_choice_value(self):
        with pytest.raises(TypeMismatchError, match="ChoiceValue"):
            encode_choice("deceased", ALLOWED, True, encode=_passthrough)


class TestChoiceThroughCodec:
    def setup_method(self):
        self.codec = FhirCodec()

    def test_patient_deceased_boolean(self):
        p, _ = self.codec.decode({"resourceType": "Patient", "deceasedBoolean": True})
        assert p.deceased == ChoiceValue("Boolean", True)
        assert p.is_deceased

    def test_patient_conflict_is_rejected(self):
        doc = {
            "resourceType": "Patient",
            "deceasedBoolean": True,
            "deceasedDateTime": "2020-01-01",
        }
        with pytest.raises(ChoiceConflictError) as exc:
            self.codec.decode(doc)
        assert exc.value.path == "Patient"

    def test_complex_branch(self):
        doc = {
            "resourceType": "Observation",
            "status": "final",
            "code": {"text": "weight"},
            "valueQuantity": {"value": 72.5, "unit": "kg"},
            "effectivePeriod": {"start": "2020-01-01"},
        }
        obs, _ = self.codec.decode(doc)
        assert obs.value.kind == "Quantity"
        assert isinstance(obs.value.value, Quantity)
        assert obs.value.value.value == 72.5
        assert obs.effective == ChoiceValue("Period", Period(start="2020-01-01"))
        assert self.codec.encode(obs) == doc

    def test_wrong_branch_value_type(self):
        doc = {"resourceType": "Patient", "multipleBirthInteger": "two"}
        with pytest.raises(TypeMismatchError) as exc:
            self.codec.decode(doc)
        assert exc.value.path == "Patient.multipleBirthInteger"

    def test_encode_rejects_disallowed_branch(self):
        p = Patient(deceased=ChoiceValue("Integer", 3))
        with pytest.raises(TypeMismatchError):
            self.codec.encode(p)

    def test_encode_single_key_only(self):
        obs = Observation(
            status="final",
            code=CodeableConcept(text="x"),
            value=ChoiceValue("String", "positive"),
        )
        out = self.codec.encode(obs)
        assert out["valueString"] == "positive"
        assert [k for k in out if k.startswith("value")] == ["valueString"]

    def test_primitive_branch_extension(self):
        doc = {
            "resourceType": "Patient",
            "_deceasedDateTime": {"extension": [{"url": "http://example.org/x", "valueString": "unknown"}]},
        }
        p, _ = self.codec.decode(doc)
        assert p.deceased == ChoiceValue("DateTime", None)
        assert p.primitive_extension("deceasedDateTime").extension[0].url == "http://example.org/x"
        assert self.codec.encode(p) == doc

    def test_required_choice_missing(self):
        doc = {
            "resourceType": "MedicationRequest",
            "status": "active",
            "intent": "order",
            "subject": {"reference": "Patient/1"},
        }
        with pytest.raises(MissingRequiredFieldError, match=r"medication\[x\]"):
            self.codec.decode(doc)
