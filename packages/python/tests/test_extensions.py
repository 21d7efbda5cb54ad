"""Tests for extensions, modifier extensions and primitive ``_name`` siblings."""

import pytest

from fhir_records import FhirCodec, decode, encode
from fhir_records.choice import ChoiceValue
from fhir_records.datatypes import Coding
from fhir_records.elements import Extension, PrimitiveExtension
from fhir_records.errors import MissingRequiredFieldError, TypeMismatchError
from fhir_records.extensions import (
    capture,
    extensions_with_url,
    reemit,
    unknown_modifier_urls,
)
from fhir_records.resources import Patient


RACE_URL = "http://hl7.org/fhir/us/core/StructureDefinition/us-core-race"
BIRTHPLACE_URL = "http://hl7.org/fhir/StructureDefinition/patient-birthPlace"


class TestBag:
    def test_capture_unknown_only(self):
        raw = {"a": 1, "b": {"c": 2}, "_a": {"id": "x"}}
        assert capture(raw, {"a", "_a"}) == {"b": {"c": 2}}

    def test_capture_deep_copies(self):
        raw = {"b": {"c": [1]}}
        bag = capture(raw, ())
        bag["b"]["c"].append(2)
        assert raw["b"]["c"] == [1]

    def test_reemit_known_fields_win(self):
        out = reemit({"a": 1}, {"a": 99, "z": 3})
        assert out == {"a": 1, "z": 3}


class TestTypedExtensions:
    def test_extension_values_decoded(self):
        doc = {
            "resourceType": "Patient",
            "extension": [
                {"url": BIRTHPLACE_URL, "valueAddress": {"city": "Boston"}},
                {"url": "http://example.org/flag", "valueBoolean": False},
            ],
        }
        p, _ = decode(doc)
        assert p.extension[0].value.kind == "Address"
        assert p.extension[0].value.value.city == "Boston"
        assert p.extension[1].value == ChoiceValue("Boolean", False)
        assert encode(p) == doc

    def test_nested_extensions(self):
        doc = {
            "resourceType": "Patient",
            "extension": [{
                "url": RACE_URL,
                "extension": [
                    {"url": "ombCategory", "valueCoding": {"system": "urn:oid:2.16.840.1.113883.6.238", "code": "2106-3"}},
                    {"url": "text", "valueString": "White"},
                ],
            }],
        }
        p, _ = decode(doc)
        race = p.extensions_with_url(RACE_URL)[0]
        assert race.value is None
        assert race.extension[0].value.value == Coding(system="urn:oid:2.16.840.1.113883.6.238", code="2106-3")
        assert extensions_with_url(race, "text")[0].value.value == "White"
        assert encode(p) == doc

    def test_unmodelled_value_type_kept_in_extension_bag(self):
        doc = {
            "resourceType": "Patient",
            "extension": [{"url": "http://example.org/sig", "valueSignature": {"who": {"display": "X"}}}],
        }
        p, report = decode(doc)
        ext = p.extension[0]
        assert ext.value is None
        assert ext.unknown_fields == {"valueSignature": {"who": {"display": "X"}}}
        assert report.warnings[0].path == "Patient.extension[0].valueSignature"
        assert encode(p) == doc

    def test_extension_requires_url(self):
        with pytest.raises(MissingRequiredFieldError, match="'url'"):
            decode({"resourceType": "Patient", "extension": [{"valueString": "x"}]})

    def test_encode_constructed_extension(self):
        p = Patient(extension=[Extension(url="http://example.org/a", value=ChoiceValue("integer", 3))])
        assert encode(p)["extension"] == [{"url": "http://example.org/a", "valueInteger": 3}]


class TestModifierExtensions:
    def test_kept_apart_from_extension(self):
        doc = {
            "resourceType": "Patient",
            "modifierExtension": [{"url": "http://example.org/do-not-use", "valueBoolean": True}],
            "contact": [{
                "modifierExtension": [{"url": "http://example.org/inactive", "valueBoolean": True}],
                "name": {"family": "Roe"},
            }],
        }
        p, _ = decode(doc)
        assert p.extension == []
        assert p.has_modifier_extensions()
        assert p.modifier_extension_urls() == ["http://example.org/do-not-use"]
        assert p.contact[0].modifier_extension_urls() == ["http://example.org/inactive"]
        assert encode(p) == doc

    def test_unknown_modifier_urls(self):
        doc = {
            "resourceType": "Patient",
            "modifierExtension": [
                {"url": "http://example.org/known", "valueBoolean": True},
                {"url": "http://example.org/unknown", "valueBoolean": True},
            ],
        }
        p, _ = decode(doc)
        assert unknown_modifier_urls(p, ["http://example.org/known"]) == ["http://example.org/unknown"]


class TestPrimitiveExtensions:
    def test_single_value_with_extension(self):
        doc = {
            "resourceType": "Patient",
            "birthDate": "1970-03-30",
            "_birthDate": {
                "id": "bd",
                "extension": [{"url": "http://hl7.org/fhir/StructureDefinition/patient-birthTime", "valueDateTime": "1970-03-30T14:35:45-05:00"}],
            },
        }
        p, report = decode(doc)
        assert p.birth_date == "1970-03-30"
        ext = p.primitive_extension("birthDate")
        assert isinstance(ext, PrimitiveExtension)
        assert ext.id == "bd"
        assert report.warnings == []
        assert encode(p) == doc

    def test_array_alignment_with_null_holes(self):
        doc = {
            "resourceType": "Patient",
            "name": [{
                "given": ["Alice", None, "Beth"],
                "_given": [None, {"extension": [{"url": "http://example.org/absent", "valueCode": "masked"}]}, None],
            }],
        }
        p, _ = decode(doc)
        name = p.name[0]
        assert name.given == ["Alice", None, "Beth"]
        exts = name.primitive_extension("given")
        assert exts[0] is None and exts[2] is None
        assert exts[1].extension[0].value.value == "masked"
        assert encode(p) == doc

    def test_extension_only_array(self):
        doc = {
            "resourceType": "Patient",
            "name": [{"_given": [{"id": "g1"}]}],
        }
        p, _ = decode(doc)
        assert p.name[0].given == [None]
        assert encode(p) == doc

    def test_length_mismatch(self):
        doc = {
            "resourceType": "Patient",
            "name": [{"given": ["A", "B"], "_given": [None]}],
        }
        with pytest.raises(TypeMismatchError, match="align"):
            decode(doc)

    def test_null_without_extension(self):
        doc = {"resourceType": "Patient", "name": [{"given": ["A", None]}]}
        with pytest.raises(TypeMismatchError) as exc:
            decode(doc)
        assert exc.value.path == "Patient.name[0].given[1]"

    def test_underscore_key_on_complex_field_goes_to_bag(self):
        doc = {"resourceType": "Patient", "_managingOrganization": {"id": "x"}}
        p, report = FhirCodec().decode(doc)
        assert p.unknown_fields == {"_managingOrganization": {"id": "x"}}
        assert report.codes() == ["unmodeled-field"]
