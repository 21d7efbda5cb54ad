"""Tests for the injectable resource registry."""

from dataclasses import dataclass
from typing import ClassVar, Optional

import pytest

from fhir_records import FhirCodec
from fhir_records.errors import UnknownResourceTypeError
from fhir_records.registry import ResourceRegistry, default_registry
from fhir_records.report import DecodeReport
from fhir_records.resource import DomainResource, Resource
from fhir_records.resources import BUILTIN_RESOURCES, Observation, Patient
from fhir_records.schema import datatype, fhir_field


@datatype
@dataclass(frozen=True)
class ProfiledPatient(Patient):
    """A Patient profile that models one extra element."""

    nickname: Optional[str] = fhir_field("string")


class TestRegistration:
    def test_register_and_get(self):
        reg = ResourceRegistry()
        reg.register("Patient", Patient)
        assert reg.get("Patient") is Patient
        assert "Patient" in reg
        assert len(reg) == 1

    def test_get_unknown_is_none(self):
        assert ResourceRegistry().get("Patient") is None

    def test_constructor_mapping(self):
        reg = ResourceRegistry({"Patient": Patient, "Observation": Observation})
        assert reg.names() == ["Observation", "Patient"]
        assert list(reg) == ["Observation", "Patient"]

    def test_reregistration_replaces(self):
        reg = default_registry()
        reg.register("Patient", ProfiledPatient)
        assert reg.get("Patient") is ProfiledPatient

    def test_name_must_match_class(self):
        with pytest.raises(ValueError, match="not 'Person'"):
            ResourceRegistry().register("Person", Patient)

    def test_empty_name(self):
        with pytest.raises(ValueError, match="non-empty"):
            ResourceRegistry().register("", Patient)

    def test_non_resource_rejected(self):
        with pytest.raises(TypeError, match="Resource subclass"):
            ResourceRegistry().register("Patient", dict)

    @pytest.mark.parametrize("cls", [Resource, DomainResource])
    def test_abstract_rejected(self, cls):
        with pytest.raises(TypeError, match="abstract"):
            ResourceRegistry().register(cls.resource_type, cls)

    def test_unregister(self):
        reg = default_registry()
        reg.unregister("Claim")
        assert "Claim" not in reg

    def test_unregister_missing(self):
        with pytest.raises(KeyError):
            ResourceRegistry().unregister("Claim")

    def test_repr(self):
        assert repr(ResourceRegistry({"Patient": Patient})) == "ResourceRegistry(1 resource types)"


class TestDefaultRegistry:
    def test_holds_builtins(self):
        reg = default_registry()
        assert set(reg.names()) == {cls.resource_type for cls in BUILTIN_RESOURCES}
        assert len(reg) == 28

    def test_fresh_each_call(self):
        a = default_registry()
        b = default_registry()
        a.unregister("Patient")
        assert "Patient" in b

    def test_copy_is_independent(self):
        a = default_registry()
        b = a.copy()
        b.unregister("Bundle")
        assert "Bundle" in a


class TestPeek:
    def setup_method(self):
        self.reg = default_registry()

    def test_known(self):
        assert self.reg.peek({"resourceType": "Observation"}) is Observation

    def test_missing(self):
        with pytest.raises(UnknownResourceTypeError, match="no 'resourceType'"):
            self.reg.peek({"id": "x"})

    def test_not_a_string(self):
        with pytest.raises(UnknownResourceTypeError) as exc:
            self.reg.peek({"resourceType": 7}, path="Bundle.entry[0].resource")
        assert exc.value.resource_type == "7"
        assert exc.value.path == "Bundle.entry[0].resource"

    def test_unregistered(self):
        with pytest.raises(UnknownResourceTypeError, match="'Foo'"):
            self.reg.peek({"resourceType": "Foo"})


class TestPolymorphicDecoding:
    def test_decode_polymorphic(self):
        reg = default_registry()
        obs = reg.decode_polymorphic(
            {"resourceType": "Observation", "status": "final", "code": {"text": "x"}}
        )
        assert isinstance(obs, Observation)

    def test_report_collects_warnings(self):
        report = DecodeReport()
        default_registry().decode_polymorphic(
            {"resourceType": "Patient", "gender": "martian"}, report=report,
        )
        assert report.codes() == ["unknown-code"]

    def test_profiled_class_used_by_codec(self):
        reg = default_registry()
        reg.register("Patient", ProfiledPatient)
        p, report = FhirCodec(reg).decode({"resourceType": "Patient", "nickname": "Ace"})
        assert isinstance(p, ProfiledPatient)
        assert p.nickname == "Ace"
        assert report.warnings == []

    def test_registries_do_not_interfere(self):
        reg = default_registry()
        reg.register("Patient", ProfiledPatient)
        p, report = FhirCodec().decode({"resourceType": "Patient", "nickname": "Ace"})
        assert type(p) is Patient
        assert p.unknown_fields == {"nickname": "Ace"}

    def test_registration_order_irrelevant(self):
        a = ResourceRegistry({"Patient": Patient, "Bundle": default_registry().get("Bundle")})
        b = ResourceRegistry({"Bundle": default_registry().get("Bundle"), "Patient": Patient})
        doc = {"resourceType": "Bundle", "type": "collection",
               "entry": [{"resource": {"resourceType": "Patient", "id": "1"}}]}
        assert FhirCodec(a).decode(doc)[0] == FhirCodec(b).decode(doc)[0]

    def test_empty_registry_rejects_contained(self):
        reg = ResourceRegistry({"Patient": Patient})
        doc = {"resourceType": "Patient", "contained": [{"resourceType": "Organization", "id": "o"}]}
        with pytest.raises(UnknownResourceTypeError) as exc:
            FhirCodec(reg).decode(doc)
        assert exc.value.path == "Patient.contained[0]"

    def test_decode_as_needs_no_registration(self):
        p, _ = FhirCodec(ResourceRegistry()).decode_as(Patient, {"resourceType": "Patient"})
        assert isinstance(p, Patient)

    def test_unregistered_entry_isolated_in_bundle(self):
        reg = default_registry()
        reg.unregister("Observation")
        doc = {
            "resourceType": "Bundle",
            "type": "collection",
            "entry": [
                {"resource": {"resourceType": "Observation", "status": "final", "code": {"text": "x"}}},
                {"resource": {"resourceType": "Patient"}},
            ],
        }
        b, report = FhirCodec(reg).decode(doc)
        assert b.entry[0].failed
        assert isinstance(b.entry[1].resource, Patient)
        assert len(report.errors) == 1
