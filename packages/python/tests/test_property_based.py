"""
Property-based tests for the codec using Hypothesis.

Strategies generate well-formed Patient and Observation JSON (including
unknown keys and primitive extensions) and check that decoding then
encoding reproduces the input, that a second decode gives an equal
object, and that choice groups never produce more than one key.
"""

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from fhir_records import FhirCodec, compare_round_trip
from fhir_records.choice import ChoiceValue
from fhir_records.errors import ChoiceConflictError
from fhir_records.resources import Observation, Patient


# ═══════════════════════════════════════════════════════════════════
# Custom Hypothesis Strategies
# ═══════════════════════════════════════════════════════════════════

_text = st.text(
    alphabet=st.characters(min_codepoint=33, max_codepoint=0x2FF, blacklist_categories=("Cs",)),
    min_size=1,
    max_size=12,
)
_token = st.from_regex(r"[a-z][a-z0-9\-]{0,10}", fullmatch=True)
_date = st.dates().filter(lambda d: d.year >= 1000).map(lambda d: d.isoformat())
_url = _token.map(lambda t: f"http://example.org/{t}")

# Unmodelled JSON kept in extension bags.
_json_leaf = st.one_of(st.none(), st.booleans(), st.integers(-1000, 1000), _text)
_json = st.recursive(
    _json_leaf,
    lambda inner: st.one_of(
        st.lists(inner, max_size=3),
        st.dictionaries(_token, inner, max_size=3),
    ),
    max_leaves=8,
)


@st.composite
def extensions(draw):
    kind = draw(st.sampled_from(["valueString", "valueBoolean", "valueInteger", "valueCode"]))
    if kind == "valueBoolean":
        value = draw(st.booleans())
    elif kind == "valueInteger":
        value = draw(st.integers(-10_000, 10_000))
    elif kind == "valueCode":
        value = draw(_token)
    else:
        value = draw(_text)
    return {"url": draw(_url), kind: value}


@st.composite
def human_names(draw):
    name = {}
    if draw(st.booleans()):
        name["family"] = draw(_text)
    given = draw(st.lists(_text, max_size=3))
    if given:
        # Optionally blank out one of several given names and extend it instead.
        if len(given) > 1 and draw(st.booleans()):
            i = draw(st.integers(0, len(given) - 1))
            ext = [None] * len(given)
            ext[i] = {"extension": [draw(extensions())]}
            given[i] = None
            name["_given"] = ext
        name["given"] = given
    if draw(st.booleans()):
        name["use"] = draw(st.sampled_from(["usual", "official", "nickname"]))
    return name


@st.composite
def patients(draw, allow_unknown=True):
    doc = {"resourceType": "Patient"}
    if draw(st.booleans()):
        doc["id"] = draw(st.from_regex(r"[A-Za-z0-9\-\.]{1,20}", fullmatch=True))
    if draw(st.booleans()):
        doc["active"] = draw(st.booleans())
    names = draw(st.lists(human_names(), max_size=3))
    names = [n for n in names if n]
    if names:
        doc["name"] = names
    if draw(st.booleans()):
        doc["gender"] = draw(st.sampled_from(["male", "female", "other", "unknown"]))
    if draw(st.booleans()):
        doc["birthDate"] = draw(_date)
        if draw(st.booleans()):
            doc["_birthDate"] = {"extension": [draw(extensions())]}
    deceased = draw(st.sampled_from([None, "boolean", "dateTime"]))
    if deceased == "boolean":
        doc["deceasedBoolean"] = draw(st.booleans())
    elif deceased == "dateTime":
        doc["deceasedDateTime"] = draw(_date)
    exts = draw(st.lists(extensions(), max_size=2))
    if exts:
        doc["extension"] = exts
    if allow_unknown and draw(st.booleans()):
        doc["zzUnknown"] = draw(_json)
    return doc


@st.composite
def observations(draw):
    doc = {
        "resourceType": "Observation",
        "status": draw(st.sampled_from(["registered", "preliminary", "final", "amended"])),
        "code": {"text": draw(_text)},
    }
    kind = draw(st.sampled_from([None, "Quantity", "String", "Boolean", "Integer", "DateTime"]))
    if kind == "Quantity":
        doc["valueQuantity"] = {
            "value": draw(st.floats(-1e6, 1e6, allow_nan=False, allow_infinity=False)),
            "unit": draw(_text),
        }
    elif kind == "String":
        doc["valueString"] = draw(_text)
    elif kind == "Boolean":
        doc["valueBoolean"] = draw(st.booleans())
    elif kind == "Integer":
        doc["valueInteger"] = draw(st.integers(-(2**31), 2**31 - 1))
    elif kind == "DateTime":
        doc["valueDateTime"] = draw(_date)
    return doc


_settings = settings(max_examples=200, suppress_health_check=[HealthCheck.too_slow])


# ═══════════════════════════════════════════════════════════════════
# Properties
# ═══════════════════════════════════════════════════════════════════


class TestRoundTripProperties:
    @_settings
    @given(doc=patients())
    def test_patient_lossless(self, doc):
        result = compare_round_trip(doc)
        assert result.equal, result.differences
        assert result.stable

    @_settings
    @given(doc=observations())
    def test_observation_lossless(self, doc):
        result = compare_round_trip(doc)
        assert result.equal, result.differences
        assert result.stable

    @_settings
    @given(doc=patients(allow_unknown=False))
    def test_no_unmodeled_warnings_for_known_fields(self, doc):
        _, report = FhirCodec().decode(doc)
        assert report.warnings == []

    @_settings
    @given(doc=patients())
    def test_encode_is_idempotent(self, doc):
        codec = FhirCodec()
        once = codec.encode(codec.decode(doc)[0])
        twice = codec.encode(codec.decode(once)[0])
        assert once == twice


class TestChoiceProperties:
    @_settings
    @given(doc=observations())
    def test_at_most_one_value_key(self, doc):
        codec = FhirCodec()
        out = codec.encode(codec.decode(doc)[0])
        value_keys = [k for k in out if k.startswith("value")]
        assert len(value_keys) <= 1

    @_settings
    @given(flag=st.booleans(), date=_date)
    def test_two_branches_always_conflict(self, flag, date):
        doc = {"resourceType": "Patient", "deceasedBoolean": flag, "deceasedDateTime": date}
        with pytest.raises(ChoiceConflictError):
            FhirCodec().decode(doc)

    @_settings
    @given(value=st.one_of(
        st.booleans().map(lambda b: ChoiceValue("boolean", b)),
        st.integers(0, 20).map(lambda n: ChoiceValue("integer", n)),
    ))
    def test_constructed_choice_emits_one_key(self, value):
        out = FhirCodec().encode(Patient(multiple_birth=value))
        assert [k for k in out if k.startswith("multipleBirth")] == [value.key("multipleBirth")]


class TestDecodedTypes:
    @_settings
    @given(doc=observations())
    def test_observation_class(self, doc):
        obs, _ = FhirCodec().decode(doc)
        assert isinstance(obs, Observation)
        if "valueQuantity" in doc:
            assert obs.value.kind == "Quantity"
