"""Tests for size and depth limits on untrusted input."""

import json

import pytest

from fhir_records import FhirCodec
from fhir_records.errors import LimitExceededError, MalformedJSONError
from fhir_records.limits import DEFAULT_DECODE_LIMITS, enforce_decode_limits, resolve_limits


def _nested(depth):
    """A Patient whose first name carries *depth* levels of nested extensions."""
    ext = {"url": "http://example.org/leaf", "valueString": "x"}
    for _ in range(depth):
        ext = {"url": "http://example.org/node", "extension": [ext]}
    return {"resourceType": "Patient", "extension": [ext]}


class TestResolveLimits:
    def test_defaults(self):
        assert resolve_limits() == DEFAULT_DECODE_LIMITS

    def test_override(self):
        assert resolve_limits({"max_depth": 5})["max_depth"] == 5

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown limit"):
            resolve_limits({"max_entries": 5})

    @pytest.mark.parametrize("bad", [0, -1, 1.5, True, "10"])
    def test_non_positive_or_non_int(self, bad):
        with pytest.raises(ValueError, match="positive integer"):
            resolve_limits({"max_depth": bad})


class TestEnforceDecodeLimits:
    def test_text_parsed(self):
        assert enforce_decode_limits('{"resourceType": "Patient"}') == {"resourceType": "Patient"}

    def test_bytes_parsed(self):
        assert enforce_decode_limits(b'{"resourceType": "Patient"}') == {"resourceType": "Patient"}

    def test_dict_passed_through(self):
        doc = {"resourceType": "Patient"}
        assert enforce_decode_limits(doc) is doc

    def test_size_text(self):
        with pytest.raises(LimitExceededError, match="exceeds limit 10"):
            enforce_decode_limits('{"resourceType": "Patient"}', {"max_document_size": 10})

    def test_size_bytes_checked_before_decoding(self):
        with pytest.raises(LimitExceededError):
            enforce_decode_limits(b"\xff" * 20, {"max_document_size": 10})

    def test_size_dict(self):
        with pytest.raises(LimitExceededError):
            enforce_decode_limits({"resourceType": "Patient", "id": "x" * 50}, {"max_document_size": 20})

    def test_depth(self):
        with pytest.raises(LimitExceededError, match="depth"):
            enforce_decode_limits(_nested(10), {"max_depth": 5})

    def test_invalid_utf8(self):
        with pytest.raises(MalformedJSONError, match="UTF-8"):
            enforce_decode_limits(b'{"id": "\xff"}')

    def test_invalid_json(self):
        with pytest.raises(MalformedJSONError, match="not valid JSON"):
            enforce_decode_limits("{nope")

    def test_top_level_must_be_object(self):
        with pytest.raises(MalformedJSONError, match="JSON object"):
            enforce_decode_limits('"Patient"')

    def test_none(self):
        with pytest.raises(TypeError, match="must not be None"):
            enforce_decode_limits(None)

    def test_unsupported_type(self):
        with pytest.raises(TypeError, match="str, bytes, or dict"):
            enforce_decode_limits(42)

    def test_size_text_counted_in_utf8_bytes(self):
        text = '{"id": "' + "é" * 10 + '"}'
        assert len(text) == 20
        enforce_decode_limits(text, {"max_document_size": 30})
        with pytest.raises(LimitExceededError, match="Document size 30 exceeds limit 25"):
            enforce_decode_limits(text, {"max_document_size": 25})

    def test_size_dict_counted_in_utf8_bytes(self):
        doc = {"id": "é" * 10}
        enforce_decode_limits(doc, {"max_document_size": 29})
        with pytest.raises(LimitExceededError):
            enforce_decode_limits(doc, {"max_document_size": 20})

    @pytest.mark.parametrize("depth", [1_000, 100_000])
    def test_deeply_nested_text(self, depth):
        text = '{"resourceType":"Patient","x":' + "[" * depth + "]" * depth + "}"
        with pytest.raises((LimitExceededError, MalformedJSONError)):
            enforce_decode_limits(text)

    def test_deeply_nested_text_through_codec(self):
        text = '{"resourceType":"Patient","x":' + "[" * 100_000 + "]" * 100_000 + "}"
        with pytest.raises(LimitExceededError):
            FhirCodec().decode(text)

    def test_deeply_nested_dict(self):
        doc = inner = {}
        for _ in range(100_000):
            inner["x"] = {}
            inner = inner["x"]
        with pytest.raises(LimitExceededError):
            enforce_decode_limits(doc)

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_constants_rejected(self, constant):
        text = '{"resourceType":"Observation","valueQuantity":{"value":' + constant + "}}"
        with pytest.raises(MalformedJSONError, match=f"{constant} is not a JSON value"):
            enforce_decode_limits(text)

    def test_non_finite_float_in_dict_rejected(self):
        with pytest.raises(MalformedJSONError):
            enforce_decode_limits({"resourceType": "Patient", "x": float("inf")})

    def test_non_serializable_dict(self):
        with pytest.raises(TypeError, match="not JSON-serializable"):
            enforce_decode_limits({"resourceType": "Patient", "x": object()})


class TestCodecLimits:
    def test_codec_exposes_limits_copy(self):
        codec = FhirCodec(limits={"max_depth": 7})
        limits = codec.limits
        limits["max_depth"] = 1000
        assert codec.limits["max_depth"] == 7

    def test_codec_rejects_deep_document(self):
        codec = FhirCodec(limits={"max_depth": 8})
        with pytest.raises(LimitExceededError):
            codec.decode(_nested(10))

    def test_codec_accepts_within_limits(self):
        resource, _ = FhirCodec().decode(json.dumps(_nested(10)))
        assert resource.extension[0].url == "http://example.org/node"

    def test_limit_errors_not_recoverable(self):
        with pytest.raises(LimitExceededError) as exc:
            FhirCodec(limits={"max_document_size": 5}).decode('{"resourceType":"Patient"}')
        assert not exc.value.recoverable

    def test_unknown_limit_key_at_construction(self):
        with pytest.raises(ValueError):
            FhirCodec(limits={"depth": 3})
