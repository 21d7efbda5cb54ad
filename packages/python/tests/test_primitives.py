"""Tests for FHIR primitive checks and partial date/time values."""

from datetime import datetime, timedelta, timezone

import pytest

from fhir_records.errors import TypeMismatchError
from fhir_records.primitives import (
    PRIMITIVE_TYPES,
    FhirDateTime,
    check_primitive,
    is_primitive,
)


class TestPrimitiveTable:
    def test_all_r4_primitives_present(self):
        expected = {
            "boolean", "integer", "positiveInt", "unsignedInt", "decimal",
            "string", "markdown", "code", "id", "uri", "url", "canonical",
            "oid", "uuid", "base64Binary", "date", "dateTime", "instant",
            "time", "xhtml",
        }
        assert set(PRIMITIVE_TYPES) == expected

    def test_is_primitive(self):
        assert is_primitive("dateTime")
        assert not is_primitive("Quantity")
        assert not is_primitive(int)


class TestCheckPrimitive:
    def test_boolean(self):
        assert check_primitive("boolean", True) is True
        with pytest.raises(TypeMismatchError, match="expected boolean"):
            check_primitive("boolean", "true")

    def test_integer_rejects_bool(self):
        with pytest.raises(TypeMismatchError):
            check_primitive("integer", True)

    def test_integer_rejects_float(self):
        with pytest.raises(TypeMismatchError):
            check_primitive("integer", 2.0)

    def test_positive_int_minimum(self):
        assert check_primitive("positiveInt", 1) == 1
        with pytest.raises(TypeMismatchError, match=">= 1"):
            check_primitive("positiveInt", 0)

    def test_unsigned_int_minimum(self):
        assert check_primitive("unsignedInt", 0) == 0
        with pytest.raises(TypeMismatchError):
            check_primitive("unsignedInt", -1)

    def test_integer_32_bit_range(self):
        assert check_primitive("integer", 2147483647) == 2147483647
        assert check_primitive("integer", -2147483648) == -2147483648
        with pytest.raises(TypeMismatchError, match="<= 2147483647"):
            check_primitive("integer", 2**40)
        with pytest.raises(TypeMismatchError, match=">= -2147483648"):
            check_primitive("integer", -(2**31) - 1)

    @pytest.mark.parametrize("name", ["positiveInt", "unsignedInt"])
    def test_bounded_integers_maximum(self, name):
        assert check_primitive(name, 2147483647) == 2147483647
        with pytest.raises(TypeMismatchError, match="<= 2147483647"):
            check_primitive(name, 2147483648)

    def test_decimal_accepts_int_and_float(self):
        assert check_primitive("decimal", 3) == 3
        assert check_primitive("decimal", 3.25) == 3.25

    def test_decimal_rejects_non_finite(self):
        with pytest.raises(TypeMismatchError, match="not finite"):
            check_primitive("decimal", float("inf"))

    def test_decimal_rejects_string(self):
        with pytest.raises(TypeMismatchError):
            check_primitive("decimal", "1.5")

    def test_string_rejects_number(self):
        with pytest.raises(TypeMismatchError, match="expected string, got number 5"):
            check_primitive("string", 5)

    def test_code_lexical(self):
        assert check_primitive("code", "in-progress") == "in-progress"
        with pytest.raises(TypeMismatchError, match="not a valid FHIR code"):
            check_primitive("code", " leading")

    def test_id_length_limit(self):
        assert check_primitive("id", "a" * 64)
        with pytest.raises(TypeMismatchError):
            check_primitive("id", "a" * 65)

    @pytest.mark.parametrize("value", ["2018", "1973-06", "1905-08-23", "2015-02-07T13:28:17-05:00"])
    def test_valid_date_times(self, value):
        assert check_primitive("dateTime", value) == value

    @pytest.mark.parametrize("value", ["2018-13", "2015-02-07T13:28:17", "yesterday"])
    def test_invalid_date_times(self, value):
        with pytest.raises(TypeMismatchError):
            check_primitive("dateTime", value)

    def test_instant_requires_time_and_zone(self):
        assert check_primitive("instant", "2015-02-07T13:28:17.239+02:00")
        with pytest.raises(TypeMismatchError):
            check_primitive("instant", "2015-02-07")

    def test_path_reported(self):
        with pytest.raises(TypeMismatchError) as exc:
            check_primitive("boolean", 1, path="Patient.active")
        assert exc.value.path == "Patient.active"
        assert str(exc.value).startswith("Patient.active: ")

    def test_type_mismatch_is_type_error(self):
        with pytest.raises(TypeError):
            check_primitive("boolean", "no")

    def test_unknown_type_name(self):
        with pytest.raises(KeyError):
            check_primitive("Quantity", {})


class TestFhirDateTime:
    def test_year(self):
        dt = FhirDateTime.parse("2016")
        assert dt.precision == "year"
        assert dt.value == datetime(2016, 1, 1, tzinfo=timezone.utc)
        assert dt.isoformat() == "2016"

    def test_month(self):
        dt = FhirDateTime.parse("2016-03")
        assert dt.precision == "month"
        assert str(dt) == "2016-03"

    def test_day(self):
        dt = FhirDateTime.parse("2016-03-09")
        assert dt.precision == "day"
        assert dt.isoformat() == "2016-03-09"

    def test_full_with_offset(self):
        dt = FhirDateTime.parse("2015-02-07T13:28:17-05:00")
        assert dt.precision == "second"
        assert dt.value.utcoffset() == timedelta(hours=-5)
        assert dt.isoformat() == "2015-02-07T13:28:17-05:00"

    def test_utc_written_as_z(self):
        dt = FhirDateTime.parse("2015-02-07T13:28:17Z")
        assert dt.isoformat() == "2015-02-07T13:28:17Z"

    def test_milliseconds_kept(self):
        dt = FhirDateTime.parse("2015-02-07T13:28:17.239Z")
        assert dt.isoformat() == "2015-02-07T13:28:17.239Z"

    def test_naive_value_gets_utc(self):
        dt = FhirDateTime(datetime(2020, 5, 1), "day")
        assert dt.value.tzinfo is timezone.utc

    def test_unknown_precision(self):
        with pytest.raises(ValueError, match="Unknown precision"):
            FhirDateTime(datetime(2020, 5, 1), "minute")

    @pytest.mark.parametrize("text", ["", "20", "2016-1", "2016-02-30", "not a date"])
    def test_unparseable(self, text):
        with pytest.raises(ValueError, match="unable to parse"):
            FhirDateTime.parse(text)

    def test_non_string(self):
        with pytest.raises(TypeError):
            FhirDateTime.parse(2016)
