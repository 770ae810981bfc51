"""Tests for the lenient scalar decoders."""

import pytest

from datatables_ssp import Direction
from datatables_ssp.utils import first_value, to_bool, to_direction, to_int, to_str


class TestFirstValue:
    def test_first_of_many(self):
        assert first_value(["a", "b"]) == "a"

    def test_bare_string(self):
        assert first_value("a") == "a"

    def test_empty_and_missing(self):
        assert first_value([]) is None
        assert first_value(None) is None


class TestToInt:
    @pytest.mark.parametrize("text, expected", [("0", 0), ("15", 15), ("-1", -1), ("+3", 3), ("0010", 10)])
    def test_integers(self, text, expected):
        assert to_int(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "1.5", "1e3", " 5", "5 ", "1_000", "0x10"])
    def test_not_integers(self, text):
        assert to_int(text) is None

    @pytest.mark.parametrize("value", ["2147483648", "-2147483649", 2 ** 31, "99999999999999999999999"])
    def test_outside_int32_is_absent(self, value):
        assert to_int(value) is None

    def test_int32_limits(self):
        assert to_int("2147483647") == 2 ** 31 - 1
        assert to_int(-(2 ** 31)) == -(2 ** 31)

    def test_native_values(self):
        assert to_int(7) == 7
        assert to_int(None) is None
        assert to_int(True) is None


class TestToBool:
    @pytest.mark.parametrize("text", ["true", "TRUE", "True"])
    def test_true(self, text):
        assert to_bool(text) is True

    @pytest.mark.parametrize("text", ["false", "nope", "", "1", "yes"])
    def test_false(self, text):
        assert to_bool(text) is False

    def test_missing_is_not_false(self):
        assert to_bool(None) is None

    def test_native_bool(self):
        assert to_bool(False) is False


class TestToDirection:
    def test_desc_any_case(self):
        assert to_direction("DeSc") == Direction.DESC

    @pytest.mark.parametrize("value", ["asc", "descending", "", None, 3])
    def test_everything_else_is_asc(self, value):
        assert to_direction(value) == Direction.ASC


class TestToStr:
    def test_scalars(self):
        assert to_str("name") == "name"
        assert to_str(3) == "3"

    def test_objects_have_no_flat_form(self):
        assert to_str({"_": "name"}) is None
