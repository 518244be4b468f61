"""Tests for the lenient JSON accessors."""
import pytest

from system_info_utils.domain.json_utils import (
    get_node,
    get_value,
    has_node,
    is_unsigned,
    iter_members,
    iter_nodes,
    parse_luid,
)


class TestHasNode:
    def test_present_key(self):
        assert has_node({"a": 1}, "a")

    def test_present_null_value(self):
        assert has_node({"a": None}, "a")

    def test_missing_key(self):
        assert not has_node({"a": 1}, "b")

    @pytest.mark.parametrize("node", [None, [], ["a"], "a", 3, True])
    def test_non_object_parent(self, node):
        assert not has_node(node, "a")


class TestGetValue:
    def test_string(self):
        assert get_value({"name": "gpu"}, "name", "") == "gpu"

    def test_missing_returns_fallback(self):
        assert get_value({}, "name", "fallback") == "fallback"

    def test_unsigned(self):
        assert get_value({"size": 4096}, "size", 0) == 4096

    def test_negative_number_falls_back(self):
        assert get_value({"size": -1}, "size", 7) == 7

    def test_integral_float_converts(self):
        assert get_value({"size": 12.0}, "size", 0) == 12

    def test_fractional_float_falls_back(self):
        assert get_value({"size": 12.5}, "size", 0) == 0

    def test_boolean_is_not_a_number(self):
        assert get_value({"size": True}, "size", 3) == 3

    def test_number_is_not_a_boolean(self):
        assert get_value({"flag": 1}, "flag", False) is False

    def test_boolean(self):
        assert get_value({"flag": True}, "flag", False) is True

    def test_string_is_not_a_number(self):
        assert get_value({"size": "4096"}, "size", 0) == 0

    def test_number_is_not_a_string(self):
        assert get_value({"name": 5}, "name", "") == ""

    def test_null_falls_back(self):
        assert get_value({"name": None}, "name", "x") == "x"

    def test_explicit_value_type(self):
        assert get_value({"name": "a"}, "name", None, value_type=str) == "a"
        assert get_value({"name": 1}, "name", None, value_type=str) is None

    def test_non_object_parent(self):
        assert get_value(["name"], "name", "x") == "x"


class TestIteration:
    def test_iter_nodes_array(self):
        assert list(iter_nodes([1, 2, 3])) == [1, 2, 3]

    def test_iter_nodes_object_values_in_order(self):
        assert list(iter_nodes({"b": 1, "a": 2})) == [1, 2]

    def test_iter_nodes_scalar(self):
        assert list(iter_nodes("abc")) == []
        assert list(iter_nodes(None)) == []

    def test_iter_members(self):
        assert list(iter_members({"local": 1, "invisible": 2})) == [("local", 1), ("invisible", 2)]

    def test_iter_members_array(self):
        assert list(iter_members([1, 2])) == []

    def test_get_node(self):
        assert get_node({"a": {"b": 1}}, "a") == {"b": 1}
        assert get_node({"a": 1}, "b") is None
        assert get_node("a", "a") is None


class TestIsUnsigned:
    @pytest.mark.parametrize("value", [0, 1, 2**32, 2**64])
    def test_accepts(self, value):
        assert is_unsigned(value)

    @pytest.mark.parametrize("value", [-1, 1.0, True, False, "1", None, [1]])
    def test_rejects(self, value):
        assert not is_unsigned(value)


class TestParseLuid:
    def test_full_string(self):
        assert parse_luid("0123456789abcdef") == bytes([0x01, 0x23, 0x45, 0x67, 0x89, 0xAB, 0xCD, 0xEF])

    def test_short_string_zero_pads(self):
        assert parse_luid("ff10") == bytes([0xFF, 0x10, 0, 0, 0, 0, 0, 0])

    def test_empty_string(self):
        assert parse_luid("") == bytes(8)

    def test_odd_length_uses_last_single_character(self):
        assert parse_luid("abc") == bytes([0xAB, 0x0C, 0, 0, 0, 0, 0, 0])

    def test_invalid_fragment_is_zero(self):
        assert parse_luid("zz11") == bytes([0x00, 0x11, 0, 0, 0, 0, 0, 0])

    def test_fragment_uses_valid_prefix(self):
        assert parse_luid("az") == bytes([0x0A, 0, 0, 0, 0, 0, 0, 0])

    def test_long_string_is_truncated(self):
        assert parse_luid("0102030405060708ffff") == bytes([1, 2, 3, 4, 5, 6, 7, 8])

    def test_uppercase(self):
        assert parse_luid("ABCD") == bytes([0xAB, 0xCD, 0, 0, 0, 0, 0, 0])
