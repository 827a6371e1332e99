"""Tests for releasekit.core.structured."""

from releasekit.core.structured import (
    as_obj_list,
    as_str_dict,
    get_float,
    get_str,
    get_table,
)


class TestNarrowing:
    """Tests for as_str_dict / as_obj_list."""

    def test_str_dict(self) -> None:
        assert as_str_dict({"a": 1}) == {"a": 1}
        assert as_str_dict({1: "a"}) is None
        assert as_str_dict([("a", 1)]) is None

    def test_obj_list(self) -> None:
        assert as_obj_list([1, "a"]) == [1, "a"]
        assert as_obj_list({"a": 1}) is None


class TestGetters:
    """Tests for typed getters."""

    def test_get_str_strips(self) -> None:
        assert get_str({"k": "  v  "}, "k") == "v"
        assert get_str({"k": "   "}, "k") is None
        assert get_str({"k": 1}, "k") is None
        assert get_str({}, "k") is None

    def test_get_float_accepts_int(self) -> None:
        assert get_float({"k": 5}, "k") == 5.0
        assert get_float({"k": 2.5}, "k") == 2.5
        assert get_float({"k": False}, "k") is None

    def test_get_table(self) -> None:
        assert get_table({"api": {"token": "x"}}, "api") == {"token": "x"}
        assert get_table({"api": "x"}, "api") is None
