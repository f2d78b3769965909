"""Tests for rendering compiled patterns into paths."""

from __future__ import annotations

import pytest

from routeschema.errors import FormatError
from routeschema.formatting import decode_component, encode_component, format_path, partial_format_path
from routeschema.segments import compile_pattern

# =====================================================================
# Component escaping
# =====================================================================


class TestEscaping:
    def test_reserved_characters_are_encoded(self) -> None:
        assert encode_component("a b/c?d:e") == "a%20b%2Fc%3Fd%3Ae"

    def test_unreserved_characters_are_kept(self) -> None:
        assert encode_component("AZaz09-_.!~*'()") == "AZaz09-_.!~*'()"

    def test_utf8(self) -> None:
        assert encode_component("中") == "%E4%B8%AD"

    def test_non_strings_are_stringified(self) -> None:
        assert encode_component(22) == "22"

    def test_decode(self) -> None:
        assert decode_component("a%20b%2Fc") == "a b/c"
        assert decode_component("%FF") is None


# =====================================================================
# Full formatting
# =====================================================================


class TestFormatPath:
    def test_required_params(self) -> None:
        compiled = compile_pattern("/org/:organizationId/dashboards/:dashboardId")
        assert format_path(compiled, {"organizationId": "35", "dashboardId": "blah"}) == "/org/35/dashboards/blah"

    def test_values_are_encoded(self) -> None:
        assert format_path(compile_pattern("/t/:tag"), {"tag": "a/b"}) == "/t/a%2Fb"

    def test_optional_static_emitted_without_marker(self) -> None:
        assert format_path(compile_pattern("/foo/bar?/:baz"), {"baz": "a"}) == "/foo/bar/a"

    def test_optional_param(self) -> None:
        compiled = compile_pattern("/users/:userId?")
        assert format_path(compiled, {"userId": "21"}) == "/users/21"
        assert format_path(compiled, {}) == "/users"
        assert format_path(compiled, {"userId": None}) == "/users"

    def test_missing_required_param(self) -> None:
        with pytest.raises(FormatError, match="organizationId") as info:
            format_path(compile_pattern("/org/:organizationId"), {})
        assert info.value.issues[0]["loc"] == ("organizationId",)

    def test_extra_params_ignored(self) -> None:
        assert format_path(compile_pattern("/org/:id"), {"id": "1", "other": "x"}) == "/org/1"


# =====================================================================
# Partial formatting
# =====================================================================


class TestPartialFormatPath:
    def test_missing_params_become_placeholders(self) -> None:
        compiled = compile_pattern("/org/:organizationId/dashboards/:dashboardId")
        assert partial_format_path(compiled, {"dashboardId": "blah"}) == "/org/:organizationId/dashboards/blah"
        assert partial_format_path(compiled, {"organizationId": "35"}) == "/org/35/dashboards/:dashboardId"

    def test_optional_placeholders_keep_marker(self) -> None:
        assert partial_format_path(compile_pattern("/users/:userId?"), {}) == "/users/:userId?"

    def test_optional_static_keeps_marker(self) -> None:
        compiled = compile_pattern("/foo/bar?/:baz")
        assert partial_format_path(compiled, {"baz": "a"}) == "/foo/bar?/a"
        assert partial_format_path(compiled, {}) == "/foo/bar?/:baz"

    def test_optional_param_set_to_none_is_dropped(self) -> None:
        assert partial_format_path(compile_pattern("/users/:userId?"), {"userId": None}) == "/users"

    def test_required_param_set_to_none_stays_placeholder(self) -> None:
        assert partial_format_path(compile_pattern("/org/:id"), {"id": None}) == "/org/:id"

    def test_output_is_a_pattern(self) -> None:
        compiled = compile_pattern("/org/:organizationId/dashboards/:dashboardId")
        partial = partial_format_path(compiled, {"organizationId": "35"})
        assert compile_pattern(partial).param_names == ("dashboardId",)
