"""Tests for structural path matching."""

from __future__ import annotations

import logging

import pytest

from routeschema.matching import match_path
from routeschema.segments import compile_pattern


class TestRequiredSegments:
    def test_match(self) -> None:
        assert match_path(compile_pattern("/org/:organizationId"), "/org/22") == {"organizationId": "22"}

    @pytest.mark.parametrize("path", ["/org", "/org/22/b", "org/22", "/orgs/22", ""])
    def test_mismatch(self, path: str) -> None:
        assert match_path(compile_pattern("/org/:organizationId"), path) is None

    def test_static_only(self) -> None:
        assert match_path(compile_pattern("/health"), "/health") == {}
        assert match_path(compile_pattern("/health"), "/other") is None

    def test_params_capture_any_component(self) -> None:
        # Value validity is the validator's concern, not the matcher's.
        assert match_path(compile_pattern("/org/:organizationId"), "/org/a") == {"organizationId": "a"}


class TestExactness:
    def test_trailing_components_rejected_when_exact(self) -> None:
        assert match_path(compile_pattern("/org/:id"), "/org/22/dashboards") is None

    def test_trailing_components_ignored_when_not_exact(self) -> None:
        compiled = compile_pattern("/org/:id")
        assert match_path(compiled, "/org/22/dashboards/blah", exact=False) == {"id": "22"}

    def test_short_path_fails_even_when_not_exact(self) -> None:
        assert match_path(compile_pattern("/org/:id"), "/org", exact=False) is None


class TestOptionalSegments:
    def test_optional_param_present(self) -> None:
        assert match_path(compile_pattern("/users/:userId?"), "/users/3") == {"userId": "3"}

    def test_optional_param_absent(self) -> None:
        assert match_path(compile_pattern("/users/:userId?"), "/users") == {}

    @pytest.mark.parametrize("path", ["/foo/bar/a", "/foo/a"])
    def test_optional_static_is_skippable(self, path: str) -> None:
        assert match_path(compile_pattern("/foo/bar?/:baz"), path) == {"baz": "a"}

    def test_trailing_optional_static(self) -> None:
        compiled = compile_pattern("/a/b?")
        assert match_path(compiled, "/a") == {}
        assert match_path(compiled, "/a/b") == {}
        assert match_path(compiled, "/a/c") is None

    def test_optional_static_is_greedy(self) -> None:
        # "bar" is consumed by the optional literal and never retried as :baz.
        assert match_path(compile_pattern("/foo/bar?/:baz"), "/foo/bar") is None

    def test_remaining_required_segment_fails(self) -> None:
        assert match_path(compile_pattern("/a/:b?/c"), "/a") is None


class TestDecoding:
    def test_percent_decoding(self) -> None:
        compiled = compile_pattern("/events/:startTime")
        assert match_path(compiled, "/events/2022-01-06T03%3A45%3A00Z") == {
            "startTime": "2022-01-06T03:45:00Z",
        }

    def test_unicode(self) -> None:
        assert match_path(compile_pattern("/t/:tag"), "/t/%E4%B8%AD%20x") == {"tag": "中 x"}

    def test_static_segments_compared_raw(self) -> None:
        assert match_path(compile_pattern("/a b"), "/a%20b") is None

    def test_invalid_utf8_is_a_mismatch(self) -> None:
        assert match_path(compile_pattern("/t/:tag"), "/t/%FF") is None


def test_duplicate_names_last_write_wins() -> None:
    assert match_path(compile_pattern("/:a/:a"), "/x/y") == {"a": "y"}


def test_mismatch_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="routeschema"):
        assert match_path(compile_pattern("/org/:id"), "/orgs/1") is None
    assert "doesn't match" in caplog.text
