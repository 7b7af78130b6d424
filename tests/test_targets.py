"""Tests for cmdbuild.targets."""

from __future__ import annotations

import pytest

from cmdbuild.targets import TargetStack


class TestBreadcrumb:
    def test_empty(self):
        assert TargetStack().breadcrumb() == ""

    def test_single(self):
        stack = TargetStack()
        stack.push("build")
        assert stack.breadcrumb() == "[build]"

    def test_nested(self):
        stack = TargetStack()
        stack.push("a")
        stack.push("b")
        stack.push("c")
        assert stack.breadcrumb() == "[a | b | c]"


class TestPushRelease:
    def test_nested_steps_balance(self):
        stack = TargetStack()
        seen = []
        release_outer = stack.push("outer")
        seen.append(stack.breadcrumb())
        release_inner = stack.push("inner")
        seen.append(stack.breadcrumb())
        release_inner()
        seen.append(stack.breadcrumb())
        release_outer()
        seen.append(stack.breadcrumb())
        assert seen == ["[outer]", "[outer | inner]", "[outer]", ""]

    def test_release_is_idempotent(self):
        stack = TargetStack()
        stack.push("outer")
        release = stack.push("inner")
        release()
        release()
        assert list(stack) == ["outer"]

    def test_release_drops_unreleased_inner_steps(self):
        stack = TargetStack()
        release_outer = stack.push("outer")
        stack.push("inner")
        stack.push("innermost")
        release_outer()
        assert stack.breadcrumb() == ""

    def test_release_after_outer_dropped_is_noop(self):
        stack = TargetStack()
        stack.push("target")
        release_outer = stack.push("outer")
        release_inner = stack.push("inner")
        release_outer()
        release_inner()
        assert list(stack) == ["target"]

    def test_release_in_finally(self):
        stack = TargetStack()
        stack.push("target")

        def body():
            release = stack.push("step")
            try:
                raise ValueError("fail")
            finally:
                release()

        with pytest.raises(ValueError):
            body()
        assert stack.breadcrumb() == "[target]"

    def test_current(self):
        stack = TargetStack()
        assert stack.current is None
        stack.push("a")
        stack.push("b")
        assert stack.current == "b"


class TestClear:
    def test_clear_empties_stack(self):
        stack = TargetStack()
        stack.push("old")
        stack.push("leftover")
        stack.clear()
        assert stack.breadcrumb() == ""
        assert len(stack) == 0

    def test_repr(self):
        stack = TargetStack()
        stack.push("a")
        assert repr(stack) == "TargetStack(['a'])"
