"""
Tests for forbidden-type spec parsing.
"""

import pytest

from typefence.validation import ForbiddenTypeSpec, MalformedSpec, unique_specs


class TestParse:
    """Syntax of <package-locator>::<type-name>."""

    def test_valid(self):
        spec = ForbiddenTypeSpec.parse("package:flutter/src/widgets/framework.dart::Widget")
        assert spec.locator == "package:flutter/src/widgets/framework.dart"
        assert spec.type_name == "Widget"
        assert spec.package == "package:flutter"
        assert spec.scheme == "package:"

    def test_lookup_path_levels(self):
        spec = ForbiddenTypeSpec.parse("package:foo/bar.dart::Foo")
        assert spec.lookup_path == ("package:foo", "package:foo/bar.dart", "Foo")

    def test_non_package_scheme(self):
        spec = ForbiddenTypeSpec.parse("file:///src/app.dart::App")
        assert spec.scheme == "file:"
        assert spec.package == "file:"

    @pytest.mark.parametrize("raw", [
        "foo::Bar",                      # no slash
        "package:foo.dart::Bar",         # no slash in locator
        "package:foo/bar.dart",          # no separator
        "::Bar",                         # separator at index 0
        "pkg::Bar/x",                    # slash only after the separator
        "package:foo/bar.dart::",        # empty type name
        "",
    ])
    def test_malformed(self, raw):
        with pytest.raises(MalformedSpec) as exc:
            ForbiddenTypeSpec.parse(raw)
        assert exc.value.raw == raw

    def test_separator_at_index_two_allowed(self):
        spec = ForbiddenTypeSpec.parse("a/::B")
        assert spec.locator == "a/"
        assert spec.package == "a"

    def test_malformed_message(self):
        with pytest.raises(MalformedSpec, match='Invalid forbidden type "foo::Bar"'):
            ForbiddenTypeSpec.parse("foo::Bar")


def test_unique_specs_keeps_first_seen_order():
    assert unique_specs(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
