"""Tests for package specifier parsing."""

import pytest

from errors import InvalidSpecifier
from versioning.models import PackageSpecifier
from versioning.parser import parse_package_spec


class TestParsePackageSpec:
    """Tests for parse_package_spec()."""

    def test_unscoped_without_version(self):
        spec = parse_package_spec("react")
        assert spec == PackageSpecifier(name="react", version_or_tag=None)

    def test_unscoped_with_version(self):
        spec = parse_package_spec("bootstrap@4.0.0-beta")
        assert spec.name == "bootstrap"
        assert spec.version_or_tag == "4.0.0-beta"

    def test_unscoped_with_tag(self):
        spec = parse_package_spec("pkg-with-peers@next")
        assert spec.name == "pkg-with-peers"
        assert spec.version_or_tag == "next"

    def test_scoped_with_version_keeps_at_sign(self):
        spec = parse_package_spec("@scope/pkg@1.2.3-beta")
        assert spec.name == "@scope/pkg"
        assert spec.version_or_tag == "1.2.3-beta"

    def test_scoped_without_version(self):
        spec = parse_package_spec("@angular/core")
        assert spec.name == "@angular/core"
        assert spec.version_or_tag is None

    def test_surrounding_whitespace_ignored(self):
        spec = parse_package_spec("  eslint-config-airbnb@17.1.0\n")
        assert spec.name == "eslint-config-airbnb"
        assert spec.version_or_tag == "17.1.0"

    def test_str_reconstructs_token(self):
        assert str(parse_package_spec("@scope/pkg@1.2.3")) == "@scope/pkg@1.2.3"
        assert str(parse_package_spec("left-pad")) == "left-pad"

    @pytest.mark.parametrize("token", [
        "",
        "@",
        "pkg@",
        "@@scope/pkg",
        "pkg@1.0.0@2.0.0",
        "pkg@^1.0.0",
        "@scope/pkg@1 2",
        "has space",
        "réact@1.0.0",
        "pkg@1.0.0-bêta",
    ])
    def test_invalid_tokens_raise(self, token):
        with pytest.raises(InvalidSpecifier) as exc_info:
            parse_package_spec(token)
        assert exc_info.value.token == token

    def test_invalid_specifier_is_value_error(self):
        with pytest.raises(ValueError):
            parse_package_spec("")
