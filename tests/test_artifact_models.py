"""Tests for artifact kinds, version derivation and coordinates."""

import itertools

import pytest

from artifacts.models import (
    KIND_TABLE,
    ArtifactKind,
    Coordinate,
    ModuleDependency,
    derive_classifier,
    derive_extension,
    derive_version,
)
from errors import ConfigurationError, UnknownArtifactKindError


class TestDeriveVersion:
    """Variant suffixing of base versions."""

    def test_flavor_and_build_type(self):
        assert derive_version("1.0", "paid", "release") == "1.0-paid-release"

    def test_empty_flavor_is_omitted(self):
        assert derive_version("1.0", "", "debug") == "1.0-debug"

    @pytest.mark.parametrize("base,flavor,build_type", [
        ("1.2.0", "free", "debug"),
        ("2.0.0-rc1", "china", "staging"),
        ("7", "", "release"),
    ])
    def test_general_shape(self, base, flavor, build_type):
        expected = f"{base}-{flavor}-{build_type}" if flavor else f"{base}-{build_type}"
        assert derive_version(base, flavor, build_type) == expected

    def test_missing_base_version_is_a_configuration_error(self):
        with pytest.raises(ConfigurationError, match="set a version"):
            derive_version(None, "paid", "release")


class TestKindTable:
    """Classifier and extension table."""

    def test_exact_table(self):
        assert derive_classifier(ArtifactKind.PACKAGE) is None
        assert derive_extension(ArtifactKind.PACKAGE) == "apk"
        assert derive_classifier(ArtifactKind.MAPPING) == "mapping"
        assert derive_extension(ArtifactKind.MAPPING) == "txt"
        assert derive_classifier(ArtifactKind.SYMBOL) == "r"
        assert derive_extension(ArtifactKind.SYMBOL) == "txt"

    def test_every_kind_has_an_entry(self):
        assert set(KIND_TABLE) == set(ArtifactKind)

    def test_pairs_are_collision_free(self):
        for k1, k2 in itertools.combinations(ArtifactKind, 2):
            assert (k1.classifier, k1.extension) != (k2.classifier, k2.extension)

    def test_unknown_kind_is_rejected(self):
        with pytest.raises(UnknownArtifactKindError):
            derive_classifier("apk")
        with pytest.raises(ValueError):
            derive_extension(None)


class TestCoordinate:
    """Dependency notation rendering and parsing."""

    def test_notation_with_classifier(self):
        coordinate = Coordinate("org.tinker.app", "com.example.app", "1.2.0-paid-release",
                                "mapping", "txt")
        assert coordinate.notation == "org.tinker.app:com.example.app:1.2.0-paid-release:mapping@txt"

    def test_notation_without_classifier(self):
        coordinate = Coordinate("org.tinker.app", "com.example.app", "1.0-debug", None, "apk")
        assert str(coordinate) == "org.tinker.app:com.example.app:1.0-debug@apk"

    def test_from_notation(self):
        coordinate = Coordinate.from_notation("g.h:art:1.0-release:r@txt")
        assert coordinate == Coordinate("g.h", "art", "1.0-release", "r", "txt")
        assert Coordinate.from_notation("g:a:1@apk").classifier is None

    @pytest.mark.parametrize("text", ["g:a:1", "g:a@apk", "g::1@apk", "g:a:1:c:x@apk", "g:a:1@"])
    def test_from_notation_rejects_malformed(self, text):
        with pytest.raises(ConfigurationError):
            Coordinate.from_notation(text)

    def test_module_dependency_keeps_coordinate(self):
        coordinate = Coordinate("g", "a", "1-debug", "mapping", "txt")
        dependency = ModuleDependency.of(coordinate)
        assert dependency.name == "a"
        assert dependency.coordinate == coordinate
