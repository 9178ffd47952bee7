"""Artifact kinds, coordinates and the dependency records built from them."""

from .models import (
    KIND_TABLE,
    ArtifactKind,
    Coordinate,
    Dependency,
    FileDependency,
    ModuleDependency,
    Publication,
    PublishedArtifact,
    ResolvedArtifact,
    Variant,
    derive_classifier,
    derive_extension,
    derive_version,
)

__all__ = [
    "KIND_TABLE",
    "ArtifactKind",
    "Coordinate",
    "Dependency",
    "FileDependency",
    "ModuleDependency",
    "Publication",
    "PublishedArtifact",
    "ResolvedArtifact",
    "Variant",
    "derive_classifier",
    "derive_extension",
    "derive_version",
]
