"""Locator resolving variant artifacts through Maven repository coordinates."""

from __future__ import annotations

from typing import Optional

from artifacts.models import (
    ArtifactKind,
    Coordinate,
    Dependency,
    ModuleDependency,
    ResolvedArtifact,
    Variant,
    derive_version,
)
from constants import Constants
from .base import ArtifactSpec, DependencySpec, VariantArtifactsLocator


class RemoteLocator(VariantArtifactsLocator):
    """Maps (variant, kind) onto ``group:artifactId:version[:classifier]@extension``.

    Args:
        variant: Variant the coordinates are derived for.
        group_id: Repository group; defaults to ``org.tinker.app``.
        artifact_id: Artifact id; defaults to the variant's application id.
        base_version: Version before variant suffixing; defaults to the
            variant's version name.

    Raises:
        ConfigurationError: if neither base_version nor a variant version name is set.
    """

    def __init__(self, variant: Variant, group_id: Optional[str] = None,
                 artifact_id: Optional[str] = None, base_version: Optional[str] = None):
        self._variant = variant
        self._group_id = group_id or Constants.DEFAULT_GROUP_ID
        self._artifact_id = artifact_id or variant.application_id
        self._version = derive_version(
            base_version if base_version is not None else variant.version_name,
            variant.flavor_name,
            variant.build_type,
        )

    @property
    def group_id(self) -> str:
        return self._group_id

    @property
    def artifact_id(self) -> str:
        return self._artifact_id

    @property
    def version(self) -> str:
        """Suffixed version, e.g. ``1.2.0-paid-release``."""
        return self._version

    def coordinate(self, kind: ArtifactKind) -> Coordinate:
        return Coordinate(
            self._group_id,
            self._artifact_id,
            self._version,
            self.classifier(kind),
            self.extension(kind),
        )

    def dependency_notation(self, kind: ArtifactKind) -> str:
        return self.coordinate(kind).notation

    def matches_dependency(self, kind: ArtifactKind) -> DependencySpec:
        # Classifier is left out: one declared module can resolve to several classified files.
        def spec(dependency: Dependency) -> bool:
            return (
                isinstance(dependency, ModuleDependency)
                and dependency.group == self._group_id
                and dependency.name == self._artifact_id
                and dependency.version == self._version
            )
        return spec

    def matches_resolved_artifact(self, kind: ArtifactKind) -> ArtifactSpec:
        classifier = self.classifier(kind)

        def spec(artifact: ResolvedArtifact) -> bool:
            return artifact.classifier == classifier
        return spec

    def describe(self, kind: ArtifactKind) -> str:
        return self.dependency_notation(kind)

    def __repr__(self) -> str:
        return (f"RemoteLocator(variant={self._variant.name!r}, "
                f"coordinates={self._group_id}:{self._artifact_id}:{self._version})")
