"""Locator serving baseline artifacts from fixed local files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from artifacts.models import ArtifactKind, Dependency, FileDependency, ResolvedArtifact
from errors import ConfigurationError
from .base import ArtifactSpec, DependencySpec, VariantArtifactsLocator


class LocalOverrideLocator(VariantArtifactsLocator):
    """Bypasses the repository; every kind maps to a configured file (or nothing).

    Raises:
        ConfigurationError: if no package file is given.
    """

    def __init__(self, package: Optional[Path], mapping: Optional[Path] = None,
                 symbol: Optional[Path] = None):
        self._files: Dict[ArtifactKind, Optional[Path]] = {
            ArtifactKind.PACKAGE: Path(package) if package is not None else None,
            ArtifactKind.MAPPING: Path(mapping) if mapping is not None else None,
            ArtifactKind.SYMBOL: Path(symbol) if symbol is not None else None,
        }
        if package is None:
            raise ConfigurationError(
                "Local override mode requires a package file (resolver 'package')."
            )

    def artifact_file(self, kind: ArtifactKind) -> Optional[Path]:
        """Configured file for the kind, None when that override is unset."""
        self.extension(kind)  # rejects kinds outside the table
        return self._files.get(kind)

    def dependency_notation(self, kind: ArtifactKind) -> Optional[FileDependency]:
        file = self.artifact_file(kind)
        if file is None:
            return None
        return FileDependency((file,))

    def matches_dependency(self, kind: ArtifactKind) -> DependencySpec:
        file = self.artifact_file(kind)

        def spec(dependency: Dependency) -> bool:
            return isinstance(dependency, FileDependency) and file in dependency.files
        return spec

    def matches_resolved_artifact(self, kind: ArtifactKind) -> ArtifactSpec:
        file = self.artifact_file(kind)

        def spec(artifact: ResolvedArtifact) -> bool:
            return file is not None and artifact.file == file
        return spec

    def describe(self, kind: ArtifactKind) -> str:
        file = self.artifact_file(kind)
        return f"local file {file}" if file is not None else f"no local {kind.value} file"

    def __repr__(self) -> str:
        files = ", ".join(f"{k.value}={v}" for k, v in self._files.items() if v is not None)
        return f"LocalOverrideLocator({files})"
