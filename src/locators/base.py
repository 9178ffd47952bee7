"""Abstract interface shared by every variant artifacts locator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional, Union

from artifacts.models import (
    ArtifactKind,
    Dependency,
    FileDependency,
    ResolvedArtifact,
    derive_classifier,
    derive_extension,
)

DependencySpec = Callable[[Dependency], bool]
ArtifactSpec = Callable[[ResolvedArtifact], bool]
DependencyNotation = Union[str, FileDependency]


class VariantArtifactsLocator(ABC):
    """Where the artifacts of one variant live, for a single intended version.

    Instances are immutable and cheap; create a new one rather than changing
    an existing one.
    """

    def classifier(self, kind: ArtifactKind) -> Optional[str]:
        """Classifier of the given kind."""
        return derive_classifier(kind)

    def extension(self, kind: ArtifactKind) -> str:
        """Extension of the given kind."""
        return derive_extension(kind)

    @abstractmethod
    def dependency_notation(self, kind: ArtifactKind) -> Optional[DependencyNotation]:
        """Notation to declare on a resolution channel, None when there is nothing to declare."""

    @abstractmethod
    def matches_dependency(self, kind: ArtifactKind) -> DependencySpec:
        """Predicate recognising a declared dependency as this locator's."""

    @abstractmethod
    def matches_resolved_artifact(self, kind: ArtifactKind) -> ArtifactSpec:
        """Predicate recognising a resolved artifact as the given kind."""

    @abstractmethod
    def describe(self, kind: ArtifactKind) -> str:
        """Human-readable location of the given kind, used in messages."""
