"""Data models for artifact kinds, coordinates and dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from constants import Constants
from errors import ConfigurationError, UnknownArtifactKindError


class ArtifactKind(Enum):
    """Artifacts published for, and resolved against, a build variant."""
    PACKAGE = "package"
    MAPPING = "mapping"
    SYMBOL = "symbol"

    @property
    def classifier(self) -> Optional[str]:
        """Classifier token of this kind (None for the package)."""
        return derive_classifier(self)

    @property
    def extension(self) -> str:
        """File extension of this kind."""
        return derive_extension(self)


# kind -> (classifier, extension); must stay in sync with already published artifacts.
KIND_TABLE: Dict[ArtifactKind, Tuple[Optional[str], str]] = {
    ArtifactKind.PACKAGE: (None, Constants.PACKAGE_EXTENSION),
    ArtifactKind.MAPPING: (Constants.MAPPING_CLASSIFIER, Constants.TEXT_EXTENSION),
    ArtifactKind.SYMBOL: (Constants.SYMBOL_CLASSIFIER, Constants.TEXT_EXTENSION),
}


def _table_entry(kind: ArtifactKind) -> Tuple[Optional[str], str]:
    try:
        return KIND_TABLE[kind]
    except KeyError:
        raise UnknownArtifactKindError(f"Unknown artifact kind: {kind!r}") from None


def derive_classifier(kind: ArtifactKind) -> Optional[str]:
    """Return the classifier for a kind, None for the unclassified package."""
    return _table_entry(kind)[0]


def derive_extension(kind: ArtifactKind) -> str:
    """Return the file extension for a kind."""
    return _table_entry(kind)[1]


def derive_version(base_version: Optional[str], flavor_name: str, build_type_name: str) -> str:
    """Suffix a base version with the variant's flavor and build type.

    ``derive_version("1.2.0", "paid", "release") == "1.2.0-paid-release"``;
    the flavor segment is omitted when the flavor name is empty.

    Raises:
        ConfigurationError: if base_version is None.
    """
    if base_version is None:
        raise ConfigurationError("You must set a version to publish.")
    parts = [base_version]
    if flavor_name:
        parts.append(flavor_name)
    parts.append(build_type_name)
    return "-".join(parts)


@dataclass(frozen=True)
class Variant:
    """One build configuration (flavor x build type) and the files it produced."""
    name: str
    build_type: str
    application_id: str
    flavor_name: str = ""
    version_name: Optional[str] = None
    minify_enabled: bool = False
    package_file: Optional[Path] = None
    mapping_file: Optional[Path] = None
    symbol_file: Optional[Path] = None

    @property
    def capitalized_name(self) -> str:
        """Variant name with its first letter upper-cased, as used in channel names."""
        return self.name[:1].upper() + self.name[1:]


@dataclass(frozen=True)
class Coordinate:
    """Repository coordinate of one published file."""
    group: str
    artifact_id: str
    version: str
    classifier: Optional[str]
    extension: str

    @property
    def notation(self) -> str:
        """``group:artifactId:version[:classifier]@extension``"""
        classifier = f":{self.classifier}" if self.classifier else ""
        return f"{self.group}:{self.artifact_id}:{self.version}{classifier}@{self.extension}"

    @classmethod
    def from_notation(cls, text: str) -> "Coordinate":
        """Parse a ``group:artifactId:version[:classifier]@extension`` notation."""
        body, sep, extension = text.strip().rpartition("@")
        if not sep or not extension:
            raise ConfigurationError(f"Missing '@extension' in dependency notation: {text!r}")
        parts = body.split(":")
        if len(parts) not in (3, 4) or not all(parts):
            raise ConfigurationError(f"Malformed dependency notation: {text!r}")
        classifier = parts[3] if len(parts) == 4 else None
        return cls(parts[0], parts[1], parts[2], classifier, extension)

    def __str__(self) -> str:
        return self.notation


@dataclass(frozen=True)
class ModuleDependency:
    """A dependency declared on a resolution channel by coordinate."""
    group: str
    name: str
    version: str
    classifier: Optional[str]
    extension: str

    @classmethod
    def of(cls, coordinate: Coordinate) -> "ModuleDependency":
        return cls(coordinate.group, coordinate.artifact_id, coordinate.version,
                   coordinate.classifier, coordinate.extension)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.group, self.name, self.version, self.classifier, self.extension)

    def __str__(self) -> str:
        return self.coordinate.notation


@dataclass(frozen=True)
class FileDependency:
    """A dependency on fixed local files."""
    files: Tuple[Path, ...]

    def __str__(self) -> str:
        return ", ".join(str(f) for f in self.files)


Dependency = Union[ModuleDependency, FileDependency]


@dataclass(frozen=True)
class ResolvedArtifact:
    """A concrete file produced by resolving a declared dependency."""
    file: Path
    dependency: Dependency
    classifier: Optional[str]
    extension: str


@dataclass(frozen=True)
class PublishedArtifact:
    """One file of a publication, with the classifier/extension it is published under."""
    file: Path
    kind: ArtifactKind
    classifier: Optional[str]
    extension: str


@dataclass(frozen=True)
class Publication:
    """Files sharing one group:artifactId:version, ready to deploy."""
    name: str
    group: str
    artifact_id: str
    version: str
    artifacts: Tuple[PublishedArtifact, ...] = ()

    def coordinate(self, artifact: PublishedArtifact) -> Coordinate:
        return Coordinate(self.group, self.artifact_id, self.version,
                          artifact.classifier, artifact.extension)

    def kinds(self) -> Tuple[ArtifactKind, ...]:
        return tuple(a.kind for a in self.artifacts)
