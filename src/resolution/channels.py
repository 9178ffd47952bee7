"""Named resolution channels turning declared dependencies into files.

A channel collects dependencies (coordinate notations or local files),
resolves them once against an ordered list of repositories and offers a
strict and a lenient view of the outcome. Channels are registered by name
in a ChannelRegistry; creating a name twice returns the existing channel.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Set, Union

from artifacts.models import (
    Coordinate,
    Dependency,
    FileDependency,
    ModuleDependency,
    ResolvedArtifact,
)
from common.logging_utils import extra_context, is_debug_enabled, Timer
from errors import ResolutionError
from repository.maven_repository import MavenRepository

logger = logging.getLogger(__name__)

DependencySpec = Callable[[Dependency], bool]
Notation = Union[str, ModuleDependency, FileDependency, None]


def _everything(_dependency: Dependency) -> bool:
    return True


@dataclass
class ChannelResult:
    """Outcome of resolving every dependency declared on a channel."""
    artifacts: List[ResolvedArtifact] = field(default_factory=list)
    failures: List[Dependency] = field(default_factory=list)


class ResolutionChannel:
    """Dependencies resolved together, with strict and lenient views.

    Args:
        name: Unique name within its registry.
        repositories: Repositories searched in order for module dependencies.
        description: Free text shown in logs.
    """

    def __init__(self, name: str, repositories: Sequence[MavenRepository],
                 description: str = ""):
        self.name = name
        self.description = description
        self._repositories = list(repositories)
        self._dependencies: List[Dependency] = []
        self._result: Optional[ChannelResult] = None
        self._lock = threading.Lock()

    @property
    def dependencies(self) -> List[Dependency]:
        return list(self._dependencies)

    def add(self, notation: Notation) -> Optional[Dependency]:
        """Declare a dependency; None is ignored (an unset optional override).

        Raises:
            ConfigurationError: for a malformed notation string.
            RuntimeError: when the channel was already resolved.
        """
        if notation is None:
            return None
        if isinstance(notation, str):
            dependency: Dependency = ModuleDependency.of(Coordinate.from_notation(notation))
        else:
            dependency = notation
        with self._lock:
            if self._result is not None:
                raise RuntimeError(f"Cannot add dependencies to resolved channel '{self.name}'")
            self._dependencies.append(dependency)
        return dependency

    def _resolve_module(self, dependency: ModuleDependency) -> Optional[ResolvedArtifact]:
        for repository in self._repositories:
            file = repository.fetch(dependency.coordinate)
            if file is not None:
                logger.debug("Resolved %s from %s", dependency, repository.name)
                return ResolvedArtifact(file, dependency, dependency.classifier,
                                        dependency.extension)
        return None

    @staticmethod
    def _resolve_files(dependency: FileDependency) -> Optional[List[ResolvedArtifact]]:
        missing = [f for f in dependency.files if not Path(f).is_file()]
        if missing:
            logger.debug("Local file(s) not found: %s", ", ".join(str(m) for m in missing))
            return None
        return [
            ResolvedArtifact(Path(f), dependency, None, Path(f).suffix.lstrip("."))
            for f in dependency.files
        ]

    def resolve(self) -> ChannelResult:
        """Resolve every declared dependency, once; later calls return the cached result.

        Raises:
            RepositoryError: on repository transport failures.
        """
        with self._lock:
            if self._result is not None:
                return self._result
            result = ChannelResult()
            with Timer() as t:
                for dependency in self._dependencies:
                    if isinstance(dependency, FileDependency):
                        resolved = self._resolve_files(dependency)
                        if resolved is None:
                            result.failures.append(dependency)
                        else:
                            result.artifacts.extend(resolved)
                        continue
                    artifact = self._resolve_module(dependency)
                    if artifact is None:
                        result.failures.append(dependency)
                    else:
                        result.artifacts.append(artifact)
            if is_debug_enabled(logger):
                logger.debug(
                    "Channel resolved",
                    extra=extra_context(
                        event="resolve",
                        component="channel",
                        target=self.name,
                        resolved=len(result.artifacts),
                        failed=len(result.failures),
                        duration_ms=t.duration_ms(),
                    ),
                )
            self._result = result
            return result

    def artifacts(self, spec: DependencySpec = _everything) -> List[ResolvedArtifact]:
        """Strict view: artifacts of dependencies matching spec.

        Raises:
            ResolutionError: if any declared dependency could not be resolved.
        """
        result = self.resolve()
        if result.failures:
            failed = ", ".join(str(d) for d in result.failures)
            raise ResolutionError(
                f"Could not resolve all dependencies for '{self.name}'. Could not find: {failed}"
            )
        return [a for a in result.artifacts if spec(a.dependency)]

    def files(self, spec: DependencySpec = _everything) -> Set[Path]:
        """Strict view: files of dependencies matching spec."""
        return {a.file for a in self.artifacts(spec)}

    def lenient_artifacts(self, spec: DependencySpec = _everything) -> List[ResolvedArtifact]:
        """Lenient view: unresolved dependencies are skipped instead of failing."""
        result = self.resolve()
        for dependency in result.failures:
            if spec(dependency):
                logger.info("'%s': could not resolve %s, ignoring", self.name, dependency)
        return [a for a in result.artifacts if spec(a.dependency)]

    def __repr__(self) -> str:
        return f"ResolutionChannel({self.name!r}, dependencies={len(self._dependencies)})"


class ChannelRegistry:
    """Channels of one invocation, keyed by name, with atomic create-if-absent."""

    def __init__(self, repositories: Sequence[MavenRepository]):
        self._repositories = list(repositories)
        self._channels: Dict[str, ResolutionChannel] = {}
        self._lock = threading.Lock()

    def maybe_create(self, name: str,
                     configure: Optional[Callable[[ResolutionChannel], None]] = None,
                     description: str = "") -> ResolutionChannel:
        """Return the channel called name, creating and configuring it if absent.

        ``configure`` runs only for the caller that creates the channel; racing
        callers wait and receive the same instance.
        """
        with self._lock:
            channel = self._channels.get(name)
            if channel is not None:
                return channel
            channel = ResolutionChannel(name, self._repositories, description)
            if configure is not None:
                configure(channel)
            self._channels[name] = channel
            logger.debug("Created resolution channel '%s': %s", name, description or "-")
            return channel

    def get(self, name: str) -> Optional[ResolutionChannel]:
        with self._lock:
            return self._channels.get(name)

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._channels)

    def __len__(self) -> int:
        with self._lock:
            return len(self._channels)
