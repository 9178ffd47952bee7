"""Maven-layout artifact repository access."""

from .maven_repository import MavenRepository, artifact_path, metadata_path

__all__ = ["MavenRepository", "artifact_path", "metadata_path"]
