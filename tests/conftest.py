"""Shared fixtures: variants, file-backed repositories and stub repositories."""

from pathlib import Path

import pytest

from artifacts.models import Variant
from repository.maven_repository import MavenRepository, artifact_path


class StubRepository:
    """Repository answering fetch() from a dict of notation -> file(s)."""

    def __init__(self, files=None, name="stub"):
        self.name = name
        self.files = dict(files or {})
        self.fetched = []

    def fetch(self, coordinate):
        self.fetched.append(coordinate.notation)
        found = self.files.get(coordinate.notation)
        if isinstance(found, list):
            return found.pop(0) if found else None
        return found


@pytest.fixture
def paid_release():
    return Variant(
        name="paidRelease",
        flavor_name="paid",
        build_type="release",
        application_id="com.example.app",
        version_name="1.2.0",
        minify_enabled=True,
    )


@pytest.fixture
def debug_variant():
    return Variant(
        name="debug",
        build_type="debug",
        application_id="com.example.app",
        version_name="1.0",
    )


@pytest.fixture
def file_repository(tmp_path):
    return MavenRepository(str(tmp_path / "repo"), name="local", cache_dir=tmp_path / "cache")


def put_artifact(repository: MavenRepository, coordinate, content: bytes = b"data") -> Path:
    """Place a file directly into a file-backed repository."""
    target = repository.root / artifact_path(coordinate)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(content)
    return target
