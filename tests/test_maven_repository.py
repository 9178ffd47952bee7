"""Tests for the Maven repository client."""

import hashlib
import xml.etree.ElementTree as ET
from unittest.mock import patch, MagicMock

import pytest
import requests

from artifacts.models import ArtifactKind, Coordinate, Publication, PublishedArtifact
from errors import RepositoryError
from repository.maven_repository import MavenRepository, artifact_path, metadata_path

from conftest import put_artifact

MAPPING = Coordinate("org.tinker.app", "com.example.app", "1.2.0-paid-release", "mapping", "txt")
PACKAGE = Coordinate("org.tinker.app", "com.example.app", "1.2.0-paid-release", None, "apk")


def _response(status_code, content=b""):
    res = MagicMock()
    res.status_code = status_code
    res.content = content
    return res


class TestLayout:
    """Repository-relative paths."""

    def test_artifact_path_with_classifier(self):
        assert artifact_path(MAPPING) == (
            "org/tinker/app/com.example.app/1.2.0-paid-release/"
            "com.example.app-1.2.0-paid-release-mapping.txt"
        )

    def test_artifact_path_without_classifier(self):
        assert artifact_path(PACKAGE).endswith("com.example.app-1.2.0-paid-release.apk")

    def test_metadata_path(self):
        assert metadata_path("org.tinker.app", "shop") == "org/tinker/app/shop/maven-metadata.xml"

    def test_file_url_root(self, tmp_path):
        repo = MavenRepository(tmp_path.as_uri())
        assert not repo.is_remote
        assert repo.root == tmp_path

    def test_remote_detection(self):
        assert MavenRepository("https://repo.example.com/maven/").is_remote
        assert MavenRepository("https://repo.example.com/maven/").url == "https://repo.example.com/maven"


class TestFileRepository:
    """Local filesystem repositories."""

    def test_fetch_returns_file_in_place(self, file_repository):
        stored = put_artifact(file_repository, MAPPING, b"a -> b")
        assert file_repository.fetch(MAPPING) == stored

    def test_fetch_missing(self, file_repository):
        assert file_repository.fetch(MAPPING) is None

    def test_deploy_writes_checksums(self, file_repository, tmp_path):
        source = tmp_path / "mapping.txt"
        source.write_bytes(b"a -> b")
        file_repository.deploy(MAPPING, source)

        target = file_repository.root / artifact_path(MAPPING)
        assert target.read_bytes() == b"a -> b"
        sha1 = target.with_name(target.name + ".sha1").read_text()
        md5 = target.with_name(target.name + ".md5").read_text()
        assert sha1 == hashlib.sha1(b"a -> b").hexdigest()
        assert md5 == hashlib.md5(b"a -> b").hexdigest()

    def test_metadata_accumulates_versions(self, file_repository):
        file_repository.update_metadata("org.tinker.app", "shop", "1.0-release")
        file_repository.update_metadata("org.tinker.app", "shop", "1.1-release")
        file_repository.update_metadata("org.tinker.app", "shop", "1.1-release")

        assert file_repository.list_versions("org.tinker.app", "shop") == ["1.0-release", "1.1-release"]
        root = ET.fromstring((file_repository.root / metadata_path("org.tinker.app", "shop")).read_bytes())
        assert root.findtext("versioning/latest") == "1.1-release"
        assert root.findtext("versioning/release") == "1.1-release"
        assert len(root.findtext("versioning/lastUpdated")) == 14

    def test_list_versions_without_metadata(self, file_repository):
        assert file_repository.list_versions("org.tinker.app", "shop") == []

    def test_unreadable_metadata_is_empty(self, file_repository):
        path = file_repository.root / metadata_path("g", "a")
        path.parent.mkdir(parents=True)
        path.write_text("<metadata")
        assert file_repository.list_versions("g", "a") == []

    def test_publish_writes_artifacts_pom_and_metadata(self, file_repository, tmp_path):
        apk = tmp_path / "app.apk"
        apk.write_bytes(b"apk")
        publication = Publication(
            name="AppPaidRelease",
            group="org.tinker.app",
            artifact_id="com.example.app",
            version="1.2.0-paid-release",
            artifacts=(PublishedArtifact(apk, ArtifactKind.PACKAGE, None, "apk"),),
        )
        file_repository.publish(publication)

        assert file_repository.fetch(PACKAGE).read_bytes() == b"apk"
        pom = file_repository.root / artifact_path(
            Coordinate("org.tinker.app", "com.example.app", "1.2.0-paid-release", None, "pom"))
        assert "<artifactId>com.example.app</artifactId>" in pom.read_text()
        assert file_repository.list_versions("org.tinker.app", "com.example.app") == ["1.2.0-paid-release"]


class TestHttpRepository:
    """HTTP repositories, with requests mocked."""

    @patch('common.http_client.requests.get')
    def test_fetch_downloads_into_cache(self, mock_get, tmp_path):
        """A 200 response is written below the cache directory."""
        mock_get.return_value = _response(200, b"a -> b")
        repo = MavenRepository("https://repo.example.com/maven", name="corp",
                               cache_dir=tmp_path / "cache")

        fetched = repo.fetch(MAPPING)

        assert fetched == tmp_path / "cache" / "corp" / artifact_path(MAPPING)
        assert fetched.read_bytes() == b"a -> b"
        url = mock_get.call_args[0][0]
        assert url == f"https://repo.example.com/maven/{artifact_path(MAPPING)}"

    @patch('common.http_client.requests.get')
    def test_fetch_404_is_absent(self, mock_get, tmp_path):
        """A 404 means the repository does not have the artifact."""
        mock_get.return_value = _response(404)
        repo = MavenRepository("https://repo.example.com/maven", cache_dir=tmp_path)
        assert repo.fetch(MAPPING) is None

    @patch('common.http_client.requests.get')
    def test_fetch_server_error_raises(self, mock_get, tmp_path):
        """Other statuses are repository failures, not absence."""
        mock_get.return_value = _response(500)
        repo = MavenRepository("https://repo.example.com/maven", cache_dir=tmp_path)
        with pytest.raises(RepositoryError, match="HTTP 500"):
            repo.fetch(MAPPING)

    @patch('common.http_client.time.sleep')
    @patch('common.http_client.requests.get')
    def test_fetch_connection_error_raises(self, mock_get, _sleep, tmp_path):
        """Exhausted retries surface as RepositoryError."""
        mock_get.side_effect = requests.ConnectionError("refused")
        repo = MavenRepository("https://repo.example.com/maven", cache_dir=tmp_path)
        with pytest.raises(RepositoryError, match="refused"):
            repo.fetch(MAPPING)

    @patch('common.http_client.requests.get')
    def test_credentials_sent_as_basic_auth(self, mock_get, tmp_path):
        mock_get.return_value = _response(404)
        repo = MavenRepository("https://repo.example.com/maven", username="ci",
                               password="s3cret", cache_dir=tmp_path)
        repo.fetch(MAPPING)
        assert mock_get.call_args.kwargs["auth"] == ("ci", "s3cret")

    @patch('common.http_client.requests.put')
    def test_deploy_puts_file_and_checksums(self, mock_put, tmp_path):
        """Each upload is a PUT; checksums follow the artifact."""
        mock_put.return_value = _response(201)
        source = tmp_path / "mapping.txt"
        source.write_bytes(b"a -> b")
        repo = MavenRepository("https://repo.example.com/maven", cache_dir=tmp_path)

        repo.deploy(MAPPING, source)

        urls = [c[0][0] for c in mock_put.call_args_list]
        base = f"https://repo.example.com/maven/{artifact_path(MAPPING)}"
        assert urls == [base, base + ".sha1", base + ".md5"]
        assert mock_put.call_args_list[0].kwargs["data"] == b"a -> b"

    @patch('common.http_client.requests.put')
    def test_deploy_rejected(self, mock_put, tmp_path):
        mock_put.return_value = _response(401)
        source = tmp_path / "mapping.txt"
        source.write_bytes(b"a -> b")
        repo = MavenRepository("https://repo.example.com/maven", cache_dir=tmp_path)
        with pytest.raises(RepositoryError, match="HTTP 401"):
            repo.deploy(MAPPING, source)

    @patch('common.http_client.requests.get')
    def test_list_versions_from_metadata(self, mock_get, tmp_path):
        mock_get.return_value = _response(200, b"""<?xml version="1.0"?>
<metadata>
  <groupId>org.tinker.app</groupId>
  <artifactId>shop</artifactId>
  <versioning>
    <versions>
      <version>1.0-release</version>
      <version>1.1-release</version>
    </versions>
  </versioning>
</metadata>""")
        repo = MavenRepository("https://repo.example.com/maven", cache_dir=tmp_path)
        assert repo.list_versions("org.tinker.app", "shop") == ["1.0-release", "1.1-release"]
