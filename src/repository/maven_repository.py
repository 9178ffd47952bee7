"""Maven-layout artifact repository client (HTTP or local filesystem).

Serves both directions of the workflow: ``publish``/``deploy`` write the
artifacts of the current build, ``fetch`` downloads a baseline artifact.
HTTP repositories are accessed through ``common.http_client``; ``file://``
URLs and plain paths are read and written directly.
"""
from __future__ import annotations

import hashlib
import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

import requests

from artifacts.models import Coordinate, Publication
from common import http_client
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from constants import Constants
from errors import RepositoryError
from project_config import RepositoryConfig

logger = logging.getLogger(__name__)

_POM_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0"
         xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
         xsi:schemaLocation="http://maven.apache.org/POM/4.0.0 http://maven.apache.org/xsd/maven-4.0.0.xsd">
  <modelVersion>4.0.0</modelVersion>
  <groupId>{group}</groupId>
  <artifactId>{artifact_id}</artifactId>
  <version>{version}</version>
  <packaging>{packaging}</packaging>
</project>
"""


def artifact_path(coordinate: Coordinate) -> str:
    """Repository-relative path of a coordinate, standard Maven layout."""
    classifier = f"-{coordinate.classifier}" if coordinate.classifier else ""
    return (
        f"{coordinate.group.replace('.', '/')}/{coordinate.artifact_id}/{coordinate.version}/"
        f"{coordinate.artifact_id}-{coordinate.version}{classifier}.{coordinate.extension}"
    )


def metadata_path(group: str, artifact_id: str) -> str:
    """Repository-relative path of the artifact-level maven-metadata.xml."""
    return f"{group.replace('.', '/')}/{artifact_id}/{Constants.METADATA_FILE}"


class MavenRepository:
    """One Maven repository, addressed by ``http(s)://`` URL, ``file://`` URL or path.

    Args:
        url: Repository root.
        name: Label used in logs and as the download cache sub-directory.
        username: Optional basic-auth user for HTTP repositories.
        password: Optional basic-auth password.
        cache_dir: Download directory for artifacts fetched over HTTP.
    """

    def __init__(self, url: str, name: str = "maven", username: Optional[str] = None,
                 password: Optional[str] = None, cache_dir: Optional[Path] = None):
        self.url = url.rstrip("/")
        self.name = name
        self._auth = (username, password or "") if username else None
        self._cache_dir = Path(cache_dir or Constants.DEFAULT_CACHE_DIR) / name

    @classmethod
    def from_config(cls, config: RepositoryConfig, cache_dir: Path) -> "MavenRepository":
        return cls(config.url, config.name, config.username, config.password, cache_dir)

    @property
    def is_remote(self) -> bool:
        return urlparse(self.url).scheme in ("http", "https")

    @property
    def root(self) -> Path:
        """Filesystem root of a local repository."""
        parsed = urlparse(self.url)
        if parsed.scheme == "file":
            return Path(url2pathname(parsed.path))
        return Path(self.url)

    def __repr__(self) -> str:
        target = safe_url(self.url) if self.is_remote else self.url
        return f"MavenRepository({self.name!r}, {target!r})"

    # ----- low level -------------------------------------------------------

    def _read(self, relpath: str) -> Optional[bytes]:
        """Return the content at relpath, None when it does not exist."""
        if not self.is_remote:
            target = self.root / relpath
            return target.read_bytes() if target.is_file() else None

        url = f"{self.url}/{relpath}"
        try:
            res = http_client.safe_get(url, context=self.name, fatal=False, auth=self._auth)
        except requests.RequestException as exc:
            raise RepositoryError(f"{self.name}: failed to GET {safe_url(url)}: {exc}") from exc
        if res.status_code == 404:
            return None
        if res.status_code != 200:
            raise RepositoryError(
                f"{self.name}: unexpected HTTP {res.status_code} for GET {safe_url(url)}"
            )
        return res.content

    def _write(self, relpath: str, data: bytes, checksums: bool = True) -> None:
        """Store data at relpath, plus ``.sha1``/``.md5`` siblings when checksums is set."""
        payloads = [(relpath, data)]
        if checksums:
            for algorithm in Constants.CHECKSUM_ALGORITHMS:
                digest = hashlib.new(algorithm, data).hexdigest()
                payloads.append((f"{relpath}.{algorithm}", digest.encode("ascii")))

        for path, payload in payloads:
            if not self.is_remote:
                target = self.root / path
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(payload)
                continue
            url = f"{self.url}/{path}"
            try:
                res = http_client.safe_put(url, context=self.name, data=payload,
                                           fatal=False, auth=self._auth)
            except requests.RequestException as exc:
                raise RepositoryError(f"{self.name}: failed to PUT {safe_url(url)}: {exc}") from exc
            if res.status_code not in (200, 201, 204):
                raise RepositoryError(
                    f"{self.name}: upload of {safe_url(url)} rejected with HTTP {res.status_code}"
                )

    # ----- resolution ------------------------------------------------------

    def fetch(self, coordinate: Coordinate) -> Optional[Path]:
        """Return a local file for the coordinate, None when the repository lacks it.

        Raises:
            RepositoryError: on transport failures or unexpected HTTP status.
        """
        relpath = artifact_path(coordinate)
        if not self.is_remote:
            target = self.root / relpath
            return target if target.is_file() else None

        with Timer() as t:
            data = self._read(relpath)
        if is_debug_enabled(logger):
            logger.debug(
                "Artifact lookup",
                extra=extra_context(
                    event="fetch",
                    component="maven_repository",
                    target=coordinate.notation,
                    outcome="found" if data is not None else "missing",
                    duration_ms=t.duration_ms(),
                ),
            )
        if data is None:
            return None
        target = self._cache_dir / relpath
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        return target

    def list_versions(self, group: str, artifact_id: str) -> List[str]:
        """Versions listed in maven-metadata.xml, in source order; empty when absent."""
        data = self._read(metadata_path(group, artifact_id))
        if data is None:
            return []
        try:
            root = ET.fromstring(data)
        except ET.ParseError as exc:
            logger.warning("%s: unreadable %s for %s:%s: %s", self.name,
                           Constants.METADATA_FILE, group, artifact_id, exc)
            return []
        return [
            item.text.strip()
            for item in root.findall("versioning/versions/version")
            if item.text and item.text.strip()
        ]

    # ----- publishing ------------------------------------------------------

    def deploy(self, coordinate: Coordinate, file: Path) -> None:
        """Upload one file under the coordinate, with checksums."""
        logger.info("Deploying %s to %s", coordinate.notation, self.name)
        self._write(artifact_path(coordinate), Path(file).read_bytes())

    def deploy_pom(self, group: str, artifact_id: str, version: str) -> None:
        """Write a minimal POM so the version is a well-formed Maven module."""
        pom = _POM_TEMPLATE.format(group=group, artifact_id=artifact_id, version=version,
                                   packaging=Constants.POM_PACKAGING)
        self._write(artifact_path(Coordinate(group, artifact_id, version, None, "pom")),
                    pom.encode("utf-8"))

    def update_metadata(self, group: str, artifact_id: str, version: str) -> None:
        """Add version to maven-metadata.xml and mark it latest and release."""
        relpath = metadata_path(group, artifact_id)
        existing = self._read(relpath)
        root = None
        if existing is not None:
            try:
                root = ET.fromstring(existing)
            except ET.ParseError:
                logger.warning("%s: replacing unreadable %s for %s:%s", self.name,
                               Constants.METADATA_FILE, group, artifact_id)
        if root is None:
            root = ET.Element("metadata")
            ET.SubElement(root, "groupId").text = group
            ET.SubElement(root, "artifactId").text = artifact_id

        versioning = root.find("versioning")
        if versioning is None:
            versioning = ET.SubElement(root, "versioning")
        for tag in ("latest", "release"):
            node = versioning.find(tag)
            if node is None:
                node = ET.SubElement(versioning, tag)
            node.text = version
        versions = versioning.find("versions")
        if versions is None:
            versions = ET.SubElement(versioning, "versions")
        if version not in [v.text for v in versions.findall("version")]:
            ET.SubElement(versions, "version").text = version
        updated = versioning.find("lastUpdated")
        if updated is None:
            updated = ET.SubElement(versioning, "lastUpdated")
        updated.text = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")

        self._write(relpath, ET.tostring(root, encoding="utf-8", xml_declaration=True))

    def publish(self, publication: Publication) -> None:
        """Deploy every artifact of a publication, then its POM and metadata."""
        for artifact in publication.artifacts:
            self.deploy(publication.coordinate(artifact), artifact.file)
        self.deploy_pom(publication.group, publication.artifact_id, publication.version)
        self.update_metadata(publication.group, publication.artifact_id, publication.version)
        logger.info(
            "Published %s:%s:%s (%s) to %s",
            publication.group,
            publication.artifact_id,
            publication.version,
            ", ".join(k.value for k in publication.kinds()),
            self.name,
        )
