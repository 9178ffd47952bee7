"""Assigns coordinates to the files of the current build and publishes them."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from artifacts.models import ArtifactKind, Publication, PublishedArtifact, Variant
from constants import Constants
from errors import ConfigurationError
from locators.factory import LocatorFactory
from locators.remote import RemoteLocator
from project_config import PublishConfig

logger = logging.getLogger(__name__)


def find_resguard_package(package: Path) -> Optional[Path]:
    """Locate the AndResGuard-processed package next to a build output, if any.

    Looks for ``AndResGuard_<basename>/<basename>_aligned_unsigned.apk``; failing
    that, the first ``.apk`` in that directory starting with the basename.
    """
    basename = package.stem
    resguard_dir = package.parent / f"{Constants.RESGUARD_DIR_PREFIX}{basename}"
    primary = resguard_dir / f"{basename}{Constants.RESGUARD_APK_SUFFIX}"
    if primary.is_file():
        logger.info("Found resguard package: %s", primary)
        return primary
    if not resguard_dir.is_dir():
        return None

    for candidate in sorted(resguard_dir.iterdir()):
        if (candidate.is_file() and candidate.suffix == f".{Constants.PACKAGE_EXTENSION}"
                and candidate.name.startswith(basename)):
            logger.warning("Found %s but not the primary package %s, using: %s",
                           resguard_dir, primary, candidate)
            return candidate
    logger.warning("Found %s but no package in it", resguard_dir)
    return None


class PublishingCoordinator:
    """Builds and hands over the publication of each variant.

    Args:
        publisher: Object with a ``publish(publication)`` method, typically a
            MavenRepository.
        publish_config: Group, artifact id and version to publish under.
        locator_factory: Source of publish locators; defaults to LocatorFactory().
    """

    def __init__(self, publisher, publish_config: PublishConfig,
                 locator_factory: Optional[LocatorFactory] = None):
        self._publisher = publisher
        self._publish_config = publish_config
        self._locator_factory = locator_factory or LocatorFactory()

    @staticmethod
    def _artifact(locator: RemoteLocator, file: Path, kind: ArtifactKind) -> PublishedArtifact:
        return PublishedArtifact(file, kind, locator.classifier(kind), locator.extension(kind))

    def build_publication(self, variant: Variant) -> Publication:
        """Publication for the variant's produced files.

        The package is always included. The mapping file only when minify is
        enabled, the symbol table only when it exists on disk.

        Raises:
            ConfigurationError: if the package file (or, with minify enabled,
                the mapping file) is missing, or no version can be derived.
        """
        locator = self._locator_factory.create_publish_locator(variant, self._publish_config)

        if variant.package_file is None or not variant.package_file.is_file():
            raise ConfigurationError(
                f"Package file for '{variant.name}' does not exist: {variant.package_file}"
            )
        package = find_resguard_package(variant.package_file) or variant.package_file
        artifacts: List[PublishedArtifact] = [self._artifact(locator, package, ArtifactKind.PACKAGE)]

        if variant.minify_enabled:
            if variant.mapping_file is None or not variant.mapping_file.is_file():
                raise ConfigurationError(
                    f"minify_enabled is set for '{variant.name}' but the mapping file "
                    f"does not exist: {variant.mapping_file}"
                )
            artifacts.append(self._artifact(locator, variant.mapping_file, ArtifactKind.MAPPING))
        else:
            logger.info("Skip publishing mapping file for '%s' because minify_enabled = false",
                        variant.name)

        if variant.symbol_file is not None and variant.symbol_file.is_file():
            artifacts.append(self._artifact(locator, variant.symbol_file, ArtifactKind.SYMBOL))
        else:
            logger.warning("Skip publishing symbol file for '%s' because %s does not exist",
                           variant.name, variant.symbol_file)

        return Publication(
            name=f"App{variant.capitalized_name}",
            group=locator.group_id,
            artifact_id=locator.artifact_id,
            version=locator.version,
            artifacts=tuple(artifacts),
        )

    def publish(self, variant: Variant) -> Publication:
        """Build the variant's publication and hand it to the publisher."""
        publication = self.build_publication(variant)
        self._publisher.publish(publication)
        return publication
