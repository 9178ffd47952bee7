"""CLI handler for ``tinkerpub publish``."""

from __future__ import annotations

import logging
from typing import List

from artifacts.models import Publication
from cli_config import load_with_overrides
from constants import ExitCodes
from errors import ConfigurationError
from publishing.coordinator import PublishingCoordinator
from repository.maven_repository import MavenRepository, artifact_path

logger = logging.getLogger(__name__)


class DryRunPublisher:
    """Publisher that only reports what would be deployed."""

    def __init__(self) -> None:
        self.publications: List[Publication] = []

    def publish(self, publication: Publication) -> None:
        self.publications.append(publication)
        for artifact in publication.artifacts:
            coordinate = publication.coordinate(artifact)
            logger.info("[dry-run] %s -> %s (%s)", artifact.file, coordinate.notation,
                        artifact_path(coordinate))


def run_publish(args) -> int:
    """Publish every selected variant to the first configured repository."""
    config = load_with_overrides(args)
    variants = config.select_variants(args.VARIANTS)
    if not variants:
        raise ConfigurationError("No variants configured")

    if getattr(args, "DRY_RUN", False):
        publisher = DryRunPublisher()
    else:
        if not config.repositories:
            raise ConfigurationError("No repository configured to publish to")
        publisher = MavenRepository.from_config(config.repositories[0], config.cache_dir)
        if len(config.repositories) > 1:
            logger.info("Publishing to '%s'; other repositories are only used for resolving",
                        publisher.name)

    coordinator = PublishingCoordinator(publisher, config.publish)
    for variant in variants:
        coordinator.publish(variant)
    return ExitCodes.SUCCESS.value
