"""CLI handlers for ``tinkerpub coordinates`` and ``tinkerpub versions``."""

from __future__ import annotations

import logging
import sys
from typing import List

from packaging import version

from artifacts.models import ArtifactKind, Variant
from cli_config import load_with_overrides
from constants import Constants, ExitCodes
from errors import ConfigurationError
from locators.factory import LocatorFactory
from project_config import ProjectConfig
from repository.maven_repository import MavenRepository

logger = logging.getLogger(__name__)


def run_coordinates(args) -> int:
    """Print ``<variant> <kind> <notation>`` for every selected variant and kind."""
    config = load_with_overrides(args)
    factory = LocatorFactory()
    for variant in config.select_variants(args.VARIANTS):
        if getattr(args, "SHOW_BASELINE", False):
            if not config.resolver.has_baseline:
                logger.warning("No baseline configured; nothing to show for '%s'", variant.name)
                continue
            locator = factory.create(variant, config.publish, config.resolver)
        else:
            locator = factory.create_publish_locator(variant, config.publish)
        for kind in ArtifactKind:
            notation = locator.dependency_notation(kind)
            sys.stdout.write(f"{variant.name}\t{kind.value}\t{notation if notation else '-'}\n")
    return ExitCodes.SUCCESS.value


def variant_suffix(variant: Variant) -> str:
    """Suffix appended to base versions for this variant, e.g. ``-paid-release``."""
    flavor = f"-{variant.flavor_name}" if variant.flavor_name else ""
    return f"{flavor}-{variant.build_type}"


def _sort_key(base: str):
    try:
        return (0, version.Version(base), base)
    except version.InvalidVersion:
        return (1, version.Version("0"), base)


def published_base_versions(config: ProjectConfig, variant: Variant) -> List[str]:
    """Base versions published for the variant across all repositories, oldest first."""
    group = config.publish.group_id or Constants.DEFAULT_GROUP_ID
    artifact_id = config.publish.artifact_id or variant.application_id
    suffix = variant_suffix(variant)
    # "-release" also ends "1.0-paid-release"; skip bases owned by a flavored variant.
    foreign_flavors = tuple(
        f"-{v.flavor_name}" for v in config.variants
        if v.flavor_name and not variant.flavor_name
    )

    found = set()
    for repo_config in config.repositories:
        repository = MavenRepository.from_config(repo_config, config.cache_dir)
        for published in repository.list_versions(group, artifact_id):
            if not published.endswith(suffix) or len(published) <= len(suffix):
                continue
            base = published[: -len(suffix)]
            if foreign_flavors and base.endswith(foreign_flavors):
                continue
            found.add(base)
    return sorted(found, key=_sort_key)


def run_versions(args) -> int:
    """Print the baseline versions available for each selected variant."""
    config = load_with_overrides(args)
    if not config.repositories:
        raise ConfigurationError("No repository configured")
    for variant in config.select_variants(args.VARIANTS):
        versions = published_base_versions(config, variant)
        if not versions:
            logger.warning("No published versions found for '%s'", variant.name)
        for base in versions:
            sys.stdout.write(f"{variant.name}\t{base}\n")
    return ExitCodes.SUCCESS.value
