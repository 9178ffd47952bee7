"""Locator selection: remote coordinates or local override files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from artifacts.models import Variant
from project_config import PublishConfig, ResolverConfig
from .base import VariantArtifactsLocator
from .local import LocalOverrideLocator
from .remote import RemoteLocator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteStrategy:
    """Resolve from the repository at the given baseline version."""
    version: Optional[str]


@dataclass(frozen=True)
class LocalOverrideStrategy:
    """Resolve from fixed local files."""
    package: Path
    mapping: Optional[Path] = None
    symbol: Optional[Path] = None


LocatorStrategy = Union[RemoteStrategy, LocalOverrideStrategy]


def select_strategy(resolver_config: ResolverConfig) -> LocatorStrategy:
    """A local package wins over a baseline version; otherwise resolve remotely.

    Mapping or symbol overrides without a package are ignored.
    """
    if resolver_config.has_local_override:
        return LocalOverrideStrategy(
            package=resolver_config.package,
            mapping=resolver_config.mapping,
            symbol=resolver_config.symbol,
        )
    return RemoteStrategy(version=resolver_config.version)


class LocatorFactory:
    """Builds the locator used for a variant.

    This is the only place locators are constructed; pass a subclass (or any
    object with the same two methods) to the resolver or the publishing
    coordinator to substitute another implementation.
    """

    def create(self, variant: Variant, publish_config: PublishConfig,
               resolver_config: ResolverConfig) -> VariantArtifactsLocator:
        """Locator for resolving the baseline artifacts of a variant.

        Raises:
            ConfigurationError: for a remote strategy without any usable version.
        """
        strategy = select_strategy(resolver_config)
        if isinstance(strategy, LocalOverrideStrategy):
            logger.info("Using local package file for '%s': %s", variant.name, strategy.package)
            return LocalOverrideLocator(strategy.package, strategy.mapping, strategy.symbol)
        if resolver_config.mapping is not None or resolver_config.symbol is not None:
            logger.warning("Ignoring local mapping/symbol override for '%s': no local package set",
                           variant.name)
        logger.info("Resolving baseline for '%s' from repository, version: %s",
                    variant.name, strategy.version)
        return RemoteLocator(variant, publish_config.group_id, publish_config.artifact_id,
                             strategy.version)

    def create_publish_locator(self, variant: Variant,
                               publish_config: PublishConfig) -> RemoteLocator:
        """Locator assigning coordinates to the artifacts of the current build."""
        return RemoteLocator(variant, publish_config.group_id, publish_config.artifact_id,
                             publish_config.version)
