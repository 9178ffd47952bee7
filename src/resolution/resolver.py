"""Resolution of a variant's baseline package, mapping and symbol files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Set

from artifacts.models import ArtifactKind, Variant
from constants import Constants
from errors import AmbiguousArtifactError, ResolutionError
from locators.base import VariantArtifactsLocator
from locators.factory import LocatorFactory
from project_config import PublishConfig, ResolverConfig
from .channels import ChannelRegistry, ResolutionChannel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BaselineArtifacts:
    """Baseline files of one variant; None where nothing was found."""
    package: Optional[Path]
    mapping: Optional[Path]
    symbol: Optional[Path]


class ArtifactResolver:
    """Resolves baseline artifacts for hot-patch generation.

    The package is resolved strictly: anything but exactly one file fails.
    Mapping and symbol files are optional and resolved leniently on a shared
    channel. Without a baseline (no version, no local override) every call
    returns None.

    Args:
        channels: Registry the per-variant channels are created in.
        publish_config: Group/artifact id the baseline was published under.
        resolver_config: Baseline version and local overrides.
        locator_factory: Source of locators; defaults to LocatorFactory().
    """

    def __init__(self, channels: ChannelRegistry, publish_config: PublishConfig,
                 resolver_config: ResolverConfig,
                 locator_factory: Optional[LocatorFactory] = None):
        self._channels = channels
        self._publish_config = publish_config
        self._resolver_config = resolver_config
        self._locator_factory = locator_factory or LocatorFactory()

    @property
    def resolver_config(self) -> ResolverConfig:
        return self._resolver_config

    def _locator(self, variant: Variant) -> Optional[VariantArtifactsLocator]:
        if not self._resolver_config.has_baseline:
            return None
        return self._locator_factory.create(variant, self._publish_config, self._resolver_config)

    def _package_channel(self, variant: Variant,
                         locator: VariantArtifactsLocator) -> ResolutionChannel:
        # Separate from the resource channel: this one is read strictly.
        return self._channels.maybe_create(
            Constants.PACKAGE_CHANNEL_TEMPLATE.format(variant=variant.capitalized_name),
            lambda channel: channel.add(locator.dependency_notation(ArtifactKind.PACKAGE)),
            description="Resolves the baseline package.",
        )

    def _resource_channel(self, variant: Variant,
                          locator: VariantArtifactsLocator) -> ResolutionChannel:
        def configure(channel: ResolutionChannel) -> None:
            channel.add(locator.dependency_notation(ArtifactKind.SYMBOL))
            channel.add(locator.dependency_notation(ArtifactKind.MAPPING))

        return self._channels.maybe_create(
            Constants.RESOURCE_CHANNEL_TEMPLATE.format(variant=variant.capitalized_name),
            configure,
            description="Resolves the baseline mapping and symbol files.",
        )

    def resolve_package(self, variant: Variant) -> Optional[Path]:
        """Baseline package of the variant, None when no baseline is configured.

        Raises:
            ResolutionError: if the package cannot be resolved or no file matches.
            AmbiguousArtifactError: if more than one file matches.
        """
        locator = self._locator(variant)
        if locator is None:
            return None
        kind = ArtifactKind.PACKAGE
        channel = self._package_channel(variant, locator)
        matches = locator.matches_resolved_artifact(kind)
        files = {a.file for a in channel.artifacts(locator.matches_dependency(kind)) if matches(a)}
        if not files:
            raise ResolutionError(
                f"Cannot find baseline package {locator.describe(kind)}: "
                "expected exactly one baseline package, found 0"
            )
        if len(files) > 1:
            raise AmbiguousArtifactError(
                f"Expected exactly one baseline package for {locator.describe(kind)}, "
                f"found {len(files)}: {', '.join(sorted(str(f) for f in files))}"
            )
        package = files.pop()
        logger.info("Baseline package for '%s': %s", variant.name, package)
        return package

    def _resolve_optional(self, variant: Variant, kind: ArtifactKind, label: str) -> Optional[Path]:
        locator = self._locator(variant)
        if locator is None:
            return None
        channel = self._resource_channel(variant, locator)
        matches = locator.matches_resolved_artifact(kind)
        candidates = channel.lenient_artifacts(locator.matches_dependency(kind))
        files: Set[Path] = {a.file for a in candidates if matches(a)}
        if not files:
            logger.warning(
                "Can not find the %s file (%s), continue build without it.",
                label,
                locator.describe(kind),
            )
            return None
        if len(files) > 1:
            raise AmbiguousArtifactError(
                f"Ambiguous {label} file found for {locator.describe(kind)}: "
                f"{', '.join(sorted(str(f) for f in files))}"
            )
        found = files.pop()
        logger.info("Baseline %s file for '%s': %s", label, variant.name, found)
        return found

    def resolve_mapping(self, variant: Variant) -> Optional[Path]:
        """Baseline obfuscation mapping file; None when absent or ignored.

        Raises:
            AmbiguousArtifactError: if more than one candidate file matches.
        """
        if self._resolver_config.ignore_mapping:
            logger.warning("Skip resolving the mapping file for '%s' because ignore_mapping = true",
                           variant.name)
            return None
        return self._resolve_optional(variant, ArtifactKind.MAPPING, "mapping")

    def resolve_symbol(self, variant: Variant) -> Optional[Path]:
        """Baseline resource symbol table; None when absent.

        Raises:
            AmbiguousArtifactError: if more than one candidate file matches.
        """
        return self._resolve_optional(variant, ArtifactKind.SYMBOL, "symbol")

    def resolve_all(self, variant: Variant) -> BaselineArtifacts:
        return BaselineArtifacts(
            package=self.resolve_package(variant),
            mapping=self.resolve_mapping(variant),
            symbol=self.resolve_symbol(variant),
        )
