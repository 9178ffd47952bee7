"""CLI handler for ``tinkerpub resolve``: baseline artifacts to patch inputs.

Runs the pipeline explicitly and in order: gather the selected variants,
resolve each variant's baseline through the ArtifactResolver, then emit the
inputs the patch tool expects as JSON.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Iterable

from artifacts.models import Variant
from cli_config import load_with_overrides
from constants import ExitCodes
from errors import ResolutionError
from project_config import ProjectConfig
from repository.maven_repository import MavenRepository
from resolution.channels import ChannelRegistry
from resolution.resolver import ArtifactResolver

logger = logging.getLogger(__name__)


def build_resolver(config: ProjectConfig) -> ArtifactResolver:
    """Resolver over every configured repository, sharing one channel registry."""
    repositories = [MavenRepository.from_config(r, config.cache_dir) for r in config.repositories]
    return ArtifactResolver(ChannelRegistry(repositories), config.publish, config.resolver)


def prepare_patch_inputs(variants: Iterable[Variant],
                         resolver: ArtifactResolver) -> Dict[str, Dict[str, Any]]:
    """Resolve the baseline of each variant into patch-tool inputs.

    Variants are skipped when no baseline is configured (first release).

    Raises:
        ResolutionError: when a variant's baseline package cannot be found.
    """
    inputs: Dict[str, Dict[str, Any]] = {}
    if not resolver.resolver_config.has_baseline:
        logger.info("Skip resolving baseline artifacts because no baseline version "
                    "or local package is configured")
        return inputs

    for variant in variants:
        baseline = resolver.resolve_all(variant)
        if baseline.package is None:
            raise ResolutionError(
                f"Cannot find base apk file in Maven repository for '{variant.name}'"
            )
        entry: Dict[str, Any] = {"old_apk": str(baseline.package.absolute())}
        if baseline.mapping is not None:
            entry["apply_mapping"] = str(baseline.mapping.absolute())
            entry["using_resource_mapping"] = True
        if baseline.symbol is not None:
            entry["apply_resource_mapping"] = str(baseline.symbol.absolute())
        inputs[variant.name] = entry
    return inputs


def run_resolve(args) -> int:
    config = load_with_overrides(args)
    variants = config.select_variants(args.VARIANTS)
    inputs = prepare_patch_inputs(variants, build_resolver(config))

    document = json.dumps(inputs, indent=4, sort_keys=True)
    if args.OUTPUT:
        with open(args.OUTPUT, "w", encoding="utf-8") as fh:
            fh.write(document + "\n")
        logger.info("Patch inputs written to %s", args.OUTPUT)
    else:
        sys.stdout.write(document + "\n")
    return ExitCodes.SUCCESS.value
