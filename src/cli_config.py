"""CLI configuration overrides applied on top of the project file.

Command line values take precedence; the result is a new immutable
ProjectConfig, the loaded one is never modified.
"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Optional

from project_config import ProjectConfig, RepositoryConfig, load_config

logger = logging.getLogger(__name__)


def _path(value: Optional[str]) -> Optional[Path]:
    if not value:
        return None
    return Path(os.path.expanduser(value)).absolute()


def apply_overrides(config: ProjectConfig, args) -> ProjectConfig:
    """Return config with every CLI override present on args applied."""
    publish = config.publish
    if getattr(args, "GROUP_ID", None):
        publish = replace(publish, group_id=args.GROUP_ID)
    if getattr(args, "ARTIFACT_ID", None):
        publish = replace(publish, artifact_id=args.ARTIFACT_ID)
    if getattr(args, "PUBLISH_VERSION", None):
        publish = replace(publish, version=args.PUBLISH_VERSION)

    resolver = config.resolver
    if getattr(args, "BASELINE_VERSION", None):
        resolver = replace(resolver, version=args.BASELINE_VERSION)
    for attr, field_name in (("LOCAL_PACKAGE", "package"), ("LOCAL_MAPPING", "mapping"),
                             ("LOCAL_SYMBOL", "symbol")):
        local = _path(getattr(args, attr, None))
        if local is not None:
            resolver = replace(resolver, **{field_name: local})
    if getattr(args, "IGNORE_MAPPING", False):
        resolver = replace(resolver, ignore_mapping=True)

    repositories = config.repositories
    cli_repositories = getattr(args, "REPOSITORIES", None) or []
    if cli_repositories:
        repositories = tuple(
            RepositoryConfig(
                url=url if "://" in url else str(_path(url)),
                name=f"cli{index + 1}",
            )
            for index, url in enumerate(cli_repositories)
        )
        logger.debug("Using repositories from the command line: %s",
                     ", ".join(r.name for r in repositories))

    cache_dir = _path(getattr(args, "CACHE_DIR", None)) or config.cache_dir

    return replace(config, publish=publish, resolver=resolver,
                   repositories=repositories, cache_dir=cache_dir)


def load_with_overrides(args) -> ProjectConfig:
    """Load the project file named by ``--config`` and apply CLI overrides."""
    return apply_overrides(load_config(args.CONFIG), args)
