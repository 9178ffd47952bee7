"""Immutable project configuration loaded from a YAML or JSON file.

The file describes the variants the build produced, how they are published
and which baseline they are patched against. Values are validated once here
and passed explicitly to the locator factory, resolver and coordinator.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from artifacts.models import Variant
from constants import Constants
from errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishConfig:
    """Coordinates used when publishing; unset fields fall back per variant."""
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None


@dataclass(frozen=True)
class ResolverConfig:
    """Baseline to resolve: a published version or local override files."""
    version: Optional[str] = None
    package: Optional[Path] = None
    mapping: Optional[Path] = None
    symbol: Optional[Path] = None
    ignore_mapping: bool = False

    @property
    def has_local_override(self) -> bool:
        """A local package switches resolution to local files; mapping and symbol alone do not."""
        return self.package is not None

    @property
    def has_baseline(self) -> bool:
        """False for a project's first release: there is nothing to patch against."""
        return self.version is not None or self.package is not None


@dataclass(frozen=True)
class RepositoryConfig:
    """One Maven-layout repository."""
    url: str
    name: str = "maven"
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)


@dataclass(frozen=True)
class ProjectConfig:
    """Everything one invocation needs, built once from validated input."""
    publish: PublishConfig = field(default_factory=PublishConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    repositories: Tuple[RepositoryConfig, ...] = ()
    variants: Tuple[Variant, ...] = ()
    cache_dir: Path = Path(Constants.DEFAULT_CACHE_DIR)
    base_dir: Path = Path(".")

    def select_variants(self, names: Optional[List[str]] = None) -> Tuple[Variant, ...]:
        """Return the variants named (all when names is empty), in configuration order.

        Raises:
            ConfigurationError: if a requested name is not configured.
        """
        if not names:
            return self.variants
        known = {v.name for v in self.variants}
        missing = [n for n in names if n not in known]
        if missing:
            raise ConfigurationError(f"Unknown variant(s): {', '.join(missing)}")
        return tuple(v for v in self.variants if v.name in names)


def _opt_str(section: Mapping[str, Any], key: str) -> Optional[str]:
    value = section.get(key)
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise ConfigurationError(f"'{key}' must be a scalar, got {type(value).__name__}")
    text = str(value).strip()
    return text or None


def _opt_path(section: Mapping[str, Any], key: str, base_dir: Path) -> Optional[Path]:
    value = _opt_str(section, key)
    if value is None:
        return None
    path = Path(os.path.expanduser(value))
    return path if path.is_absolute() else base_dir / path


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"'{key}' must be a mapping")
    return value


def _parse_variant(raw: Any, base_dir: Path) -> Variant:
    if not isinstance(raw, dict):
        raise ConfigurationError("Each variant must be a mapping")
    name = _opt_str(raw, "name")
    build_type = _opt_str(raw, "build_type")
    application_id = _opt_str(raw, "application_id")
    for key, value in (("name", name), ("build_type", build_type),
                       ("application_id", application_id)):
        if value is None:
            raise ConfigurationError(f"Variant is missing required field '{key}': {raw!r}")
    symbol = _opt_path(raw, "symbol_file", base_dir)
    if symbol is None:
        symbol = base_dir / Constants.SYMBOL_FILE_TEMPLATE.format(variant=name)
    return Variant(
        name=name,
        build_type=build_type,
        application_id=application_id,
        flavor_name=_opt_str(raw, "flavor") or "",
        version_name=_opt_str(raw, "version_name"),
        minify_enabled=bool(raw.get("minify_enabled", False)),
        package_file=_opt_path(raw, "package_file", base_dir),
        mapping_file=_opt_path(raw, "mapping_file", base_dir),
        symbol_file=symbol,
    )


def _parse_repository(raw: Any, index: int, base_dir: Path) -> RepositoryConfig:
    if isinstance(raw, str):
        raw = {"url": raw}
    if not isinstance(raw, dict):
        raise ConfigurationError("Each repository must be a URL or a mapping")
    url = _opt_str(raw, "url")
    if url is None:
        raise ConfigurationError(f"Repository #{index + 1} is missing 'url'")
    if "://" not in url and not os.path.isabs(url):
        url = str(base_dir / url)
    username = _opt_str(raw, "username")
    password = _opt_str(raw, "password")
    if raw.get("username_env"):
        username = os.environ.get(str(raw["username_env"]), username)
    if raw.get("password_env"):
        password = os.environ.get(str(raw["password_env"]), password)
    return RepositoryConfig(
        url=url,
        name=_opt_str(raw, "name") or f"repository{index + 1}",
        username=username,
        password=password,
    )


def parse_config(data: Optional[Mapping[str, Any]], base_dir: Path) -> ProjectConfig:
    """Build a ProjectConfig from an already-parsed mapping.

    Raises:
        ConfigurationError: on malformed sections or missing required fields.
    """
    data = data or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Project configuration must be a mapping")

    publish_raw = _section(data, "publish")
    resolver_raw = _section(data, "resolver")
    publish = PublishConfig(
        group_id=_opt_str(publish_raw, "group_id"),
        artifact_id=_opt_str(publish_raw, "artifact_id"),
        version=_opt_str(publish_raw, "version"),
    )
    resolver = ResolverConfig(
        version=_opt_str(resolver_raw, "version"),
        package=_opt_path(resolver_raw, "package", base_dir),
        mapping=_opt_path(resolver_raw, "mapping", base_dir),
        symbol=_opt_path(resolver_raw, "symbol", base_dir),
        ignore_mapping=bool(resolver_raw.get("ignore_mapping", False)),
    )

    repos_raw = data.get("repositories") or []
    if not isinstance(repos_raw, list):
        raise ConfigurationError("'repositories' must be a list")
    variants_raw = data.get("variants") or []
    if not isinstance(variants_raw, list):
        raise ConfigurationError("'variants' must be a list")
    variants = tuple(_parse_variant(v, base_dir) for v in variants_raw)
    names = [v.name for v in variants]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ConfigurationError(f"Duplicate variant name(s): {', '.join(duplicates)}")

    cache_dir = _opt_path(data, "cache_dir", base_dir) or base_dir / Constants.DEFAULT_CACHE_DIR
    return ProjectConfig(
        publish=publish,
        resolver=resolver,
        repositories=tuple(_parse_repository(r, i, base_dir) for i, r in enumerate(repos_raw)),
        variants=variants,
        cache_dir=cache_dir,
        base_dir=base_dir,
    )


def load_config(path: str) -> ProjectConfig:
    """Load a project file (YAML, YML, or JSON); relative paths resolve against its directory.

    Raises:
        ConfigurationError: if the file is missing, unparsable or invalid.
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigurationError(f"Config file not found: {config_path}")
    try:
        with open(config_path, "r", encoding="utf-8") as fh:
            if config_path.suffix.lower() == ".json":
                data: Dict[str, Any] = json.load(fh)
            else:
                data = yaml.safe_load(fh)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Failed to parse {config_path}: {exc}") from exc
    logger.debug("Loaded project configuration from %s", config_path)
    return parse_config(data, config_path.resolve().parent)
