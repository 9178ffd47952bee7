"""Tests for project file loading and CLI overrides."""

import json
from argparse import Namespace
from pathlib import Path

import pytest

from cli_config import apply_overrides
from errors import ConfigurationError
from project_config import load_config, parse_config

PROJECT_YAML = """
publish:
  group_id: com.corp
  version: 2.0.0
resolver:
  version: 1.9.0
  ignore_mapping: true
repositories:
  - name: corp
    url: https://repo.example.com/maven
    username: ci
    password_env: TINKERPUB_TEST_PASSWORD
  - build/repo
cache_dir: build/cache
variants:
  - name: paidRelease
    flavor: paid
    build_type: release
    application_id: com.example.app
    version_name: "1.2.0"
    minify_enabled: true
    package_file: outputs/app-paid-release.apk
    mapping_file: outputs/mapping.txt
  - name: debug
    build_type: debug
    application_id: com.example.app
"""


@pytest.fixture
def project_file(tmp_path):
    path = tmp_path / "tinker.yml"
    path.write_text(PROJECT_YAML)
    return path


class TestLoadConfig:
    """YAML/JSON project files."""

    def test_yaml(self, project_file, monkeypatch):
        monkeypatch.setenv("TINKERPUB_TEST_PASSWORD", "s3cret")
        config = load_config(str(project_file))
        base = project_file.parent.resolve()

        assert config.publish.group_id == "com.corp"
        assert config.publish.artifact_id is None
        assert config.resolver.version == "1.9.0"
        assert config.resolver.ignore_mapping is True
        assert config.cache_dir == base / "build/cache"

        corp, local = config.repositories
        assert (corp.name, corp.username, corp.password) == ("corp", "ci", "s3cret")
        assert local.name == "repository2"
        assert local.url == str(base / "build/repo")

        paid, debug = config.variants
        assert paid.package_file == base / "outputs/app-paid-release.apk"
        assert paid.minify_enabled is True
        assert paid.symbol_file == base / "build/intermediates/runtime_symbol_list/paidRelease/R.txt"
        assert debug.flavor_name == ""
        assert debug.version_name is None

    def test_json(self, tmp_path):
        path = tmp_path / "tinker.json"
        path.write_text(json.dumps({"publish": {"artifact_id": "shop"}}))
        config = load_config(str(path))
        assert config.publish.artifact_id == "shop"
        assert config.variants == ()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(str(tmp_path / "absent.yml"))

    def test_unparsable_yaml(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("publish: [unclosed")
        with pytest.raises(ConfigurationError, match="Failed to parse"):
            load_config(str(path))


class TestParseConfig:
    """Validation of the parsed mapping."""

    def test_variant_requires_application_id(self):
        with pytest.raises(ConfigurationError, match="application_id"):
            parse_config({"variants": [{"name": "debug", "build_type": "debug"}]}, Path("/p"))

    def test_duplicate_variant_names(self):
        variant = {"name": "debug", "build_type": "debug", "application_id": "a"}
        with pytest.raises(ConfigurationError, match="Duplicate"):
            parse_config({"variants": [variant, variant]}, Path("/p"))

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigurationError):
            parse_config({"publish": ["nope"]}, Path("/p"))

    def test_repository_needs_url(self):
        with pytest.raises(ConfigurationError, match="url"):
            parse_config({"repositories": [{"name": "x"}]}, Path("/p"))

    def test_no_baseline_by_default(self):
        config = parse_config({}, Path("/p"))
        assert not config.resolver.has_baseline
        assert not config.resolver.has_local_override

    def test_mapping_and_symbol_alone_are_no_baseline(self):
        data = {"resolver": {"mapping": "b/mapping.txt", "symbol": "b/R.txt"}}
        resolver = parse_config(data, Path("/p")).resolver
        assert resolver.mapping == Path("/p/b/mapping.txt")
        assert not resolver.has_local_override
        assert not resolver.has_baseline

    def test_local_package_is_a_baseline(self):
        resolver = parse_config({"resolver": {"package": "b/app.apk"}}, Path("/p")).resolver
        assert resolver.has_local_override
        assert resolver.has_baseline

    def test_select_variants(self):
        data = {"variants": [
            {"name": "debug", "build_type": "debug", "application_id": "a"},
            {"name": "release", "build_type": "release", "application_id": "a"},
        ]}
        config = parse_config(data, Path("/p"))
        assert [v.name for v in config.select_variants(["release"])] == ["release"]
        assert len(config.select_variants([])) == 2
        with pytest.raises(ConfigurationError, match="staging"):
            config.select_variants(["staging"])


class TestApplyOverrides:
    """Command line values win over the project file."""

    def test_overrides(self, project_file, tmp_path):
        config = load_config(str(project_file))
        args = Namespace(
            GROUP_ID="org.other",
            ARTIFACT_ID=None,
            PUBLISH_VERSION="3.0",
            BASELINE_VERSION="2.9",
            LOCAL_PACKAGE=str(tmp_path / "base.apk"),
            LOCAL_MAPPING=None,
            LOCAL_SYMBOL=None,
            IGNORE_MAPPING=False,
            REPOSITORIES=["https://mirror.example.com/m2"],
            CACHE_DIR=None,
        )
        updated = apply_overrides(config, args)

        assert updated.publish.group_id == "org.other"
        assert updated.publish.version == "3.0"
        assert updated.resolver.version == "2.9"
        assert updated.resolver.package == tmp_path / "base.apk"
        assert updated.resolver.ignore_mapping is True
        assert [r.url for r in updated.repositories] == ["https://mirror.example.com/m2"]
        assert updated.repositories[0].name == "cli1"
        assert updated.cache_dir == config.cache_dir
        # The loaded configuration is untouched.
        assert config.publish.group_id == "com.corp"

    def test_missing_attributes_are_ignored(self, project_file):
        config = load_config(str(project_file))
        assert apply_overrides(config, Namespace()) == config
