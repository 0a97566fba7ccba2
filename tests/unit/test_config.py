"""Tests for builder configuration."""

import pytest

from schema_builder.builder import SchemaBuilder
from schema_builder.core.config import (
    BuilderConfig,
    DuplicateGuardPolicy,
    get_config,
    set_config,
)
from schema_builder.errors import DuplicateGuardError
from schema_builder.guards.base import create_guard


class TestBuilderConfig:
    """Tests for BuilderConfig loading and saving."""

    def test_defaults(self):
        config = BuilderConfig()
        assert config.duplicate_guards == DuplicateGuardPolicy.OVERWRITE
        assert config.indent == "  "
        assert not config.verbose

    def test_load_missing_file(self, tmp_path):
        config = BuilderConfig.load(tmp_path / "nope.yaml")
        assert config.project_name == "schema-builder"

    def test_load_yaml(self, tmp_path):
        path = tmp_path / ".schema-builder.yaml"
        path.write_text(
            "project_name: Storefront\n"
            "duplicate_guards: error\n"
            "indent: 4\n"
            "verbose: true\n"
        )
        config = BuilderConfig.load(path)
        assert config.project_name == "Storefront"
        assert config.duplicate_guards == DuplicateGuardPolicy.ERROR
        assert config.indent == "    "
        assert config.verbose
        assert config.project_root == tmp_path

    def test_invalid_yaml_falls_back(self, tmp_path):
        path = tmp_path / ".schema-builder.yml"
        path.write_text("duplicate_guards: sometimes\n")
        config = BuilderConfig.load(path)
        assert config.duplicate_guards == DuplicateGuardPolicy.OVERWRITE

    def test_load_pyproject(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text(
            "[project]\nname = \"app\"\n\n"
            "[tool.schema-builder]\nproject_name = \"App\"\nduplicate_guards = \"error\"\n"
        )
        config = BuilderConfig.load(path)
        assert config.project_name == "App"
        assert config.duplicate_guards == DuplicateGuardPolicy.ERROR

    def test_pyproject_without_section(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text("[project]\nname = \"app\"\n")
        assert BuilderConfig.load(path).project_name == "schema-builder"

    def test_discovers_config_in_cwd(self, tmp_path, monkeypatch):
        (tmp_path / ".schema-builder.yaml").write_text("project_name: Found\n")
        monkeypatch.chdir(tmp_path)
        assert BuilderConfig.load().project_name == "Found"

    def test_save_and_reload(self, tmp_path):
        config = BuilderConfig(
            project_name="Saved",
            duplicate_guards=DuplicateGuardPolicy.ERROR,
            indent="    ",
            project_root=tmp_path,
        )
        path = config.save()
        assert path == tmp_path / ".schema-builder.yaml"

        loaded = BuilderConfig.load(path)
        assert loaded.project_name == "Saved"
        assert loaded.duplicate_guards == DuplicateGuardPolicy.ERROR
        assert loaded.indent == "    "


class TestGlobalConfig:
    """Tests for the process-wide config."""

    def test_set_and_get(self):
        config = BuilderConfig(project_name="Global")
        set_config(config)
        assert get_config() is config

    def test_builder_uses_global_config(self):
        set_config(BuilderConfig(duplicate_guards=DuplicateGuardPolicy.ERROR))
        builder = SchemaBuilder()
        guard = create_guard("dup", lambda context, extras: True)

        builder.register_guards(guard)
        with pytest.raises(DuplicateGuardError):
            builder.register_guards(guard)
