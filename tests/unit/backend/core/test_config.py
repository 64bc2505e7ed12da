"""
Unit Tests for Configuration Management.

Black box tests against the public interface of config.py.
Tests run against the real YAML files in config/settings/.
Failure scenarios use tmp_path to create controlled filesystems.
"""

import shutil

import pytest

from wallboard.backend.core.config import (
    AppConfig,
    Settings,
    find_project_root,
    get_app_config,
    get_database_url,
    load_yaml_config,
)
from wallboard.backend.core.config_schema import (
    ApplicationSchema,
    FeaturesSchema,
    ModerationSchema,
    SharingSchema,
)


@pytest.fixture(autouse=True)
def _clear_config_cache():
    """Clear lru_cache between tests so each test gets a fresh load."""
    get_app_config.cache_clear()
    yield
    get_app_config.cache_clear()


@pytest.fixture
def project_copy(tmp_path, monkeypatch):
    """A throwaway project root holding a copy of the real settings."""
    root = find_project_root()
    (tmp_path / ".project_root").touch()
    shutil.copytree(root / "config" / "settings", tmp_path / "config" / "settings")
    monkeypatch.chdir(tmp_path)
    return tmp_path


# =============================================================================
# Project root
# =============================================================================


class TestFindProjectRoot:
    def test_finds_root_with_settings(self):
        root = find_project_root()
        assert (root / ".project_root").exists()
        assert (root / "config" / "settings").is_dir()

    def test_raises_when_no_marker_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(RuntimeError, match="Project root not found"):
            find_project_root()


# =============================================================================
# YAML loading
# =============================================================================


class TestLoadYamlConfig:
    @pytest.mark.parametrize(
        "filename",
        [
            "application.yaml",
            "database.yaml",
            "logging.yaml",
            "features.yaml",
            "sharing.yaml",
            "moderation.yaml",
            "concurrency.yaml",
        ],
    )
    def test_loads_every_settings_file(self, filename):
        data = load_yaml_config(filename)
        assert isinstance(data, dict)
        assert data

    def test_raises_for_nonexistent_file(self):
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            load_yaml_config("does_not_exist.yaml")

    def test_returns_empty_dict_for_empty_yaml(self, project_copy):
        (project_copy / "config" / "settings" / "empty.yaml").write_text("")
        assert load_yaml_config("empty.yaml") == {}


# =============================================================================
# AppConfig
# =============================================================================


class TestAppConfig:
    def test_sections_are_typed(self):
        config = AppConfig()
        assert isinstance(config.application, ApplicationSchema)
        assert isinstance(config.features, FeaturesSchema)
        assert isinstance(config.sharing, SharingSchema)
        assert isinstance(config.moderation, ModerationSchema)

    def test_sharing_values(self):
        sharing = AppConfig().sharing
        assert sharing.code_length == 6
        assert sharing.max_attempts == 5
        assert sharing.preview_description_length == 200
        assert not set("0O1Il") & set(sharing.code_alphabet)
        assert len(set(sharing.code_alphabet)) == len(sharing.code_alphabet)

    def test_default_wall(self):
        walls = AppConfig().application.walls
        assert walls.default_slug == "main"

    def test_rejects_unknown_fields(self, project_copy):
        path = project_copy / "config" / "settings" / "features.yaml"
        path.write_text(path.read_text() + "surprise_flag: true\n")
        with pytest.raises(ValueError, match="features.yaml"):
            AppConfig()

    def test_rejects_missing_required_fields(self, project_copy):
        (project_copy / "config" / "settings" / "sharing.yaml").write_text("code_length: 6\n")
        with pytest.raises(ValueError, match="sharing.yaml"):
            AppConfig()

    def test_get_app_config_is_cached(self):
        assert get_app_config() is get_app_config()


# =============================================================================
# Settings (secrets)
# =============================================================================


class TestSettings:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("WALL_PASSWORD", "from-env")
        monkeypatch.setenv("BITLY_TOKEN", "bitly-token")
        settings = Settings(_env_file=None)
        assert settings.wall_password == "from-env"
        assert settings.bitly_token == "bitly-token"

    def test_optional_secrets_default_to_none(self, monkeypatch):
        for name in ("OPENAI_API_KEY", "BITLY_TOKEN", "SHORTIO_API_KEY"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(wall_password="x", _env_file=None)
        assert settings.openai_api_key is None
        assert settings.shortio_api_key is None

    def test_reads_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("WALL_PASSWORD", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("WALL_PASSWORD=from-file\n")
        assert Settings(_env_file=str(env_file)).wall_password == "from-file"


# =============================================================================
# URLs
# =============================================================================


class TestGetDatabaseUrl:
    def test_async_url_keeps_driver(self):
        assert get_database_url().startswith("postgresql+asyncpg://")

    def test_sync_url_strips_driver(self):
        assert get_database_url(async_driver=False).startswith("postgresql://")

    def test_sqlite_url_uses_name_as_path(self, project_copy):
        path = project_copy / "config" / "settings" / "database.yaml"
        text = path.read_text().replace("postgresql+asyncpg", "sqlite+aiosqlite").replace(
            "name: wallboard", "name: wallboard.db"
        )
        path.write_text(text)
        assert get_database_url() == "sqlite+aiosqlite:///wallboard.db"
