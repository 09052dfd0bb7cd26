from pathlib import Path

import pytest
from pydantic import ValidationError

from core.config import BootstrapSettings
from core.domain.provider import Provider
from core.services.env_configurator import configure_database_env


def test_missing_database_url_synthesizes_local_sqlite_file(settings, home_dir: Path):
    env: dict[str, str] = {}

    config = configure_database_env(env, settings=settings, platform="linux", home=home_dir)

    expected = home_dir / ".config" / "OnlyLabs" / "database" / "dev.db"
    assert env["DATABASE_URL"] == f"file:{expected}"
    assert env["DATABASE_PROVIDER"] == "sqlite"
    assert "DIRECT_URL" not in env
    assert config.provider is Provider.SQLITE
    assert config.embedded_path == expected
    assert config.direct_url is None
    assert expected.parent.is_dir()


def test_generic_unix_home_layout(settings, monkeypatch):
    created: list[Path] = []
    monkeypatch.setattr(Path, "mkdir", lambda self, **kwargs: created.append(self))
    env: dict[str, str] = {}

    config = configure_database_env(env, settings=settings, platform="linux", home=Path("/home/u"))

    assert str(config.embedded_path).endswith(".config/OnlyLabs/database/dev.db")
    assert env["DATABASE_URL"] == "file:/home/u/.config/OnlyLabs/database/dev.db"
    assert env["DATABASE_PROVIDER"] == "sqlite"
    assert created == [Path("/home/u/.config/OnlyLabs/database")]


def test_postgresql_url_mirrors_into_direct_url(settings, home_dir: Path):
    env = {"DATABASE_URL": "postgresql://host/db"}

    config = configure_database_env(env, settings=settings, platform="linux", home=home_dir)

    assert env["DIRECT_URL"] == "postgresql://host/db"
    assert env["DATABASE_PROVIDER"] == "postgresql"
    assert config.provider is Provider.POSTGRESQL
    assert config.embedded_path is None
    assert not (home_dir / ".config").exists()


def test_explicit_direct_url_is_kept(settings, home_dir: Path):
    env = {
        "DATABASE_URL": "postgresql://pooler/db",
        "DIRECT_URL": "postgresql://direct/db",
    }

    config = configure_database_env(env, settings=settings, platform="linux", home=home_dir)

    assert env["DIRECT_URL"] == "postgresql://direct/db"
    assert config.direct_url == "postgresql://direct/db"


def test_direct_url_kept_for_sqlite_when_already_set(settings, home_dir: Path):
    env = {"DATABASE_URL": "file:./local.db", "DIRECT_URL": "file:./other.db"}

    config = configure_database_env(env, settings=settings, platform="linux", home=home_dir)

    assert env["DATABASE_PROVIDER"] == "sqlite"
    assert env["DIRECT_URL"] == "file:./other.db"
    assert config.direct_url == "file:./other.db"


def test_stale_provider_variable_is_corrected(settings, home_dir: Path):
    env = {"DATABASE_URL": "postgresql://host/db", "DATABASE_PROVIDER": "sqlite"}

    configure_database_env(env, settings=settings, platform="linux", home=home_dir)

    assert env["DATABASE_PROVIDER"] == "postgresql"


def test_windows_appdata_override(tmp_path: Path):
    settings = BootstrapSettings(project_dir=tmp_path)
    appdata = tmp_path / "Roaming"
    env = {"APPDATA": str(appdata)}

    config = configure_database_env(env, settings=settings, platform="win32", home=tmp_path / "home")

    assert config.embedded_path == appdata / "OnlyLabs" / "database" / "dev.db"
    assert env["DATABASE_URL"] == f"file:{appdata / 'OnlyLabs' / 'database' / 'dev.db'}"


def test_configured_snapshot_is_frozen(settings, home_dir: Path):
    config = configure_database_env({}, settings=settings, platform="linux", home=home_dir)

    with pytest.raises(ValidationError):
        config.database_url = "changed"
