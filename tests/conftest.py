from pathlib import Path

import pytest
from rich.console import Console

from core.config import BootstrapSettings
from core.services.bootstrap_pipeline import BootstrapContext

PLACEHOLDER_SCHEMA = """generator client {
  provider = "prisma-client-js"
}

datasource db {
  provider  = env("DATABASE_PROVIDER")
  url       = env("DATABASE_URL")
  directUrl = env("DIRECT_URL")
}

model User {
  id    Int    @id @default(autoincrement())
  email String @unique
}
"""


class RecordingRunner:
    """Records commands and the env they were given; returns canned exit codes."""

    def __init__(self, *exit_codes: int) -> None:
        self.exit_codes = list(exit_codes)
        self.calls: list[tuple[str, dict[str, str]]] = []

    def __call__(self, command: str, *, env) -> int:
        self.calls.append((command, dict(env)))
        if self.exit_codes:
            return self.exit_codes.pop(0)
        return 0

    @property
    def commands(self) -> list[str]:
        return [command for command, _ in self.calls]


@pytest.fixture
def schema_template() -> str:
    return PLACEHOLDER_SCHEMA


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    (project / "prisma").mkdir(parents=True)
    (project / "prisma" / "schema.prisma").write_text(PLACEHOLDER_SCHEMA, encoding="utf-8")
    return project


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    return home


@pytest.fixture
def settings(project_dir: Path) -> BootstrapSettings:
    return BootstrapSettings(project_dir=project_dir)


@pytest.fixture
def console() -> Console:
    return Console(record=True, width=120)


@pytest.fixture
def make_context(settings, console, home_dir):
    def _make(env: dict[str, str] | None = None, runner=None) -> BootstrapContext:
        return BootstrapContext(
            settings=settings,
            env={} if env is None else env,
            console=console,
            runner=runner or RecordingRunner(),
            platform="linux",
            home=home_dir,
        )

    return _make


@pytest.fixture
def runner_factory():
    return RecordingRunner
