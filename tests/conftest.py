# pkgtypes Test Fixtures
# Pytest fixtures for pkgtypes tests

import tempfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from pkgtypes.config.schema import TypesConfig
from pkgtypes.logger import TypesLogger
from pkgtypes.sync.engine import TypesWriter
from pkgtypes.sync.state import CacheLayout

_ENV_VARS = (
    "PKGTYPES_CONFIG",
    "PKGTYPES_DEBUG",
    "PKGTYPES_SYMLINK_REMOTE_CATALOG_ROOT",
    "PKGTYPES_SYMLINK_APP_PATH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's pkgtypes environment out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def app_dir(temp_dir: Path) -> Path:
    """Create a mock application directory."""
    app = temp_dir / "app"
    (app / ".meteor").mkdir(parents=True)
    return app


@pytest.fixture
def make_package(temp_dir: Path) -> Callable[..., Path]:
    """Factory creating a package directory with a type entry."""

    def _make(name: str, root: str = "packages", types_entry: str = "index.d.ts") -> Path:
        package = temp_dir / root / name
        (package / "npm" / "node_modules").mkdir(parents=True)
        (package / types_entry).parent.mkdir(parents=True, exist_ok=True)
        (package / types_entry).write_text("export declare const value: number;\n", encoding="utf-8")
        return package

    return _make


@pytest.fixture
def types_config(app_dir: Path) -> TypesConfig:
    """Default configuration rooted at the mock application."""
    return TypesConfig(app_path=str(app_dir))


@pytest.fixture
def layout(types_config: TypesConfig) -> CacheLayout:
    """Cache layout for the mock application."""
    return CacheLayout.from_config(types_config)


@pytest.fixture
def quiet_logger() -> TypesLogger:
    """Logger that prints nothing."""
    return TypesLogger(verbose=False)


@pytest.fixture
def writer(types_config: TypesConfig, quiet_logger: TypesLogger) -> TypesWriter:
    """Writer for the mock application."""
    return TypesWriter(types_config, logger=quiet_logger)
