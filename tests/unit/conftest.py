"""Shared fixtures for module system tests."""

import textwrap
from pathlib import Path

import pytest
import tomlkit

from modkit import hooks, i18n
from modkit.application import Application


@pytest.fixture(autouse=True)
def clean_registries():
    """Reset process-wide registries between tests."""
    yield
    hooks.clear()
    i18n.clear_domains()


def make_module(root: Path, name: str, files: dict[str, str] | None = None) -> Path:
    """
    Create a module directory below *root*.

    Args:
        root: Module search path
        name: Module directory name
        files: Relative path -> content; paths ending in "/" create directories

    Returns:
        Module base directory
    """
    base_dir = root / name
    base_dir.mkdir(parents=True, exist_ok=True)
    for relative, content in (files or {}).items():
        target = base_dir / relative
        if relative.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(textwrap.dedent(content), encoding="utf-8")
    return base_dir


def write_settings(config_dir: Path, settings: dict) -> None:
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "modkit.toml").write_text(tomlkit.dumps(settings), encoding="utf-8")


@pytest.fixture
def modules_dir(tmp_path) -> Path:
    path = tmp_path / "modules"
    path.mkdir()
    return path


@pytest.fixture
def make_app(tmp_path, modules_dir):
    """Factory building an Application over the temporary modules directory."""

    def factory(web: bool = True, enabled: list[str] | None = None) -> Application:
        config_dir = tmp_path / "config"
        write_settings(
            config_dir,
            {
                "modules": {"paths": [str(modules_dir)], "enabled": enabled or []},
                "web": {"enabled": web},
            },
        )
        return Application(config_dir)

    return factory
