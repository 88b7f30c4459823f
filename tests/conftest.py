"""Pytest configuration for asset-vault tests."""

import logging
from pathlib import Path

import pytest
import yaml


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep global settings and the JSONL log inside the test's temp dir."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("ASSETVAULT_LOG_PATH", str(tmp_path / "logs" / "assetvault.log.jsonl"))
    return home


@pytest.fixture
def project_dir(tmp_path) -> Path:
    """Project with an empty Content folder."""
    project = tmp_path / "project"
    (project / "Content").mkdir(parents=True)
    return project


@pytest.fixture
def content_root(project_dir) -> Path:
    return project_dir / "Content"


@pytest.fixture
def vault_root(tmp_path) -> Path:
    root = tmp_path / "vault"
    root.mkdir()
    return root


def make_payload(content_root: Path, relative: str, extensions=("uasset",), data: bytes = b"payload") -> Path:
    """Create payload files for a package (``Chars/Hero`` -> ``Chars/Hero.uasset``...)."""
    base = content_root / relative
    base.parent.mkdir(parents=True, exist_ok=True)
    for ext in extensions:
        base.with_name(f"{base.name}.{ext}").write_bytes(data)
    return base.with_name(f"{base.name}.{extensions[0]}")


def write_manifest(project_dir: Path, packages: dict, ready: bool = True) -> Path:
    """Write the default dependency manifest for ``project_dir``."""
    manifest = project_dir / ".assetvault" / "dependencies.yaml"
    manifest.parent.mkdir(parents=True, exist_ok=True)
    manifest.write_text(yaml.safe_dump({"ready": ready, "packages": packages}), encoding="utf-8")
    return manifest


@pytest.fixture
def payload():
    """Factory fixture for ``make_payload``."""
    return make_payload


@pytest.fixture
def manifest():
    """Factory fixture for ``write_manifest``."""
    return write_manifest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Drop handlers installed by the CLI's logging bootstrap after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
