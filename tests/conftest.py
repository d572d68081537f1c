"""Shared pytest fixtures for ignorekit tests."""
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator

import pytest
import yaml

from ignorekit.infrastructure.config_manager import set_global_config
from ignorekit.infrastructure.logger import set_global_logger


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def repo_dir(temp_dir: Path) -> Path:
    """Create a project directory with a .gitignore file."""
    repo = temp_dir / "repo"
    repo.mkdir()
    (repo / ".gitignore").write_text(
        "# build output\n"
        "build/\n"
        "*.log\n"
        "\n"
        "!keep.log\n"
        "/dist\n"
        "**/__pycache__\n",
        encoding="utf-8",
    )
    return repo


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample ignorekit configuration."""
    return {
        "ignorekit": {
            "logging": {"level": "DEBUG", "file": None},
            "rules": {"ignore_file": ".dockerignore", "encoding": "utf-8"},
        }
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "ignorekit.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Reset global logger/config and IGNOREKIT_* variables between tests."""
    import os

    for key in list(os.environ):
        if key.startswith("IGNOREKIT_"):
            monkeypatch.delenv(key)
    set_global_logger(None)
    set_global_config(None)
    yield
    set_global_logger(None)
    set_global_config(None)
