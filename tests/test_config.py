"""Tests for store root resolution."""

import os
from pathlib import Path
from unittest.mock import patch

from ili.config import DEFAULT_REGISTRY_URL, IliConfig, default_root


def _env_without_ili():
    return {k: v for k, v in os.environ.items() if not k.startswith("ILI_")}


class TestResolutionOrder:

    def test_explicit_root_wins(self, tmp_path):
        env = _env_without_ili()
        env["ILI_PATH"] = str(tmp_path / "from_env")
        with patch.dict(os.environ, env, clear=True):
            config = IliConfig.from_env(root=tmp_path / "explicit")
        assert config.root == tmp_path / "explicit"

    def test_env_var(self, tmp_path):
        env = _env_without_ili()
        env["ILI_PATH"] = str(tmp_path / "from_env")
        with patch.dict(os.environ, env, clear=True):
            config = IliConfig.from_env()
        assert config.root == tmp_path / "from_env"

    def test_user_default(self):
        with patch.dict(os.environ, _env_without_ili(), clear=True):
            config = IliConfig.from_env()
        assert config.root == Path.home() / ".local/share/ili"
        assert config.registry_url == DEFAULT_REGISTRY_URL
        assert config.git == "git"

    def test_system_default(self):
        with patch("ili.config.sys.platform", "linux"):
            assert default_root(system=True) == Path("/opt/ili")

    def test_registry_and_git_overrides(self, tmp_path):
        env = _env_without_ili()
        env["ILI_REGISTRY_URL"] = "https://mirror.test/registry.git"
        env["ILI_GIT"] = "/usr/local/bin/git"
        with patch.dict(os.environ, env, clear=True):
            config = IliConfig.from_env(root=tmp_path)
        assert config.registry_url == "https://mirror.test/registry.git"
        assert config.git == "/usr/local/bin/git"


class TestDerivedPaths:

    def test_layout(self, tmp_path):
        config = IliConfig(root=tmp_path)
        assert config.libs_dir == tmp_path / "libs"
        assert config.registry_dir == tmp_path / "registry"
        assert config.registry_file == tmp_path / "registry" / "registry.txt"

    def test_root_accepts_string(self, tmp_path):
        assert IliConfig(root=str(tmp_path)).root == tmp_path
