"""Shared fixtures: an isolated store root and a fake git transport."""

from pathlib import Path

import pytest

from ili.config import IliConfig
from ili.installer import Installer

REGISTRY_URL = "https://example.test/registry.git"


def manifest_text(name, dependencies=(), version="1.0.0", entry="src/main.il"):
    deps = ", ".join(f'"{d}"' for d in dependencies)
    return (
        "{\n"
        f'    "name": "{name}",\n'
        f'    "version": "{version}",\n'
        f'    "entry": "{entry}",\n'
        f'    "dependencies": [{deps}]\n'
        "}\n"
    )


class FakeTransport:
    """Stands in for git: a clone writes the files registered for a URL."""

    def __init__(self, repos=None, git_available=True):
        self.repos = dict(repos or {})
        self.git_available = git_available
        self.clones = []
        self.pulls = []
        self.fail_pull = set()
        self.partial_clone = set()
        self.empty_clone = set()
        self.pull_changes = {}

    def available(self):
        return self.git_available

    def clone(self, url, dest):
        self.clones.append((url, Path(dest)))
        if url in self.empty_clone:
            return True
        if url in self.partial_clone:
            Path(dest).mkdir(parents=True)
            return False
        if url not in self.repos:
            return False
        Path(dest).mkdir(parents=True)
        for filename, content in self.repos[url].items():
            (Path(dest) / filename).write_text(content)
        return True

    def pull(self, path):
        path = Path(path)
        self.pulls.append(path.name)
        if path.name in self.fail_pull:
            return False
        for filename, content in self.pull_changes.get(path.name, {}).items():
            (path / filename).write_text(content)
        return True


def lib_url(name):
    return f"https://example.test/{name}.git"


@pytest.fixture
def config(tmp_path):
    return IliConfig(root=tmp_path / "ili", registry_url=REGISTRY_URL)


@pytest.fixture
def make_installer(config):
    """Build an Installer over a registry and a set of library repos.

    ``libraries`` maps a name to its manifest text (None for a repo that
    ships no Library.json). Every library gets a registry line unless
    ``registry`` is given explicitly.
    """

    def _make(libraries=None, registry=None, **transport_kwargs):
        libraries = libraries or {}
        repos = {}
        for name, text in libraries.items():
            files = {"README.md": f"# {name}\n"}
            if text is not None:
                files["Library.json"] = text
            repos[lib_url(name)] = files

        if registry is None:
            registry = "\n".join(f"{name} = {lib_url(name)}" for name in libraries)
        repos[REGISTRY_URL] = {"registry.txt": registry}

        transport = FakeTransport(repos, **transport_kwargs)
        return Installer(config, transport=transport), transport

    return _make
