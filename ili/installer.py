"""
Install, update and remove libraries together with their dependencies

Every operation is best effort: a library that cannot be resolved,
fetched or read is reported and skipped, and the rest of the dependency
walk carries on. Outcomes are printed and also returned as Result records.
"""
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from ili.config import IliConfig
from ili.git import GitTransport
from ili.manifest import MANIFEST_FILE, Manifest, load_manifest
from ili.registry import Registry
from ili.store import PackageStore, is_valid_name


class Status(Enum):
    INSTALLED = 'installed'
    ALREADY_INSTALLED = 'already-installed'
    UPDATED = 'updated'
    REMOVED = 'removed'
    FOUND = 'found'
    NOT_FOUND = 'not-found'
    EMPTY_URL = 'empty-url'
    TRANSPORT_FAILED = 'transport-failed'
    MALFORMED_MANIFEST = 'malformed-manifest'
    NOT_INSTALLED = 'not-installed'
    INVALID_NAME = 'invalid-name'
    REMOVE_FAILED = 'remove-failed'


OK_STATUSES = {
    Status.INSTALLED,
    Status.ALREADY_INSTALLED,
    Status.UPDATED,
    Status.REMOVED,
    Status.FOUND,
}


@dataclass
class Result:
    name: str
    status: Status
    path: Optional[Path] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status in OK_STATUSES


@dataclass
class Report:
    """Results of one invocation, in the order libraries were processed"""
    results: List[Result] = field(default_factory=list)
    cycles: List[Tuple[str, str]] = field(default_factory=list)

    def add(self, result: Result):
        self.results.append(result)

    def extend(self, other: "Report"):
        self.results.extend(other.results)
        self.cycles.extend(other.cycles)

    def get(self, name: str) -> Optional[Result]:
        for result in self.results:
            if result.name == name:
                return result
        return None

    def names(self) -> List[str]:
        return [result.name for result in self.results]

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.results)

    def __iter__(self) -> Iterator[Result]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)


# Visit states for the dependency walk
IN_PROGRESS = 'in-progress'
DONE = 'done'

Step = Callable[[str], Tuple[Result, List[str]]]


class Installer:
    def __init__(self, config: IliConfig,
                 store: Optional[PackageStore] = None,
                 registry: Optional[Registry] = None,
                 transport: Optional[GitTransport] = None):
        self.config = config
        self.transport = transport or GitTransport(config.git)
        self.store = store or PackageStore(config.libs_dir)
        self.registry = registry or Registry(config, self.transport)

    def _walk(self, roots: List[str], step: Step, report: Report):
        """Depth-first walk over roots and their declared dependencies

        step(name) handles one library and returns its Result and the
        dependencies to visit next. Each name is handled at most once;
        meeting a name that is still in progress means a cycle, which is
        recorded and not followed.
        """
        visited: Dict[str, str] = {}
        # Entries are (name, required_by, leaving)
        stack: List[Tuple[str, Optional[str], bool]] = [(name, None, False) for name in reversed(roots)]

        while stack:
            name, parent, leaving = stack.pop()
            if leaving:
                visited[name] = DONE
                continue

            state = visited.get(name)
            if state == IN_PROGRESS:
                print(f"Note: dependency cycle: '{parent}' requires '{name}', skipping")
                report.cycles.append((parent, name))
                continue
            if state == DONE:
                continue

            visited[name] = IN_PROGRESS
            result, dependencies = step(name)
            report.add(result)
            stack.append((name, parent, True))
            for dependency in reversed(dependencies):
                stack.append((dependency, name, False))

    def _fail(self, name: str, status: Status, message: str, path: Optional[Path] = None) -> Result:
        print(f"Error: {message}", file=sys.stderr)
        return Result(name, status, path, message)

    def _require_git(self, name: str) -> Optional[Result]:
        if self.transport.available():
            return None
        return self._fail(name, Status.TRANSPORT_FAILED, "Git is not installed or not in PATH")

    def _reject_name(self, name: str) -> Optional[Result]:
        if is_valid_name(name):
            return None
        return self._fail(name, Status.INVALID_NAME, f"Invalid library name: '{name}'")

    def _discard(self, name: str):
        """Delete a half-installed library directory if there is one"""
        if not self.store.exists(name):
            return
        dest = self.store.path(name)
        try:
            self.store.delete(name)
            print(f"Cleaned up cloned directory: {dest}", file=sys.stderr)
        except OSError as e:
            print(f"Warning: Could not clean up directory {dest}: {e}", file=sys.stderr)

    def _install_one(self, name: str) -> Tuple[Result, List[str]]:
        invalid = self._reject_name(name)
        if invalid:
            return invalid, []

        url = self.registry.resolve(name)
        if url is None:
            return self._fail(name, Status.NOT_FOUND, f"No entry found for '{name}' in registry"), []
        if not url:
            return self._fail(name, Status.EMPTY_URL, f"Registry entry for '{name}' has no URL"), []

        dest = self.store.path(name)
        if self.store.exists(name):
            print(f"'{name}' already installed at {dest}")
            return Result(name, Status.ALREADY_INSTALLED, dest), []

        self.store.ensure_root()
        print(f"Cloning {url} to {dest}...")
        if not self.transport.clone(url, dest):
            self._discard(name)
            return self._fail(name, Status.TRANSPORT_FAILED, f"Git clone failed for '{name}'"), []

        manifest = load_manifest(dest)
        if manifest is None:
            self._discard(name)
            return self._fail(name, Status.MALFORMED_MANIFEST,
                              f"Missing or invalid {MANIFEST_FILE} in '{name}'"), []

        if manifest.name != name:
            print(f"Warning: '{name}' declares itself as '{manifest.name}'", file=sys.stderr)

        print(f"Installed '{name}' {manifest.version}")
        return Result(name, Status.INSTALLED, dest), manifest.dependencies

    def _update_one(self, name: str) -> Tuple[Result, List[str]]:
        invalid = self._reject_name(name)
        if invalid:
            return invalid, []

        path = self.store.path(name)
        if not self.store.exists(name):
            return self._fail(name, Status.NOT_INSTALLED, f"'{name}' is not installed"), []

        print(f"Updating '{name}'...")
        if not self.transport.pull(path):
            return self._fail(name, Status.TRANSPORT_FAILED, f"Update failed for '{name}'", path), []

        manifest = load_manifest(path)
        if manifest is None:
            return self._fail(name, Status.MALFORMED_MANIFEST,
                              f"Missing or invalid {MANIFEST_FILE} in '{name}' after update", path), []

        print(f"Updated '{name}' to {manifest.version}")
        return Result(name, Status.UPDATED, path), manifest.dependencies

    def install(self, name: str) -> Report:
        """Install a library and every dependency it declares"""
        report = Report()
        missing_git = self._require_git(name)
        if missing_git:
            report.add(missing_git)
            return report

        self.registry.refresh()
        self._walk([name], self._install_one, report)
        return report

    def update(self, name: Optional[str] = None) -> Report:
        """Pull a library and its dependencies, or every library if name is None"""
        if name is None:
            return self.update_all()

        report = Report()
        self._walk([name], self._update_one, report)
        return report

    def update_all(self) -> Report:
        report = Report()
        libraries = self.store.enumerate()
        if not libraries:
            print("No libraries installed.")
            return report

        print(f"Updating {len(libraries)} library(s)...")
        self._walk([name for name, _ in libraries], self._update_one, report)
        return report

    def remove(self, name: str) -> Result:
        invalid = self._reject_name(name)
        if invalid:
            return invalid

        if not self.store.exists(name):
            print(f"'{name}' not installed")
            return Result(name, Status.NOT_INSTALLED, message=f"'{name}' not installed")

        path = self.store.path(name)
        try:
            self.store.delete(name)
        except OSError as e:
            return self._fail(name, Status.REMOVE_FAILED, f"Error removing directory {path}: {e}", path)
        print(f"Removed '{name}'")
        return Result(name, Status.REMOVED, path)

    def reinstall(self, name: str) -> Report:
        """Remove a library (if present) and install it again

        The two steps are not atomic: an interruption in between leaves
        the library absent.
        """
        report = Report()
        missing_git = self._require_git(name)
        if missing_git:
            report.add(missing_git)
            return report

        removed = self.remove(name)
        if removed.status != Status.NOT_INSTALLED:
            report.add(removed)
            if not removed.ok:
                return report
        report.extend(self.install(name))
        return report

    def where(self, name: str) -> Result:
        invalid = self._reject_name(name)
        if invalid:
            return invalid

        path = self.store.path(name)
        if self.store.exists(name):
            print(f"'{name}' installed at {path}")
            return Result(name, Status.FOUND, path)
        print(f"'{name}' not installed")
        return Result(name, Status.NOT_INSTALLED, message=f"'{name}' not installed")

    def list_installed(self) -> List[Tuple[str, Path, Optional[Manifest]]]:
        """List all installed libraries"""
        libraries = [(name, path, load_manifest(path)) for name, path in self.store.enumerate()]
        if not libraries:
            print("No libraries installed.")
            return libraries

        print(f"\nInstalled libraries ({len(libraries)}):")
        print("-" * 80)
        print(f"{'Name':<25} {'Version':<15} {'Path':<40}")
        print("-" * 80)
        for name, path, manifest in libraries:
            version = manifest.version if manifest else '?'
            print(f"{name:<25} {version:<15} {str(path):<40}")
        return libraries

    def sync(self) -> bool:
        if self._require_git('registry'):
            return False
        return self.registry.sync()
