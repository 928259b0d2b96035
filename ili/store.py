"""Directory of installed libraries, one subdirectory per library"""
import os
import shutil
from pathlib import Path
from typing import List, Tuple

from ili.manifest import MANIFEST_FILE


class NotInstalledError(LookupError):
    """Raised when a library directory that must exist does not"""


class InvalidNameError(ValueError):
    """Raised for a library name that does not map to its own directory"""


def is_valid_name(name: str) -> bool:
    """A library name must be a single, real path component
    e.g. "json-lite" is valid; "", ".", "..", "a/b" and "a\\b" are not.
    """
    if not name or name in ('.', '..'):
        return False
    return not any(sep in name for sep in ('/', '\\', '\0'))


class PackageStore:
    def __init__(self, root: Path):
        self.root = Path(root)

    def ensure_root(self):
        self.root.mkdir(parents=True, exist_ok=True)

    def path(self, name: str) -> Path:
        if not is_valid_name(name):
            raise InvalidNameError(f"Invalid library name: '{name}'")
        return self.root / name

    def exists(self, name: str) -> bool:
        return self.path(name).exists()

    def enumerate(self) -> List[Tuple[str, Path]]:
        """List (name, path) for every directory holding a readable manifest
        Directories without a Library.json are left out.
        """
        if not self.root.is_dir():
            return []

        libraries = []
        for entry in sorted(self.root.iterdir()):
            manifest_path = entry / MANIFEST_FILE
            if entry.is_dir() and manifest_path.is_file() and os.access(manifest_path, os.R_OK):
                libraries.append((entry.name, entry))
        return libraries

    def create(self, name: str) -> Path:
        """Create the directory for name; raises FileExistsError if present

        Installs never call this, git clone creates the library directory.
        It is kept for tests and manual maintenance of the store.
        """
        self.ensure_root()
        library_path = self.path(name)
        library_path.mkdir()
        return library_path

    def delete(self, name: str):
        library_path = self.path(name)
        if not library_path.exists():
            raise NotInstalledError(f"'{name}' is not installed")
        if library_path.is_dir() and not library_path.is_symlink():
            shutil.rmtree(library_path)
        else:
            library_path.unlink()
