"""
Registry of library names to git URLs

The registry is a git repository holding registry.txt, one
``name = url`` pair per line. Lines without '=' never match, so comments
and blank lines need no special handling.
"""
import sys
from typing import Optional

from ili.config import IliConfig
from ili.git import GitTransport


def find_repo(content: str, name: str) -> Optional[str]:
    """Return the URL of the first line whose left side equals name
    Returns None when there is no entry; an entry with nothing after '='
    resolves to the empty string.
    """
    for line in content.splitlines():
        if '=' not in line:
            continue
        key, url = line.split('=', 1)
        if key.strip() == name:
            return url.strip()
    return None


class Registry:
    def __init__(self, config: IliConfig, transport: GitTransport):
        self.config = config
        self.transport = transport
        self._content: Optional[str] = None

    def refresh(self) -> bool:
        """Clone the registry if it is missing, otherwise pull the latest"""
        self._content = None
        registry_dir = self.config.registry_dir

        if not registry_dir.exists():
            print("Cloning registry...")
            registry_dir.parent.mkdir(parents=True, exist_ok=True)
            if not self.transport.clone(self.config.registry_url, registry_dir):
                print("Error: Failed to clone registry repository", file=sys.stderr)
                return False
            return True

        print("Updating local registry...")
        if not self.transport.pull(registry_dir):
            print("Warning: Could not update registry, using local copy", file=sys.stderr)
            return False
        return True

    def sync(self) -> bool:
        """Refresh the registry on request and report the outcome"""
        if self.refresh():
            print("Registry is up to date")
            return True
        print("Error: Registry sync failed", file=sys.stderr)
        return False

    def load(self) -> str:
        if self._content is None:
            try:
                self._content = self.config.registry_file.read_text(encoding='utf-8', errors='replace')
            except OSError:
                self._content = ""
        return self._content

    def resolve(self, name: str) -> Optional[str]:
        return find_repo(self.load(), name)
