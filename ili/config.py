"""Where ili keeps its registry and installed libraries.

Resolution order for the root directory (first match wins):
    1. Explicit ``root`` argument (the ``--root`` CLI flag)
    2. ILI_PATH environment variable
    3. Default: ~/.local/share/ili, or the system location with ``system=True``
"""
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

DEFAULT_REGISTRY_URL = "https://github.com/I-had-a-bad-idea/ILI.git"


def default_root(system: bool = False) -> Path:
    if system:
        if sys.platform.startswith('win'):
            return Path("C:\\ProgramData\\ILI")
        return Path("/opt/ili")
    return Path.home() / ".local/share/ili"


@dataclass
class IliConfig:
    root: Path
    registry_url: str = DEFAULT_REGISTRY_URL
    git: str = "git"

    def __post_init__(self):
        self.root = Path(self.root)

    @property
    def libs_dir(self) -> Path:
        return self.root / "libs"

    @property
    def registry_dir(self) -> Path:
        return self.root / "registry"

    @property
    def registry_file(self) -> Path:
        return self.registry_dir / "registry.txt"

    @classmethod
    def from_env(cls, system: bool = False, root: Optional[Union[str, Path]] = None) -> "IliConfig":
        """Build a config from arguments and ILI_* environment variables"""
        if root:
            resolved = Path(root).expanduser()
        elif os.environ.get("ILI_PATH"):
            resolved = Path(os.environ["ILI_PATH"]).expanduser()
        else:
            resolved = default_root(system)

        return cls(
            root=resolved,
            registry_url=os.environ.get("ILI_REGISTRY_URL") or DEFAULT_REGISTRY_URL,
            git=os.environ.get("ILI_GIT") or "git",
        )
