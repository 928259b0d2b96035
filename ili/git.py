"""Thin wrapper around the git command line"""
import subprocess
import sys
from pathlib import Path


class GitTransport:
    """Runs git clone/pull and reports only success or failure"""

    def __init__(self, executable: str = "git"):
        self.executable = executable

    def _run(self, args) -> bool:
        try:
            result = subprocess.run([self.executable, *args], check=False)
        except FileNotFoundError:
            print(f"Error: Git is not installed or not in PATH ({self.executable})", file=sys.stderr)
            return False
        except OSError as e:
            print(f"Error running {self.executable}: {e}", file=sys.stderr)
            return False
        return result.returncode == 0

    def available(self) -> bool:
        """Check that the git executable can be run"""
        try:
            result = subprocess.run(
                [self.executable, '--version'],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False
            )
            return result.returncode == 0
        except OSError:
            return False

    def clone(self, url: str, dest: Path) -> bool:
        return self._run(['clone', url, str(dest)])

    def pull(self, path: Path) -> bool:
        return self._run(['-C', str(path), 'pull'])
