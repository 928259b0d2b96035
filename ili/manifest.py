"""
Library.json reader

The manifest is scanned line by line instead of being handed to a JSON
parser. Only lines that start with one of the quoted keys below are looked
at, so braces, commas and unknown keys around them are tolerated.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

MANIFEST_FILE = "Library.json"

SCALAR_KEYS = ('name', 'version', 'entry')
DEPENDENCIES_KEY = 'dependencies'


@dataclass
class Manifest:
    name: str
    version: str
    entry: str
    dependencies: List[str] = field(default_factory=list)


def extract_string(line: str) -> Optional[str]:
    """Return the quoted value following the quoted key at the start of line
    e.g. '"name": "foo",' -> 'foo'
    Returns None if the line holds fewer than four quote characters.
    """
    key_end = line.find('"', 1)
    if key_end == -1:
        return None
    value_start = line.find('"', key_end + 1)
    if value_start == -1:
        return None
    value_end = line.find('"', value_start + 1)
    if value_end == -1:
        return None
    return line[value_start + 1:value_end]


def extract_array(text: str) -> List[str]:
    """Return the quoted strings between the first '[' and first ']' of text

    The brackets are located in the whole text, not next to the
    "dependencies" key. Tokens that are not a quoted string are dropped.
    """
    start = text.find('[')
    end = text.find(']')
    if start == -1 or end == -1 or end < start:
        return []

    items = []
    for token in text[start + 1:end].split(','):
        token = token.strip()
        if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
            items.append(token[1:-1])
    return items


def parse_manifest(text: str) -> Optional[Manifest]:
    """Parse manifest text into a Manifest
    Returns None unless name, version and entry were all recovered.
    A malformed scalar line invalidates the whole manifest.
    """
    fields = {}
    dependencies: List[str] = []

    for line in text.splitlines():
        line = line.strip()
        if not line.startswith('"'):
            continue

        if line.startswith(f'"{DEPENDENCIES_KEY}"'):
            dependencies = extract_array(text)
            continue

        for key in SCALAR_KEYS:
            if line.startswith(f'"{key}"'):
                value = extract_string(line)
                if value is None:
                    return None
                fields[key] = value
                break

    if any(key not in fields for key in SCALAR_KEYS):
        return None

    return Manifest(
        name=fields['name'],
        version=fields['version'],
        entry=fields['entry'],
        dependencies=dependencies,
    )


def load_manifest(library_dir: Path) -> Optional[Manifest]:
    """Read and parse Library.json from a library directory"""
    manifest_path = Path(library_dir) / MANIFEST_FILE
    try:
        text = manifest_path.read_text(encoding='utf-8', errors='replace')
    except OSError:
        return None
    return parse_manifest(text)
