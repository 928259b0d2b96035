"""
ili - a package manager for source libraries kept in git repositories
"""
from ili.config import IliConfig
from ili.installer import Installer, Report, Result, Status
from ili.manifest import Manifest, parse_manifest
from ili.registry import Registry, find_repo
from ili.store import InvalidNameError, NotInstalledError, PackageStore

__version__ = "0.1.0"

__all__ = [
    'IliConfig',
    'InvalidNameError',
    'Installer',
    'Manifest',
    'NotInstalledError',
    'PackageStore',
    'Registry',
    'Report',
    'Result',
    'Status',
    'find_repo',
    'parse_manifest',
]
