"""Command line entry point for ili"""
import argparse
import os
import sys

from ili.config import IliConfig
from ili.installer import Installer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ili',
        description='ili - Install and manage source libraries from git repositories'
    )
    parser.add_argument(
        '--system',
        action='store_true',
        help='Use the system-wide store instead of the user store'
    )
    parser.add_argument(
        '--root',
        help='Store root directory (overrides ILI_PATH)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    install_parser = subparsers.add_parser('install', help='Install a library from the registry')
    install_parser.add_argument('name', help='Library name to install')

    update_parser = subparsers.add_parser('update', help='Update installed libraries')
    update_parser.add_argument('name', nargs='?', help='Library name to update (optional, updates all if omitted)')

    remove_parser = subparsers.add_parser('remove', help='Remove a library')
    remove_parser.add_argument('name', help='Library name to remove')

    where_parser = subparsers.add_parser('where', help='Show installation path')
    where_parser.add_argument('name', help='Library name to locate')

    subparsers.add_parser('list', help='List installed libraries')

    reinstall_parser = subparsers.add_parser('reinstall', help='Remove and install a library again')
    reinstall_parser.add_argument('name', help='Library name to reinstall')

    subparsers.add_parser('sync', help='Update local copy of the registry')

    return parser


def main(argv=None, installer=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.system and hasattr(os, 'geteuid') and os.geteuid() != 0:
        print("Error: --system flag requires root privileges", file=sys.stderr)
        sys.exit(1)

    if installer is None:
        config = IliConfig.from_env(system=args.system, root=args.root)
        print(f"Using libs directory: {config.libs_dir}")
        installer = Installer(config)

    if args.command == 'install':
        success = installer.install(args.name).ok

    elif args.command == 'update':
        success = installer.update(args.name).ok

    elif args.command == 'remove':
        success = installer.remove(args.name).ok

    elif args.command == 'where':
        success = installer.where(args.name).ok

    elif args.command == 'list':
        installer.list_installed()
        success = True

    elif args.command == 'reinstall':
        success = installer.reinstall(args.name).ok

    elif args.command == 'sync':
        success = installer.sync()

    else:
        parser.print_help()
        sys.exit(1)

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
