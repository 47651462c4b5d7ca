# src/lalparser/__main__.py

import sys
import argparse

from lalparser.lal import cli as lal_cli


def main():
    # 1. Initialize the primary ArgumentParser
    parser = argparse.ArgumentParser(
        prog="lalparser",
        description="Read, normalize and export LAL credential lists.",
        epilog="Use 'lalparser <command> --help' for more information on a specific command."
    )

    # 2. Define subparsers for the available commands
    subparsers = parser.add_subparsers(
        title="Available Commands",
        dest="command",
        required=True,
        metavar="<command>"
    )
    subparsers.add_parser("view", help="Show the logins stored in a LAL file.")
    subparsers.add_parser("format", help="Rewrite a LAL file in canonical form.")
    subparsers.add_parser("export", help="Export a LAL file as a json, csv, md or txt report.")

    # Only the command name is parsed here; each command parses the rest.
    args = parser.parse_args(sys.argv[1:2])

    if args.command == "view":
        lal_cli.view_main()
    elif args.command == "format":
        lal_cli.format_main()
    elif args.command == "export":
        lal_cli.export_main()
    else:
        parser.print_help()

if __name__ == "__main__":
    main()
