"""Main CLI entry point for mdvars."""

import argparse
import sys
from typing import Optional

from .commands import export_variables, list_declarations, process_document


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='warn',
        help='Set log level'
    )


def _add_variable_sources(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--vars',
        action='append',
        metavar='FILE',
        help='Variables YAML file to load as globals (can be specified multiple times)'
    )
    parser.add_argument(
        '--set',
        action='append',
        metavar='KEY=VALUE',
        help='Global variable (can be specified multiple times, applied after --vars)'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the mdvars CLI."""
    parser = argparse.ArgumentParser(
        prog='mdvars',
        description='Expand {{variable}} placeholders in Markdown documents'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Process command
    process_parser = subparsers.add_parser('process', help='Expand a document')
    process_parser.add_argument(
        'document',
        type=str,
        help='Path to a .md or .txt document'
    )
    _add_variable_sources(process_parser)
    process_parser.add_argument(
        '--out',
        type=str,
        metavar='PATH',
        help='Write the expanded document here instead of stdout'
    )
    process_parser.add_argument(
        '--strict',
        action='store_true',
        help='Exit 2 if any placeholder is left unresolved'
    )
    _add_common_arguments(process_parser)

    # Export command
    export_parser = subparsers.add_parser('export', help='Export merged global variables as YAML')
    _add_variable_sources(export_parser)
    export_parser.add_argument(
        '--out',
        type=str,
        metavar='PATH',
        help='Write the variables document here instead of stdout'
    )
    _add_common_arguments(export_parser)

    # Vars command
    vars_parser = subparsers.add_parser('vars', help='List variables declared in a document')
    vars_parser.add_argument(
        'document',
        type=str,
        help='Path to a .md or .txt document'
    )
    _add_common_arguments(vars_parser)

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'process':
        return process_document(parsed_args)
    elif parsed_args.command == 'export':
        return export_variables(parsed_args)
    elif parsed_args.command == 'vars':
        return list_declarations(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
