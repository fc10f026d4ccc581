"""
Generate argparse parsers from CLI schema.

This module converts the declarative CLI schema into argparse ArgumentParsers.
"""

import argparse
from typing import Dict, Tuple

from .schema import CLISchema, Command, Argument, Positional, ArgAction


def _add_argument(parser: argparse.ArgumentParser, arg: Argument):
    """Add a single argument to parser."""
    kwargs: Dict = {
        "help": arg.help,
        "default": arg.default,
    }

    if arg.action != ArgAction.STORE:
        kwargs["action"] = arg.action.value
    else:
        if arg.type is not None:
            kwargs["type"] = arg.type
        if arg.choices is not None:
            kwargs["choices"] = arg.choices
        if arg.metavar is not None:
            kwargs["metavar"] = arg.metavar
        if arg.required:
            kwargs["required"] = arg.required

    if arg.dest is not None:
        kwargs["dest"] = arg.dest

    parser.add_argument(*arg.get_flags(), **kwargs)


def _add_positional(parser: argparse.ArgumentParser, pos: Positional):
    """Add a positional argument to parser."""
    kwargs: Dict = {
        "help": pos.help,
        "metavar": pos.name.upper(),
    }

    if pos.nargs is not None:
        kwargs["nargs"] = pos.nargs

    parser.add_argument(pos.name, **kwargs)


def _add_command_subparser(subparsers, cmd: Command, schema: CLISchema) -> argparse.ArgumentParser:
    """Add a single command's subparser and return it."""
    subparser = subparsers.add_parser(
        name=cmd.name,
        aliases=cmd.aliases or [],
        help=cmd.help,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    for pos in cmd.positionals:
        _add_positional(subparser, pos)

    for set_name in cmd.include_common:
        common_set = schema.get_common_set(set_name)
        if common_set is None:
            continue
        for arg in common_set.arguments:
            _add_argument(subparser, arg)

    for arg in cmd.arguments:
        _add_argument(subparser, arg)

    return subparser


def generate_parser(schema: CLISchema) -> Tuple[argparse.ArgumentParser, Dict[str, argparse.ArgumentParser]]:
    """
    Generate complete argparse parser from schema.

    Args:
        schema: The CLI schema definition

    Returns:
        Tuple of (main parser, dict mapping command names to subparsers)
    """
    parser = argparse.ArgumentParser(
        prog=schema.prog,
        description=schema.description,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command")
    subparser_map: Dict[str, argparse.ArgumentParser] = {}

    for cmd in schema.commands:
        subparser_map[cmd.name] = _add_command_subparser(subparsers, cmd, schema)

    return parser, subparser_map
