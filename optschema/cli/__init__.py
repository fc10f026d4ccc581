"""
optschema CLI.

The toolchain's own commands are declared once in commands.py and turned
into an argparse parser by argparse_gen.py.
"""

from .commands import OPTSCHEMA_CLI_SCHEMA, COMMAND_ALIASES
from .argparse_gen import generate_parser

__all__ = ["OPTSCHEMA_CLI_SCHEMA", "COMMAND_ALIASES", "generate_parser"]
