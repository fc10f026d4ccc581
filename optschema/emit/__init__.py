"""
Emitters consuming resolved command schemas.

Usage:
    from optschema.emit import generate_command_module, schema_to_dict
"""

from .yargs_gen import generate_command_module, generate_imports, render_option_literal
from .dict_gen import schema_to_dict

__all__ = [
    "generate_command_module",
    "generate_imports",
    "render_option_literal",
    "schema_to_dict",
]
