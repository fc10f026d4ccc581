"""
optschema CLI Command Definitions - SINGLE SOURCE OF TRUTH

All command definitions live here; argparse_gen.py builds the parser from
them. When adding a new command or option, ONLY modify this file.
"""

from .schema import CLISchema, Command, Argument, Positional, CommonArgumentSet


# =============================================================================
# CONSTANTS (shared with other modules)
# =============================================================================

INSPECT_FORMATS = ["yaml", "json"]

# Suffix of generated yargs command modules
EMIT_SUFFIX = ".command.ts"


# =============================================================================
# COMMON ARGUMENT SETS
# =============================================================================

COMMON_CONFIG = CommonArgumentSet(
    name="config",
    arguments=[
        Argument(
            name="config",
            short="c",
            help="Configuration file (defaults to ./optschema.yaml when present).",
            metavar="FILE",
            default=None,
        ),
    ],
)


# =============================================================================
# COMMAND DEFINITIONS
# =============================================================================

INSPECT_COMMAND = Command(
    name="inspect",
    aliases=["i"],
    help="Print the resolved command schemas of declaration files.",
    include_common=["config"],
    positionals=[
        Positional(
            name="files",
            help="TypeScript declaration sources to inspect.",
            nargs="+",
        ),
    ],
    arguments=[
        Argument(
            name="format",
            short="f",
            help="Output format.",
            choices=INSPECT_FORMATS,
            default="yaml",
        ),
    ],
)

EMIT_COMMAND = Command(
    name="emit",
    aliases=["e"],
    help="Generate a yargs command module for every exported function of a file.",
    include_common=["config"],
    positionals=[
        Positional(
            name="file",
            help="TypeScript declaration source to generate commands from.",
        ),
    ],
    arguments=[
        Argument(
            name="output",
            short="o",
            help=f"Directory to write <command>{EMIT_SUFFIX} modules to. Printed to the console when omitted.",
            metavar="DIR",
            default=None,
        ),
    ],
)


# =============================================================================
# SCHEMA
# =============================================================================

OPTSCHEMA_CLI_SCHEMA = CLISchema(
    prog="optschema",
    description="""\
Derives command-line option schemas from documented TypeScript functions, \
interfaces and enums, and generates yargs command modules from them.""",

    commands=[
        INSPECT_COMMAND,
        EMIT_COMMAND,
    ],

    common_sets=[
        COMMON_CONFIG,
    ],
)


# =============================================================================
# DERIVED DATA (for use by other modules)
# =============================================================================

COMMAND_ALIASES = {
    alias: cmd.name
    for cmd in OPTSCHEMA_CLI_SCHEMA.commands
    for alias in cmd.aliases
}
