"""
CLI Schema Dataclass Definitions.

This module defines the dataclasses used to describe the optschema
toolchain's own commands and arguments. The definitions in commands.py are
the single source of truth from which the argparse parser is generated.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Any, Union


class ArgAction(Enum):
    """Supported argparse actions."""
    STORE = "store"
    STORE_TRUE = "store_true"
    COUNT = "count"


@dataclass
class Argument:  # pylint: disable=too-many-instance-attributes
    """
    Definition of a single CLI option argument (--flag).

    This represents one add_argument() call for a flag-style argument.
    """
    # Identity
    name: str                           # Long form without dashes (e.g., "format")
    short: Optional[str] = None         # Short form without dash (e.g., "f")

    # Argparse configuration
    help: str = ""
    action: ArgAction = ArgAction.STORE
    type: Optional[type] = None
    default: Any = None
    choices: Optional[List[Any]] = None
    metavar: Optional[str] = None
    required: bool = False
    dest: Optional[str] = None          # Override destination name

    def get_flags(self) -> List[str]:
        """Return the flag strings for argparse."""
        flags = []
        if self.short:
            flags.append(f"-{self.short}")
        flags.append(f"--{self.name}")
        return flags

    def get_dest(self) -> str:
        """Return the destination name for argparse."""
        if self.dest:
            return self.dest
        return self.name.replace("-", "_")


@dataclass
class Positional:
    """Definition of a positional argument."""
    name: str                           # Metavar and destination
    help: str = ""
    nargs: Optional[Union[str, int]] = None


@dataclass
class CommonArgumentSet:
    """A reusable set of arguments that can be included in multiple commands."""
    name: str                           # Identifier for include_common
    arguments: List[Argument] = field(default_factory=list)


@dataclass
class Command:
    """Definition of a CLI command/subcommand."""
    # Identity
    name: str
    help: str
    aliases: List[str] = field(default_factory=list)

    # Arguments
    positionals: List[Positional] = field(default_factory=list)
    arguments: List[Argument] = field(default_factory=list)

    # Inherit common argument sets
    include_common: List[str] = field(default_factory=list)


@dataclass
class CLISchema:
    """The complete CLI schema - single source of truth."""
    prog: str = "optschema"
    description: str = ""

    # Commands
    commands: List[Command] = field(default_factory=list)

    # Reusable argument sets
    common_sets: List[CommonArgumentSet] = field(default_factory=list)

    def get_command(self, name: str) -> Optional[Command]:
        """Get a command by name or alias."""
        for cmd in self.commands:
            if cmd.name == name or name in cmd.aliases:
                return cmd
        return None

    def get_common_set(self, name: str) -> Optional[CommonArgumentSet]:
        """Get a common argument set by name."""
        for cs in self.common_sets:
            if cs.name == name:
                return cs
        return None
