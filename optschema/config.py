import os
import typing
import dataclasses

from .common import OPTSCHEMA_CONFIG_FILENAME, OptSchemaException, file_load_yaml


DEFAULT_DEMAND_OPTION_TAGS = ["demandOption", "require", "required"]


@dataclasses.dataclass
class Resolve:
    options_interface:  str
    demand_option_tags: typing.List[str]

    def __init__(self, data: dict) -> None:
        self.options_interface  = data.get("options-interface",  "Options")
        self.demand_option_tags = list(data.get("demand-option-tags", DEFAULT_DEMAND_OPTION_TAGS))

        if not self.demand_option_tags:
            raise OptSchemaException("Config: 'resolve.demand-option-tags' must not be empty")


@dataclasses.dataclass
class Emit:
    indent: int
    quote:  str

    def __init__(self, data: dict) -> None:
        self.indent = int(data.get("indent", 2))
        self.quote  =     data.get("quote",  "'")

        if self.quote not in ("'", '"'):
            raise OptSchemaException(f"Config: 'emit.quote' must be a single or double quote, got {self.quote!r}")


@dataclasses.dataclass
class OptSchemaConfig:
    resolve: Resolve
    emit:    Emit

    def __init__(self, data: typing.Optional[dict] = None) -> None:
        data = data or {}

        if not isinstance(data, dict):
            raise OptSchemaException("Config: top level must be a mapping")

        self.resolve = Resolve(data.get("resolve") or {})
        self.emit    = Emit   (data.get("emit")    or {})

    @staticmethod
    def load(filepath: typing.Optional[str] = None) -> "OptSchemaConfig":
        """ Load the configuration from filepath, or from ./optschema.yaml when
            it exists. Missing files and keys fall back to defaults. """
        if filepath is None:
            if not os.path.exists(OPTSCHEMA_CONFIG_FILENAME):
                return OptSchemaConfig()
            filepath = OPTSCHEMA_CONFIG_FILENAME

        return OptSchemaConfig(file_load_yaml(filepath))


DEFAULT_CONFIG = OptSchemaConfig()
