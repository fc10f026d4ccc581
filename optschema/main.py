#!/usr/bin/env python3

import os, json, typing, argparse, posixpath

from rich.markup import escape

from .cli          import OPTSCHEMA_CLI_SCHEMA, COMMAND_ALIASES, generate_parser
from .cli.commands import EMIT_SUFFIX
from .common       import OptSchemaException, dump_yaml, file_write, format_list_to_string
from .config       import OptSchemaConfig
from .declarations import Project
from .emit         import generate_command_module, schema_to_dict
from .printer      import cons
from .schema       import build_source_schemas


def parse(argv: typing.Optional[typing.List[str]] = None) -> argparse.Namespace:
    parser, _ = generate_parser(OPTSCHEMA_CLI_SCHEMA)
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        raise SystemExit(1)

    args.command = COMMAND_ALIASES.get(args.command, args.command)
    return args


def inspect(args: argparse.Namespace, config: OptSchemaConfig) -> None:
    project = Project()
    data    = {}

    for path in args.files:
        source = project.load(path)
        data[source.path] = [schema_to_dict(schema) for schema in build_source_schemas(source, config)]

    if args.format == "json":
        text = json.dumps(data, indent=2)
    else:
        text = dump_yaml(data)

    cons.print(text, no_indent=True, markup=False, highlight=False)


def emit(args: argparse.Namespace, config: OptSchemaConfig) -> None:
    project = Project()
    source  = project.load(args.file)
    schemas = build_source_schemas(source, config)

    if len(schemas) == 0:
        cons.warn(f"[bold]{source.path}[/bold] exports no functions; nothing to generate.")
        return

    directory = args.output if args.output is not None else posixpath.dirname(source.path)

    if args.output is not None:
        names = format_list_to_string([schema.name for schema in schemas], "bold magenta")
        cons.print(f"Generating {names} from [bold]{source.path}[/bold]")
        cons.indent()

    for schema in schemas:
        module_path = posixpath.normpath(posixpath.join(directory.replace("\\", "/"), f"{schema.name}{EMIT_SUFFIX}"))
        text        = generate_command_module(schema, module_path, config.emit)

        if args.output is None:
            cons.print(f"// {module_path}", no_indent=True, markup=False, highlight=False)
            cons.print(text, no_indent=True, markup=False, highlight=False)
            continue

        os.makedirs(args.output, exist_ok=True)
        file_write(module_path, text, if_different=True)
        cons.print(f"[bold magenta]{schema.name}[/bold magenta] -> {module_path}")

    if args.output is not None:
        cons.unindent()


def __run(args: argparse.Namespace) -> None:
    config = OptSchemaConfig.load(args.config)

    {"inspect": inspect, "emit": emit}[args.command](args, config)


def main(argv: typing.Optional[typing.List[str]] = None) -> int:
    try:
        __run(parse(argv))
    except OptSchemaException as exc:
        cons.reset()
        cons.error(f"[bold red]Error[/bold red]: {escape(str(exc))}")
        return 1
    except KeyboardInterrupt:
        return 1
    except Exception as exc:
        cons.reset()
        cons.print_exception()
        cons.error(f"[bold red]ERROR[/bold red]: An unexpected exception occurred: {escape(str(exc))}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
