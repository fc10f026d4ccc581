import typing

import rich, rich.console


class OptSchemaPrinter:
    """
    Console output. Generated text and progress go to stdout (`raw`);
    warnings, errors and tracebacks go to stderr (`err`), so that
    `optschema emit cmd.ts > cmd.command.ts` captures the module only.
    """

    def __init__(self):
        self.stack = []
        self.raw   = rich.console.Console()
        self.err   = rich.console.Console(stderr=True)

    def reset(self):
        self.stack = []

    def indent(self):
        self.stack.append("  ")

    def unindent(self):
        self.stack.pop()

    def _indented(self, msg: typing.Any) -> str:
        return '\n'.join(f"{''.join(self.stack)}{s}" for s in str(msg).split('\n'))

    def print(self, msg: typing.Any = None, *args, no_indent: bool = False, **kwargs):
        if msg is None:
            msg = ""

        text = str(msg) if no_indent else self._indented(msg)
        self.raw.print(text, *args, soft_wrap=True, **kwargs)

    def warn(self, msg: str):
        self.err.print(self._indented(f"[bold yellow]Warning[/bold yellow]: {msg}"), soft_wrap=True)

    def error(self, msg: str):
        self.err.print(f"\n\n{msg}\n", soft_wrap=True)

    def print_exception(self):
        self.err.print_exception()


cons = OptSchemaPrinter()
