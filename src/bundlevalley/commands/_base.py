"""Click base classes for the bundlevalley command tree.

``BvCommand`` carries usage examples: an eager ``--examples`` flag
prints them, and ``--help`` appends them as an "Examples" section.

``BvGroup`` resolves subcommands from a ``name -> "module:attr"`` table
on first lookup, so ``bundlevalley --version`` imports no store or
service module.  Commands are listed in table order
(``init`` first, ``stats`` last) instead of alphabetically.
"""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from typing import Any

import click


class _ExamplesMixin:
    """Shared ``examples`` handling for commands and groups."""

    examples: str | None

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(  # type: ignore[attr-defined]
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Print usage examples and exit.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value and self.examples:
            click.echo(self.examples)
            ctx.exit(0)

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)  # type: ignore[misc]
        if not self.examples:
            return
        with formatter.section("Examples"):
            for line in self.examples.splitlines():
                formatter.write(f"{'':>{formatter.current_indent}}{line.strip()}\n")


class BvCommand(_ExamplesMixin, click.Command):
    """A leaf command that accepts ``examples=``."""


class BvGroup(_ExamplesMixin, click.Group):
    """Root group with lazily imported subcommands.

    Args:
        lazy_commands: Command name to ``"package.module:attribute"``.
        examples: Usage examples for the group itself.
    """

    def __init__(
        self,
        *args: Any,
        lazy_commands: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.lazy_commands = dict(lazy_commands or {})

    def list_commands(self, ctx: click.Context) -> list[str]:
        eager = [name for name in self.commands if name not in self.lazy_commands]
        return [*self.lazy_commands, *eager]

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if cmd_name not in self.commands and cmd_name in self.lazy_commands:
            self.add_command(self._import_command(cmd_name), cmd_name)
        return super().get_command(ctx, cmd_name)

    def _import_command(self, cmd_name: str) -> click.Command:
        target = self.lazy_commands[cmd_name]
        module_name, _, attr = target.partition(":")
        command = getattr(importlib.import_module(module_name), attr)
        if not isinstance(command, click.Command):
            msg = f"{target} is not a click command"
            raise TypeError(msg)
        return command
