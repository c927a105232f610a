"""
CLI utilities for recording how a definitions document was produced.
"""

from pathlib import Path

import click

PROGRAM_NAME = "schema_synth"


def _display_value(value) -> str:
    """Show resolved paths by file name only so documents stay machine independent."""
    if isinstance(value, (str, Path)):
        path = Path(str(value))
        if path.is_absolute() and path.parent.exists():
            return path.name
    return str(value)


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Rebuild the invoking command line from the active click context.

    Positional arguments come first, then every option that differs from
    its default; boolean flags are emitted without a value.

    Args:
        click_command: The running click command

    Returns:
        The command line, or just the program name outside a click context
    """
    ctx = click.get_current_context(silent=True)
    if ctx is None or not ctx.params:
        return PROGRAM_NAME

    arguments = []
    options = []
    for param in click_command.params:
        value = ctx.params.get(param.name)
        if value is None or value is False:
            continue

        if isinstance(param, click.Argument):
            arguments.append(_display_value(value))
        elif isinstance(param, click.Option):
            if value == param.default:
                continue
            flag = param.opts[0] if param.opts else f"--{param.name}"
            if param.is_flag:
                options.append(flag)
            else:
                options.extend([flag, _display_value(value)])

    return " ".join([PROGRAM_NAME, *arguments, *options])
