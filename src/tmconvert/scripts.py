import json
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from enum import StrEnum
from pathlib import Path
from typing import Annotated

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme
from typer import Argument, Exit, Option, Typer, echo

from tmconvert.errors import (
    ConversionError,
    OutputOpenFailure,
    ReadFailure,
    SerializationFailure,
    SourceNotFound,
    SourceOpenFailure,
    WriteFailure,
)
from tmconvert.parser import parse_lines
from tmconvert.turing_machine import Configuration

app = Typer(
    help="Converter of human readable turing machine commands into json.",
    no_args_is_help=True,
    pretty_exceptions_show_locals=False,
)
theme = Theme({
    "success": "green",
    "warning": "orange3",
    "error": "red",
    "heading": "blue",
    "info": "dim cyan",
})
console = Console(theme=theme)
err_console = Console(theme=theme, stderr=True)


class Style(StrEnum):
    pretty = "pretty"
    compact = "compact"


def read_lines(path: Path) -> Iterator[str]:
    if not path.exists():
        raise SourceNotFound(path)
    try:
        file = path.open(encoding="utf-8")
    except OSError as e:
        raise SourceOpenFailure(path, e) from e
    with file:
        while True:
            try:
                line = file.readline()
            except (OSError, UnicodeDecodeError) as e:
                raise ReadFailure(path, e) from e
            if not line:
                return
            yield line


def serialize(config: Configuration, *, pretty: bool) -> str:
    try:
        if pretty:
            return json.dumps(config.to_dict(), indent=2, ensure_ascii=False)
        else:
            return json.dumps(config.to_dict(), separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationFailure(f"Error occured while converting to json! Reason: {e}") from e


def write_output(data: str, out: Path) -> None:
    try:
        file = out.open("w", encoding="utf-8")
    except OSError as e:
        raise OutputOpenFailure(out, e) from e
    try:
        with file:
            file.write(data)
    except (OSError, UnicodeEncodeError) as e:
        out.unlink(missing_ok=True)
        raise WriteFailure(out, e) from e


def write_stdout(data: str) -> None:
    try:
        echo(data)
    except OSError as e:
        # point the dead stream at devnull so the final flush at exit doesn't fail again
        with suppress(OSError, ValueError):
            os.dup2(os.open(os.devnull, os.O_WRONLY), sys.stdout.fileno())
        raise WriteFailure("stdout", e) from e
    except UnicodeEncodeError as e:
        raise WriteFailure("stdout", e) from e


def load_configuration(source: Path, *, verbose: bool = False) -> Configuration:
    def report_ignored(line_num: int, text: str) -> None:
        err_console.print(f"[warning]Ignoring unrecognized line {line_num}:[/] {escape(text)}")

    config = parse_lines(read_lines(source), on_ignored=report_ignored if verbose else None)
    if verbose:
        for rule in config.commands:
            err_console.print(f"[info]Transition:[/] {escape(str(rule))}")
        err_console.print(
            f"[info]Parsed {len(config.commands)} transitions, alphabet '{escape(config.alphabet or '')}' "
            f"and tape '{escape(config.tape or '')}'."
        )
    return config


@contextmanager
def exit_on_error() -> Iterator[None]:
    try:
        yield
    except ConversionError as e:
        err_console.print(f"[error]{escape(e.message)}")
        raise Exit(e.exit_code) from e


@app.command()
def convert(
    source: Annotated[Path, Argument(help="Path to the human readable turing machine description.")],
    *,
    out: Annotated[
        Path | None,
        Option("--out", "-o", help="File to save the json to. The default prints it to stdout instead."),
    ] = None,
    style: Annotated[
        Style | None,
        Option(
            "--style",
            "-s",
            help="Layout of the json output. Defaults to pretty output on stdout and compact output in files.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        Option("--verbose", "-v", help="Report lines that were ignored and summarize the parsed machine."),
    ] = False,
):
    """Convert a turing machine description into a json configuration."""
    with exit_on_error():
        config = load_configuration(source, verbose=verbose)
        style = style or (Style.pretty if out is None else Style.compact)
        data = serialize(config, pretty=style == Style.pretty)
        if out is None:
            write_stdout(data)
        else:
            write_output(data, out)
            if verbose:
                err_console.print(f"[success]Saved configuration to '{escape(str(out))}'.")


@app.command()
def show(
    source: Annotated[Path, Argument(help="Path to the human readable turing machine description.")],
):
    """Display the parsed turing machine as a table."""
    with exit_on_error():
        config = load_configuration(source)

    table = Table(title=escape(source.name), header_style="heading")
    for column in ("state", "read", "next state", "write", "move"):
        table.add_column(column)
    for rule in config.commands:
        table.add_row(
            f"q{rule.state}",
            escape(rule.reading_char),
            f"q{rule.next_state}",
            escape(rule.place_char),
            rule.next_move.name,
        )
    console.print(table)
    console.print(f"[heading]alphabet:[/] {escape(config.alphabet or '')}")
    console.print(f"[heading]tape:[/] {escape(config.tape or '')}")


if __name__ == "__main__":
    app()
