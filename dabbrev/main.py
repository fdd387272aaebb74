#!/usr/bin/env python3
"""Command line entry point for dabbrev."""

import asyncio
import sys
from contextlib import contextmanager

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from dabbrev.completer import menu_key
from dabbrev.config import Settings, setup_logging
from dabbrev.console_app import ConsoleApp
from dabbrev.core.query import last_word, query, suffixes
from dabbrev.core.source import ChainSource, TextSource


def _read_sources(
    files: tuple,
    settings: Settings,
    start_line: int | None,
    end_line: int | None,
    open_end: bool = False,
) -> ChainSource:
    """One TextSource per input file (stdin when none), scanned in order.

    ``open_end`` leaves the last line of the last input open when it has no
    trailing newline, so its unfinished word stays pending.
    """
    if start_line is None:
        start_line = -settings.history_lines
    texts = [f.read() for f in files] if files else [click.get_text_stream("stdin").read()]
    last = len(texts) - 1
    return ChainSource(
        *(
            TextSource(
                text,
                width=settings.wrap_width,
                start_line=start_line,
                end_line=end_line,
                open_end=open_end and number == last,
            )
            for number, text in enumerate(texts)
        )
    )


def _settings(ctx: click.Context) -> Settings:
    return ctx.obj["settings"]


@contextmanager
def _exit_on_error():
    """Exit 0 on Ctrl-C and 1 with a message on any other error."""
    try:
        yield
    except KeyboardInterrupt:
        sys.exit(0)
    except Exception as e:
        print(f"Fatal error: {e}")
        sys.exit(1)


@click.group()
@click.option("--log-level", help="Logging level (overrides DABBREV_LOG_LEVEL)")
@click.option("--trace/--no-trace", default=None, help="Log every tokenizer transition")
@click.option("--width", type=click.IntRange(min=2), help="Soft-wrap input at this many cells")
@click.pass_context
def main(ctx: click.Context, log_level: str | None, trace: bool | None, width: int | None):
    """dabbrev - dynamic abbreviation completion

    Completes a prefix from the words found in previously shown text.

    Examples:
        dabbrev complete fo notes.txt        # words in notes.txt starting with "fo"
        tmux capture-pane -p | dabbrev complete --keys ht
        dabbrev shell session.log            # interactive console
    """
    overrides = {}
    if log_level is not None:
        overrides["DABBREV_LOG_LEVEL"] = log_level
    if trace is not None:
        overrides["DABBREV_TRACE"] = trace
    if width is not None:
        overrides["DABBREV_WRAP_WIDTH"] = width
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        raise click.UsageError(str(e)) from e
    setup_logging(settings.log_level, settings.trace)
    ctx.obj = {"settings": settings}


@main.command()
@click.argument("prefix")
@click.argument("files", nargs=-1, type=click.File("r", encoding="utf-8", errors="replace"))
@click.option("-S", "--start-line", type=int, help="First line to scan (negative counts from the end)")
@click.option("-E", "--end-line", type=int, help="Last line to scan (negative counts from the end)")
@click.option("--keys", is_flag=True, help="Show a lettered menu with the text each choice inserts")
@click.pass_context
def complete(ctx: click.Context, prefix: str, files: tuple, start_line: int | None, end_line: int | None, keys: bool):
    """Print every previously seen word starting with PREFIX."""
    settings = _settings(ctx)
    with _exit_on_error():
        source = _read_sources(files, settings, start_line, end_line)
        matches = query(source, prefix, tracer=settings.tracer())

        if not keys:
            for match in matches:
                click.echo(match)
            return

        matches = matches[: settings.max_completions]
        table = Table(show_header=True, header_style="bold")
        table.add_column("Key", style="cyan")
        table.add_column("Word")
        table.add_column("Inserts", style="green")
        for position, (match, suffix) in enumerate(zip(matches, suffixes(matches, prefix))):
            table.add_row(menu_key(position), match, suffix)
        Console().print(table)


@main.command("last-word")
@click.argument("files", nargs=-1, type=click.File("r", encoding="utf-8", errors="replace"))
@click.option("-S", "--start-line", type=int, help="First line to scan (negative counts from the end)")
@click.option("-E", "--end-line", type=int, help="Last line to scan (negative counts from the end)")
@click.pass_context
def last_word_command(ctx: click.Context, files: tuple, start_line: int | None, end_line: int | None):
    """Print the unfinished word at the very end of the input."""
    settings = _settings(ctx)
    with _exit_on_error():
        source = _read_sources(files, settings, start_line, end_line, open_end=True)
        click.echo(last_word(source, tracer=settings.tracer()))


@main.command()
@click.argument("files", nargs=-1, type=click.File("r", encoding="utf-8", errors="replace"))
@click.pass_context
def shell(ctx: click.Context, files: tuple):
    """Interactive console completing from FILES and everything typed."""
    settings = _settings(ctx)
    with _exit_on_error():
        app = ConsoleApp(settings, "".join(f.read() for f in files))
        asyncio.run(app.run())


if __name__ == "__main__":
    main()
