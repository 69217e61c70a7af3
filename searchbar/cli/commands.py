"""CLI commands for searchbar."""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from searchbar import __version__
from searchbar.config.loader import load_config
from searchbar.config.schema import Config
from searchbar.panel.controller import SearchController
from searchbar.panel.editor import BufferEditor
from searchbar.search.history import ModeHistory, encode_modes
from searchbar.search.modes import ModeSet
from searchbar.session.options_store import OptionsStore

app = typer.Typer(
    name="searchbar",
    help="searchbar - incremental search and replace over text files",
    no_args_is_help=True,
)
console = Console()

_state: dict[str, bool] = {"verbose": False}


def version_callback(value: bool) -> None:
    if value:
        console.print(f"searchbar v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """searchbar entrypoint."""
    del version
    _state["verbose"] = verbose


def _setup() -> Config:
    config = load_config()
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if _state["verbose"] else config.log_level)
    return config


def _read_file(path: Path) -> str:
    if not path.is_file():
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(1)
    return path.read_text(encoding="utf-8")


def _open_panel(
    config: Config,
    editor: BufferEditor,
    query: str,
    modes: ModeSet,
) -> SearchController:
    controller = SearchController(
        editor,
        store=OptionsStore(config.options_file),
        history_depth=config.history.depth,
    )
    controller.set_modes(modes)
    controller.activate("", take_focus=True)
    # clear the field first so the query always arrives as a fresh edit
    controller.on_query_edited("")
    controller.on_query_edited(query)
    return controller


def _position(text: str, offset: int) -> tuple[int, int]:
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column


def _mode_flags(modes: ModeSet) -> str:
    names = []
    if modes.case_sensitive:
        names.append("case")
    if modes.effective_whole_word:
        names.append("word")
    if modes.regex:
        names.append("regex")
    if modes.effective_multi_line:
        names.append("multi")
    return ", ".join(names) or "-"


@app.command()
def find(
    file: Path = typer.Argument(..., help="File to search."),
    query: str = typer.Argument(..., help="Search string or pattern."),
    case: bool = typer.Option(False, "--case", help="Match case."),
    word: bool = typer.Option(False, "--word", help="Whole words only (literal mode)."),
    regex: bool = typer.Option(False, "--regex", help="Treat query as a regular expression."),
    multi: bool = typer.Option(False, "--multi", help="Let patterns span lines (regex mode)."),
) -> None:
    """List all hits of QUERY in FILE."""
    config = _setup()
    text = _read_file(file)
    editor = BufferEditor(text, editable=False)
    modes = ModeSet(case_sensitive=case, whole_word=word, regex=regex, multi_line=multi)
    controller = _open_panel(config, editor, query, modes)
    controller.commit_history()

    report = editor.last_report
    console.print(report.status if report and report.status else "No search string.")
    if not controller.result.spans:
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Line", justify="right")
    table.add_column("Col", justify="right")
    table.add_column("Text")
    for idx, span in enumerate(controller.result.spans, start=1):
        line, column = _position(text, span.start)
        table.add_row(str(idx), str(line), str(column), repr(text[span.start : span.end]))
    console.print(table)


@app.command()
def replace(
    file: Path = typer.Argument(..., help="File to edit."),
    query: str = typer.Argument(..., help="Search string or pattern."),
    replacement: str = typer.Argument(..., help="Replacement text (\\n, \\t decoded in regex mode)."),
    case: bool = typer.Option(False, "--case", help="Match case."),
    word: bool = typer.Option(False, "--word", help="Whole words only (literal mode)."),
    regex: bool = typer.Option(False, "--regex", help="Treat query as a regular expression."),
    multi: bool = typer.Option(False, "--multi", help="Let patterns span lines (regex mode)."),
    write: bool = typer.Option(False, "--write", "-w", help="Write the result back to FILE."),
) -> None:
    """Replace all hits of QUERY in FILE."""
    config = _setup()
    text = _read_file(file)
    editor = BufferEditor(text)
    modes = ModeSet(case_sensitive=case, whole_word=word, regex=regex, multi_line=multi)
    controller = _open_panel(config, editor, query, modes)
    count = controller.replace(replacement)

    if write:
        if count:
            file.write_text(editor.text(), encoding="utf-8")
            logger.info(f"[cli] wrote {file} ({count} replacement(s))")
        console.print(f"[green]OK[/green] {count} replacement(s) in {file}")
    else:
        console.print(editor.text(), end="", markup=False, highlight=False)


@app.command()
def history() -> None:
    """Show remembered search terms and their modes."""
    config = _setup()
    options = OptionsStore(config.options_file).load()
    if not options.searched:
        console.print("[dim]No search history.[/dim]")
        return

    modes_by_term = ModeHistory.deserialize(options.search_modes, options.searched)
    table = Table(show_header=True, header_style="bold")
    table.add_column("Term")
    table.add_column("Flags")
    table.add_column("Modes")
    for term in options.searched:
        modes = modes_by_term.lookup(term) or ModeSet()
        table.add_row(repr(term), encode_modes(modes), _mode_flags(modes))
    console.print(table)
    if options.replaced:
        console.print(f"Last replacement: {options.replaced[0]!r}")


if __name__ == "__main__":
    app()
