"""CLI interface for tokseg.

Typer-based inspector that runs a registered tokenizer over a file and shows
how ``TokenString`` segments and classifies the result, with Rich output.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from tokseg import __version__
from tokseg.config import CONFIG_FILE, UNITS, TokSegConfig, default_config, load_config
from tokseg.exceptions import TokSegError
from tokseg.kinds import KIND_PREDICATES
from tokseg.registry import default_registry
from tokseg.token_string import TokenString
from tokseg.tokenizer import validate_tokens

__all__ = ["app"]

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="tokseg",
    help="Inspect how token streams split into chunks, sentences and paragraphs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help=f"Config file (default: ./{CONFIG_FILE} if present)"),
]
TokenizerOption = Annotated[
    str | None,
    typer.Option("--tokenizer", "-t", help="Registered tokenizer name"),
]


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """tokseg command-line inspector."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


def _fail(message: str) -> typer.Exit:
    console.print(message)
    return typer.Exit(code=1)


def _load_settings(config_path: Path | None) -> TokSegConfig:
    if config_path is not None:
        return load_config(config_path)
    local = Path.cwd() / CONFIG_FILE
    if local.exists():
        return load_config(local)
    return default_config()


def _tokenize(
    path: Path, tokenizer_name: str | None, config: TokSegConfig
) -> tuple[str, TokenString]:
    """Read ``path`` and run the selected tokenizer over it."""
    if not path.is_file():
        raise _fail(f"[red]File not found:[/red] {escape(str(path))}")

    name = tokenizer_name or config.tokenizer.name
    if not name:
        raise _fail(
            "[yellow]No tokenizer selected.[/yellow] Pass [bold]--tokenizer[/bold] or set "
            f"[bold]tokenizer.name[/bold] in {CONFIG_FILE}."
        )

    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read %s: %s", path, e)
        raise _fail(f"[red]Cannot read {escape(str(path))}:[/red] {escape(str(e))}") from e
    tokenizer = default_registry.create(name, config)
    tokens = tokenizer.tokenize(source)
    if config.tokenizer.validate:
        validate_tokens(tokens, len(source))

    logger.info("Tokenized %s: %d chars, %d tokens", path.name, len(source), len(tokens))
    return source, TokenString(tokens)


def _display(text: str) -> Text:
    return Text(text.replace("\n", "\\n"))


@app.command()
def version() -> None:
    """Show tokseg version."""
    console.print(f"tokseg {__version__}")


@app.command()
def segment(
    path: Annotated[Path, typer.Argument(help="Text file to segment")],
    unit: Annotated[
        str | None,
        typer.Option("--unit", "-u", help=f"Unit to split into ({', '.join(UNITS)})"),
    ] = None,
    tokenizer: TokenizerOption = None,
    config_path: ConfigOption = None,
    no_spans: Annotated[
        bool,
        typer.Option("--no-spans", help="Hide character spans"),
    ] = False,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", help="Show at most N units (0 = all)"),
    ] = None,
) -> None:
    """Split a file into chunks, sentences or paragraphs."""
    try:
        config = _load_settings(config_path)
        unit = unit or config.output.unit
        if unit not in UNITS:
            raise _fail(f"[red]Unknown unit:[/red] {unit} (expected one of: {', '.join(UNITS)})")
        show_spans = config.output.show_spans and not no_spans
        max_units = config.output.max_units if limit is None else limit

        source, doc = _tokenize(path, tokenizer, config)
        units = {
            "sentences": doc.iter_sentences,
            "chunks": doc.iter_chunks,
            "paragraphs": doc.iter_paragraphs,
        }[unit]()

        table = Table(title=f"{path.name}: {unit}", show_lines=False)
        table.add_column("#", justify="right", style="dim")
        if show_spans:
            table.add_column("Span", style="cyan")
        table.add_column("Text")

        shown = 0
        total = 0
        for i, piece in enumerate(units):
            total += 1
            if max_units and shown >= max_units:
                continue
            row = [str(i)]
            if show_spans:
                row.append(f"[{piece[0].span.start}, {piece[-1].span.end})")
            table.add_row(*row, _display(piece.get_content_string(source)))
            shown += 1
    except TokSegError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e

    console.print(table)
    console.print(f"[green]{total} {unit}[/green] ({len(doc)} tokens)")


@app.command()
def kinds(
    path: Annotated[Path, typer.Argument(help="Text file to classify")],
    tokenizer: TokenizerOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Count tokens per classification."""
    try:
        config = _load_settings(config_path)
        source, doc = _tokenize(path, tokenizer, config)
    except TokSegError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e

    table = Table(title=f"{path.name}: {len(doc)} tokens")
    table.add_column("Kind")
    table.add_column("Count", justify="right", style="bold")
    table.add_column("Last index", justify="right", style="dim")
    for name in KIND_PREDICATES:
        query = doc.query(name)
        count = sum(1 for _ in query.iter_indices())
        last = query.last_index()
        table.add_row(name, str(count), "-" if last is None else str(last))
    console.print(table)

    first_word = doc.first_sentence_word()
    if first_word is not None:
        word = escape(first_word.get_content_string(source))
        console.print(f"First sentence word: [bold]{word}[/bold]")


@app.command()
def tokenizers() -> None:
    """List available tokenizers."""
    try:
        names = default_registry.list_tokenizers()
    except TokSegError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1) from e

    if not names:
        console.print("[yellow]No tokenizers registered.[/yellow]")
        console.print("[dim]Install a package exposing a 'tokseg.tokenizers' entry point.[/dim]")
        return
    for name in names:
        console.print(f"  {name}")
