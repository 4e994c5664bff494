"""Command-line interface for the vdproj-xml converter."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape as escape_markup
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from vdproj_xml import __version__
from vdproj_xml.cli.exception_handler import handle_exceptions
from vdproj_xml.converters import Direction, convert_file, detect_direction, read_events
from vdproj_xml.ir import Element, build_tree, collect_stats
from vdproj_xml.models import (
    ConversionOptions,
    VdprojLayout,
    load_options,
    options_from_environment,
)

# Create Typer app
app = typer.Typer(
    name="vdproj-xml",
    help="Convert Visual Studio installer projects (.vdproj) to XML and back.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich consoles for output
console = Console()
error_console = Console(stderr=True, style="bold red")

InputFile = Annotated[
    Path,
    typer.Argument(
        help="Input .vdproj or .xml file.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
]

Verbose = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-V",
        help="Show debug logging and error details.",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"vdproj-xml version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send library debug logging to the terminal when verbose."""
    logger = logging.getLogger("vdproj_xml")
    if not verbose:
        return
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.setLevel(logging.DEBUG)


def _check_supported(input_file: Path) -> None:
    try:
        detect_direction(input_file)
    except ValueError as e:
        error_console.print(f"\n[bold red]✗ {e}[/bold red]\n")
        raise typer.Exit(code=1) from None


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Convert Visual Studio installer projects (.vdproj) to XML and back.

    The direction is chosen from the input file extension. Set
    VDPROJECT2XML_INDENT=true to pretty-print XML output.
    """


@app.command()
@handle_exceptions()
def convert(
    input_file: InputFile,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file. Defaults to the input filename with the other extension.",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    pretty: Annotated[
        bool | None,
        typer.Option(
            "--pretty/--no-pretty",
            help="Indent XML output. Defaults to $VDPROJECT2XML_INDENT or the config file.",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="YAML file with conversion options.",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    layout: Annotated[
        VdprojLayout | None,
        typer.Option(
            "--layout",
            "-l",
            help="Indentation style of .vdproj output.",
            case_sensitive=False,
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite output file if it exists.",
        ),
    ] = False,
    verbose: Verbose = False,
) -> None:
    """Convert a .vdproj file to XML, or an XML file back to .vdproj.

    Examples
    --------
        vdproj-xml convert Setup.vdproj
        vdproj-xml convert Setup.vdproj --pretty
        vdproj-xml convert Setup.xml -o Setup.vdproj --force
        vdproj-xml convert Setup.xml --layout visual-studio

    """
    configure_logging(verbose)
    _check_supported(input_file)

    if output is None:
        output = input_file.with_suffix(detect_direction(input_file).output_suffix)

    if output.exists() and not force:
        error_console.print(
            f"\n[bold red]✗ Output file already exists: {output}[/bold red]\n"
            "Use --force to overwrite."
        )
        raise typer.Exit(code=1)

    options = resolve_options(config, pretty, layout)
    written = convert_file(input_file, output, options)

    file_size = written.stat().st_size
    console.print(f"\n[bold green]✓ Wrote {file_size:,} bytes to {written}[/bold green]\n")


def resolve_options(
    config: Path | None,
    pretty: bool | None,
    layout: VdprojLayout | None,
) -> ConversionOptions:
    """Combine config file, environment and command line options.

    Later sources win: `VDPROJECT2XML_INDENT`, then settings present in the
    config file, then flags.
    """
    options = options_from_environment(os.environ, ConversionOptions())

    update: dict[str, object] = {}
    if config is not None:
        from_file = load_options(config)
        update.update({name: getattr(from_file, name) for name in from_file.model_fields_set})
    if pretty is not None:
        update["pretty_print"] = pretty
    if layout is not None:
        update["vdproj_layout"] = layout
    return options.model_copy(update=update) if update else options


@app.command()
@handle_exceptions()
def validate(
    input_file: InputFile,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only output errors, no success messages.",
        ),
    ] = False,
    verbose: Verbose = False,
) -> None:
    """Check that a .vdproj or XML file can be converted, without writing anything.

    Examples
    --------
        vdproj-xml validate Setup.vdproj
        vdproj-xml validate Setup.xml --quiet

    """
    configure_logging(verbose)
    _check_supported(input_file)

    count = 0
    for _ in read_events(input_file):
        count += 1

    if not quiet:
        console.print(f"\n[bold green]✓ {input_file.name} is valid[/bold green] ({count} events)\n")


@app.command()
@handle_exceptions()
def info(
    input_file: InputFile,
    depth: Annotated[
        int,
        typer.Option(
            "--depth",
            "-d",
            min=0,
            help="Number of levels to show in the element tree (0 hides the tree).",
        ),
    ] = 2,
    verbose: Verbose = False,
) -> None:
    """Display statistics and the top-level structure of a .vdproj or XML file.

    Examples
    --------
        vdproj-xml info Setup.vdproj
        vdproj-xml info Setup.xml --depth 3

    """
    configure_logging(verbose)
    _check_supported(input_file)

    roots = build_tree(read_events(input_file))
    stats = collect_stats(roots)

    is_xml = detect_direction(input_file) is Direction.XML_TO_VDPROJ
    console.print(
        Panel.fit(
            f"[bold]{'XML' if is_xml else 'vdproj'} document[/bold]\n" f"File: {input_file}",
            title="File Info",
        )
    )

    table = Table(title="Document Summary", show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Elements", str(stats.elements))
    table.add_row("Values", str(stats.values))
    table.add_row("Keyless entries", str(stats.keyless))
    table.add_row("Empty blocks", str(stats.empty_blocks))
    table.add_row("Max depth", str(stats.max_depth))
    console.print(table)

    if depth > 0:
        tree = Tree("[bold]Elements[/bold]")
        for root in roots:
            _add_tree_node(tree, root, depth)
        console.print(tree)


def _describe(element: Element) -> str:
    name = escape_markup(element.name)
    if element.value is None:
        return f"[cyan]{name}[/cyan]"
    value_type = escape_markup(element.value.value_type)
    value = escape_markup(element.value.value)
    if element.keyless:
        return f"[magenta]{value_type}[/magenta]:{value}"
    return f"[cyan]{name}[/cyan] = {value_type}:{value}"


def _add_tree_node(parent: Tree, element: Element, depth: int) -> None:
    label = _describe(element)
    if element.children and depth == 1:
        label += f" [dim]({len(element.children)} children)[/dim]"
    node = parent.add(label, highlight=False)
    if depth > 1:
        for child in element.children:
            _add_tree_node(node, child, depth - 1)


if __name__ == "__main__":
    app()
