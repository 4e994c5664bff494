"""CLI exception handling."""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import TypeVar

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.panel import Panel

from vdproj_xml.errors import ConversionError
from vdproj_xml.models.loader import LoaderError

T = TypeVar("T")

console = Console(stderr=True)


def handle_exceptions(
    verbose: bool = False,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Handle exceptions in CLI commands with formatted output.

    A `verbose` keyword argument passed to the command overrides the
    decorator's default.

    Args:
    ----
        verbose: Whether to show full tracebacks.

    Returns:
    -------
        Decorator function.

    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: object, **kwargs: object) -> T:
            show_details = bool(kwargs.get("verbose", verbose))
            try:
                return func(*args, **kwargs)
            except ConversionError as e:
                _handle_conversion_error(e, show_details)
                raise typer.Exit(1) from None
            except PydanticValidationError as e:
                _handle_pydantic_error(e, show_details)
                raise typer.Exit(1) from None
            except LoaderError as e:
                _handle_loader_error(e)
                raise typer.Exit(1) from None
            except FileNotFoundError as e:
                _handle_file_error(e)
                raise typer.Exit(1) from None
            except PermissionError as e:
                _handle_permission_error(e)
                raise typer.Exit(1) from None
            except (typer.Exit, typer.Abort):
                raise
            except Exception as e:
                _handle_generic_error(e, show_details)
                raise typer.Exit(1) from None

        return wrapper

    return decorator


def _read_source(path: Path | None) -> str | None:
    if path is None:
        return None
    try:
        return path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError:
        return None


def _handle_conversion_error(error: ConversionError, verbose: bool) -> None:
    """Handle parse and structure errors."""
    from vdproj_xml.cli.error_formatter import ErrorFormatter

    source = None
    if error.location is not None:
        source = _read_source(error.location.path)

    ErrorFormatter(console, show_context=True).format_error(error, source)

    if verbose and error.__cause__ is not None:
        console.print(f"[dim]Caused by: {error.__cause__!r}[/dim]")


def _handle_pydantic_error(error: PydanticValidationError, verbose: bool) -> None:
    """Handle invalid config file settings."""
    from vdproj_xml.cli.pydantic_errors import (
        format_pydantic_location,
        get_suggestion_for_error,
        translate_pydantic_error,
    )

    console.print("[red bold]Invalid Configuration[/red bold]")
    console.print()

    for err in error.errors():
        location = format_pydantic_location(err["loc"])
        msg = translate_pydantic_error(err)
        suggestion = get_suggestion_for_error(err)

        console.print(f"[red]✗[/red] {location}")
        console.print(f"  {msg}")
        console.print(f"  [dim]({err['type']})[/dim]")

        if suggestion:
            console.print(f"  [green]💡 {suggestion}[/green]")

        console.print()

    if verbose:
        console.print("[dim]Full error:[/dim]")
        console.print(str(error))


def _handle_loader_error(error: LoaderError) -> None:
    """Handle unreadable config files."""
    console.print(
        Panel(
            f"[red]{error}[/red]",
            title="Configuration Error",
            border_style="red",
        )
    )


def _handle_file_error(error: FileNotFoundError) -> None:
    """Handle file not found errors."""
    filename = error.filename or "unknown"
    console.print(
        Panel(
            f"[red]File not found: {filename}[/red]\n\n"
            "Please check that the file path is correct.",
            title="Error",
            border_style="red",
        )
    )


def _handle_permission_error(error: PermissionError) -> None:
    """Handle permission errors."""
    filename = error.filename or "unknown"
    console.print(
        Panel(
            f"[red]Permission denied: {filename}[/red]\n\n" "Check file permissions and try again.",
            title="Error",
            border_style="red",
        )
    )


def _handle_generic_error(error: Exception, verbose: bool) -> None:
    """Handle unexpected errors."""
    console.print(
        Panel(
            f"[red]An unexpected error occurred:[/red]\n{error}",
            title="Error",
            border_style="red",
        )
    )

    if verbose:
        console.print("\n[dim]Traceback:[/dim]")
        console.print(traceback.format_exc())
    else:
        console.print("\n[dim]Use --verbose for full traceback[/dim]")
