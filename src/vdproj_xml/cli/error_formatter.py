"""Error message formatting with Rich."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from vdproj_xml.errors import ConversionError, SourceLocation


class ErrorFormatter:
    """Formats conversion errors for terminal display."""

    def __init__(
        self,
        console: Console | None = None,
        show_context: bool = True,
        max_context_lines: int = 3,
    ) -> None:
        """Initialize formatter.

        Args:
        ----
            console: Rich Console for output.
            show_context: Whether to show source context.
            max_context_lines: Max lines of context to show.

        """
        self.console = console or Console(stderr=True)
        self.show_context = show_context
        self.max_context_lines = max_context_lines

    def format_error(
        self,
        error: ConversionError,
        source_content: str | None = None,
    ) -> None:
        """Format and print a conversion error.

        Args:
        ----
            error: The error to format.
            source_content: Text of the input file, for a context snippet.

        """
        self.console.print(self._build_summary(error))
        self.console.print()

        self.console.print(f"[red bold]✗[/red bold] {error.message}")

        if error.location:
            self.console.print(f"  [dim]at {error.location}[/dim]")

        if self.show_context and source_content and error.location:
            context = self._get_source_context(source_content, error.location)
            if context:
                self.console.print(context)

        if error.suggestion:
            self.console.print(f"  [green]💡 {error.suggestion}[/green]")

        self.console.print()

    def _build_summary(self, error: ConversionError) -> Panel:
        """Build summary panel."""
        content = Text()
        if error.location and error.location.path:
            content.append(f"File: {error.location.path}\n", style="dim")
        content.append(error.kind.title, style="red bold")

        return Panel(content, title="Conversion Failed", border_style="red")

    def _get_source_context(
        self,
        source: str,
        location: SourceLocation,
    ) -> Syntax | None:
        """Get source context around the error location."""
        if location.line is None:
            return None

        lines = source.splitlines()
        line_no = location.line - 1  # Convert to 0-indexed

        if line_no < 0 or line_no >= len(lines):
            return None

        start = max(0, line_no - self.max_context_lines)
        end = min(len(lines), line_no + self.max_context_lines + 1)

        context = "\n".join(lines[start:end])
        lexer = "xml" if location.path and location.path.suffix.lower() == ".xml" else "text"

        return Syntax(
            context,
            lexer,
            line_numbers=True,
            start_line=start + 1,
            highlight_lines={location.line},
            theme="monokai",
        )
