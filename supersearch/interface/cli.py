# supersearch/interface/cli.py

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text

from supersearch.domain.interfaces import ResultsViewPort
from supersearch.domain.models import RebuildReport, Suggestion


console = Console()


class RichResultsView(ResultsViewPort):
    """
    Terminal stand-in for the search overlay: the results list is a table,
    showing and hiding the overlay prints a rule.
    """

    def __init__(self, out: Console = console):
        self._console = out
        self.highlight_terms: List[str] = []
        self.visible = False

    def render(self, suggestions: List[Suggestion]) -> None:
        if not suggestions:
            self._console.print("[dim]No suggestions.[/dim]")
            return

        table = Table(box=box.SIMPLE, show_header=True, header_style="bold cyan")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Title")
        table.add_column("Link", style="blue")

        for rank, suggestion in enumerate(suggestions, start=1):
            title = Text(suggestion.title)
            title.highlight_words(self.highlight_terms, style="bold yellow", case_sensitive=False)
            table.add_row(str(rank), title, suggestion.link)

        self._console.print(table)

    def clear(self) -> None:
        self._console.print("[dim]Suggestions cleared.[/dim]")

    def show(self) -> None:
        self.visible = True
        self._console.rule("[bold cyan]Supersearch[/bold cyan]")

    def hide(self) -> None:
        self.visible = False
        self._console.rule("[dim]closed[/dim]")


def display_welcome_banner() -> None:
    console.print(Panel.fit(
        "[bold cyan]🔍 Supersearch[/bold cyan]\n"
        "[dim]Type a few letters, pick a suggestion, land on the page.[/dim]",
        box=box.DOUBLE,
        border_style="cyan",
    ))


def display_engine_status(document_count: int, ready: bool) -> None:
    if ready:
        console.print(f"\n[green]✓[/green] Snapshot loaded — [bold]{document_count}[/bold] documents searchable.\n")
    else:
        console.print("\n[yellow]⚠[/yellow] Snapshot unavailable — suggestions will stay empty.\n")


def display_rebuild_report(report: RebuildReport) -> None:
    status = "[green]updated[/green]" if report.changed else "[dim]unchanged[/dim]"
    console.print(Panel(
        f"📄 Snapshot: [bold]{report.snapshot_path}[/bold]\n"
        f"🧾 Documents: [bold]{report.documents_written}[/bold]\n"
        f"🔑 SHA-256: {report.snapshot_sha256}\n"
        f"Status: {status}",
        title="[bold]Index rebuilt[/bold]",
        border_style="green",
        box=box.ROUNDED,
    ))


def prompt_for_query() -> str:
    return Prompt.ask("\n[bold yellow]🔎 Search[/bold yellow]", default="")


def prompt_for_selection(count: int) -> Optional[int]:
    """Ask which suggestion to open. Returns a zero-based index or None to skip."""
    if count == 0:
        return None
    answer = Prompt.ask(
        "[dim]Open suggestion #[/dim]",
        choices=[str(n) for n in range(1, count + 1)] + ["-"],
        default="-",
    )
    return None if answer == "-" else int(answer) - 1


def display_navigation(link: str) -> None:
    console.print(f"[bold green]→[/bold green] {link}")


def display_error(message: str) -> None:
    console.print(f"\n[bold red]✗ Error:[/bold red] {message}\n")


def ask_continue() -> bool:
    answer = Prompt.ask(
        "\n[dim]Search again?[/dim]",
        choices=["y", "n"],
        default="y",
    )
    return answer.lower() == "y"
