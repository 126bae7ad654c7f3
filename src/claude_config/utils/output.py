"""Rich console output utilities."""

from rich.console import Console
from rich.markup import escape


console = Console()


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {escape(message)}", style="red")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {escape(message)}")


def print_banner(title: str) -> None:
    """Print a title framed by rules."""
    console.rule(f"[bold blue]{escape(title)}[/bold blue]", style="blue")
