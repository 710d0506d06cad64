"""
Rich console wrapper for consistent terminal UI across droidsign.
"""

from rich.console import Console
from rich.theme import Theme

# Custom droidsign theme
DROIDSIGN_THEME = Theme({
    "droidsign.title": "bold bright_green",
    "droidsign.success": "bold green",
    "droidsign.warning": "bold yellow",
    "droidsign.error": "bold red",
    "droidsign.info": "dim cyan",
    "droidsign.highlight": "bold magenta",
    "droidsign.muted": "dim white",
    "droidsign.secret": "bold bright_yellow",
    "droidsign.progress": "bold blue",
})

# Global console instance
console = Console(theme=DROIDSIGN_THEME)


def print_banner() -> None:
    """Print the droidsign banner."""
    console.print("[droidsign.title]droidsign[/] [droidsign.muted]- Android release signing & build config[/]")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[droidsign.success]✓[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[droidsign.error]✗[/] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[droidsign.warning]⚠[/] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[droidsign.info]ℹ[/] {message}")


def print_step(step: int, total: int, message: str) -> None:
    """Print a numbered step."""
    console.print(f"[droidsign.progress][{step}/{total}][/] {message}")
