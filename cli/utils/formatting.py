"""Rich Formatting Utilities for CLI Output"""

from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()

OUTCOME_STYLES = {"sent": "green", "skipped": "yellow", "failed": "red"}


def print_success(message: str):
    """Print success message with green styling"""
    console.print(f"[green]✓ {message}[/green]")


def print_error(message: str):
    """Print error message with red styling"""
    console.print(f"[red]✗ {message}[/red]")


def print_warning(message: str):
    """Print warning message with yellow styling"""
    console.print(f"[yellow]⚠ {message}[/yellow]")


def print_info(message: str):
    """Print info message with blue styling"""
    console.print(f"[blue]ℹ {message}[/blue]")


def create_message_table(message: dict[str, Any]) -> Table:
    """Create a table for an outbound push message"""
    table = Table(title="Outbound Message", box=box.ROUNDED, show_header=False)

    table.add_column("Field", justify="left", style="cyan", no_wrap=True)
    table.add_column("Value", justify="left", style="white")

    notification = message.get("notification", {})
    table.add_row("target", _short_token(message.get("target")))
    table.add_row("notification.title", _or_dash(notification.get("title")))
    table.add_row("notification.body", _or_dash(notification.get("body")))

    data = message.get("data") or {}
    if data:
        for key, value in data.items():
            table.add_row(f"data.{key}", str(value))
    else:
        table.add_row("data", "{}")

    return table


def create_dispatch_panel(result: dict[str, Any]) -> Panel:
    """Create formatted panel for a dispatch result"""
    outcome = result.get("outcome", "unknown")
    style = OUTCOME_STYLES.get(outcome, "white")

    lines = [f"• Outcome: [{style}]{outcome}[/{style}]"]
    if result.get("target"):
        lines.append(f"• Target: [cyan]{_short_token(result['target'])}[/cyan]")
    if result.get("message_id"):
        lines.append(f"• Message ID: [blue]{result['message_id']}[/blue]")
    if result.get("error_kind"):
        lines.append(f"• Failure: [red]{result['error_kind']}[/red]")
    if result.get("error"):
        lines.append(f"• Error: [dim]{result['error']}[/dim]")

    return Panel("\n".join(lines), title="Dispatch Result", border_style=style)


def _short_token(token: str | None) -> str:
    if not token:
        return "—"
    return token if len(token) <= 24 else f"{token[:12]}…{token[-8:]}"


def _or_dash(value: Any) -> str:
    return "—" if value is None else str(value)
