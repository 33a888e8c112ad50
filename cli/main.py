"""pushjobs CLI - Main Entry Point"""

import typer
from typing import Optional
from rich.console import Console
from rich.panel import Panel

from .commands import config, jobs
from .utils.formatting import print_error, print_info
from .utils.config_manager import config as config_manager
from .client.endpoints import DispatcherClient

console = Console()

app = typer.Typer(
    name="pushjobs",
    help="📨 pushjobs - push notification dispatcher CLI",
    rich_markup_mode="rich",
)

app.add_typer(jobs.app, name="jobs")
app.add_typer(config.app, name="config")


@app.command()
def status():
    """📊 Check dispatcher status and connectivity"""
    base_url = config_manager.get("api.base_url")
    print_info(f"Checking connection to: {base_url}")

    try:
        with DispatcherClient(base_url) as client:
            health = client.health_check()
    except Exception as e:
        print_error(f"Failed to connect: {e}")
        console.print(Panel(
            f"🚫 [red]Connection Failed[/red]\n\n"
            f"Make sure the dispatcher API is running at:\n"
            f"[blue]{base_url}[/blue]\n\n"
            f"You can update the API URL with:\n"
            f"[cyan]pushjobs config set api.base_url <url>[/cyan]",
            title="Connection Error",
            border_style="red"
        ))
        raise typer.Exit(1)

    push = health.get("push", {})
    console.print(Panel(
        f"🚀 [green]Connected Successfully![/green]\n\n"
        f"• Version: [cyan]{health.get('version', 'unknown')}[/cyan]\n"
        f"• Environment: [yellow]{health.get('environment', 'unknown')}[/yellow]\n"
        f"• Push provider: [magenta]{push.get('provider', 'unknown')}[/magenta]\n"
        f"• Collections: [cyan]{', '.join(health.get('collections', [])) or '—'}[/cyan]\n"
        f"• API URL: [blue]{base_url}[/blue]",
        title="System Status",
        border_style="green"
    ))


@app.command()
def version():
    """📎 Show CLI version information"""
    from . import __version__

    console.print(Panel(
        f"📨 [bold cyan]pushjobs CLI[/bold cyan]\n\n"
        f"• Version: [green]{__version__}[/green]",
        title="Version Info",
        border_style="cyan"
    ))


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None, "--version", "-v", help="Show version and exit"
    ),
):
    """
    📨 pushjobs - create notification jobs and check the dispatcher
    """
    if version:
        from . import __version__
        console.print(f"pushjobs CLI v{__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


if __name__ == "__main__":
    app()
