"""
droidsign CLI - Main entry point.

Validates Android release signing and build configuration before Gradle runs.
"""

import typer

from droidsign.ui.console import console, print_banner

# Create the main Typer app
app = typer.Typer(
    name="droidsign",
    help="droidsign - Android release signing & build configuration",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", "-v", help="Show version"),
):
    """
    droidsign - Android release signing & build configuration

    Loads key.properties and droidsign.yaml, fails fast when signing material
    is missing, and renders what Gradle needs for a signed release build.
    """
    if version:
        from droidsign import __version__
        console.print(f"droidsign CLI v{__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        print_banner()
        console.print("\nRun [bold cyan]droidsign --help[/] for available commands.\n")


# Import and register commands
from droidsign.cli.check_cmd import check_command
from droidsign.cli.init_cmd import init_command
from droidsign.cli.plan_cmd import plan_command, gradle_args_command

app.command(name="init", help="Create key.properties and droidsign.yaml")(init_command)
app.command(name="check", help="Validate key.properties release signing")(check_command)
app.command(name="plan", help="Show the resolved release build plan")(plan_command)
app.command(name="gradle-args", help="Print Gradle injected-signing arguments")(gradle_args_command)


if __name__ == "__main__":
    app()
