"""
droidsign plan / gradle-args - Resolve the release build plan.
"""

import json
import shlex
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from droidsign.ui.console import print_success, print_error
from droidsign.ui.panels import create_plan_panel, display_panel
from droidsign.core.config import get_config_path, get_env_config, load_build_config
from droidsign.core.errors import ConfigError
from droidsign.core.plan import ReleasePlan, resolve_release_plan


def plan_command(
    project: Optional[Path] = typer.Option(None, "--project", "-p", help="Android project root"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to droidsign.yaml"),
    as_json: bool = typer.Option(False, "--json", help="Print the plan as JSON"),
    show_secrets: bool = typer.Option(False, "--show-secrets", help="Do not mask passwords"),
):
    """
    Resolve droidsign.yaml and key.properties into the release build plan.
    """
    plan = _resolve_plan(project, config_path)
    summary = plan.summary(mask=not show_secrets)

    if as_json:
        typer.echo(json.dumps(summary, indent=2))
        return

    display_panel(create_plan_panel(summary))
    print_success("Release plan ready")


def gradle_args_command(
    project: Optional[Path] = typer.Option(None, "--project", "-p", help="Android project root"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to droidsign.yaml"),
    shell: bool = typer.Option(False, "--shell", help="Print one shell-quoted line for eval"),
):
    """
    Print -Pandroid.injected.signing.* arguments for ./gradlew, one per line.

    With --shell the arguments are quoted on a single line, safe for
    eval "./gradlew assembleRelease $(droidsign gradle-args --shell)".
    """
    plan = _resolve_plan(project, config_path)
    if shell:
        typer.echo(" ".join(shlex.quote(arg) for arg in plan.gradle_args()))
        return

    for arg in plan.gradle_args():
        typer.echo(arg)


def _resolve_plan(project: Optional[Path], config_path: Optional[Path]) -> ReleasePlan:
    """Resolve the plan or exit with code 1 on a configuration error."""
    env = get_env_config()
    root = project if project is not None else env["project_dir"]
    if config_path is None and env["config_path"]:
        config_path = Path(env["config_path"])

    try:
        config = load_build_config(config_path or get_config_path(root))
        return resolve_release_plan(root, config=config, key_properties=env["key_properties"])
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)
