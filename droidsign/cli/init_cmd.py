"""
droidsign init - Create key.properties and droidsign.yaml for an Android project.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.prompt import Prompt

from droidsign.ui.console import console, print_success, print_error, print_info, print_step, print_warning
from droidsign.core.config import AndroidBuildConfig, get_config_path, get_env_config, save_build_config
from droidsign.core.errors import ConfigError
from droidsign.core.keystore import inspect_keystore
from droidsign.core.plan import resolve_release_plan
from droidsign.core.properties import write_properties
from droidsign.core.signing import (
    KEY_ALIAS_KEY,
    KEY_PASSWORD_KEY,
    KEY_PROPERTIES_FILE_NAME,
    STORE_FILE_KEY,
    STORE_PASSWORD_KEY,
)


def init_command(
    directory: Optional[Path] = typer.Option(None, "--dir", "-d", help="Android project root"),
    store_file: Optional[str] = typer.Option(None, "--store-file", help="Keystore path, relative to the app module"),
    key_alias: Optional[str] = typer.Option(None, "--key-alias", help="Signing key alias"),
    store_password: Optional[str] = typer.Option(None, "--store-password", help="Keystore password"),
    key_password: Optional[str] = typer.Option(None, "--key-password", help="Key password"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing files"),
):
    """
    Write key.properties with release signing info and a default droidsign.yaml.

    Values not passed as options are prompted for. key.properties holds
    secrets and should be kept out of version control.
    """
    project_dir = directory if directory is not None else get_env_config()["project_dir"]
    properties_path = project_dir / KEY_PROPERTIES_FILE_NAME
    config_path = get_config_path(project_dir)

    console.print("\n[bold]Initialize release signing[/]\n")

    if properties_path.exists() and not force:
        print_error(f"{KEY_PROPERTIES_FILE_NAME} already exists in {escape(str(project_dir))}")
        console.print("[dim]Use --force to overwrite it[/]")
        raise typer.Exit(1)

    # Step 1: Collect values
    print_step(1, 3, "Collecting signing details...")
    store_file = store_file or Prompt.ask("Keystore path (relative to the app module)", default="upload-keystore.jks")
    key_alias = key_alias or Prompt.ask("Key alias", default="upload")
    store_password = store_password or Prompt.ask("Keystore password", password=True)
    key_password = key_password or Prompt.ask(
        "Key password (Enter to reuse the keystore password)",
        default="",
        password=True,
    ) or store_password

    # Step 2: key.properties
    print_step(2, 3, f"Writing {KEY_PROPERTIES_FILE_NAME}...")
    project_dir.mkdir(parents=True, exist_ok=True)
    write_properties(
        properties_path,
        {
            STORE_PASSWORD_KEY: store_password,
            KEY_PASSWORD_KEY: key_password,
            KEY_ALIAS_KEY: key_alias,
            STORE_FILE_KEY: store_file,
        },
        comments="Release signing - do not commit this file",
    )

    # Step 3: droidsign.yaml
    print_step(3, 3, f"Writing {config_path.name}...")
    if config_path.exists() and not force:
        print_info(f"Keeping existing {config_path.name}")
    else:
        save_build_config(AndroidBuildConfig(), config_path)

    try:
        plan = resolve_release_plan(project_dir)
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    console.print()
    print_success(f"Release signing written to {escape(str(properties_path))}")

    report = inspect_keystore(plan.credential.store_file)
    if not report.exists:
        print_warning(escape(report.concerns[0]))
        console.print(
            "[dim]Create one with: keytool -genkey -v -keystore "
            f"{escape(str(plan.credential.store_file))} -keyalg RSA -keysize 2048 "
            f"-validity 10000 -alias {escape(plan.credential.key_alias)}[/]"
        )
