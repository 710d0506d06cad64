"""
droidsign check - Validate release signing credentials in key.properties.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from droidsign.ui.console import console, print_success, print_error, print_warning
from droidsign.ui.panels import create_credential_panel, display_panel
from droidsign.core.config import get_env_config
from droidsign.core.errors import ConfigError
from droidsign.core.keystore import inspect_keystore
from droidsign.core.signing import KEY_PROPERTIES_FILE_NAME, load_signing_credential


def check_command(
    properties: Optional[Path] = typer.Option(
        None, "--properties", "-p", help="Path to key.properties (default: ./key.properties)"
    ),
    base_dir: Optional[Path] = typer.Option(
        None, "--base-dir", help="Directory a relative storeFile resolves against"
    ),
    strict: bool = typer.Option(False, "--strict", help="Also fail when the keystore is missing"),
):
    """
    Load key.properties and verify that release signing is fully configured.

    Exits with code 1 when the file is missing or any of storeFile,
    storePassword, keyAlias and keyPassword is blank.
    """
    env = get_env_config()
    if properties is None:
        if env["key_properties"]:
            properties = Path(env["key_properties"])
        else:
            properties = env["project_dir"] / KEY_PROPERTIES_FILE_NAME

    console.print("\n[bold]Release signing check[/]\n")

    try:
        credential = load_signing_credential(properties, base_dir)
    except ConfigError as e:
        print_error(escape(str(e)))
        raise typer.Exit(1)

    report = inspect_keystore(credential.store_file)
    display_panel(create_credential_panel(credential, report))

    for concern in report.concerns:
        print_warning(escape(concern))

    if strict and not report.is_usable:
        print_error("Keystore check failed")
        raise typer.Exit(1)

    print_success("Release signing configured")
