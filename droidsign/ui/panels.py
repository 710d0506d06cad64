"""
Rich panels for signing and build plan displays.
"""

from typing import Any

from rich.panel import Panel
from rich.table import Table
from rich.box import ROUNDED
from rich.markup import escape

from droidsign.core.keystore import KeystoreReport, mask_secret
from droidsign.core.signing import SigningCredential
from droidsign.ui.console import console


def create_credential_panel(credential: SigningCredential, report: KeystoreReport) -> Panel:
    """Create a signing credential panel. Passwords are always masked."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Property", style="droidsign.muted")
    table.add_column("Value", style="bold")

    table.add_row("Keystore", escape(str(credential.store_file)))
    if report.exists:
        fmt = report.format or "unknown"
        fmt_color = "green" if report.is_usable else "yellow"
        table.add_row("Format", f"[{fmt_color}]{fmt}[/] ({report.size:,} bytes)")
    else:
        table.add_row("Format", "[yellow]not found[/]")
    table.add_row("Key alias", escape(credential.key_alias))
    table.add_row("Store password", f"[droidsign.secret]{mask_secret(credential.store_password)}[/]")
    table.add_row("Key password", f"[droidsign.secret]{mask_secret(credential.key_password)}[/]")

    return Panel(
        table,
        title="[droidsign.title]Release Signing[/]",
        border_style="green",
        box=ROUNDED,
    )


def create_plan_panel(summary: dict[str, Any]) -> Panel:
    """Create a release plan panel from ReleasePlan.summary()."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Property", style="droidsign.muted")
    table.add_column("Value", style="bold")

    table.add_row("Namespace", summary["namespace"])
    table.add_row("Application ID", summary["application_id"])
    table.add_row("Version", f"{summary['version_name']} ({summary['version_code']})")
    table.add_row("SDK", f"min {summary['min_sdk']} / target {summary['target_sdk']} / compile {summary['compile_sdk']}")
    if summary["ndk_version"]:
        table.add_row("NDK", summary["ndk_version"])

    table.add_row("", "")  # Spacer
    table.add_row("Minify", _flag(summary["minify_enabled"]))
    table.add_row("Shrink resources", _flag(summary["shrink_resources"]))
    table.add_row("Multidex", _flag(summary["multidex_enabled"]))
    table.add_row("Desugaring", _flag(summary["core_library_desugaring"]))
    table.add_row("Java target", summary["java_target"])
    table.add_row("Proguard", "\n".join(summary["proguard_files"]) or "-")
    table.add_row("Excludes", "\n".join(summary["resource_excludes"]) or "-")
    table.add_row("Dependencies", "\n".join(summary["dependencies"]) or "-")

    table.add_row("", "")  # Spacer
    table.add_row("Keystore", escape(summary["store_file"]))
    table.add_row("Key alias", escape(summary["key_alias"]))
    table.add_row("Store password", f"[droidsign.secret]{summary['store_password']}[/]")
    table.add_row("Key password", f"[droidsign.secret]{summary['key_password']}[/]")

    return Panel(
        table,
        title="[droidsign.title]Release Build Plan[/]",
        border_style="magenta",
        box=ROUNDED,
    )


def _flag(enabled: bool) -> str:
    return "[green]on[/]" if enabled else "[dim]off[/]"


def display_panel(panel: Panel) -> None:
    """Display a panel to the console."""
    console.print(panel)
