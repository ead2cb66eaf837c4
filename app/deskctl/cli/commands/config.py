"""Settings commands.

Shows and edits ~/.config/deskctl/config.toml.
"""

from typing import Annotated

import typer
from rich.table import Table

from deskctl.cli.types import load_settings
from deskctl.core.config import ConfigError, DeskConfig, save_config, update_config
from deskctl.core.paths import get_config_path
from deskctl.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show and change settings.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective settings."""
    config = load_settings()
    path = get_config_path()

    table = Table(
        title="Settings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_column("Description", style="muted")

    for key, field in DeskConfig.model_fields.items():
        value = getattr(config, key)
        if key == "desktop_dir":
            value = f"{config.effective_desktop_dir}" + (" (default)" if value is None else "")
        elif hasattr(value, "value"):
            value = value.value
        table.add_row(key, str(value), field.description or "")

    console.print(table)
    source = str(path) if path.exists() else f"{path} (not created yet, using defaults)"
    console.print(f"[dim]Config file: {source}[/dim]", highlight=False)


@app.command()
def path() -> None:
    """Print the settings file location."""
    typer.echo(str(get_config_path()))


@app.command("set")
def set_value(
    key: Annotated[str, typer.Argument(help="Setting name, e.g. min_age_days.")],
    value: Annotated[str, typer.Argument(help="New value. Empty desktop_dir resets it.")],
) -> None:
    """Change one setting.

    Examples:
        deskctl config set min_age_days 30
        deskctl config set sort size-desc
        deskctl config set desktop_dir ~/Schreibtisch
    """
    config = load_settings()
    try:
        updated = update_config(config, key, value)
        saved_to = save_config(updated)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    new_value = getattr(updated, key)
    shown = getattr(new_value, "value", new_value)
    print_success(f"Set {key} = {shown}")
    console.print(f"[dim]Saved to {saved_to}[/dim]", highlight=False)
