"""Command-line interface for inspecting class models."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from docmodel.manifest import ValidationError, load_manifest, resolve_target
from docmodel.model import ClassModel, ConfigurationError, MarkerOverlay, build_class_model


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log resolution steps")
def cli(verbose: bool) -> None:
    """docmodel class model tools."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@cli.command()
@click.argument("target")
@click.option("--manifest", "-m", "manifest_file", default=None, help="Marker manifest file")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(target: str, manifest_file: str | None, output_json: bool) -> None:
    """Display the class model of TARGET (module:Class)."""
    try:
        cls = resolve_target(target)
        overlay: MarkerOverlay | None = None
        if manifest_file:
            overlay = load_manifest(manifest_file).get(cls)
        model = build_class_model(cls, overlay)
    except (ConfigurationError, ValidationError, OSError) as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    if output_json:
        _output_json(model)
    else:
        _output_plain(model)


@cli.command()
@click.argument("manifest_file")
def check(manifest_file: str) -> None:
    """Build every class model declared in a manifest."""
    console = Console()
    try:
        overlays = load_manifest(manifest_file)
    except (ValidationError, OSError) as exc:
        console.print(f"[red]invalid[/red] {escape(manifest_file)}: {escape(str(exc))}")
        sys.exit(1)

    failed = False
    for cls, overlay in overlays.items():
        try:
            model = build_class_model(cls, overlay)
        except ConfigurationError as exc:
            console.print(f"[red]error[/red] {cls.__qualname__}: {escape(str(exc))}")
            failed = True
            continue
        console.print(f"[green]ok[/green] {model.name} ({len(model.properties)} properties)")

    if failed:
        sys.exit(1)


def _format_name(name: str | None) -> str:
    """Format an external name, handling None for a disabled side."""
    return "-" if name is None else name


def _creator_summary(model: ClassModel[Any]) -> dict[str, Any] | None:
    if not model.has_creator:
        return None
    factory = model.instance_creator_factory
    return {
        "name": factory.executable.name,
        "kind": factory.executable.kind,
        "bindings": list(factory.bindings),
    }


def _output_json(model: ClassModel[Any]) -> None:
    """Output the class model as JSON."""
    data: dict[str, Any] = {
        "type": model.name,
        "discriminator": {
            "enabled": model.discriminator_enabled,
            "key": model.discriminator_key,
            "value": model.discriminator,
        },
        "id_property": model.id_property.name if model.id_property else None,
        "creator": _creator_summary(model),
        "properties": {},
    }

    for property_model in model.properties:
        data["properties"][property_model.name] = {
            "read_name": property_model.read_name,
            "write_name": property_model.write_name,
            "type": str(property_model.type_data),
            "use_discriminator": property_model.use_discriminator,
        }

    print(json.dumps(data, indent=2))


def _output_plain(model: ClassModel[Any]) -> None:
    """Output the class model using rich text formatting."""
    console = Console()

    console.print(f"[bold cyan]{model.name}[/bold cyan]")
    summary = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
    summary.add_column("Label", style="dim")
    summary.add_column("Value", style="white")

    if model.discriminator_enabled:
        summary.add_row("Discriminator", f"{model.discriminator_key} = {model.discriminator}")
    else:
        summary.add_row("Discriminator", "disabled")
    summary.add_row("Id", model.id_property.name if model.id_property else "-")

    creator = _creator_summary(model)
    if creator:
        summary.add_row("Creator", f"{creator['name']} ({creator['kind']})")
    else:
        summary.add_row("Creator", "-")

    console.print(summary)
    console.print()

    bindings = list(model.instance_creator_factory.bindings)

    console.print("[bold cyan]Properties[/bold cyan]")
    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Name", style="white")
    table.add_column("Read", style="yellow")
    table.add_column("Write", style="yellow")
    table.add_column("Type", style="dim")
    table.add_column("Creator", style="green", justify="right")

    for property_model in model.properties:
        position = ""
        if property_model.name in bindings:
            position = str(bindings.index(property_model.name))
        table.add_row(
            property_model.name,
            _format_name(property_model.read_name),
            _format_name(property_model.write_name),
            str(property_model.type_data),
            position,
        )

    console.print(table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
