"""Command line interface for contentwrap."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table

from contentwrap.config import ConfigError, ConfigManager, ContentWrapConfig
from contentwrap.content import ContentFactory, ContentKind, ContentObject, ImageContent
from contentwrap.errors import ContentError

console = Console()


def _load_config() -> ContentWrapConfig:
    try:
        return ConfigManager().load()
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


def _configure_logging(config: ContentWrapConfig) -> None:
    """Route library log records through rich on stderr at the configured level."""
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(
        level=config.logging.level.upper(),
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def _describe(content: ContentObject, algorithm: str | None) -> dict[str, Any]:
    """Return the inspectable attributes of ``content`` as plain data."""
    raw = content.raw
    info = content.wrapper_info
    payload: dict[str, Any] = {
        "name": content.name,
        "kind": content.kind.value,
        "mime_type": content.mime_type,
        "size_bytes": len(raw),
        "hash": content.hash(algorithm),
        "extension": content.extension(),
        "obfuscated_name": content.obfuscated_name(algorithm=algorithm),
        "wrapper": None,
    }
    if info is not None:
        payload["wrapper"] = {
            "scheme": info.scheme,
            "mime": info.mime_annotation,
            "base64": info.is_base64,
        }
    if isinstance(content, ImageContent):
        size = content.size()
        payload["image"] = {
            "width": size.width,
            "height": size.height,
            "format": size.format,
            "channels": size.channels,
            "bits": size.bits,
        }
    return payload


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="contentwrap")
def cli() -> None:
    """contentwrap normalizes paths, handles, buffers, base64 and wrapped strings."""


@cli.command()
@click.argument("value")
@click.option("--name", type=str, help="Logical name for the content.")
@click.option("--hash-algorithm", "algorithm", type=str, help="hashlib algorithm to use.")
@click.option(
    "--kind",
    type=click.Choice([kind.value for kind in ContentKind]),
    default=ContentKind.GENERIC.value,
    show_default=True,
    help="Capability set to build the content with.",
)
@click.option("--json", "json_output", is_flag=True, help="Emit JSON instead of a table.")
def inspect(
    value: str,
    name: str | None,
    algorithm: str | None,
    kind: str,
    json_output: bool,
) -> None:
    """Inspect VALUE: a path, a wrapped string, base64 text, or `-` for stdin.

    Raises:
        click.ClickException: If VALUE cannot be turned into content.
    """
    settings = _load_config()
    _configure_logging(settings)
    factory = ContentFactory(settings)

    try:
        if value == "-":
            content = factory.from_handle(
                click.get_binary_stream("stdin"), name, kind=ContentKind(kind)
            )
        else:
            content = factory.from_best_guess(value, name, kind=ContentKind(kind))
        details = _describe(content, algorithm)
    except ContentError as exc:
        raise click.ClickException(str(exc)) from exc

    if json_output:
        console.print_json(data=details)
        return

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    for key, field in details.items():
        if isinstance(field, dict):
            field = ", ".join(f"{k}={v}" for k, v in field.items())
        table.add_row(key, "-" if field is None else str(field))
    console.print(table)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--wrap/--base64",
    "wrap",
    default=True,
    show_default=True,
    help="Emit a hex-wrapped string or plain base64.",
)
@click.option("--chunked/--no-chunked", default=False, help="Break base64 output into lines.")
def encode(path: Path, wrap: bool, chunked: bool) -> None:
    """Print the file at PATH as a wrapped string or base64 text.

    Raises:
        click.ClickException: If the file cannot be read.
    """
    settings = _load_config()
    _configure_logging(settings)
    factory = ContentFactory(settings)

    try:
        content = factory.from_path(path)
        if wrap:
            output = factory.codec.wrap(content.mime_type, content.raw)
        else:
            output = content.base64(chunked=chunked)
    except ContentError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(output, nl=not output.endswith("\n"))


@cli.group()
def config() -> None:
    """Manage contentwrap configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules."""
    try:
        effective = ConfigManager().load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(effective.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="YAML literal to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value addressed by a dotted KEY such as `content.hash_algorithm`.

    Raises:
        click.ClickException: If the value is unparsable or fails validation.
    """
    manager = ConfigManager()
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    try:
        updated = manager.load(overrides={key: parsed}, include_env=False)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(updated)
    console.print(f"[green]Set {key} = {parsed!r} in {manager.config_path}[/green]")


def main() -> None:
    """Entry point used by ``python -m contentwrap``."""
    cli()


__all__ = ["cli", "main"]
